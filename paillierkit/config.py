import logging
import os


# ── Key generation ─────────────────────────────────
DEFAULT_KEY_BITS = int(os.getenv("PAILLIER_KEY_BITS", "2048"))
PRIMALITY_ROUNDS = int(os.getenv("PAILLIER_PRIMALITY_ROUNDS", "30"))  # false positive <= 4^-30
# 0 = unbounded search
PRIME_SEARCH_MAX_DRAWS = int(os.getenv("PAILLIER_PRIME_SEARCH_MAX_DRAWS", "0"))

# ── Demo service ───────────────────────────────────
DEMO_KEY_BITS = int(os.getenv("PAILLIER_DEMO_KEY_BITS", "512"))

# ── Logging ────────────────────────────────────────
LOG_LEVEL = os.getenv("PAILLIER_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str | None = None) -> None:
    """Attach a stream handler to the package logger (idempotent)."""
    logger = logging.getLogger("paillierkit")
    logger.setLevel(level or LOG_LEVEL)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
