from contextlib import asynccontextmanager
from functools import lru_cache
import logging

from fastapi import FastAPI, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from paillierkit import config
from paillierkit.crypto.ciphertext import encrypt
from paillierkit.crypto.decryption import DecryptionAlgorithm, decrypt
from paillierkit.crypto.keys import KeyPair, generate_keypair
from paillierkit.errors import PaillierError
from paillierkit.serialization import (
    DECIMAL_PATTERN,
    MAX_DECIMAL_DIGITS,
    CiphertextPayload,
    PublicKeyPayload,
    dump_ciphertext,
    dump_public_key,
    load_ciphertext,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config.configure_logging()
    await run_in_threadpool(get_demo_keypair)
    yield


app = FastAPI(
    title="Paillier Homomorphic API",
    version="0.1.0",
    lifespan=lifespan,
)


# ── Security: HTTP headers ───────────────────────────────────
@app.middleware("http")
async def security_headers(request: Request, call_next):
    response: Response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["Cache-Control"] = "no-store"
    return response


@app.exception_handler(PaillierError)
async def paillier_error_handler(request: Request, exc: PaillierError) -> JSONResponse:
    logger.info("rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@lru_cache(maxsize=1)
def get_demo_keypair() -> KeyPair:
    """Demo key pair, generated on first use and kept for the process lifetime.

    Handlers using it are plain functions so FastAPI runs them in its
    threadpool; key generation and exponentiation stay off the event loop.
    """
    return generate_keypair(config.DEMO_KEY_BITS)


class EncryptRequest(BaseModel):
    plaintext: str = Field(min_length=1, max_length=MAX_DECIMAL_DIGITS, pattern=DECIMAL_PATTERN)


class AggregateRequest(BaseModel):
    ciphertexts: list[CiphertextPayload] = Field(default_factory=list)


class AggregateResponse(BaseModel):
    count: int
    ciphertext: CiphertextPayload


class ScaleRequest(BaseModel):
    ciphertext: CiphertextPayload
    scalar: int


class DecryptRequest(BaseModel):
    ciphertext: CiphertextPayload
    algorithm: DecryptionAlgorithm = DecryptionAlgorithm.CRT_FAST


class DecryptResponse(BaseModel):
    plaintext: str
    algorithm: DecryptionAlgorithm


@app.get("/health")
def health() -> dict:
    """Liveness probe; also reports the demo key size."""
    return {"status": "ok", "key_bits": get_demo_keypair().public_key.bits}


@app.get("/keys/public", response_model=PublicKeyPayload)
def public_key() -> PublicKeyPayload:
    return dump_public_key(get_demo_keypair().public_key)


@app.post("/ciphertexts/encrypt", response_model=CiphertextPayload)
def encrypt_value(payload: EncryptRequest) -> CiphertextPayload:
    pub = get_demo_keypair().public_key
    return dump_ciphertext(encrypt(int(payload.plaintext), pub))


@app.post("/ciphertexts/aggregate", response_model=AggregateResponse)
def aggregate(payload: AggregateRequest) -> AggregateResponse:
    """Homomorphic sum of the submitted ciphertexts; empty input sums to E(0)."""
    pub = get_demo_keypair().public_key
    agg = encrypt(0, pub)
    for item in payload.ciphertexts:
        agg.add_ciphertext(int(item.value))
    return AggregateResponse(count=len(payload.ciphertexts), ciphertext=dump_ciphertext(agg))


@app.post("/ciphertexts/scale", response_model=CiphertextPayload)
def scale(payload: ScaleRequest) -> CiphertextPayload:
    pub = get_demo_keypair().public_key
    ct = load_ciphertext(payload.ciphertext, pub)
    return dump_ciphertext(ct.multiply(payload.scalar))


@app.post("/ciphertexts/decrypt", response_model=DecryptResponse)
def decrypt_value(payload: DecryptRequest) -> DecryptResponse:
    """Decrypt under the demo private key (demo only, a real deployment keeps it offline)."""
    key_pair = get_demo_keypair()
    plaintext = decrypt(
        int(payload.ciphertext.value),
        key_pair.private_key,
        key_pair.public_key,
        payload.algorithm,
    )
    return DecryptResponse(plaintext=str(plaintext), algorithm=payload.algorithm)
