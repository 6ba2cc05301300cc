"""Error kinds raised by the cryptosystem. None of them are retryable."""


class PaillierError(Exception):
    """Base class for every error raised by paillierkit."""


class InvalidKeyMaterial(PaillierError):
    """A required modular inverse is missing or the key parameters are malformed."""


class PlaintextOutOfRange(PaillierError, ValueError):
    """Plaintext is not in [0, n) for the public key it is encrypted under."""


class PrimalitySearchExhausted(PaillierError):
    """The prime search hit PAILLIER_PRIME_SEARCH_MAX_DRAWS without success."""


class InvalidCiphertext(PaillierError, ValueError):
    """Raw ciphertext value is outside [0, n^2), not invertible, or under another key."""
