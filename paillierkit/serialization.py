"""
Wire models: integers travel as decimal strings so JSON clients never lose
precision. Private keys have no wire form.
"""

from pydantic import BaseModel, Field

from paillierkit.crypto.ciphertext import Ciphertext
from paillierkit.crypto.keys import PublicKey

DECIMAL_PATTERN = r"^[0-9]+$"
# int(str) refuses longer strings by default (sys.get_int_max_str_digits)
MAX_DECIMAL_DIGITS = 4300


class PublicKeyPayload(BaseModel):
    n: str = Field(min_length=1, max_length=MAX_DECIMAL_DIGITS, pattern=DECIMAL_PATTERN)
    g: str = Field(min_length=1, max_length=MAX_DECIMAL_DIGITS, pattern=DECIMAL_PATTERN)


class CiphertextPayload(BaseModel):
    value: str = Field(min_length=1, max_length=MAX_DECIMAL_DIGITS, pattern=DECIMAL_PATTERN)


def dump_public_key(public_key: PublicKey) -> PublicKeyPayload:
    return PublicKeyPayload(n=str(public_key.n), g=str(public_key.g))


def load_public_key(payload: PublicKeyPayload) -> PublicKey:
    return PublicKey(n=int(payload.n), g=int(payload.g))


def dump_ciphertext(ciphertext: Ciphertext) -> CiphertextPayload:
    """Serialize through the blinding read boundary."""
    return CiphertextPayload(value=str(ciphertext.value))


def load_ciphertext(payload: CiphertextPayload, public_key: PublicKey, *, blinded: bool = False) -> Ciphertext:
    return Ciphertext.from_value(int(payload.value), public_key, blinded=blinded)
