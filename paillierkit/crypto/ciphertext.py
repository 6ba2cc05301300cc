"""
Ciphertext handle and the homomorphic operators.

A Ciphertext keeps its raw value private. The only way to observe it is the
`value` property, which blinds the raw value first unless it is already blinded
and untouched since. Homomorphic operators mutate the handle in place and
reset it to UNBLINDED, so purely local chains of operations pay for one
blinding at the read boundary instead of one per step.

A single instance is not thread-safe; callers sharing one across threads must
serialize access to it.
"""

import enum
from typing import Union

from paillierkit.crypto.arith import mod_inverse, random_unit
from paillierkit.crypto.keys import PublicKey
from paillierkit.errors import InvalidCiphertext, PlaintextOutOfRange


class BlindingState(enum.Enum):
    UNBLINDED = "unblinded"
    BLINDED = "blinded"


def raw_encrypt(public_key: PublicKey, plaintext: int) -> int:
    # (n + 1)^m mod n^2 == 1 + m*n by the binomial expansion. Only valid for
    # g = n + 1, which PublicKey enforces.
    return (1 + plaintext * public_key.n) % public_key.n_sq


def raw_blind(public_key: PublicKey, raw: int) -> int:
    r = random_unit(public_key.n)
    return (raw * pow(r, public_key.n, public_key.n_sq)) % public_key.n_sq


class Ciphertext:
    __slots__ = ("_raw", "_state", "public_key")

    def __init__(self, raw: int, public_key: PublicKey, state: BlindingState = BlindingState.UNBLINDED):
        self._raw = raw
        self._state = state
        self.public_key = public_key

    @classmethod
    def from_plaintext(cls, plaintext: int, public_key: PublicKey) -> "Ciphertext":
        if not 0 <= plaintext < public_key.n:
            raise PlaintextOutOfRange("plaintext must satisfy 0 <= m < n")
        return cls(raw_encrypt(public_key, plaintext), public_key)

    @classmethod
    def from_value(cls, value: int, public_key: PublicKey, *, blinded: bool = False) -> "Ciphertext":
        """
        Wrap a raw ciphertext received from another party.

        By default the value is treated as unblinded and is re-randomized on
        first read, since a relay cannot tell whether the sender blinded it.
        Pass blinded=True to forward the value unchanged.
        """
        if not 0 <= value < public_key.n_sq:
            raise InvalidCiphertext("ciphertext must satisfy 0 <= c < n^2")
        state = BlindingState.BLINDED if blinded else BlindingState.UNBLINDED
        return cls(value, public_key, state)

    @property
    def state(self) -> BlindingState:
        return self._state

    @property
    def is_blinded(self) -> bool:
        return self._state is BlindingState.BLINDED

    @property
    def value(self) -> int:
        """Externally visible ciphertext; blinds once if needed."""
        if self._state is BlindingState.UNBLINDED:
            self.blind()
        return self._raw

    def raw_value(self) -> int:
        """Current value without blinding. Only for local use, never for transmission."""
        return self._raw

    def blind(self) -> "Ciphertext":
        """Re-randomize the raw value without changing the plaintext."""
        self._raw = raw_blind(self.public_key, self._raw)
        self._state = BlindingState.BLINDED
        return self

    def _mutate(self, raw: int) -> "Ciphertext":
        self._raw = raw
        self._state = BlindingState.UNBLINDED
        return self

    def _check_raw(self, value: int) -> int:
        if not 0 <= value < self.public_key.n_sq:
            raise InvalidCiphertext("ciphertext must satisfy 0 <= c < n^2")
        return value

    def _operand(self, other: "Ciphertext") -> int:
        if other.public_key != self.public_key:
            raise InvalidCiphertext("ciphertexts were created under different public keys")
        return other._raw

    def add_ciphertext(self, value: int) -> "Ciphertext":
        """Homomorphic addition of a raw ciphertext value."""
        value = self._check_raw(value)
        return self._mutate((self._raw * value) % self.public_key.n_sq)

    def subtract_ciphertext(self, value: int) -> "Ciphertext":
        """Homomorphic subtraction of a raw ciphertext value."""
        inverse = mod_inverse(self._check_raw(value), self.public_key.n_sq)
        if inverse is None:
            raise InvalidCiphertext("ciphertext is not invertible modulo n^2")
        return self.add_ciphertext(inverse)

    def add(self, other: Union["Ciphertext", int]) -> "Ciphertext":
        if isinstance(other, Ciphertext):
            return self.add_ciphertext(self._operand(other))
        # intermediate scalar encryption is folded in straight away, no blinding
        return self.add_ciphertext(raw_encrypt(self.public_key, other))

    def subtract(self, other: Union["Ciphertext", int]) -> "Ciphertext":
        if isinstance(other, Ciphertext):
            return self.subtract_ciphertext(self._operand(other))
        return self.subtract_ciphertext(raw_encrypt(self.public_key, other))

    def multiply(self, scalar: int) -> "Ciphertext":
        """Homomorphic multiplication by a known scalar (taken mod n)."""
        exponent = scalar % self.public_key.n
        return self._mutate(pow(self._raw, exponent, self.public_key.n_sq))

    def __repr__(self) -> str:
        return f"Ciphertext(bits={self.public_key.bits}, state={self._state.value})"


def encrypt(plaintext: int, public_key: PublicKey) -> Ciphertext:
    """Encrypt `plaintext` (0 <= m < n). The returned handle blinds on first read."""
    return Ciphertext.from_plaintext(plaintext, public_key)
