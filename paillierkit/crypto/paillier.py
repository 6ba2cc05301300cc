from typing import Optional, Union

from paillierkit import config
from paillierkit.crypto.ciphertext import BlindingState, Ciphertext, encrypt
from paillierkit.crypto.decryption import DecryptionAlgorithm, decrypt
from paillierkit.crypto.keys import KeyPair, PrivateKey, PublicKey, generate_keypair

__all__ = [
    "BlindingState",
    "Ciphertext",
    "DecryptionAlgorithm",
    "KeyPair",
    "Paillier",
    "PrivateKey",
    "PublicKey",
    "decrypt",
    "encrypt",
    "generate_keypair",
]


class Paillier:
    """Holds one key pair; the private half never leaves this object."""

    def __init__(self, strength: Optional[int] = None, key_pair: Optional[KeyPair] = None):
        if key_pair is None:
            if strength is None:
                strength = config.DEFAULT_KEY_BITS
            key_pair = generate_keypair(strength)
        self._private_key = key_pair.private_key
        self.public_key = key_pair.public_key

    def encrypt(self, plaintext: int) -> Ciphertext:
        return encrypt(plaintext, self.public_key)

    def ciphertext(self, value: int) -> Ciphertext:
        """Wrap a received raw value under this object's public key."""
        return Ciphertext.from_value(value, self.public_key)

    def decrypt(
        self,
        ciphertext: Union[int, Ciphertext],
        algorithm: Union[DecryptionAlgorithm, str] = DecryptionAlgorithm.DIRECT,
    ) -> int:
        return decrypt(ciphertext, self._private_key, self.public_key, algorithm)
