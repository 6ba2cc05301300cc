import enum
import logging
from typing import Union

from paillierkit.crypto.arith import mod_inverse
from paillierkit.crypto.ciphertext import Ciphertext
from paillierkit.crypto.keys import PrivateKey, PublicKey, l_function
from paillierkit.errors import InvalidCiphertext, InvalidKeyMaterial

logger = logging.getLogger(__name__)


class DecryptionAlgorithm(str, enum.Enum):
    DIRECT = "direct"
    CRT_FAST = "crt_fast"


def decrypt_direct(value: int, private_key: PrivateKey, public_key: PublicKey) -> int:
    """Textbook decryption: one exponentiation with full-size exponent and modulus."""
    lam = (private_key.p - 1) * (private_key.q - 1)
    mu = mod_inverse(l_function(pow(public_key.g, lam, public_key.n_sq), public_key.n), public_key.n)
    if mu is None:
        raise InvalidKeyMaterial("L(g^lambda) has no inverse modulo n")
    return (l_function(pow(value, lam, public_key.n_sq), public_key.n) * mu) % public_key.n


def decrypt_crt(value: int, private_key: PrivateKey, public_key: PublicKey) -> int:
    """Two half-size exponentiations mod p^2 and q^2, recombined with the CRT."""
    p, q = private_key.p, private_key.q
    m_p = (l_function(pow(value, p - 1, private_key.p_sq), p) * private_key.hp) % p
    m_q = (l_function(pow(value, q - 1, private_key.q_sq), q) * private_key.hq) % q
    u = ((m_q - m_p) * private_key.pinv) % q
    return m_p + u * p


_ALGORITHMS = {
    DecryptionAlgorithm.DIRECT: decrypt_direct,
    DecryptionAlgorithm.CRT_FAST: decrypt_crt,
}


def decrypt(
    ciphertext: Union[int, Ciphertext],
    private_key: PrivateKey,
    public_key: PublicKey,
    algorithm: Union[DecryptionAlgorithm, str] = DecryptionAlgorithm.DIRECT,
) -> int:
    """
    Recover the plaintext of `ciphertext` with either algorithm.

    Both algorithms give the same result for every valid ciphertext. Neither
    mutates its inputs; a Ciphertext handle is read without blinding it,
    since the value never leaves the private side.
    """
    if private_key.p * private_key.q != public_key.n:
        raise InvalidKeyMaterial("private key does not match public key")
    if isinstance(ciphertext, Ciphertext):
        ciphertext = ciphertext.raw_value()
    if not 0 <= ciphertext < public_key.n_sq:
        raise InvalidCiphertext("ciphertext must satisfy 0 <= c < n^2")

    algorithm = DecryptionAlgorithm(algorithm)
    logger.debug("decrypting with %s", algorithm.value)
    return _ALGORITHMS[algorithm](ciphertext, private_key, public_key)
