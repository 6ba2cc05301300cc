import logging
from dataclasses import dataclass, field

from paillierkit import config
from paillierkit.crypto.arith import is_probable_prime, mod_inverse, random_exact_width
from paillierkit.errors import InvalidKeyMaterial, PrimalitySearchExhausted

logger = logging.getLogger(__name__)

MIN_KEY_BITS = 16
SECURE_KEY_BITS = 1024


def l_function(x: int, d: int) -> int:
    """L(x, d) = (x - 1) // d, exact whenever x == 1 mod d."""
    return (x - 1) // d


@dataclass(frozen=True)
class PublicKey:
    n: int
    g: int
    n_sq: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Encryption uses (n + 1)^m == 1 + m*n (mod n^2) and so only holds for
        # g = n + 1. Allowing another g means replacing raw_encrypt with pow().
        if self.g != self.n + 1:
            raise InvalidKeyMaterial("public key requires g = n + 1")
        if self.n < 15:
            raise InvalidKeyMaterial("modulus too small")
        object.__setattr__(self, "n_sq", self.n * self.n)

    @property
    def bits(self) -> int:
        return self.n.bit_length()


def _h(g: int, p: int, p_sq: int) -> int:
    value = mod_inverse(l_function(pow(g, p - 1, p_sq), p), p)
    if value is None:
        raise InvalidKeyMaterial("CRT helper value has no inverse")
    return value


@dataclass(frozen=True)
class PrivateKey:
    """
    Secret primes p < q plus the values crt_fast decryption reuses:
    p_sq, q_sq, hp = L(g^(p-1) mod p^2, p)^-1 mod p (hq likewise), pinv = p^-1 mod q.
    """

    p: int
    q: int
    g: int
    p_sq: int = field(init=False, repr=False, compare=False)
    q_sq: int = field(init=False, repr=False, compare=False)
    hp: int = field(init=False, repr=False, compare=False)
    hq: int = field(init=False, repr=False, compare=False)
    pinv: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.p >= self.q:
            raise InvalidKeyMaterial("private key requires p < q")
        if self.g != self.p * self.q + 1:
            raise InvalidKeyMaterial("private key requires g = p*q + 1")
        p_sq = self.p * self.p
        q_sq = self.q * self.q
        pinv = mod_inverse(self.p, self.q)
        if pinv is None:
            raise InvalidKeyMaterial("p has no inverse modulo q")
        object.__setattr__(self, "p_sq", p_sq)
        object.__setattr__(self, "q_sq", q_sq)
        object.__setattr__(self, "hp", _h(self.g, self.p, p_sq))
        object.__setattr__(self, "hq", _h(self.g, self.q, q_sq))
        object.__setattr__(self, "pinv", pinv)

    def __repr__(self) -> str:
        return f"PrivateKey(bits={(self.p * self.q).bit_length()})"

    def public_key(self) -> PublicKey:
        n = self.p * self.q
        return PublicKey(n=n, g=n + 1)


@dataclass(frozen=True)
class KeyPair:
    public_key: PublicKey
    private_key: PrivateKey


def generate_prime(bits: int, rounds: int | None = None, max_draws: int | None = None) -> int:
    """Draw odd candidates of exact width `bits` until one is a probable prime."""
    if rounds is None:
        rounds = config.PRIMALITY_ROUNDS
    if max_draws is None:
        max_draws = config.PRIME_SEARCH_MAX_DRAWS

    draws = 0
    while True:
        if max_draws and draws >= max_draws:
            raise PrimalitySearchExhausted(f"no {bits}-bit prime after {draws} draws")
        draws += 1
        candidate = random_exact_width(bits) | 1
        if is_probable_prime(candidate, rounds):
            logger.debug("found %d-bit prime after %d draws", bits, draws)
            return candidate


def generate_keypair(strength: int | None = None) -> KeyPair:
    """Generate a key pair whose modulus n has (about) `strength` bits."""
    if strength is None:
        strength = config.DEFAULT_KEY_BITS
    if strength < MIN_KEY_BITS or strength % 2:
        raise ValueError(f"key strength must be an even number of bits >= {MIN_KEY_BITS}")
    if strength < SECURE_KEY_BITS:
        logger.warning("generating a %d-bit key, not suitable for real secrets", strength)

    half = strength // 2
    p = generate_prime(half)
    q = generate_prime(half)
    while q == p:
        q = generate_prime(half)

    # crt_fast reconstruction is not symmetric in p and q
    if q < p:
        p, q = q, p

    n = p * q
    g = n + 1
    key_pair = KeyPair(public_key=PublicKey(n=n, g=g), private_key=PrivateKey(p=p, q=q, g=g))
    logger.info("generated %d-bit Paillier key pair", n.bit_length())
    return key_pair
