"""Big-integer helpers: modular inverse, primality, secure random draws."""

import math
import secrets
from typing import Optional

SMALL_PRIMES = [2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47]


def mod_inverse(value: int, modulus: int) -> Optional[int]:
    """Return value^-1 mod modulus, or None when gcd(value, modulus) != 1."""
    try:
        return pow(value, -1, modulus)
    except ValueError:
        return None


def _split_even_part(value: int) -> tuple[int, int]:
    """Write value = d * 2^s with d odd; returns (d, s)."""
    s = (value & -value).bit_length() - 1
    return value >> s, s


def _is_witness(a: int, n: int, d: int, s: int) -> bool:
    """True when base `a` proves n composite."""
    x = pow(a, d, n)
    if x in (1, n - 1):
        return False
    for _ in range(s - 1):
        x = x * x % n
        if x == n - 1:
            return False
    return True


def is_probable_prime(n: int, rounds: int = 30) -> bool:
    """
    Trial division by SMALL_PRIMES, then `rounds` Miller-Rabin rounds with
    bases from `secrets`. A composite survives with probability <= 4^-rounds.
    """
    if n < 2:
        return False
    for p in SMALL_PRIMES:
        if n % p == 0:
            return n == p

    d, s = _split_even_part(n - 1)
    bases = (secrets.randbelow(n - 3) + 2 for _ in range(rounds))
    return not any(_is_witness(a, n, d, s) for a in bases)


def random_exact_width(bits: int) -> int:
    """Uniform integer with exactly `bits` bits (top bit set)."""
    if bits < 1:
        raise ValueError("bit width must be positive")
    return secrets.randbits(bits) | (1 << (bits - 1))


def random_below(limit: int) -> int:
    """Uniform integer in [1, limit)."""
    if limit < 2:
        raise ValueError("limit must be at least 2")
    return secrets.randbelow(limit - 1) + 1


def random_unit(n: int) -> int:
    """Uniform r in [1, n) with gcd(r, n) == 1."""
    while True:
        r = random_below(n)
        if math.gcd(r, n) == 1:
            return r
