"""Verifies the structural invariants of a freshly generated key pair."""

import sys

from paillierkit import config
from paillierkit.crypto.arith import is_probable_prime
from paillierkit.crypto.keys import KeyPair, generate_keypair


def check(key_pair: KeyPair | None = None, bits: int | None = None) -> dict:
    bits = bits or config.DEMO_KEY_BITS
    if key_pair is None:
        key_pair = generate_keypair(bits)
    pub, priv = key_pair.public_key, key_pair.private_key

    violations = []
    if priv.p == priv.q:
        violations.append("p == q")
    if not priv.p < priv.q:
        violations.append("p is not smaller than q")
    if not (is_probable_prime(priv.p) and is_probable_prime(priv.q)):
        violations.append("p or q is not prime")
    if priv.p * priv.q != pub.n:
        violations.append("n != p*q")
    if pub.g != pub.n + 1:
        violations.append("g != n + 1")
    if (priv.pinv * priv.p) % priv.q != 1:
        violations.append("pinv*p != 1 mod q")
    if abs(pub.bits - bits) > 1:
        violations.append(f"modulus has {pub.bits} bits, expected about {bits}")

    return {
        "check": "key_invariants",
        "key_bits": pub.bits,
        "violations": violations,
        "passed": len(violations) == 0,
    }


if __name__ == "__main__":
    result = check()
    status = "PASS" if result["passed"] else "FAIL"
    print(f"{status} - key invariants: {result['key_bits']}-bit key, {len(result['violations'])} violation(s)")
    for v in result["violations"]:
        print(f"  ! {v}")
    sys.exit(0 if result["passed"] else 1)
