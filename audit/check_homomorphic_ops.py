"""Replays a fixed chain of homomorphic operations and checks the decrypted result."""

import sys

from paillierkit import config
from paillierkit.crypto.ciphertext import encrypt
from paillierkit.crypto.decryption import DecryptionAlgorithm, decrypt
from paillierkit.crypto.keys import KeyPair, generate_keypair


def check(key_pair: KeyPair | None = None) -> dict:
    if key_pair is None:
        key_pair = generate_keypair(config.DEMO_KEY_BITS)
    pub, priv = key_pair.public_key, key_pair.private_key
    n = pub.n

    cases = {
        "add": (encrypt(20, pub).add(encrypt(22, pub)), 42),
        "add_scalar": (encrypt(20, pub).add(22), 42),
        "subtract": (encrypt(50, pub).subtract(encrypt(8, pub)), 42),
        "subtract_wraps": (encrypt(3, pub).subtract(5), n - 2),
        "multiply": (encrypt(21, pub).multiply(2), 42),
        "chain": (
            encrypt(12345678, pub)
            .add(2)
            .add_ciphertext(encrypt(8, pub).value)
            .subtract(8)
            .subtract_ciphertext(encrypt(2, pub).value)
            .multiply(2),
            24691356,
        ),
    }

    violations = []
    for name, (ct, expected) in cases.items():
        for algorithm in DecryptionAlgorithm:
            got = decrypt(ct.value, priv, pub, algorithm)
            if got != expected:
                violations.append({"case": name, "algorithm": algorithm.value, "expected": expected, "got": got})

    return {
        "check": "homomorphic_ops",
        "cases": len(cases),
        "violations": violations,
        "passed": len(violations) == 0,
    }


if __name__ == "__main__":
    result = check()
    status = "PASS" if result["passed"] else "FAIL"
    print(f"{status} - homomorphic ops: {result['cases']} case(s), {len(result['violations'])} violation(s)")
    for v in result["violations"]:
        print(f"  ! {v['case']} ({v['algorithm']}): expected {v['expected']}, got {v['got']}")
    sys.exit(0 if result["passed"] else 1)
