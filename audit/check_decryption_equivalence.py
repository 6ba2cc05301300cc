"""Verifies that direct and CRT decryption agree, including at the range edges."""

import secrets
import sys

from paillierkit import config
from paillierkit.crypto.ciphertext import encrypt
from paillierkit.crypto.decryption import DecryptionAlgorithm, decrypt
from paillierkit.crypto.keys import KeyPair, generate_keypair

RANDOM_SAMPLES = 16


def check(key_pair: KeyPair | None = None) -> dict:
    if key_pair is None:
        key_pair = generate_keypair(config.DEMO_KEY_BITS)
    pub, priv = key_pair.public_key, key_pair.private_key

    plaintexts = [0, 1, pub.n - 1] + [secrets.randbelow(pub.n) for _ in range(RANDOM_SAMPLES)]
    violations = []
    for m in plaintexts:
        c = encrypt(m, pub).value
        direct = decrypt(c, priv, pub, DecryptionAlgorithm.DIRECT)
        fast = decrypt(c, priv, pub, DecryptionAlgorithm.CRT_FAST)
        if direct != fast:
            violations.append({"plaintext": m, "reason": "direct and crt_fast disagree"})
        elif direct != m:
            violations.append({"plaintext": m, "reason": "round trip failed"})

    return {
        "check": "decryption_equivalence",
        "samples": len(plaintexts),
        "violations": violations,
        "passed": len(violations) == 0,
    }


if __name__ == "__main__":
    result = check()
    status = "PASS" if result["passed"] else "FAIL"
    print(f"{status} - decryption equivalence: {result['samples']} plaintexts, {len(result['violations'])} violation(s)")
    for v in result["violations"]:
        print(f"  ! {v['reason']}")
    sys.exit(0 if result["passed"] else 1)
