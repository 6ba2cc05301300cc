"""Verifies that encryptions of the same plaintext never repeat and still decrypt."""

import sys

from paillierkit import config
from paillierkit.crypto.ciphertext import encrypt
from paillierkit.crypto.decryption import decrypt
from paillierkit.crypto.keys import KeyPair, generate_keypair

SAMPLES = 8
PLAINTEXTS = (0, 1, 42)


def check(key_pair: KeyPair | None = None) -> dict:
    if key_pair is None:
        key_pair = generate_keypair(config.DEMO_KEY_BITS)
    pub, priv = key_pair.public_key, key_pair.private_key

    violations = []
    for m in PLAINTEXTS:
        values = [encrypt(m, pub).value for _ in range(SAMPLES)]
        if len(set(values)) != SAMPLES:
            violations.append({"plaintext": m, "reason": "repeated ciphertext value"})
        if any(v == (1 + m * pub.n) % pub.n_sq for v in values):
            violations.append({"plaintext": m, "reason": "unblinded value left the ciphertext"})
        if any(decrypt(v, priv, pub) != m for v in values):
            violations.append({"plaintext": m, "reason": "blinded value does not decrypt"})

    return {
        "check": "blinding",
        "samples": SAMPLES * len(PLAINTEXTS),
        "violations": violations,
        "passed": len(violations) == 0,
    }


if __name__ == "__main__":
    result = check()
    status = "PASS" if result["passed"] else "FAIL"
    print(f"{status} - blinding: {result['samples']} encryptions, {len(result['violations'])} violation(s)")
    for v in result["violations"]:
        print(f"  ! plaintext {v['plaintext']}: {v['reason']}")
    sys.exit(0 if result["passed"] else 1)
