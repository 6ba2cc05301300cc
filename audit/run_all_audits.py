"""Runs every cryptosystem self-check against one fresh key pair and writes a JSON report."""

import json
import sys
from datetime import datetime, timezone

from audit.check_blinding import check as check_blinding
from audit.check_decryption_equivalence import check as check_decryption_equivalence
from audit.check_homomorphic_ops import check as check_homomorphic_ops
from audit.check_key_invariants import check as check_key_invariants
from paillierkit import config
from paillierkit.crypto.keys import generate_keypair


KEYED_CHECKS = [
    check_key_invariants,
    check_blinding,
    check_decryption_equivalence,
    check_homomorphic_ops,
]


def run_checks(bits: int | None = None) -> list[dict]:
    key_pair = generate_keypair(bits or config.DEMO_KEY_BITS)
    return [fn(key_pair) for fn in KEYED_CHECKS]


def main(report_path: str = "audit_report.json") -> int:
    print("=" * 60)
    print("  PAILLIER SELF-AUDIT")
    print(f"  {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')}")
    print("=" * 60)
    print()

    all_results = run_checks()

    passed = 0
    failed = 0
    for r in all_results:
        name = r["check"]
        violations = r.get("violations", [])
        if r["passed"]:
            passed += 1
            print(f"  [ok]   {name}")
        else:
            failed += 1
            print(f"  [FAIL] {name} ({len(violations)} violation(s))")
            for v in violations:
                if isinstance(v, dict):
                    print(f"         {json.dumps(v)}")
                else:
                    print(f"         {v}")

    print()
    print("-" * 60)
    total = passed + failed
    print(f"  Result: {passed}/{total} checks passed")

    report = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "summary": {"total": total, "passed": passed, "failed": failed},
        "checks": all_results,
    }
    with open(report_path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, default=str)
    print(f"\n  JSON report written to {report_path}")
    print("=" * 60)

    return 0 if failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
