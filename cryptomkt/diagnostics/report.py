"""
Diagnostics Report — Console and JSON rendering of suite results.
"""

from datetime import datetime, timezone

import orjson as json


def print_banner():
    print()
    print("  ╔═══════════════════════════════════════════════╗")
    print("  ║     C R Y P T O M K T   C L I E N T           ║")
    print("  ║        Diagnostics Runner                     ║")
    print("  ╚═══════════════════════════════════════════════╝")
    print()


def print_section(title: str):
    padding = max(0, 48 - len(title))
    print(f"\n  ── {title} {'─' * padding}")


def print_result(result: dict):
    icon = "✅" if result["passed"] else "❌"
    print(f"    {icon} {result['name']}")
    if result.get("detail"):
        print(f"        → {result['detail']}")


def group_by_suite(all_results: list[dict]) -> dict[str, list[dict]]:
    """Results are named "<Suite>: <check>"; group them on the prefix."""
    suites: dict[str, list[dict]] = {}
    for r in all_results:
        suites.setdefault(r["name"].split(":")[0].strip(), []).append(r)
    return suites


def print_verdict(all_results: list[dict], elapsed: float) -> bool:
    """Print the per-suite tally and overall verdict. Returns True when nothing failed."""
    total = len(all_results)
    failed = sum(1 for r in all_results if not r["passed"])

    print()
    print("  ══ Verdict ════════════════════════════════════════")
    print()

    for suite_name, results in group_by_suite(all_results).items():
        ok = sum(1 for r in results if r["passed"])
        icon = "✅" if ok == len(results) else "❌"
        print(f"    {icon} {suite_name}: {ok}/{len(results)}")

    print()
    print(f"    Total: {total - failed}/{total} passed ({failed} failed)")
    print(f"    Time:  {elapsed:.1f}s")
    print(f"    Run:   {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    print()

    if total == 0:
        print("  ⚪ NOTHING RAN — check credentials and suite names")
    elif failed == 0:
        print("  🟢 ALL DIAGNOSTICS PASSED")
    elif failed <= 2:
        print("  🟡 PARTIAL — Minor issues detected")
    else:
        print("  🔴 DIAGNOSTICS FAILED — Review errors above")

    print()
    return total > 0 and failed == 0


def format_json_report(all_results: list[dict], elapsed: float) -> bytes:
    """Results as indented JSON (for CI logs)."""
    passed = sum(1 for r in all_results if r["passed"])
    report = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "elapsed_seconds": round(elapsed, 2),
        "total": len(all_results),
        "passed": passed,
        "failed": len(all_results) - passed,
        "suites": {
            name: {"passed": sum(1 for r in rs if r["passed"]), "total": len(rs)}
            for name, rs in group_by_suite(all_results).items()
        },
        "results": all_results,
    }
    return json.dumps(report, option=json.OPT_INDENT_2)
