"""
Diagnostics Runner — Orchestrates all live suites and produces a report.

Usage:
    python -m cryptomkt.diagnostics.runner              # Run all suites
    python -m cryptomkt.diagnostics.runner rest auth    # Run specific suites
    python -m cryptomkt.diagnostics.runner --list       # List available suites
    python -m cryptomkt.diagnostics.runner --json       # Also dump a JSON report
"""

import importlib
import sys
import time

from ..config import (
    API_KEY,
    API_SECRET,
    API_URL,
    REQUEST_TIMEOUT,
    logger,
    validate_credentials,
    print_config,
)
from .report import print_banner, print_section, print_result, print_verdict, format_json_report

# ── Available Suites ─────────────────────────────────────────────────────────

SUITE_MAP = {
    "rest": ("REST API", "cryptomkt.diagnostics.suites.test_rest"),
    "auth": ("Authentication", "cryptomkt.diagnostics.suites.test_auth"),
    "account": ("Account", "cryptomkt.diagnostics.suites.test_account"),
}

# Default run order
DEFAULT_ORDER = ["rest", "auth", "account"]

AUTH_SUITES = {"auth", "account"}


def build_config() -> dict:
    """Build the config dict passed to each suite."""
    return {
        "api_url": API_URL,
        "api_key": API_KEY,
        "api_secret": API_SECRET,
        "timeout": REQUEST_TIMEOUT,
        "market": "ETHCLP",
    }


def run_suite(suite_key: str, config: dict) -> list[dict]:
    """Dynamically import and run a diagnostic suite."""
    if suite_key not in SUITE_MAP:
        return [{"name": f"Unknown suite: {suite_key}", "passed": False, "detail": "Not found"}]

    label, module_path = SUITE_MAP[suite_key]
    print_section(label)

    try:
        module = importlib.import_module(module_path)
        results = module.run(config)

        logger.flush()
        for r in results:
            print_result(r)

        return results

    except Exception as e:
        result = {"name": f"{label}: Import/Run Error", "passed": False, "detail": str(e)}
        print_result(result)
        return [result]


def main(argv=None):
    args = sys.argv[1:] if argv is None else list(argv)
    as_json = "--json" in args
    args = [a for a in args if a != "--json"]

    # --list flag
    if "--list" in args:
        print("\nAvailable diagnostic suites:")
        for key, (label, _) in SUITE_MAP.items():
            print(f"  {key:<12} {label}")
        print()
        return 0

    # Banner + config
    print_banner()
    has_creds = validate_credentials()
    print_config()

    # Determine which suites to run
    if args:
        suites_to_run = [s for s in args if s in SUITE_MAP]
        unknown = [s for s in args if s not in SUITE_MAP]
        if unknown:
            print(f"  ⚠ Unknown suites: {', '.join(unknown)}")
    else:
        suites_to_run = DEFAULT_ORDER

    # Skip auth-required suites if no credentials
    if not has_creds:
        skipped = [s for s in suites_to_run if s in AUTH_SUITES]
        if skipped:
            print(f"  ⚠ Skipping auth-required suites (no credentials): {', '.join(skipped)}")
        suites_to_run = [s for s in suites_to_run if s not in AUTH_SUITES]

    # Run
    config = build_config()
    all_results = []
    start = time.time()

    for suite_key in suites_to_run:
        all_results.extend(run_suite(suite_key, config))

    elapsed = time.time() - start

    # Verdict
    all_passed = print_verdict(all_results, elapsed)
    if as_json:
        print(format_json_report(all_results, elapsed).decode("utf-8"))
    return 0 if all_passed else 1


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
