"""
Command line entry point: run the suite, exit with its status
"""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .catalog.scenarios import default_suite, scenario_names, select_scenarios
from .config import settings
from .driver.session import LifecycleController
from .reporting.recorder import ResultRecorder
from .reporting.test_logger import configure_logging
from .runner.orchestrator import SuiteOrchestrator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mobile-tester",
        description="Run the onboarding/login suite against an Appium server",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Run the suite and write a report")
    run.add_argument("--scenario", action="append", default=[], metavar="NAME",
                     help="Only run this scenario (repeatable)")
    run.add_argument("--skip-home-checks", action="store_true",
                     help="Run the login scenarios only")
    run.add_argument("--close-on-teardown", action="store_true", default=None,
                     help="Terminate the app and quit the session after each scenario")
    run.add_argument("--reports-dir", type=Path, help="Where to write the CSV report")
    run.add_argument("--verbose", action="store_true", help="Debug level logging")

    sub.add_parser("list", help="List the built-in scenarios")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "list":
        for name in scenario_names(default_suite(settings)):
            print(name)
        return 0

    configure_logging(settings, verbose=args.verbose)

    groups = default_suite(settings, include_home=not args.skip_home_checks)
    if args.scenario:
        try:
            groups = select_scenarios(groups, args.scenario)
        except ValueError as e:
            print(f"error: {e}", file=sys.stderr)
            return 2

    orchestrator = SuiteOrchestrator(
        settings,
        lifecycle=LifecycleController(settings, close_on_teardown=args.close_on_teardown),
        recorder=ResultRecorder(args.reports_dir or settings.REPORTS_DIR),
    )
    outcome = orchestrator.run(groups)

    s = outcome.summary
    print(f"{s.total} tests: {s.passed} passed, {s.failed} failed, {s.skipped} skipped "
          f"({s.success_rate}%)")
    if outcome.report_path:
        print(f"Report: {outcome.report_path}")
    if outcome.error:
        print(f"error: {outcome.error}", file=sys.stderr)
    return outcome.exit_code


if __name__ == "__main__":
    sys.exit(main())
