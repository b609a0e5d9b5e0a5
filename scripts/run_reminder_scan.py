"""Run a single reminder scan against the configured backend."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

import anyio

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from cleanops.application.reminders import build_reminder_scheduler
from cleanops.config import get_settings
from cleanops.infrastructure.stores import StoreConfigurationError, build_store
from cleanops.utils import configure_logging


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for the scan."""

    parser = argparse.ArgumentParser(
        description="Scan jobs and quotations once and emit today's reminders.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to LOG_LEVEL from the environment)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the scan report as JSON",
    )
    return parser.parse_args()


async def _run() -> dict[str, object] | None:
    settings = get_settings()
    try:
        store = build_store(settings)
    except StoreConfigurationError as exc:
        raise SystemExit(f"Could not open the store: {exc}") from exc

    scheduler = build_reminder_scheduler(store, settings=settings, publisher=None)
    report = await scheduler.tick()
    return report.as_dict() if report is not None else None


def main() -> None:
    """Run one scan and print what happened."""

    args = parse_args()
    configure_logging(args.log_level)

    report = anyio.run(_run)
    if report is None:
        raise SystemExit("The scan was skipped.")

    if args.json:
        print(json.dumps(report, indent=2))
        return

    print(
        f"Reminder scan for {report['day']}:\n"
        f"  Candidates: {report['candidates']}\n"
        f"  Sent: {report['admitted']}\n"
        f"  Already sent today: {report['suppressed']}\n"
        f"  Failed: {report['failed']}"
    )
    if report["snapshot_failed"]:
        raise SystemExit("Could not read business records from the store.")


if __name__ == "__main__":
    main()
