#!/usr/bin/env python3
"""Export driver accounts or print one driver's aggregated details."""

from __future__ import annotations

import argparse
import asyncio
import csv
import json
from pathlib import Path
import sys
from typing import Iterable, Optional, TextIO

# Ensure `riteway_admin` package is importable when script is run directly.
CURRENT_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = CURRENT_DIR.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from riteway_admin.core.logging import configure_logging
from riteway_admin.main import load_settings_or_exit
from riteway_admin.models.drivers import IdentitySummary
from riteway_admin.services.driver_details import DriverAggregator
from riteway_admin.services.driver_directory import DriverDirectory
from riteway_admin.services.firebase import initialize_firebase, shutdown_firebase
from riteway_admin.services.identity import IdentityNotFoundError
from riteway_admin.services.record_store import StoreError


CSV_FIELDS = ["uid", "email", "displayName", "phoneNumber", "disabled", "createdAt", "lastSignInAt"]


def write_csv(users: Iterable[IdentitySummary], handle: TextIO) -> int:
    writer = csv.DictWriter(handle, fieldnames=CSV_FIELDS)
    writer.writeheader()
    count = 0
    for user in users:
        writer.writerow(user.model_dump(mode="json", by_alias=True))
        count += 1
    return count


def write_json(users: Iterable[IdentitySummary], handle: TextIO) -> int:
    rows = [user.model_dump(mode="json", by_alias=True) for user in users]
    json.dump({"count": len(rows), "users": rows}, handle, indent=2)
    handle.write("\n")
    return len(rows)


def export_drivers(directory: DriverDirectory, fmt: str, output: Optional[Path]) -> int:
    writer = write_csv if fmt == "csv" else write_json
    if output is None:
        return writer(directory.iter_all(), sys.stdout)
    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open("w", encoding="utf-8", newline="") as handle:
        count = writer(directory.iter_all(), handle)
    print(f"Exported {count} drivers -> {output}", file=sys.stderr)
    return count


def main() -> None:
    parser = argparse.ArgumentParser(description="Riteway driver account reports")
    sub = parser.add_subparsers(dest="command", required=True)

    list_parser = sub.add_parser("list", help="Export every driver account")
    list_parser.add_argument("--format", choices=["json", "csv"], default="json", help="Output format")
    list_parser.add_argument("--output", type=Path, default=None, help="Write to a file instead of stdout")

    details_parser = sub.add_parser("details", help="Print aggregated details for one driver")
    details_parser.add_argument("uid", help="Driver uid (Firebase Auth)")

    args = parser.parse_args()

    settings = load_settings_or_exit()
    configure_logging(settings.log_level, settings.log_json)
    backend = initialize_firebase(settings)
    try:
        if args.command == "list":
            directory = DriverDirectory(backend.identity, backend.records, page_size=settings.identity_page_size)
            export_drivers(directory, args.format, args.output)
        else:
            aggregator = DriverAggregator(
                backend.identity,
                backend.records,
                deliveries_path=settings.deliveries_path,
                tickets_path=settings.scale_tickets_path,
                ratings_path=settings.ratings_path,
            )
            summary = asyncio.run(aggregator.aggregate(args.uid.strip()))
            print(summary.model_dump_json(by_alias=True, indent=2))
    except IdentityNotFoundError as exc:
        raise SystemExit(str(exc))
    except StoreError as exc:
        raise SystemExit(f"Store error: {exc}")
    finally:
        shutdown_firebase(backend)


if __name__ == "__main__":
    main()
