#!/usr/bin/env python3
"""Load both reference catalogs and report their health.

Prints the loader status of each catalog (primary vs fallback, record
count, version, fallback reasons) and the interaction integrity scan.
Exits non-zero when a catalog fell back or the scan found dangling drug
references, so it can gate a data release in CI.

Usage::

    # Check the bundled datasets
    python scripts/check_catalog.py

    # Check candidate files before shipping them
    python scripts/check_catalog.py --codes data/icd10-database.json --drugs new_drugs.yaml

    # Sample lookups against the loaded catalogs
    python scripts/check_catalog.py --code T81.4XXA --pair warfarin aspirin
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from dataclasses import replace
from pathlib import Path

_REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))

from rich.console import Console  # noqa: E402
from rich.table import Table  # noqa: E402

from clinref_catalog.config import load_loader_settings  # noqa: E402
from clinref_catalog.reference import ReferenceData  # noqa: E402

console = Console()


def _status_table(reference: ReferenceData) -> Table:
    table = Table(title="Catalog status")
    table.add_column("Catalog")
    table.add_column("Mode")
    table.add_column("Records", justify="right")
    table.add_column("Version")
    table.add_column("Source")
    for name, status in reference.status().items():
        mode = "[red]fallback[/red]" if status.using_fallback else "[green]primary[/green]"
        table.add_row(name, mode, str(status.record_count), status.version or "-", status.source)
    return table


async def run_check(args: argparse.Namespace) -> int:
    settings = load_loader_settings()
    overrides = {}
    if args.codes:
        overrides["codes_source"] = args.codes
    if args.drugs:
        overrides["drugs_source"] = args.drugs
    if overrides:
        settings = replace(settings, **overrides)

    reference = await ReferenceData.from_settings(settings).initialize()
    console.print(_status_table(reference))

    exit_code = 0
    for name, status in reference.status().items():
        if status.using_fallback:
            exit_code = 1
            console.print(f"[red]{name}: running on fallback data[/red]")
            for error in status.errors:
                console.print(f"  - {error}")

    report = reference.interactions.validate_catalog()
    if report.is_valid:
        console.print("[green]Interaction references: OK[/green]")
    else:
        exit_code = 1
        console.print("[red]Interaction references: INVALID[/red]")
        for error in report.errors:
            console.print(f"  - {error}")

    if args.code:
        item = reference.codes.get_by_code(args.code)
        if item is None:
            console.print(f"Code {args.code!r}: not found")
        else:
            console.print(f"Code {args.code!r} -> {item.code}  {item.description}")

    if args.pair:
        interaction = reference.interactions.find_pair(*args.pair)
        if interaction is None:
            console.print(f"{args.pair[0]} + {args.pair[1]}: no known interaction")
        else:
            console.print(
                f"{args.pair[0]} + {args.pair[1]}: "
                f"[bold]{interaction.severity.value}[/bold] {interaction.clinical_effect}"
            )

    return exit_code


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Load the reference catalogs and report their status and integrity.",
    )
    parser.add_argument("--codes", help="Code catalog path or URL (default: bundled dataset)")
    parser.add_argument("--drugs", help="Drug catalog path or URL (default: bundled dataset)")
    parser.add_argument("--code", help="Resolve one code against the loaded catalog")
    parser.add_argument(
        "--pair",
        nargs=2,
        metavar=("DRUG_A", "DRUG_B"),
        help="Look up the interaction between two drugs",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show loader logs (retries, fallbacks)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s [%(name)s] %(message)s",
    )
    sys.exit(asyncio.run(run_check(args)))


if __name__ == "__main__":
    main()
