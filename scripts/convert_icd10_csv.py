#!/usr/bin/env python3
"""Convert the ICD-10-CM CSV export into code catalog JSON files.

Writes ``icd10-database.json`` (full) and ``icd10-database-compact.json``
into the output directory.  Either file can be served as the code catalog
source (``CLINREF_CODES_SOURCE``).

Usage::

    python scripts/convert_icd10_csv.py data/icd10-codes.csv -o data/
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

_REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))

from rich.console import Console  # noqa: E402

from clinref_catalog.convert import DEFAULT_VERSION, convert_csv  # noqa: E402

console = Console()


def main() -> None:
    parser = argparse.ArgumentParser(description="Convert ICD-10-CM CSV to catalog JSON.")
    parser.add_argument("csv_path", type=Path, help="Headerless ICD-10-CM CSV export")
    parser.add_argument(
        "-o", "--out-dir",
        type=Path,
        default=Path("data"),
        help="Output directory (default: ./data)",
    )
    parser.add_argument("--version", default=DEFAULT_VERSION, help="Catalog version label")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")

    if not args.csv_path.exists():
        console.print(f"[red]Missing CSV file: {args.csv_path}[/red]")
        sys.exit(1)

    full_path, compact_path = convert_csv(args.csv_path, args.out_dir, version=args.version)
    for path in (full_path, compact_path):
        size_mb = path.stat().st_size / 1024 / 1024
        console.print(f"Wrote [bold]{path}[/bold] ({size_mb:.2f} MB)")


if __name__ == "__main__":
    main()
