"""Build serialized code catalogs from the ICD-10-CM CSV export.

The CSV has no header row; columns are::

    categoryCode, diagnosisCode, fullCode, abbreviatedDescription,
    fullDescription, categoryTitle

Two JSON files are produced: a full catalog (with short descriptions and
synonyms) and a compact one (code, description, category only) that loads
faster.  Both are accepted by :class:`CodeCatalogLoader`.
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Iterator

from clinref_catalog.models.codes import Category, ReferenceCode
from clinref_catalog.normalization import normalize_code

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "categoryCode",
    "diagnosisCode",
    "fullCode",
    "abbreviatedDescription",
    "fullDescription",
    "categoryTitle",
]

DEFAULT_VERSION = "2018-ICD-10-CM"

# --- ICD-10 chapter ranges keyed by 1- or 2-character code prefix ---
# Two-character keys take precedence over one-character keys.
_RANGE_MAP: dict[str, str] = {
    "A": "A00-B99",
    "B": "A00-B99",
    "C": "C00-D49",
    "D0": "C00-D49",
    "D1": "C00-D49",
    "D2": "C00-D49",
    "D3": "C00-D49",
    "D4": "C00-D49",
    "D5": "D50-D89",
    "D6": "D50-D89",
    "D7": "D50-D89",
    "D8": "D50-D89",
    "E": "E00-E89",
    "F": "F01-F99",
    "G": "G00-G99",
    "H0": "H00-H59",
    "H1": "H00-H59",
    "H2": "H00-H59",
    "H3": "H00-H59",
    "H4": "H00-H59",
    "H5": "H00-H59",
    "H6": "H60-H95",
    "H7": "H60-H95",
    "H8": "H60-H95",
    "H9": "H60-H95",
    "I": "I00-I99",
    "J": "J00-J99",
    "K": "K00-K95",
    "L": "L00-L99",
    "M": "M00-M99",
    "N": "N00-N99",
    "O": "O00-O9A",
    "P": "P00-P96",
    "Q": "Q00-Q99",
    "R": "R00-R99",
    "S": "S00-T88",
    "T": "S00-T88",
    "V": "V00-Y99",
    "W": "V00-Y99",
    "X": "V00-Y99",
    "Y": "V00-Y99",
    "Z": "Z00-Z99",
}


def icd_range(category_code: str) -> str:
    """Map a category code (e.g. ``"D57"``) to its chapter range label."""
    code = category_code.strip().upper()
    return _RANGE_MAP.get(code[:2]) or _RANGE_MAP.get(code[:1]) or "Unknown"


def derive_categories(codes: Iterable[ReferenceCode]) -> list[Category]:
    """One Category per distinct ``category_code``, in first-seen order."""
    categories: dict[str, Category] = {}
    for item in codes:
        if item.category_code and item.category_code not in categories:
            categories[item.category_code] = Category(
                code=item.category_code,
                title=item.category or item.category_code,
                range=icd_range(item.category_code),
            )
    return list(categories.values())


def read_icd10_csv(path: str | Path) -> Iterator[dict[str, str]]:
    """Yield one dict per CSV row, keyed by :data:`CSV_COLUMNS`."""
    with Path(path).open("r", encoding="utf-8", newline="") as f:
        for row in csv.DictReader(f, fieldnames=CSV_COLUMNS):
            yield {key: (value or "").strip() for key, value in row.items() if key}


def build_database(rows: Iterable[dict[str, str]], version: str = DEFAULT_VERSION) -> dict[str, Any]:
    """Build the full catalog payload from CSV rows.

    The export writes codes without the dot (``J069``); it is restored so
    converted catalogs use the same spelling as every other catalog.
    """
    codes: list[ReferenceCode] = []
    for row in rows:
        if not row.get("fullCode"):
            logger.debug("Skipping CSV row without fullCode: %s", row)
            continue
        codes.append(
            ReferenceCode(
                code=normalize_code(row["fullCode"]),
                description=row["fullDescription"],
                short_description=row["abbreviatedDescription"] or None,
                category=row["categoryTitle"],
                category_code=row["categoryCode"],
                synonyms=tuple(
                    s for s in (row["abbreviatedDescription"], row["fullDescription"]) if s
                ),
            )
        )
    categories = derive_categories(codes)

    return {
        "metadata": {
            "version": version,
            "totalCodes": len(codes),
            "totalCategories": len(categories),
            "generatedAt": datetime.now(timezone.utc).isoformat(),
        },
        "categories": [c.model_dump(by_alias=True) for c in categories],
        "codes": [
            c.model_dump(by_alias=True, exclude={"related_codes"}, exclude_none=True)
            for c in codes
        ],
    }


def compact_database(database: dict[str, Any]) -> dict[str, Any]:
    """Strip short descriptions and synonyms from a full catalog payload."""
    keep = ("code", "description", "category", "categoryCode")
    return {
        **database,
        "codes": [{key: code[key] for key in keep} for code in database["codes"]],
    }


def convert_csv(
    csv_path: str | Path,
    out_dir: str | Path,
    version: str = DEFAULT_VERSION,
) -> tuple[Path, Path]:
    """Write ``icd10-database.json`` and ``icd10-database-compact.json``.

    Returns the two output paths.
    """
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    database = build_database(read_icd10_csv(csv_path), version=version)
    full_path = out / "icd10-database.json"
    compact_path = out / "icd10-database-compact.json"

    full_path.write_text(json.dumps(database, indent=2, ensure_ascii=False), encoding="utf-8")
    compact_path.write_text(
        json.dumps(compact_database(database), ensure_ascii=False, separators=(",", ":")),
        encoding="utf-8",
    )
    logger.info(
        "Converted %d codes in %d categories to %s",
        database["metadata"]["totalCodes"],
        database["metadata"]["totalCategories"],
        out,
    )
    return full_path, compact_path
