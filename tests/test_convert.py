"""ICD-10-CM CSV conversion tests.

Builds a tiny headerless CSV in the export's column order, converts it and
loads the result back through CodeCatalogLoader.
"""

import csv
import json

import pytest

from clinref_catalog.convert import (
    CSV_COLUMNS,
    build_database,
    compact_database,
    convert_csv,
    icd_range,
    read_icd10_csv,
)
from clinref_catalog.loader import CodeCatalogLoader
from clinref_catalog.sources import FileSource

from helpers.catalogs import FAST_SETTINGS

CSV_ROWS = [
    ("J06", "0", "J060", "Acute laryngopharyngitis", "Acute laryngopharyngitis",
     "Acute upper respiratory infections of multiple and unspecified sites"),
    ("J06", "9", "J069", "Acute upper respiratory infection, unsp",
     "Acute upper respiratory infection, unspecified",
     "Acute upper respiratory infections of multiple and unspecified sites"),
    ("D57", "00", "D5700", "Hb-SS disease with crisis, unspecified",
     "Hb-SS disease with crisis, unspecified", "Sickle-cell disorders"),
    ("H65", "90", "H6590", "Unsp nonsuppurative otitis media, unspecified ear",
     "Unspecified nonsuppurative otitis media, unspecified ear",
     "Nonsuppurative otitis media"),
    ("R51", "", "", "", "", "Headache"),
]


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "icd10cm_codes_2018.csv"
    with path.open("w", encoding="utf-8", newline="") as f:
        csv.writer(f).writerows(CSV_ROWS)
    return path


# =====================================================================
# Chapter ranges
# =====================================================================


@pytest.mark.parametrize("category_code, expected", [
    ("A09", "A00-B99"),
    ("B34", "A00-B99"),
    ("D12", "C00-D49"),
    ("D57", "D50-D89"),
    ("H10", "H00-H59"),
    ("H65", "H60-H95"),
    ("o99", "O00-O9A"),
    ("T81", "S00-T88"),
    ("U07", "Unknown"),
    ("", "Unknown"),
])
def test_icd_range(category_code, expected):
    """Two-character prefixes win over one-character prefixes."""
    assert icd_range(category_code) == expected


# =====================================================================
# CSV reading and database building
# =====================================================================


def test_read_csv_maps_columns(csv_path):
    rows = list(read_icd10_csv(csv_path))
    assert len(rows) == len(CSV_ROWS)
    assert set(rows[0]) == set(CSV_COLUMNS)
    assert rows[1]["fullDescription"] == "Acute upper respiratory infection, unspecified"


def test_build_database(csv_path):
    db = build_database(read_icd10_csv(csv_path), version="test-2018")

    assert db["metadata"]["version"] == "test-2018"
    assert db["metadata"]["totalCodes"] == 4, "the row without fullCode is skipped"
    assert db["metadata"]["totalCategories"] == 3
    assert [c["code"] for c in db["codes"]] == ["J06.0", "J06.9", "D57.00", "H65.90"]

    first = db["codes"][1]
    assert first["categoryCode"] == "J06"
    assert first["shortDescription"] == "Acute upper respiratory infection, unsp"
    assert "relatedCodes" not in first

    ranges = {c["code"]: c["range"] for c in db["categories"]}
    assert ranges == {"J06": "J00-J99", "D57": "D50-D89", "H65": "H60-H95"}


def test_compact_database_keeps_core_fields(csv_path):
    db = build_database(read_icd10_csv(csv_path))
    compact = compact_database(db)

    assert compact["metadata"] == db["metadata"]
    assert compact["categories"] == db["categories"]
    for code in compact["codes"]:
        assert set(code) == {"code", "description", "category", "categoryCode"}


# =====================================================================
# End to end
# =====================================================================


@pytest.mark.asyncio
async def test_converted_catalogs_load(csv_path, tmp_path):
    full_path, compact_path = convert_csv(csv_path, tmp_path / "out", version="test-2018")

    assert full_path.name == "icd10-database.json"
    assert compact_path.name == "icd10-database-compact.json"
    assert json.loads(compact_path.read_text(encoding="utf-8"))["metadata"]["totalCodes"] == 4

    for path in (full_path, compact_path):
        loader = CodeCatalogLoader(FileSource(path), FAST_SETTINGS)
        catalog = await loader.load()

        assert not loader.status().using_fallback, loader.status().errors
        assert loader.status().version == "test-2018"
        assert catalog.get("J06.9").category_code == "J06"
        assert catalog.get_category("D57").range == "D50-D89"
