"""Lookup constants shared across the SDK.

The result caps are part of the public contract of the lookup engines and
are not configurable.  Loader tuning lives in :mod:`clinref_catalog.config`.
"""

from pathlib import Path

# --- Result caps ---
MAX_SEARCH_RESULTS = 50
MAX_SUGGESTIONS = 5
MAX_RELATED_CODES = 10
MAX_CATEGORY_RESULTS = 100
DEFAULT_ADVANCED_SEARCH_LIMIT = 50

# Stage-2 suggestion tokens must be strictly longer than this.
MIN_SUGGESTION_TOKEN_LENGTH = 3

# --- Bundled primary datasets ---
DATA_DIR = Path(__file__).parent / "data"
DEFAULT_CODES_PATH = DATA_DIR / "icd10_codes.json"
DEFAULT_DRUGS_PATH = DATA_DIR / "drugs.yaml"

# Catalog names used in status reports and logs.
CODES_CATALOG = "icd10"
DRUGS_CATALOG = "drugs"
