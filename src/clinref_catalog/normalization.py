"""String normalization for code and drug-name lookups.

ICD-10-CM codes reach the lookup engine in many spellings: lower case,
without the dot (``j069``), with a trailing wildcard (``R51*``), or with
placeholder/encounter suffixes (``T81.4XXA``, ``S52.521A``) that collapse
to a base entry of the catalog.  These helpers produce the candidate keys
tried by :meth:`CodeLookupEngine.get_by_code`.
"""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")

# Trailing wildcard markers typed by users or emitted by code pickers
_TRAILING_WILDCARD_RE = re.compile(r"[*\-.]+$")

# A dotless code longer than its 3-character category, e.g. "J069"
_DOTLESS_CODE_RE = re.compile(r"^([A-Z]\d[0-9A-Z])([0-9A-Z]{1,4})$")

# "X" placeholders with an optional 7th-character extension, e.g. "4XXA"
_PLACEHOLDER_SUFFIX_RE = re.compile(r"X+[A-Z]?$")

# Full 7-character code whose last character is an encounter extension
_EXTENSION_RE = re.compile(r"^([A-Z]\d[0-9A-Z]\.[0-9A-Z]{3})[A-Z]$")

# First token of a "<code> <text>" query
_CODE_TOKEN_RE = re.compile(r"^[A-Za-z]\d[0-9A-Za-z][0-9A-Za-z.*\-]*$")

_QUERY_SEPARATORS = " \t-:,;|"


def normalize_name(value: str) -> str:
    """Case-fold and collapse whitespace for alias matching."""
    return _WHITESPACE_RE.sub(" ", value.strip()).casefold()


def normalize_code(code: str) -> str:
    """Upper-case, trim, drop trailing wildcards and restore a missing dot."""
    value = _TRAILING_WILDCARD_RE.sub("", code.strip().upper())
    match = _DOTLESS_CODE_RE.match(value)
    if match:
        value = f"{match.group(1)}.{match.group(2)}"
    return value


def base_code(code: str) -> str:
    """Strip placeholder and encounter suffixes down to the base code.

    ``T81.4XXA`` → ``T81.4``, ``S52.521A`` → ``S52.521``.  Codes without a
    recognized suffix are returned normalized but otherwise unchanged.
    """
    value = normalize_code(code)
    if "." not in value:
        return value

    stem, _, detail = value.partition(".")
    stripped = _PLACEHOLDER_SUFFIX_RE.sub("", detail)
    if stripped != detail:
        return f"{stem}.{stripped}" if stripped else stem

    match = _EXTENSION_RE.match(value)
    if match:
        return match.group(1)
    return value


def category_stem(code: str) -> str:
    """The 3-character category a code belongs to (``J06.9`` → ``J06``)."""
    return normalize_code(code)[:3]


def split_code_query(query: str) -> tuple[str | None, str]:
    """Split ``"J06.9 - Acute URI"`` into ``("J06.9", "acute uri")``.

    Returns ``(None, text)`` when the query does not start with something
    shaped like a code.
    """
    parts = query.strip().split(maxsplit=1)
    if not parts or not _CODE_TOKEN_RE.match(parts[0]):
        return None, normalize_name(query)
    text = parts[1] if len(parts) > 1 else ""
    return parts[0], normalize_name(text.strip(_QUERY_SEPARATORS))
