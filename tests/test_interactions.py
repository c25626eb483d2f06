"""InteractionMatcher tests — pair lookup, N-way checks and catalog validation.

The sample catalog (helpers/catalogs.py) holds warfarin, aspirin,
lisinopril, ibuprofen and metformin with three interactions:

    warfarin  + aspirin    Major
    warfarin  + ibuprofen  Major
    lisinopril + ibuprofen Moderate
"""

import pytest

from clinref_catalog.catalog import DrugCatalog
from clinref_catalog.interactions import InteractionMatcher
from clinref_catalog.models import drugs as drug_models
from clinref_catalog.models.drugs import Drug, DrugCategory, InteractionSeverity

from helpers.catalogs import make_interaction, sample_drugs, sample_interactions


def _ids(items):
    return [item.id for item in items]


# =====================================================================
# find_pair
# =====================================================================


def test_find_pair_known_interaction(matcher):
    interaction = matcher.find_pair("warfarin", "aspirin")
    assert interaction is not None
    assert interaction.id == "warfarin-aspirin"
    assert interaction.severity is InteractionSeverity.MAJOR


@pytest.mark.parametrize("a, b", [
    ("warfarin", "aspirin"),
    ("warfarin", "ibuprofen"),
    ("lisinopril", "ibuprofen"),
    ("aspirin", "metformin"),
    ("metformin", "unobtainium"),
])
def test_find_pair_is_symmetric(matcher, a, b):
    assert matcher.find_pair(a, b) == matcher.find_pair(b, a)


@pytest.mark.parametrize("a, b", [
    ("WARFARIN", "Aspirin"),
    ("  warfarin ", "aspirin"),
    ("Coumadin", "Bayer"),
    ("warfarin sodium", "acetylsalicylic acid"),
])
def test_find_pair_accepts_aliases_and_any_case(matcher, a, b):
    interaction = matcher.find_pair(a, b)
    assert interaction is not None, f"{a!r} + {b!r} should resolve to warfarin + aspirin"
    assert interaction.id == "warfarin-aspirin"


def test_find_pair_no_interaction(matcher):
    assert matcher.find_pair("warfarin", "metformin") is None


def test_find_pair_unknown_drug_is_not_an_error(matcher):
    assert matcher.find_pair("warfarin", "unobtainium") is None
    assert matcher.find_pair("", "aspirin") is None


# =====================================================================
# find_all
# =====================================================================


def test_find_all_single_match(matcher):
    results = matcher.find_all(["Warfarin", "Aspirin", "Metformin"])
    assert _ids(results) == ["warfarin-aspirin"]


def test_find_all_returns_matches_in_pair_order(matcher):
    """Pairs are visited (0,1), (0,2), (0,3), (1,2), (1,3), (2,3)."""
    results = matcher.find_all(["ibuprofen", "warfarin", "lisinopril", "aspirin"])
    assert _ids(results) == [
        "warfarin-ibuprofen",     # (0, 1)
        "lisinopril-ibuprofen",   # (0, 2)
        "warfarin-aspirin",       # (1, 3)
    ]


def test_find_all_matches_find_pair(matcher):
    names = ["aspirin", "ibuprofen", "metformin", "warfarin", "lisinopril"]
    expected = [
        matcher.find_pair(a, b)
        for i, a in enumerate(names)
        for b in names[i + 1:]
        if matcher.find_pair(a, b) is not None
    ]
    assert matcher.find_all(names) == expected


@pytest.mark.parametrize("names", [[], ["warfarin"], ["metformin", "unobtainium"]])
def test_find_all_without_pairs(matcher, names):
    assert matcher.find_all(names) == []


# =====================================================================
# validate_catalog
# =====================================================================


def test_validate_catalog_valid(matcher):
    report = matcher.validate_catalog()
    assert report.is_valid
    assert report.errors == []


def test_validate_catalog_reports_dangling_references():
    interactions = sample_interactions() + [
        make_interaction("warfarin", "ghost"),
        make_interaction("phantom", "aspirin"),
    ]
    report = InteractionMatcher(DrugCatalog(sample_drugs(), interactions)).validate_catalog()

    assert not report.is_valid
    assert report.errors == [
        "Interaction warfarin-ghost: drug2Id 'ghost' not found",
        "Interaction phantom-aspirin: drug1Id 'phantom' not found",
    ]


def test_dangling_interaction_is_never_matched():
    """A record naming an unknown drug id cannot be reached by name."""
    interactions = [make_interaction("warfarin", "ghost")]
    matcher = InteractionMatcher(DrugCatalog(sample_drugs(), interactions))
    assert matcher.find_pair("warfarin", "ghost") is None


# =====================================================================
# Drug lookups
# =====================================================================


def test_get_drug_by_brand(matcher):
    assert matcher.get_drug("coumadin").id == "warfarin"
    assert matcher.get_drug("unobtainium") is None


def test_search_drugs(matcher):
    assert _ids(matcher.search_drugs("sodium")) == ["warfarin"]
    assert _ids(matcher.search_drugs("ADVIL")) == ["ibuprofen"]
    assert matcher.search_drugs("  ") == []


def test_interactions_for(matcher):
    assert _ids(matcher.interactions_for("Warfarin")) == ["warfarin-aspirin", "warfarin-ibuprofen"]
    assert matcher.interactions_for("metformin") == []
    assert matcher.interactions_for("unobtainium") == []


def test_drugs_by_category(matcher):
    assert _ids(matcher.drugs_by_category("Pain Management")) == ["ibuprofen"]
    assert _ids(matcher.drugs_by_category(DrugCategory.ENDOCRINE)) == ["metformin"]
    assert matcher.drugs_by_category(DrugCategory.ONCOLOGY) == []


def test_drugs_by_unknown_category_raises(matcher):
    with pytest.raises(ValueError):
        matcher.drugs_by_category("Homeopathy")


# =====================================================================
# Severity enumeration
# =====================================================================


@pytest.mark.parametrize("severity", list(InteractionSeverity))
def test_every_severity_has_display_properties(severity):
    assert severity.description
    assert severity.color
    assert isinstance(severity.rank, int)


def test_severity_ranking_and_colors():
    ordered = sorted(InteractionSeverity, key=lambda s: s.rank)
    assert ordered == [
        InteractionSeverity.MAJOR,
        InteractionSeverity.MODERATE,
        InteractionSeverity.MINOR,
        InteractionSeverity.UNKNOWN,
    ]
    assert InteractionSeverity.MAJOR.color == "red"
    assert InteractionSeverity("Moderate") is InteractionSeverity.MODERATE


@pytest.mark.parametrize("table", [
    drug_models._SEVERITY_RANK,
    drug_models._SEVERITY_DESCRIPTIONS,
    drug_models._SEVERITY_COLORS,
])
def test_severity_tables_cover_every_member(table):
    assert set(table) == set(InteractionSeverity)


def test_incomplete_severity_table_is_rejected():
    partial = {InteractionSeverity.MAJOR: "red", InteractionSeverity.MINOR: "yellow"}
    with pytest.raises(RuntimeError, match="Moderate"):
        drug_models._require_exhaustive("colors", partial)


# =====================================================================
# Alias collisions
# =====================================================================


def test_shared_brand_name_is_an_integrity_error():
    """Two drugs claiming one brand name: the first keeps it, the clash is reported."""
    rival = Drug(id="bayer-aspirin", name="Bayer Advanced Aspirin",
                 generic_name="acetylsalicylic acid", brand_names=("BAYER",))
    catalog = DrugCatalog(sample_drugs() + [rival], sample_interactions())

    assert catalog.resolve("Bayer").id == "aspirin"
    assert catalog.find_integrity_errors() == [
        "Drug bayer-aspirin: alias 'acetylsalicylic acid' already used by aspirin",
        "Drug bayer-aspirin: alias 'bayer' already used by aspirin",
    ]


def test_aliases_repeated_within_one_drug_are_not_collisions():
    """Lisinopril's id, name and generic name all normalize to one alias."""
    assert DrugCatalog(sample_drugs()).find_integrity_errors() == []
