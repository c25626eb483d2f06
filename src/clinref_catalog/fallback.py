"""Embedded fallback datasets.

Served when the primary source cannot be fetched, decoded or validated.
They are deliberately small: enough for the UI to keep working and to show
a "limited dataset" indicator, never a substitute for the real catalogs.
"""

from clinref_catalog.catalog import CodeCatalog, DrugCatalog
from clinref_catalog.models.codes import CatalogMetadata, Category, ReferenceCode
from clinref_catalog.models.drugs import (
    Drug,
    DrugCategory,
    DrugInteraction,
    EvidenceLevel,
    InteractionSeverity,
)

FALLBACK_CODES_VERSION = "2024.1-fallback"
FALLBACK_DRUGS_VERSION = "2024.10-fallback"


# ---------------------------------------------------------------------------
# ICD-10 codes
# ---------------------------------------------------------------------------

_CATEGORIES = [
    ("A00-B99", "Certain infectious and parasitic diseases"),
    ("C00-D49", "Neoplasms"),
    ("J00-J99", "Diseases of the respiratory system"),
    ("K00-K95", "Diseases of the digestive system"),
    ("L00-L99", "Diseases of the skin and subcutaneous tissue"),
    ("M00-M99", "Diseases of the musculoskeletal system and connective tissue"),
    ("N00-N99", "Diseases of the genitourinary system"),
    ("R00-R99", "Symptoms, signs and abnormal clinical and laboratory findings"),
    ("Z00-Z99", "Factors influencing health status and contact with health services"),
]

# (code, description, category range)
_CODES = [
    ("A09", "Infectious gastroenteritis and colitis, unspecified", "A00-B99"),
    ("B34.9", "Viral infection, unspecified", "A00-B99"),
    ("C80.1", "Malignant (primary) neoplasm, unspecified", "C00-D49"),
    ("D49.9", "Neoplasm of unspecified behavior of unspecified site", "C00-D49"),
    ("L23.9", "Allergic contact dermatitis, unspecified cause", "L00-L99"),
    ("L30.9", "Dermatitis, unspecified", "L00-L99"),
    ("L50.9", "Urticaria, unspecified", "L00-L99"),
    ("M25.50", "Pain in unspecified joint", "M00-M99"),
    ("R50.9", "Fever, unspecified", "R00-R99"),
    ("R06.02", "Shortness of breath", "R00-R99"),
    ("R51.9", "Headache, unspecified", "R00-R99"),
    ("K59.00", "Constipation, unspecified", "K00-K95"),
    ("N39.0", "Urinary tract infection, site not specified", "N00-N99"),
    ("J06.9", "Acute upper respiratory infection, unspecified", "J00-J99"),
    ("Z00.00", "Encounter for general adult medical examination without abnormal findings", "Z00-Z99"),
]


def fallback_code_catalog() -> CodeCatalog:
    """Build the minimal embedded code catalog."""
    categories = [Category(code=code, title=title, range=code) for code, title in _CATEGORIES]
    titles = dict(_CATEGORIES)
    codes = [
        ReferenceCode(
            code=code,
            description=description,
            category=titles[range_code],
            category_code=range_code,
        )
        for code, description, range_code in _CODES
    ]
    metadata = CatalogMetadata(
        version=FALLBACK_CODES_VERSION,
        total_codes=len(codes),
        total_categories=len(categories),
    )
    return CodeCatalog(codes, categories, metadata)


# ---------------------------------------------------------------------------
# Drugs and interactions
# ---------------------------------------------------------------------------

_DRUGS = [
    Drug(
        id="warfarin",
        name="Warfarin",
        generic_name="warfarin sodium",
        brand_names=("Coumadin", "Jantoven"),
        category=DrugCategory.CARDIOVASCULAR,
        active_ingredients=("warfarin sodium",),
        mechanism="Vitamin K antagonist anticoagulant",
    ),
    Drug(
        id="aspirin",
        name="Aspirin",
        generic_name="acetylsalicylic acid",
        brand_names=("Bayer", "Bufferin", "Ecotrin"),
        category=DrugCategory.CARDIOVASCULAR,
        active_ingredients=("acetylsalicylic acid",),
        mechanism="COX-1 and COX-2 inhibitor, antiplatelet",
    ),
    Drug(
        id="lisinopril",
        name="Lisinopril",
        generic_name="lisinopril",
        brand_names=("Prinivil", "Zestril"),
        category=DrugCategory.CARDIOVASCULAR,
        active_ingredients=("lisinopril",),
        mechanism="ACE inhibitor",
    ),
    Drug(
        id="ibuprofen",
        name="Ibuprofen",
        generic_name="ibuprofen",
        brand_names=("Advil", "Motrin", "Nuprin"),
        category=DrugCategory.PAIN_MANAGEMENT,
        active_ingredients=("ibuprofen",),
        mechanism="Non-selective COX inhibitor (NSAID)",
    ),
    Drug(
        id="metformin",
        name="Metformin",
        generic_name="metformin hydrochloride",
        brand_names=("Glucophage", "Fortamet", "Glumetza"),
        category=DrugCategory.ENDOCRINE,
        active_ingredients=("metformin hydrochloride",),
        mechanism="Biguanide, decreases hepatic glucose production",
    ),
]

_INTERACTIONS = [
    DrugInteraction(
        id="warfarin-aspirin",
        drug1_id="warfarin",
        drug2_id="aspirin",
        drug1_name="Warfarin",
        drug2_name="Aspirin",
        severity=InteractionSeverity.MAJOR,
        mechanism="Additive anticoagulant and antiplatelet effects",
        description="Concurrent use significantly increases bleeding risk",
        clinical_effect="Increased risk of serious bleeding, including GI and intracranial hemorrhage",
        management_recommendation=(
            "Avoid combination if possible. If necessary, use lowest effective aspirin "
            "dose with frequent INR monitoring and bleeding assessment."
        ),
        evidence_level=EvidenceLevel.ESTABLISHED,
    ),
    DrugInteraction(
        id="warfarin-ibuprofen",
        drug1_id="warfarin",
        drug2_id="ibuprofen",
        drug1_name="Warfarin",
        drug2_name="Ibuprofen",
        severity=InteractionSeverity.MAJOR,
        mechanism="NSAIDs inhibit platelet function and may increase warfarin levels",
        description="Increased bleeding risk and potential displacement from protein binding",
        clinical_effect="Significantly increased risk of bleeding complications",
        management_recommendation="Avoid NSAIDs in patients on warfarin. Consider acetaminophen for pain relief.",
        evidence_level=EvidenceLevel.ESTABLISHED,
    ),
    DrugInteraction(
        id="lisinopril-ibuprofen",
        drug1_id="lisinopril",
        drug2_id="ibuprofen",
        drug1_name="Lisinopril",
        drug2_name="Ibuprofen",
        severity=InteractionSeverity.MODERATE,
        mechanism="NSAIDs reduce prostaglandin synthesis, counteracting ACE inhibitor effects",
        description="Reduced antihypertensive effect and potential kidney function impairment",
        clinical_effect="Decreased blood pressure control, increased risk of acute kidney injury",
        management_recommendation="Monitor blood pressure and kidney function.",
        evidence_level=EvidenceLevel.ESTABLISHED,
    ),
]


def fallback_drug_catalog() -> DrugCatalog:
    """Build the minimal embedded drug catalog."""
    return DrugCatalog(_DRUGS, _INTERACTIONS, version=FALLBACK_DRUGS_VERSION)
