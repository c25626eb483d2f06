import pytest

from clinref_catalog.icd10 import CodeLookupEngine
from clinref_catalog.interactions import InteractionMatcher

from helpers.catalogs import FAST_SETTINGS, sample_code_catalog, sample_drug_catalog


@pytest.fixture(scope="session")
def code_catalog():
    return sample_code_catalog()

@pytest.fixture(scope="session")
def codes(code_catalog):
    return CodeLookupEngine(code_catalog)

@pytest.fixture(scope="session")
def drug_catalog():
    return sample_drug_catalog()

@pytest.fixture(scope="session")
def matcher(drug_catalog):
    return InteractionMatcher(drug_catalog)

@pytest.fixture
def fast_settings():
    return FAST_SETTINGS
