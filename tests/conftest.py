"""Shared test fixtures."""

import sys
from pathlib import Path

import pytest

# Add src/ to path so tests can import livch4
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from livch4.catalog.store import load_catalog, parse_catalog  # noqa: E402
from livch4.core.config import Settings  # noqa: E402


@pytest.fixture(scope="session")
def catalog():
    """The catalog bundled with the package."""
    return load_catalog()


@pytest.fixture
def test_settings():
    """Settings with defaults only (no environment, no .env)."""
    return Settings(_env_file=None)


@pytest.fixture
def legacy_catalog():
    """Catalog storing variants as lists, in the older catalog layout."""
    return parse_catalog(
        {
            "turkeys": [
                {
                    "gender": "male",
                    "reproduction": False,
                    "feed_intake": 50.7,
                    "implified_emission_factor": 0.0001,
                },
                {
                    "gender": "female",
                    "reproduction": False,
                    "feed_intake": 24.3,
                    "implified_emission_factor": 0.00005,
                },
            ],
            "sheep": [
                {"reproduction": False, "feed_intake": 498, "implified_emission_factor": 12.72},
                {"reproduction": False, "feed_intake": 520, "implified_emission_factor": 13.0},
            ],
            "laying_hens": [
                {"hpr": False, "age": "365 days", "implified_emission_factor": 0.0010610},
                {"hpr": True, "age": "140 days", "implified_emission_factor": 3.561e-3},
            ],
        }
    )


@pytest.fixture
def dairy_cohort_data():
    """Danish dairy herd, as keyword arguments for CohortInput."""
    return {
        "animal_type": "dairy_cattle",
        "animal_number": 100,
        "weight": 650,
        "manure_excretion": 21900,
        "manure_cn": 15,
        "fraction_housing": 0.8,
        "fraction_grazing": 0.2,
        "fraction_actual_grass": 0.15,
        "feed_intake": 7300,
        "fraction_diet_grass": 0.3,
        "fraction_diet_beet": 0.05,
        "max_manure_ch4": 0.24,
    }
