"""Tests for the inventory runner."""

import pytest

from livch4.core.errors import MissingParameter
from livch4.enteric.tiers import Tier
from livch4.inventory.cohort import CohortInput
from livch4.inventory.inventory import run_inventories, run_inventory

B0 = 0.24
DAIRY_MCF = 6.0


def manure_ch4(vs: float, mcf: float, b0: float) -> float:
    return vs * mcf / 100 * 0.67 * b0


class TestDairyInventory:
    """End-to-end inventory of a dairy herd."""

    @pytest.fixture
    def result(self, dairy_cohort_data, catalog, test_settings):
        return run_inventory(CohortInput(**dairy_cohort_data), catalog, test_settings)

    def test_tier(self, result):
        """Verify dairy cattle are inventoried at Tier 2."""
        assert result.tier is Tier.TIER_2
        assert result.catalog_key == "dairy_cattle"

    def test_seasonal_factors(self, result):
        """Verify the annual factor is the seasonal sum."""
        ef = result.emission_factors
        assert ef.winter == pytest.approx(7300 * 18.9 / 55.65 * 0.06 * 0.7)
        assert ef.summer == pytest.approx(7300 * 18.9 / 55.65 * 0.06 * 0.3)
        assert ef.annual == pytest.approx(ef.winter + ef.summer)

    def test_weight_without_reference_keeps_factor(self, result):
        """Verify a weight without a reference weight keeps the catalog factor."""
        assert result.emission_factors.resolved.value == 164.69

    def test_enteric(self, result):
        """Verify enteric CH4 is head count times the annual factor."""
        assert result.emissions.enteric == pytest.approx(100 * result.emission_factors.annual)

    def test_volatile_solids(self, result):
        """Verify the volatile solids pools."""
        vs = result.volatile_solids
        assert vs.manure == pytest.approx(21900 * 0.15 * 0.8 * 0.8)
        assert vs.straw == 0
        assert vs.grass == pytest.approx(21900 / 365 * 0.15 * 0.8 * 0.2)

    def test_manure_uses_record_mcf(self, result):
        """Verify manure CH4 uses the record MCF and covers the whole cohort."""
        assert result.manure_mcf == DAIRY_MCF
        vs = result.volatile_solids
        assert result.emissions.manure.housing == pytest.approx(100 * manure_ch4(vs.housing, DAIRY_MCF, B0))
        assert result.emissions.manure.grass == pytest.approx(100 * manure_ch4(vs.grass, DAIRY_MCF, B0))

    def test_total_and_co2eq(self, result):
        """Verify total CH4 and its CO2 equivalent."""
        assert result.ch4_total == pytest.approx(result.emissions.enteric + result.emissions.manure.total)
        assert result.co2eq == pytest.approx(result.ch4_total * 28.0)

    def test_per_head(self, result):
        """Verify per-head enteric CH4 equals the annual factor."""
        assert result.per_head(result.emissions.enteric) == pytest.approx(result.emission_factors.annual)


class TestInventoryDefaults:
    """Parameters taken from the catalog or settings."""

    def test_grass_fraction_from_catalog(self, catalog, test_settings):
        """Verify the grass fraction defaults to the catalog."""
        cohort = CohortInput(
            animal_type="sheep",
            animal_number=10,
            manure_excretion=700,
            manure_cn=10,
            fraction_housing=0.3,
            fraction_grazing=0.7,
        )
        result = run_inventory(cohort, catalog, test_settings)
        assert result.emission_factors.summer == pytest.approx(498 * 18.83 / 55.65 * 0.065 * 0.73)
        assert any("catalog" in note for note in result.notes)

    def test_scaled_feed_intake_used(self, catalog, test_settings):
        """Verify the scaled feed intake feeds the seasonal factors."""
        cohort = CohortInput(
            animal_type="suckling_cattle",
            animal_number=1,
            weight=500,
            manure_excretion=10000,
            manure_cn=12,
            fraction_housing=0.5,
            fraction_grazing=0.5,
            fraction_diet_grass=0.0,
        )
        result = run_inventory(cohort, catalog, test_settings)
        feed = 2502 * (500 / 600) ** 0.75
        assert result.emission_factors.winter == pytest.approx(feed * 34.402 / 55.6 * 0.065)

    def test_tier1_uses_resolved_factor(self, catalog, test_settings):
        """Verify Tier 1 cohorts use the resolved factor."""
        cohort = CohortInput(
            animal_type="broilers",
            animal_number=50000,
            age=42,
            organic=False,
            manure_excretion=10.5,
            manure_cn=8,
            fraction_housing=1.0,
            fraction_grazing=0.0,
            methane_conversion_factor=1.5,
        )
        result = run_inventory(cohort, catalog, test_settings)
        assert result.tier is Tier.TIER_1
        assert result.emission_factors.winter is None
        assert result.emission_factors.annual == 1.5e-5
        assert result.emissions.enteric == pytest.approx(50000 * 1.5e-5)
        assert result.manure_mcf == 1.5

    def test_tier1_without_mcf(self, catalog, test_settings):
        """Verify a cohort without any MCF raises MissingParameter."""
        cohort = CohortInput(
            animal_type="pheasant",
            animal_number=100,
            manure_excretion=5,
            manure_cn=8,
            fraction_housing=1.0,
            fraction_grazing=0.0,
        )
        with pytest.raises(MissingParameter, match="methane_conversion_factor"):
            run_inventory(cohort, catalog, test_settings)

    def test_gwp_from_settings(self, dairy_cohort_data, catalog, test_settings):
        """Verify the CO2 equivalent uses the configured GWP."""
        settings = test_settings.model_copy(update={"ch4_gwp": 1.0})
        result = run_inventory(CohortInput(**dairy_cohort_data), catalog, settings)
        assert result.co2eq == pytest.approx(result.ch4_total)


class TestRunInventories:
    """Tests for multi-cohort runs."""

    def test_failure_does_not_stop_others(self, dairy_cohort_data, catalog, test_settings):
        """Verify a failing cohort does not stop the others."""
        turkeys = CohortInput(
            animal_type="turkeys",
            animal_number=100,
            manure_excretion=20,
            manure_cn=8,
            fraction_housing=1.0,
            fraction_grazing=0.0,
        )
        run = run_inventories([turkeys, CohortInput(**dairy_cohort_data)], catalog, test_settings)
        assert len(run.results) == 1
        assert len(run.failures) == 1
        assert run.failures[0].index == 0
        assert isinstance(run.failures[0].error, MissingParameter)
        assert not run.ok
        assert run.ch4_total == pytest.approx(run.results[0].ch4_total)

    def test_totals(self, dairy_cohort_data, catalog, test_settings):
        """Verify run totals sum the cohorts."""
        cohort = CohortInput(**dairy_cohort_data)
        run = run_inventories([cohort, cohort], catalog, test_settings)
        assert run.ok
        assert run.ch4_total == pytest.approx(2 * run.results[0].ch4_total)
        assert run.co2eq_total == pytest.approx(2 * run.results[0].co2eq)
