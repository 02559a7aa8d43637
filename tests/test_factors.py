"""Tests for enteric emission factor resolution."""

import pytest

from livch4.catalog.store import Catalog, parse_catalog
from livch4.core.errors import (
    AttributeMismatch,
    InvalidScalingBasis,
    MissingParameter,
    NoMatchingRecord,
    UnknownAnimalType,
)
from livch4.enteric.factors import (
    CH4_ENERGY_CONTENT,
    CH4_ENERGY_CONTENT_WINTER_OTHER,
    AnnualEmissionFactor,
    SeasonalEmissionFactors,
    compute_enteric_ch4,
    daily_energy_emission_factor,
    record_seasonal_emission_factors,
    resolve_emission_factor,
    seasonal_emission_factors,
    summer_ef_dairy,
    summer_ef_other,
    winter_ef_dairy,
    winter_ef_other,
)
from livch4.enteric.matching import SubjectAttributes
from livch4.enteric.tiers import Tier


class TestTier1:
    """Tier 1 emission factors."""

    def test_pheasant_passes_through(self, catalog):
        """Verify a Tier 1 factor without scaling passes through unchanged."""
        ef = resolve_emission_factor(catalog, "pheasant")
        assert ef.tier is Tier.TIER_1
        assert ef.value == 0.0047
        assert ef.scaling_factor == 1.0

    def test_laying_hens_exact_age(self, catalog):
        """Verify an exact age match returns the catalog factor."""
        attrs = SubjectAttributes(age=140, housing_period_flag=True)
        assert resolve_emission_factor(catalog, "laying_hens_", attrs).value == 3.561e-3

    def test_laying_hens_age_scaled(self, catalog):
        """Verify a different age scales the factor linearly."""
        attrs = SubjectAttributes(age=200, housing_period_flag=True)
        ef = resolve_emission_factor(catalog, "laying_hens_", attrs)
        assert ef.value == pytest.approx(3.561e-3 * (200 / 140), rel=1e-9)
        assert ef.reference_value == 3.561e-3

    def test_age_scaling_ignores_directives(self, catalog):
        """Tier 1 scales by age whether or not scale_by_age is set."""
        attrs = SubjectAttributes(age=200, housing_period_flag=True, scale_by_age=False)
        ef = resolve_emission_factor(catalog, "laying_hens_", attrs)
        assert ef.value == pytest.approx(3.561e-3 * (200 / 140))

    def test_zero_age_rejected(self, catalog):
        """Verify an age of zero raises instead of scaling the factor to zero."""
        attrs = SubjectAttributes(age=0, housing_period_flag=True)
        with pytest.raises(InvalidScalingBasis, match="positive"):
            resolve_emission_factor(catalog, "laying_hens_", attrs)

    def test_broilers(self, catalog):
        """Verify conventional broilers resolve to their catalog factor."""
        ef = resolve_emission_factor(catalog, "broilers", SubjectAttributes(age=42, organic=False))
        assert ef.value == 1.5e-5

    def test_organic_broilers_mismatch(self, catalog):
        """Verify a mismatching organic flag names the expected value."""
        with pytest.raises(AttributeMismatch, match="organic expected False but got True"):
            resolve_emission_factor(catalog, "broilers", SubjectAttributes(age=42, organic=True))

    def test_missing_required_attribute(self, catalog):
        """Verify a missing required attribute raises MissingParameter."""
        with pytest.raises(MissingParameter, match="organic"):
            resolve_emission_factor(catalog, "broilers_", SubjectAttributes(age=91))

    def test_record_without_factor(self):
        """Verify a record without an emission factor raises NoMatchingRecord."""
        catalog = parse_catalog({"pheasant": {"weight": 1.2}})
        with pytest.raises(NoMatchingRecord, match="No emission factor found for pheasant"):
            resolve_emission_factor(catalog, "pheasant")

    def test_fur_animals_not_in_catalog(self, catalog):
        """Verify a known type absent from the catalog raises UnknownAnimalType."""
        with pytest.raises(UnknownAnimalType, match="fur_animals"):
            resolve_emission_factor(catalog, "fur_animals")


class TestTier2:
    """Tier 2 emission factors."""

    def test_unscaled(self, catalog):
        """Verify an unscaled Tier 2 factor and feed intake come from the catalog."""
        ef = resolve_emission_factor(catalog, "dairy_cattle")
        assert ef.tier is Tier.TIER_2
        assert ef.value == 164.69
        assert ef.feed_intake == 8082

    def test_weight_scaling(self, catalog):
        """Verify weight scaling applies the same ratio to feed intake and factor."""
        attrs = SubjectAttributes(weight=500, scale_by_weight=True)
        ef = resolve_emission_factor(catalog, "suckling_cattle", attrs)
        ratio = (500 / 600) ** 0.75
        assert ef.value == pytest.approx(72.18 * ratio)
        assert ef.feed_intake == pytest.approx(2502 * ratio)
        assert ef.scaling_factor == pytest.approx(ratio)

    def test_weight_given_without_directive(self, catalog):
        """Verify a weight without scale_by_weight leaves the factor unchanged."""
        ef = resolve_emission_factor(catalog, "suckling_cattle", SubjectAttributes(weight=500))
        assert ef.value == 72.18

    def test_range_mean_weight_is_no_op(self, catalog):
        """Verify the mean of the reference range leaves the factor unchanged."""
        attrs = SubjectAttributes(weight=18.85, scale_by_weight=True)
        ef = resolve_emission_factor(catalog, "piglets", attrs)
        assert ef.value == pytest.approx(0.08)

    def test_age_scaling_range_upper_bound(self, catalog):
        """Verify age scaling uses the upper bound of the reference range."""
        attrs = SubjectAttributes(age=3, scale_by_age=True)
        ef = resolve_emission_factor(catalog, "bull", attrs)
        assert ef.value == pytest.approx(6.56 * 3 / 6)

    def test_age_without_directive_unscaled(self, catalog):
        """Verify an age without scale_by_age leaves the factor unchanged."""
        ef = resolve_emission_factor(catalog, "bull", SubjectAttributes(age=3))
        assert ef.value == 6.56

    def test_absent_weight_basis_skipped(self, catalog):
        """Verify an absent reference weight skips weight scaling."""
        attrs = SubjectAttributes(weight=70, scale_by_weight=True)
        assert resolve_emission_factor(catalog, "fattening_pigs", attrs).value == 0.43

    def test_absent_weight_basis_with_default(self, catalog):
        """Verify scale_absent_basis scales against the default weight."""
        attrs = SubjectAttributes(weight=70, scale_by_weight=True)
        ef = resolve_emission_factor(catalog, "fattening_pigs", attrs, scale_absent_basis=True)
        assert ef.value == pytest.approx(0.43 * (70 / 600) ** 0.75)

    def test_custom_default_weight(self, catalog):
        """Verify a custom default reference weight is honoured."""
        attrs = SubjectAttributes(weight=70, scale_by_weight=True)
        ef = resolve_emission_factor(
            catalog,
            "fattening_pigs",
            attrs,
            reference_weight_default=70,
            scale_absent_basis=True,
        )
        assert ef.value == pytest.approx(0.43)

    def test_turkey_gender(self, catalog):
        """Verify turkeys resolve by gender."""
        ef = resolve_emission_factor(catalog, "turkeys_", SubjectAttributes(gender="female"))
        assert ef.value == 0.0001
        with pytest.raises(AttributeMismatch):
            resolve_emission_factor(catalog, "turkeys_", SubjectAttributes(gender="male"))

    def test_idempotent(self, catalog):
        """Verify repeated resolution gives equal results."""
        attrs = SubjectAttributes(weight=500, scale_by_weight=True)
        first = resolve_emission_factor(catalog, "bull_", attrs)
        second = resolve_emission_factor(catalog, "bull_", attrs)
        assert first == second

    def test_unknown_type_checked_first(self):
        """Verify the animal type is checked before the catalog."""
        with pytest.raises(UnknownAnimalType):
            resolve_emission_factor(Catalog({}), "geese")


class TestSeasonalFormulas:
    """Winter/summer emission factor formulas."""

    def test_dairy_winter(self):
        """Verify the two-term dairy winter formula."""
        expected = 7300 * (18.9 / 55.65 * 6.0 / 100 * 0.65 + 18.9 / 55.65 * 6.0 / 100 * 0.05)
        assert winter_ef_dairy(7300, 18.9, 6.0, 0.3, 0.05) == pytest.approx(expected)

    def test_dairy_summer(self):
        """Verify the dairy summer formula."""
        assert summer_ef_dairy(7300, 18.9, 6.0, 0.3) == pytest.approx(7300 * 18.9 / 55.65 * 0.06 * 0.3)

    def test_winter_energy_content_asymmetry(self):
        """Non-dairy winter rations use 55.6, everything else 55.65."""
        assert CH4_ENERGY_CONTENT_WINTER_OTHER == 55.6
        assert CH4_ENERGY_CONTENT == 55.65
        other = winter_ef_other(1000, 18.0, 6.0, 0.0)
        dairy = winter_ef_dairy(1000, 18.0, 6.0, 0.0, 0.0)
        assert other == pytest.approx(1000 * 18.0 / 55.6 * 0.06)
        assert dairy == pytest.approx(1000 * 18.0 / 55.65 * 0.06)
        assert other > dairy

    def test_winter_summer_ratio_other(self):
        """Verify identical non-dairy inputs differ only by the energy content."""
        winter = winter_ef_other(1000, 18.0, 6.0, 0.5)
        summer = summer_ef_other(1000, 18.0, 6.0, 0.5)
        assert winter / summer == pytest.approx(55.65 / 55.6)

    def test_other_summer(self):
        """Verify the non-dairy summer formula."""
        assert summer_ef_other(498, 18.83, 6.5, 0.73) == pytest.approx(498 * 18.83 / 55.65 * 0.065 * 0.73)

    def test_annual_is_sum(self):
        """Verify the annual factor is winter plus summer."""
        seasonal = SeasonalEmissionFactors(winter=10.0, summer=2.5)
        assert seasonal.annual == 12.5

    def test_dairy_seasons_cover_full_ration(self):
        """Verify dairy seasons add up to the full ration."""
        seasonal = seasonal_emission_factors("dairy_cattle", 7300, 18.9, 18.9, 6.0, f_grass=0.3, f_beet=0.05)
        assert seasonal.annual == pytest.approx(7300 * 18.9 / 55.65 * 0.06)

    def test_separate_grass_rate(self):
        """Verify a separate grass conversion rate drives the summer factor."""
        seasonal = seasonal_emission_factors("sheep", 498, 29.95, 18.83, 6.5, f_grass=0.73, ch4_conv_rate_grass=5.0)
        assert seasonal.summer == pytest.approx(summer_ef_other(498, 18.83, 5.0, 0.73))

    def test_daily_energy(self):
        """Verify the daily gross energy emission factor."""
        assert daily_energy_emission_factor(200, 6.5) == pytest.approx(200 * 0.065 * 365 / 55.65)


class TestRecordSeasonal:
    """Seasonal factors defaulted from a catalog record."""

    def test_defaults_from_record(self, catalog):
        """Verify seasonal inputs default to the catalog record."""
        record = catalog.record("sheep")
        seasonal = record_seasonal_emission_factors(record, "sheep")
        assert seasonal.winter == pytest.approx(winter_ef_other(498, 29.95, 6.5, 0.73))
        assert seasonal.summer == pytest.approx(summer_ef_other(498, 18.83, 6.5, 0.73))

    def test_overrides(self, catalog):
        """Verify explicit diet inputs override the record."""
        record = catalog.record("dairy_cattle")
        seasonal = record_seasonal_emission_factors(record, "dairy_cattle", feed_intake=7300, f_grass=0.3, f_beet=0.05)
        assert seasonal.summer == pytest.approx(summer_ef_dairy(7300, 18.9, 6.0, 0.3))

    def test_missing_conversion_rate(self, catalog):
        """Verify a record without a conversion rate raises MissingParameter."""
        with pytest.raises(MissingParameter, match="methane_conversion_factor"):
            record_seasonal_emission_factors(catalog.record("geese"), "geese")


class TestComputeEntericCH4:
    """Enteric CH4 totals."""

    def test_count_times_factor(self):
        """Verify enteric CH4 is head count times factor."""
        assert compute_enteric_ch4(100, 164.69) == pytest.approx(16469.0)

    def test_accepts_resolved_factor(self, catalog):
        """Verify a resolved factor can be passed directly."""
        ef = resolve_emission_factor(catalog, "pheasant")
        assert isinstance(ef, AnnualEmissionFactor)
        assert compute_enteric_ch4(1000, ef) == pytest.approx(4.7)

    def test_zero_head(self):
        """Verify zero head give zero CH4."""
        assert compute_enteric_ch4(0, 12.0) == 0

    def test_negative_count_rejected(self):
        """Verify a negative head count is rejected."""
        with pytest.raises(ValueError):
            compute_enteric_ch4(-1, 12.0)
