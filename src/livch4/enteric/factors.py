"""
Enteric fermentation emission factors (IPCC 2019 Refinement, Vol 4, Ch 10).

Tier 1 (poultry, fur animals):
    The implied emission factor of the catalog record. Poultry queried at an
    age with no matching record scale linearly from the baseline record.

Tier 2 (cattle, pigs, small ruminants, horses, turkeys):
    Reference implied emission factor, rescaled with the feed intake when
    the caller asks for weight/age scaling. For inventories the factor is
    split into a winter (housed ration) and summer (grass) part:

    winter, non-dairy = FU * (GE_w / 55.6) * Ym/100 * (1 - f_grass)
    winter, dairy     = FU * ((GE_w / 55.65) * Ym_beet/100 * (1 - f_grass - f_beet)
                              + (GE_w / 55.65) * Ym_beet/100 * f_beet)
    summer            = FU * (GE_s / 55.65) * Ym_grass/100 * f_grass
    annual            = winter + summer

    where FU is feed units/yr, GE is MJ per feed unit, Ym is the methane
    conversion rate (% of GE) and 55.65 MJ/kg is the energy content of CH4.

    The dairy winter ration keeps its two-term beet/other split even though
    both terms use the same Ym; the split mirrors the Danish inventory
    tables. The 55.6 constant for non-dairy winter rations is likewise taken
    as published.

References:
-----------
[1] IPCC (2019). 2019 Refinement to the 2006 IPCC Guidelines for National
    Greenhouse Gas Inventories, Vol 4, Ch 10, Eq. 10.21.

[2] Nielsen, O.-K., et al. Denmark's National Inventory Report,
    Agriculture sector, DCE - Danish Centre for Environment and Energy.
"""

import logging
from dataclasses import dataclass, field

from livch4.catalog.store import Catalog, ReferenceRecord
from livch4.core.errors import MissingParameter, NoMatchingRecord
from livch4.enteric.matching import RecordMatch, SubjectAttributes, match_record
from livch4.enteric.scaling import (
    DEFAULT_REFERENCE_AGE,
    DEFAULT_REFERENCE_WEIGHT,
    scale_by_age,
    scale_emission_factor,
    scale_record_feed_intake,
)
from livch4.enteric.tiers import Tier, classify, is_dairy

logger = logging.getLogger(__name__)

# Energy content of methane (MJ/kg CH4)
CH4_ENERGY_CONTENT = 55.65
CH4_ENERGY_CONTENT_WINTER_OTHER = 55.6

DAYS_PER_YEAR = 365


@dataclass(frozen=True)
class AnnualEmissionFactor:
    """Resolved enteric emission factor for one cohort (kg CH4/head/yr)."""

    animal_type: str
    tier: Tier
    # Emission factor after any scaling
    value: float
    # Implied emission factor of the catalog record
    reference_value: float
    record_key: str
    # value / reference_value
    scaling_factor: float = 1.0
    # Scaled feed intake (feed units/yr), Tier 2 records only
    feed_intake: float | None = None
    notes: str = ""
    # Matched catalog record
    record: ReferenceRecord | None = field(default=None, repr=False, compare=False)


@dataclass(frozen=True)
class SeasonalEmissionFactors:
    """Winter and summer partial emission factors (kg CH4/head/yr)."""

    winter: float
    summer: float

    @property
    def annual(self) -> float:
        return annual_emission_factor(self.winter, self.summer)


# =============================================================================
# Seasonal Formulas
# =============================================================================


def winter_ef_dairy(
    feed: float,
    ge_winter: float,
    ch4_rate_beet: float,
    f_grass: float,
    f_beet: float,
    conv_factor: float = CH4_ENERGY_CONTENT,
) -> float:
    """
    Winter emission factor for dairy cattle.

    Args:
        feed: Feed intake (feed units/yr)
        ge_winter: Gross energy of the winter ration (MJ/feed unit)
        ch4_rate_beet: Methane conversion rate of the beet ration (% GE)
        f_grass: Fraction of the year fed on grass (0-1)
        f_beet: Fraction of the year fed on beet (0-1)
        conv_factor: Energy content of CH4 (MJ/kg)

    Returns:
        kg CH4/(head.yr)
    """
    return feed * (
        (ge_winter / conv_factor) * ch4_rate_beet / 100 * (1 - f_grass - f_beet)
        + (ge_winter / conv_factor) * ch4_rate_beet / 100 * f_beet
    )


def winter_ef_other(
    feed_unit: float,
    ge_winter: float,
    ch4_rate: float,
    f_grass: float,
    conv_factor: float = CH4_ENERGY_CONTENT_WINTER_OTHER,
) -> float:
    """Winter emission factor for animals other than dairy cattle (kg CH4/(head.yr))."""
    return feed_unit * (ge_winter / conv_factor) * ch4_rate / 100 * (1 - f_grass)


def summer_ef_dairy(
    feed: float,
    ge_summer: float,
    ch4_rate_grass: float,
    f_grass: float,
    conv_factor: float = CH4_ENERGY_CONTENT,
) -> float:
    """Summer (grass) emission factor for dairy cattle (kg CH4/(head.yr))."""
    return feed * (ge_summer / conv_factor) * ch4_rate_grass / 100 * f_grass


def summer_ef_other(
    feed_unit: float,
    ge_summer: float,
    ch4_rate_grass: float,
    f_grass: float,
    conv_factor: float = CH4_ENERGY_CONTENT,
) -> float:
    """Summer (grass) emission factor for animals other than dairy cattle (kg CH4/(head.yr))."""
    return feed_unit * (ge_summer / conv_factor) * ch4_rate_grass / 100 * f_grass


def annual_emission_factor(winter_ef: float, summer_ef: float) -> float:
    """Annual emission factor; the seasons already carry their share of the year."""
    return winter_ef + summer_ef


def daily_energy_emission_factor(
    gross_energy_intake: float,
    ch4_conv_rate: float,
    conv_factor: float = CH4_ENERGY_CONTENT,
) -> float:
    """
    IPCC Eq. 10.21: EF = GE * (Ym / 100) * 365 / 55.65.

    Args:
        gross_energy_intake: Gross energy intake (MJ/head/day)
        ch4_conv_rate: Methane conversion rate Ym (% GE)
        conv_factor: Energy content of CH4 (MJ/kg)

    Returns:
        kg CH4/(head.yr)
    """
    return gross_energy_intake * ch4_conv_rate / 100 * DAYS_PER_YEAR / conv_factor


def seasonal_emission_factors(
    animal_type: str,
    feed_intake: float,
    ge_winter: float,
    ge_summer: float,
    ch4_conv_rate: float,
    f_grass: float,
    f_beet: float = 0.0,
    ch4_conv_rate_grass: float | None = None,
    ch4_conv_rate_beet: float | None = None,
    conv_factor: float = CH4_ENERGY_CONTENT,
    conv_factor_winter_other: float = CH4_ENERGY_CONTENT_WINTER_OTHER,
) -> SeasonalEmissionFactors:
    """
    Winter and summer emission factors for a Tier 2 cohort.

    Dairy cattle use the beet-aware winter ration; every other species uses
    the plain winter ration. Grass and beet conversion rates default to
    `ch4_conv_rate`.
    """
    rate_grass = ch4_conv_rate if ch4_conv_rate_grass is None else ch4_conv_rate_grass

    if is_dairy(animal_type):
        rate_beet = ch4_conv_rate if ch4_conv_rate_beet is None else ch4_conv_rate_beet
        winter = winter_ef_dairy(feed_intake, ge_winter, rate_beet, f_grass, f_beet, conv_factor)
        summer = summer_ef_dairy(feed_intake, ge_summer, rate_grass, f_grass, conv_factor)
    else:
        winter = winter_ef_other(feed_intake, ge_winter, ch4_conv_rate, f_grass, conv_factor_winter_other)
        summer = summer_ef_other(feed_intake, ge_summer, rate_grass, f_grass, conv_factor)

    return SeasonalEmissionFactors(winter=winter, summer=summer)


def record_seasonal_emission_factors(
    record: ReferenceRecord,
    animal_type: str,
    feed_intake: float | None = None,
    f_grass: float | None = None,
    f_beet: float | None = None,
    conv_factor: float = CH4_ENERGY_CONTENT,
    conv_factor_winter_other: float = CH4_ENERGY_CONTENT_WINTER_OTHER,
) -> SeasonalEmissionFactors:
    """
    Seasonal emission factors with unset inputs taken from a catalog record.

    Falls back to the record's feed intake, grass feeding share and methane
    conversion rate.

    Raises:
        MissingParameter: Neither the caller nor the record supplies an input
    """
    if feed_intake is None:
        feed_intake = record.feed_intake_ref
    if f_grass is None:
        f_grass = record.grass_fraction

    required = {
        "feed_intake": feed_intake,
        "GE_winter": record.gross_energy_winter,
        "GE_summer": record.gross_energy_summer,
        "methane_conversion_factor": record.methane_conversion_rate,
        "fraction_diet_grass": f_grass,
    }
    for name, value in required.items():
        if value is None:
            raise MissingParameter(name, animal_type)

    return seasonal_emission_factors(
        animal_type,
        feed_intake=feed_intake,
        ge_winter=record.gross_energy_winter,
        ge_summer=record.gross_energy_summer,
        ch4_conv_rate=record.methane_conversion_rate,
        f_grass=f_grass,
        f_beet=f_beet or 0.0,
        conv_factor=conv_factor,
        conv_factor_winter_other=conv_factor_winter_other,
    )


# =============================================================================
# Emission Factor Resolution
# =============================================================================


def _implied_factor(match: RecordMatch, animal_type: str, attributes: SubjectAttributes) -> float:
    ef = match.record.implied_emission_factor
    if ef is None:
        raise NoMatchingRecord(
            animal_type,
            attributes.supplied(),
            f"No emission factor found for {animal_type} (record {match.record.key})",
        )
    return ef


def tier1_emission_factor(
    catalog: Catalog,
    animal_type: str,
    attributes: SubjectAttributes,
) -> AnnualEmissionFactor:
    """
    Tier 1 emission factor.

    Exact matches return the catalog factor. A queried age without an exact
    record scales the baseline linearly, whatever the scaling directives say.
    """
    match = match_record(catalog, animal_type, attributes)
    reference_ef = _implied_factor(match, animal_type, attributes)

    if match.age_scaling_required:
        value = scale_by_age(reference_ef, match.record.age_basis, attributes.age)
        notes = f"Age-scaled from {match.record.age_basis} to {attributes.age:g}"
    else:
        value = reference_ef
        notes = "Catalog implied emission factor"

    logger.debug("%s: tier 1 EF %.6g kg CH4/head/yr (%s)", animal_type, value, notes)

    return AnnualEmissionFactor(
        animal_type=animal_type,
        tier=Tier.TIER_1,
        value=value,
        reference_value=reference_ef,
        record_key=match.record.key,
        scaling_factor=value / reference_ef if reference_ef else 1.0,
        notes=notes,
        record=match.record,
    )


def tier2_emission_factor(
    catalog: Catalog,
    animal_type: str,
    attributes: SubjectAttributes,
    reference_weight_default: float = DEFAULT_REFERENCE_WEIGHT,
    reference_age_default: float = DEFAULT_REFERENCE_AGE,
    scale_absent_basis: bool = False,
) -> AnnualEmissionFactor:
    """
    Tier 2 emission factor.

    The reference factor is rescaled with the feed intake only when
    `scale_by_weight`/`scale_by_age` is set on the query.
    """
    match = match_record(catalog, animal_type, attributes)
    reference_ef = _implied_factor(match, animal_type, attributes)

    if match.age_scaling_required and not attributes.scale_by_age:
        logger.debug(
            "%s: age %s differs from reference %s but age scaling was not requested",
            animal_type,
            attributes.age,
            match.record.age_basis,
        )

    scaling = scale_record_feed_intake(
        match.record,
        weight=attributes.weight,
        age=attributes.age,
        scale_weight=attributes.scale_by_weight,
        scale_age=attributes.scale_by_age,
        reference_weight_default=reference_weight_default,
        reference_age_default=reference_age_default,
        scale_absent_basis=scale_absent_basis,
    )

    if scaling is None:
        value = reference_ef
        feed_intake = None
        notes = "Catalog implied emission factor (no reference feed intake)"
    else:
        value = scale_emission_factor(reference_ef, scaling.reference, scaling.scaled)
        feed_intake = scaling.scaled
        applied = [name for name, done in (("weight", scaling.by_weight), ("age", scaling.by_age)) if done]
        if applied:
            notes = f"Scaled by {' and '.join(applied)}: feed intake {scaling.reference:g} -> {scaling.scaled:.2f} FU/yr"
        else:
            notes = "Catalog implied emission factor"

    logger.debug("%s: tier 2 EF %.6g kg CH4/head/yr (%s)", animal_type, value, notes)

    return AnnualEmissionFactor(
        animal_type=animal_type,
        tier=Tier.TIER_2,
        value=value,
        reference_value=reference_ef,
        record_key=match.record.key,
        scaling_factor=value / reference_ef if reference_ef else 1.0,
        feed_intake=feed_intake,
        notes=notes,
        record=match.record,
    )


def resolve_emission_factor(
    catalog: Catalog,
    animal_type: str,
    attributes: SubjectAttributes | None = None,
    reference_weight_default: float = DEFAULT_REFERENCE_WEIGHT,
    reference_age_default: float = DEFAULT_REFERENCE_AGE,
    scale_absent_basis: bool = False,
) -> AnnualEmissionFactor:
    """
    Resolve the enteric emission factor for a cohort.

    Classifies the animal type, matches the catalog record and applies the
    tier-specific scaling rules.

    Args:
        catalog: Loaded reference catalog
        animal_type: Catalog key, e.g. "bull_"
        attributes: Cohort query (defaults to an empty query)
        reference_weight_default: Reference weight for records without one (kg)
        reference_age_default: Reference age for records without one
        scale_absent_basis: Scale records without a basis against the defaults

    Returns:
        AnnualEmissionFactor

    Raises:
        UnknownAnimalType, MissingParameter, NoMatchingRecord, AmbiguousMatch,
        InvalidScalingBasis
    """
    tier = classify(animal_type)
    if attributes is None:
        attributes = SubjectAttributes()

    if tier is Tier.TIER_1:
        return tier1_emission_factor(catalog, animal_type, attributes)
    return tier2_emission_factor(
        catalog,
        animal_type,
        attributes,
        reference_weight_default=reference_weight_default,
        reference_age_default=reference_age_default,
        scale_absent_basis=scale_absent_basis,
    )


def compute_enteric_ch4(animal_count: float, annual_emission_factor: float | AnnualEmissionFactor) -> float:
    """
    Enteric CH4 of a cohort (kg CH4/yr) = head count x annual emission factor.

    Identical for Tier 1 and Tier 2.
    """
    if animal_count < 0:
        raise ValueError(f"animal_count must not be negative, got {animal_count}")
    if isinstance(annual_emission_factor, AnnualEmissionFactor):
        annual_emission_factor = annual_emission_factor.value
    return animal_count * annual_emission_factor
