"""
Livestock CH4 inventory for one or more cohorts.

For each cohort:
1. Resolve the catalog key (with base/variant fallback)
2. Resolve the enteric emission factor (Tier 1 flat, Tier 2 scaled)
3. Tier 2: split into winter/summer factors with the cohort's diet
4. Enteric CH4 = head count x annual emission factor
5. Volatile solids per head (housing, straw, pasture)
6. Manure CH4 = VS x MCF x 0.67 x B0, for the whole cohort
7. Total CH4 and CO2-equivalent

All quantities are kg/yr for the cohort unless named per head.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable

from livch4.catalog.store import Catalog, default_catalog, load_catalog
from livch4.core.config import Settings
from livch4.core.config import settings as default_settings
from livch4.core.errors import EmissionFactorError, MissingParameter
from livch4.core.units import ch4_to_co2eq
from livch4.enteric.factors import (
    AnnualEmissionFactor,
    compute_enteric_ch4,
    record_seasonal_emission_factors,
    resolve_emission_factor,
)
from livch4.enteric.tiers import Tier
from livch4.inventory.cohort import CohortInput, manure_parameters, resolve_catalog_key
from livch4.manure.volatile_solids import (
    ManureCH4,
    VolatileSolids,
    grass_volatile_solids,
    manure_management_ch4,
    manure_volatile_solids,
    straw_volatile_solids,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmissionFactors:
    """Enteric emission factors of a cohort (kg CH4/(head.yr))."""

    resolved: AnnualEmissionFactor
    annual: float
    # Seasonal split, Tier 2 records with feed/energy data only
    winter: float | None = None
    summer: float | None = None


@dataclass(frozen=True)
class Emissions:
    """CH4 emissions of a cohort (kg CH4/yr)."""

    enteric: float
    manure: ManureCH4

    @property
    def total(self) -> float:
        return self.enteric + self.manure.total


@dataclass(frozen=True)
class InventoryResult:
    """Inventory of one cohort."""

    animal_type: str
    catalog_key: str
    tier: Tier
    animal_number: float
    emission_factors: EmissionFactors
    volatile_solids: VolatileSolids
    emissions: Emissions
    # kg CO2-eq/yr
    co2eq: float
    manure_mcf: float
    notes: list[str] = field(default_factory=list)

    @property
    def ch4_total(self) -> float:
        return self.emissions.total

    def per_head(self, value: float) -> float:
        return value / self.animal_number


@dataclass(frozen=True)
class CohortFailure:
    """A cohort that could not be inventoried."""

    index: int
    animal_type: str
    error: EmissionFactorError


@dataclass
class InventoryRun:
    """Inventory of several cohorts; failed cohorts do not stop the others."""

    results: list[InventoryResult] = field(default_factory=list)
    failures: list[CohortFailure] = field(default_factory=list)

    @property
    def ch4_total(self) -> float:
        return sum(r.ch4_total for r in self.results)

    @property
    def co2eq_total(self) -> float:
        return sum(r.co2eq for r in self.results)

    @property
    def ok(self) -> bool:
        return not self.failures


def catalog_from_settings(settings: Settings) -> Catalog:
    """Load the configured catalog, or the bundled one."""
    if settings.catalog_path is not None:
        return load_catalog(settings.catalog_path)
    return default_catalog()


def _seasonal_factors(
    cohort: CohortInput,
    catalog_key: str,
    resolved: AnnualEmissionFactor,
    settings: Settings,
    notes: list[str],
) -> EmissionFactors:
    record = resolved.record
    if resolved.tier is Tier.TIER_1 or record is None or not record.has_seasonal_parameters:
        if resolved.tier is Tier.TIER_2:
            notes.append("No feed/energy data in the catalog record; annual EF used as resolved")
        return EmissionFactors(resolved=resolved, annual=resolved.value)

    if cohort.feed_intake is not None:
        feed_intake = cohort.feed_intake
    elif resolved.feed_intake is not None:
        feed_intake = resolved.feed_intake
    else:
        feed_intake = record.feed_intake_ref
    if cohort.fraction_diet_grass is None and record.grass_feeding_share is not None:
        notes.append(f"Grass diet fraction from catalog ({record.grass_feeding_share:g}% of feeding days)")

    seasonal = record_seasonal_emission_factors(
        record,
        catalog_key,
        feed_intake=feed_intake,
        f_grass=cohort.fraction_diet_grass,
        f_beet=cohort.fraction_diet_beet,
        conv_factor=settings.ch4_energy_content,
        conv_factor_winter_other=settings.ch4_energy_content_winter_other,
    )
    return EmissionFactors(
        resolved=resolved,
        annual=seasonal.annual,
        winter=seasonal.winter,
        summer=seasonal.summer,
    )


def run_inventory(
    cohort: CohortInput,
    catalog: Catalog | None = None,
    settings: Settings | None = None,
) -> InventoryResult:
    """
    Compute the CH4 inventory of one cohort.

    Manure CH4 is computed per head and multiplied by the head count, so
    enteric, manure and total CH4 are all kg CH4/yr for the whole cohort.
    Totals that add per-head manure CH4 to herd-level enteric CH4 come out
    lower than these for any cohort of more than one head.

    Args:
        cohort: Validated cohort
        catalog: Reference catalog (default: from settings)
        settings: Global parameters (default: module settings)

    Returns:
        InventoryResult

    Raises:
        EmissionFactorError: Any resolution failure for this cohort
    """
    if settings is None:
        settings = default_settings
    if catalog is None:
        catalog = catalog_from_settings(settings)

    notes: list[str] = []
    catalog_key = resolve_catalog_key(cohort.animal_type, catalog)
    if catalog_key != cohort.animal_type:
        logger.debug("%s: using catalog entry %s", cohort.animal_type, catalog_key)
        notes.append(f"Catalog entry {catalog_key} used for {cohort.animal_type}")

    resolved = resolve_emission_factor(
        catalog,
        catalog_key,
        cohort.subject_attributes(),
        reference_weight_default=settings.reference_weight_default,
        reference_age_default=settings.reference_age_default,
        scale_absent_basis=settings.scale_absent_basis,
    )
    notes.append(resolved.notes)

    factors = _seasonal_factors(cohort, catalog_key, resolved, settings, notes)
    enteric = compute_enteric_ch4(cohort.animal_number, factors.annual)

    params = manure_parameters(cohort, settings)
    vs = VolatileSolids(
        manure=manure_volatile_solids(
            cohort.manure_excretion, params.dm_manure, params.fraction_dm_vs, params.fraction_ash
        ),
        straw=straw_volatile_solids(
            cohort.straw_amount, params.straw_dm, params.fraction_ash_straw, cohort.fraction_actual_grass
        ),
        grass=grass_volatile_solids(
            cohort.manure_excretion, params.dm_manure, params.fraction_dm_vs, cohort.fraction_grazing
        ),
    )

    mcf = cohort.methane_conversion_factor
    if mcf is None and resolved.record is not None:
        mcf = resolved.record.methane_conversion_rate
    if mcf is None:
        raise MissingParameter("methane_conversion_factor", catalog_key)

    manure = manure_management_ch4(vs.housing, mcf, params.max_manure_ch4, vs.grass).scaled(cohort.animal_number)
    emissions = Emissions(enteric=enteric, manure=manure)

    logger.debug(
        "%s: enteric %.4g kg, manure %.4g kg, total %.4g kg CH4/yr",
        cohort.animal_type,
        emissions.enteric,
        emissions.manure.total,
        emissions.total,
    )

    return InventoryResult(
        animal_type=cohort.animal_type,
        catalog_key=catalog_key,
        tier=resolved.tier,
        animal_number=cohort.animal_number,
        emission_factors=factors,
        volatile_solids=vs,
        emissions=emissions,
        co2eq=ch4_to_co2eq(emissions.total, settings.ch4_gwp),
        manure_mcf=mcf,
        notes=notes,
    )


def run_inventories(
    cohorts: Iterable[CohortInput],
    catalog: Catalog | None = None,
    settings: Settings | None = None,
) -> InventoryRun:
    """
    Compute the inventory of several cohorts against one catalog.

    A cohort that fails with an EmissionFactorError is recorded in
    `failures` and the remaining cohorts are still computed.
    """
    if settings is None:
        settings = default_settings
    if catalog is None:
        catalog = catalog_from_settings(settings)

    run = InventoryRun()
    for index, cohort in enumerate(cohorts):
        try:
            run.results.append(run_inventory(cohort, catalog, settings))
        except EmissionFactorError as e:
            logger.warning("Cohort %d (%s) failed: %s", index, cohort.animal_type, e)
            run.failures.append(CohortFailure(index=index, animal_type=cohort.animal_type, error=e))
    return run
