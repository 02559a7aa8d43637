"""Livestock CH4 emissions (IPCC 2019 Tier 1/Tier 2).

This package resolves enteric fermentation emission factors from a
reference catalog, scales them to the animals at hand and combines them
with manure management CH4 into a per-cohort inventory.

Subpackages:
- livch4.core: Configuration, units and errors
- livch4.catalog: Reference catalog loading and parsing
- livch4.enteric: Tiers, record matching, scaling and emission factors
- livch4.manure: Volatile solids and manure management CH4
- livch4.inventory: Cohort input, inventory runner and CLI
"""

# Re-export common items for convenience
from livch4.catalog import Catalog, default_catalog, load_catalog
from livch4.core import EmissionFactorError, settings
from livch4.enteric import (
    AnnualEmissionFactor,
    SubjectAttributes,
    Tier,
    classify,
    compute_enteric_ch4,
    resolve_emission_factor,
)
from livch4.inventory import CohortInput, InventoryResult, run_inventories, run_inventory

__all__ = [
    "settings",
    "Catalog",
    "load_catalog",
    "default_catalog",
    "EmissionFactorError",
    "Tier",
    "classify",
    "SubjectAttributes",
    "AnnualEmissionFactor",
    "resolve_emission_factor",
    "compute_enteric_ch4",
    "CohortInput",
    "InventoryResult",
    "run_inventory",
    "run_inventories",
]

__version__ = "0.1.0"
