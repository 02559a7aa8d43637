"""Inventory module - cohort input, inventory runner and CLI."""

from livch4.inventory.cohort import CohortInput, resolve_catalog_key
from livch4.inventory.inventory import (
    CohortFailure,
    EmissionFactors,
    Emissions,
    InventoryResult,
    InventoryRun,
    run_inventories,
    run_inventory,
)

__all__ = [
    "CohortInput",
    "resolve_catalog_key",
    "EmissionFactors",
    "Emissions",
    "InventoryResult",
    "InventoryRun",
    "CohortFailure",
    "run_inventory",
    "run_inventories",
]
