"""Core module - configuration, units and errors."""

from livch4.core import units
from livch4.core.config import Settings, settings
from livch4.core.errors import (
    AmbiguousMatch,
    AttributeMismatch,
    CatalogError,
    EmissionFactorError,
    InvalidScalingBasis,
    MissingParameter,
    NoMatchingRecord,
    UnknownAnimalType,
)
from livch4.core.units import (
    ch4_kg_to_display,
    ch4_to_co2eq,
    format_ch4,
    format_emission_factor,
    get_mass_unit,
)

__all__ = [
    "units",
    "Settings",
    "settings",
    # Errors
    "EmissionFactorError",
    "CatalogError",
    "UnknownAnimalType",
    "MissingParameter",
    "NoMatchingRecord",
    "AttributeMismatch",
    "AmbiguousMatch",
    "InvalidScalingBasis",
    # Unit conversion helpers
    "ch4_kg_to_display",
    "ch4_to_co2eq",
    "format_ch4",
    "format_emission_factor",
    "get_mass_unit",
]
