"""Manure module - volatile solids and manure management CH4."""

from livch4.manure.volatile_solids import (
    ManureCH4,
    VolatileSolids,
    grass_volatile_solids,
    housing_volatile_solids,
    manure_management_ch4,
    manure_volatile_solids,
    straw_volatile_solids,
    volatile_solids_ch4,
)

__all__ = [
    "ManureCH4",
    "VolatileSolids",
    "grass_volatile_solids",
    "housing_volatile_solids",
    "manure_management_ch4",
    "manure_volatile_solids",
    "straw_volatile_solids",
    "volatile_solids_ch4",
]
