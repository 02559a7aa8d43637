"""Unit handling utilities using pint.

All internal data is stored in the units of the Danish inventory tables:
- Mass: kilograms (kg), body weight and CH4
- Age: the unit written next to the catalog value (days for poultry,
  months for cattle)
- Feed: feed units per year (1 FU = 1 kg barley at 85% DM)
- Energy: MJ per feed unit, methane conversion as % of gross energy

Catalog bases keep their unit only for reporting; scaling works on the
numeric part, so a query age must be given in the same unit as the record.

Display units are controlled by settings.display_mass:
- "kg": Display as stored
- "t": Convert to tonnes
"""

import pint

from livch4.core.config import settings

# Create a unit registry (lazily initialized)
_ureg: pint.UnitRegistry | None = None


def get_ureg() -> pint.UnitRegistry:
    """Get the pint unit registry (lazily initialized)."""
    global _ureg
    if _ureg is None:
        _ureg = pint.UnitRegistry()
    return _ureg


# =============================================================================
# Catalog Unit Suffixes
# =============================================================================


def is_known_unit(unit: str) -> bool:
    """Check whether a unit suffix (e.g. "months", "days") is understood by pint.

    Args:
        unit: Unit string as written in the catalog

    Returns:
        True if pint can parse the unit
    """
    try:
        get_ureg().Unit(unit)
    except (pint.UndefinedUnitError, ValueError, AttributeError, TypeError):
        return False
    return True


def normalize_unit(unit: str) -> str:
    """Normalize a unit suffix to pint's canonical name ("months" -> "month")."""
    return str(get_ureg().Unit(unit))


# =============================================================================
# Mass Conversions
# =============================================================================


def ch4_kg_to_display(kg: float) -> tuple[float, str]:
    """Convert kilograms of CH4 to display units.

    Args:
        kg: CH4 mass in kilograms

    Returns:
        Tuple of (value, unit_symbol) in display units
    """
    ureg = get_ureg()

    if settings.display_mass == "t":
        tonnes = (kg * ureg.kilogram).to(ureg.metric_ton).magnitude
        return (tonnes, "t")
    return (kg, "kg")


def format_ch4(kg: float, decimals: int | None = None) -> str:
    """Format a CH4 mass for display.

    Args:
        kg: CH4 mass in kilograms
        decimals: Number of decimal places (default: 2 for kg, 4 for t)

    Returns:
        Formatted string like "2059.27 kg CH4" or "2.0593 t CH4"
    """
    value, unit = ch4_kg_to_display(kg)

    if decimals is None:
        decimals = 4 if settings.display_mass == "t" else 2

    return f"{value:.{decimals}f} {unit} CH4"


def format_emission_factor(kg_per_head: float) -> str:
    """Format an emission factor (kg CH4/head/yr).

    Small poultry factors are shown in scientific notation.
    """
    if kg_per_head != 0 and abs(kg_per_head) < 0.01:
        return f"{kg_per_head:.3e} kg CH4/(head.yr)"
    return f"{kg_per_head:.2f} kg CH4/(head.yr)"


def ch4_to_co2eq(kg_ch4: float, gwp: float | None = None) -> float:
    """Convert kg CH4 to kg CO2-equivalent using the configured GWP."""
    if gwp is None:
        gwp = settings.ch4_gwp
    return kg_ch4 * gwp


def get_mass_unit() -> str:
    """Get the mass unit symbol for current display settings."""
    return "t" if settings.display_mass == "t" else "kg"
