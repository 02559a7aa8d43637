"""
Excreted volatile solids and manure management CH4.

Volatile solids (VS) are the organic, degradable part of manure dry matter.
Manure deposited in the housing (plus bedding straw) and manure dropped on
pasture are tracked separately:

- VS_manure  = m_manure * DM * f_dm_VS * (1 - f_ash)
- VS_straw   = m_straw * DM_straw * (1 - f_ash_straw) * (1 - f_actual_grass)
- VS_grass   = m_manure / 365 * DM * f_dm_VS * f_grass
- VS_housing = VS_manure + VS_straw

CH4 from each pool follows IPCC Eq. 10.23:

    CH4 = VS * MCF/100 * 0.67 * B0

where MCF is the methane conversion factor (%), B0 the maximum CH4
producing capacity of the manure (m3 CH4/kg VS) and 0.67 kg/m3 the density
of methane.

Grass VS is expressed per day of excretion (divided by 365) as in the Danish
inventory worksheets.

References:
-----------
[1] IPCC (2019). 2019 Refinement to the 2006 IPCC Guidelines for National
    Greenhouse Gas Inventories, Vol 4, Ch 10, Eq. 10.23-10.24.
"""

from dataclasses import dataclass

CH4_DENSITY = 0.67  # kg/m3
DAYS_PER_YEAR = 365

# Defaults from the Danish inventory
DEFAULT_FRACTION_DM_VS = 0.8
DEFAULT_FRACTION_ASH = 0.2
DEFAULT_FRACTION_ASH_STRAW = 0.045


@dataclass(frozen=True)
class VolatileSolids:
    """Volatile solids per head (kg VS/(head.yr))."""

    manure: float
    straw: float
    grass: float

    @property
    def housing(self) -> float:
        return housing_volatile_solids(self.manure, self.straw)


@dataclass(frozen=True)
class ManureCH4:
    """Manure management CH4 (kg CH4), split by where the manure is deposited."""

    housing: float
    grass: float

    @property
    def total(self) -> float:
        return self.housing + self.grass

    def scaled(self, factor: float) -> "ManureCH4":
        """Multiply both pools, e.g. per head -> herd."""
        return ManureCH4(housing=self.housing * factor, grass=self.grass * factor)


def manure_volatile_solids(
    m_manure_excreted: float,
    dm_manure: float,
    f_dm_vs: float = DEFAULT_FRACTION_DM_VS,
    f_ash: float = DEFAULT_FRACTION_ASH,
) -> float:
    """
    Volatile solids in excreted manure.

    Args:
        m_manure_excreted: Manure excreted (kg/(head.yr))
        dm_manure: Dry matter fraction of manure (0-1)
        f_dm_vs: Volatile solids share of dry matter (0-1)
        f_ash: Ash fraction of dry matter (0-1)

    Returns:
        kg VS/(head.yr)
    """
    return m_manure_excreted * dm_manure * f_dm_vs * (1 - f_ash)


def straw_volatile_solids(
    m_straw: float,
    dm_straw: float,
    f_ash: float = DEFAULT_FRACTION_ASH_STRAW,
    f_actual_grass: float = 0.0,
) -> float:
    """Volatile solids in bedding straw, only for days spent indoors (kg VS/(head.yr))."""
    return m_straw * dm_straw * (1 - f_ash) * (1 - f_actual_grass)


def grass_volatile_solids(
    m_manure_excreted: float,
    dm_manure: float,
    f_dm_vs: float = DEFAULT_FRACTION_DM_VS,
    f_grass: float = 0.0,
) -> float:
    """Volatile solids deposited on pasture."""
    return m_manure_excreted / DAYS_PER_YEAR * dm_manure * f_dm_vs * f_grass


def housing_volatile_solids(vs_manure: float, vs_straw: float) -> float:
    return vs_manure + vs_straw


def volatile_solids_ch4(vs: float, mcf: float, b0: float) -> float:
    """
    CH4 from one volatile solids pool.

    Args:
        vs: Volatile solids (kg VS)
        mcf: Methane conversion factor (%)
        b0: Maximum CH4 producing capacity (m3 CH4/kg VS)

    Returns:
        kg CH4
    """
    return vs * mcf / 100 * CH4_DENSITY * b0


def manure_management_ch4(vs_housing: float, mcf: float, b0: float, vs_grass: float) -> ManureCH4:
    """
    Manure management CH4 for the housing and pasture pools.

    Both pools share the livestock category's MCF.
    """
    return ManureCH4(
        housing=volatile_solids_ch4(vs_housing, mcf, b0),
        grass=volatile_solids_ch4(vs_grass, mcf, b0),
    )
