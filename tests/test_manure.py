"""Tests for volatile solids and manure management CH4."""

import pytest

from livch4.manure.volatile_solids import (
    CH4_DENSITY,
    ManureCH4,
    VolatileSolids,
    grass_volatile_solids,
    housing_volatile_solids,
    manure_management_ch4,
    manure_volatile_solids,
    straw_volatile_solids,
    volatile_solids_ch4,
)


class TestVolatileSolids:
    """Tests for the volatile solids pools."""

    def test_manure(self):
        """Verify manure VS with default fractions."""
        assert manure_volatile_solids(21900, 0.15) == pytest.approx(21900 * 0.15 * 0.8 * 0.8)

    def test_manure_custom_fractions(self):
        """Verify manure VS with custom fractions."""
        assert manure_volatile_solids(1000, 0.1, f_dm_vs=0.5, f_ash=0.0) == pytest.approx(50)

    def test_straw_indoor_days_only(self):
        """Verify straw VS covers indoor days only."""
        assert straw_volatile_solids(500, 0.85, f_actual_grass=0.2) == pytest.approx(500 * 0.85 * 0.955 * 0.8)

    def test_straw_all_year_on_grass(self):
        """Verify no straw VS when on grass all year."""
        assert straw_volatile_solids(500, 0.85, f_actual_grass=1.0) == 0

    def test_grass_per_day(self):
        """Verify grass VS is computed per day."""
        assert grass_volatile_solids(21900, 0.15, f_grass=0.2) == pytest.approx(60 * 0.15 * 0.8 * 0.2)

    def test_no_grazing_no_grass_vs(self):
        """Verify no grazing gives no grass VS."""
        assert grass_volatile_solids(470, 0.15, f_grass=0.0) == 0

    def test_housing_is_sum(self):
        """Verify housing VS is manure plus straw."""
        assert housing_volatile_solids(100.0, 25.0) == 125.0
        assert VolatileSolids(manure=100.0, straw=25.0, grass=3.0).housing == 125.0


class TestManureCH4:
    """Tests for manure management CH4."""

    def test_single_pool(self):
        """Verify CH4 from a single VS pool."""
        assert volatile_solids_ch4(1000, 10, 0.24) == pytest.approx(1000 * 0.1 * CH4_DENSITY * 0.24)

    def test_housing_and_grass(self):
        """Verify housing and grass manure CH4."""
        result = manure_management_ch4(vs_housing=2000, mcf=6.0, b0=0.24, vs_grass=1.44)
        assert result.housing == pytest.approx(2000 * 0.06 * 0.67 * 0.24)
        assert result.grass == pytest.approx(1.44 * 0.06 * 0.67 * 0.24)
        assert result.total == pytest.approx(result.housing + result.grass)

    def test_zero_mcf(self):
        """Verify a zero MCF gives no manure CH4."""
        assert manure_management_ch4(2000, 0.0, 0.24, 10).total == 0

    def test_scaled(self):
        """Verify scaling multiplies both pools."""
        herd = ManureCH4(housing=2.0, grass=0.5).scaled(100)
        assert herd.housing == 200.0
        assert herd.grass == 50.0
        assert herd.total == 250.0
