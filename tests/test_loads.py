"""
Tests for the degree-day load model.

Run with: pytest tests/test_loads.py -v
"""

import pytest

from homeenergy.analysis.loads import (
    annual_window_solar_gain,
    base_cooling_load,
    base_heating_load,
    compute_loads,
    envelope_conductance,
    estimate_ach_natural,
    house_volume_ft3,
    ua_envelope,
    ua_infiltration,
)
from homeenergy.baseline import resolve


class TestVolumeAndInfiltration:
    """Tests for house volume and air leakage."""

    def test_volume(self):
        assert house_volume_ft3(1000, 8, 1) == 8000

    def test_volume_floors(self):
        assert house_volume_ft3(50, 6, 0) == 100 * 8 * 1

    @pytest.mark.parametrize("category,ach", [("Tight", 0.25), ("Average", 0.4), ("Leaky", 0.6)])
    def test_category_ach(self, simple_input, category, ach):
        eff = resolve({**simple_input, "infiltrationCategory": category})
        assert estimate_ach_natural(eff) == pytest.approx(ach)

    def test_unknown_category_is_average(self, simple_input):
        eff = resolve({**simple_input, "infiltrationCategory": "Drafty"})
        assert estimate_ach_natural(eff) == pytest.approx(0.4)

    def test_missing_category_is_average(self, simple_input):
        """An explicit null category is defaulted, not read from the build year."""
        eff = resolve({**simple_input, "yearBuilt": 1970, "infiltrationCategory": None})
        assert estimate_ach_natural(eff) == pytest.approx(0.4)
        assert estimate_ach_natural(resolve({"infiltrationCategory": None})) == pytest.approx(0.4)

    def test_blower_door_wins(self, simple_input):
        eff = resolve({**simple_input, "ach50": 5, "nFactor": 0.08, "infiltrationCategory": "Leaky"})
        assert estimate_ach_natural(eff) == pytest.approx(0.4)

    @pytest.mark.parametrize("n_factor,expected", [(0.5, 10 * 0.2), (0.01, 10 * 0.03)])
    def test_n_factor_clamped(self, simple_input, n_factor, expected):
        eff = resolve({**simple_input, "ach50": 10, "nFactor": n_factor})
        assert estimate_ach_natural(eff) == pytest.approx(expected)

    def test_infiltration_ua(self, simple_eff):
        """1.08 × 0.4 × 8000 / 60."""
        assert ua_infiltration(simple_eff) == pytest.approx(57.6)
        assert ua_infiltration(simple_eff, ach=0.25) == pytest.approx(36.0)


class TestConductance:
    """Tests for envelope UA."""

    def test_envelope_ua(self, simple_eff):
        c = envelope_conductance(simple_eff)
        assert c.wall == pytest.approx(100)
        assert c.roof == pytest.approx(20)
        assert c.floor == 0
        assert c.doors == pytest.approx(10)
        assert c.windows == pytest.approx(50)
        assert ua_envelope(simple_eff) == pytest.approx(180)
        assert c.total == pytest.approx(237.6)
        assert c.infiltration_share == pytest.approx(57.6 / 237.6)

    def test_floor_over_unconditioned(self, simple_input):
        eff = resolve({**simple_input, "floorAreaOverUncond_ft2": 400})
        assert envelope_conductance(eff).floor == pytest.approx(400 / 20)

    def test_missing_door_u_adds_no_conductance(self, simple_input):
        """Doors without a U value contribute nothing to UA."""
        inputs = {k: v for k, v in simple_input.items() if k != "door_U"}
        assert envelope_conductance(resolve(inputs)).doors == 0
        assert envelope_conductance(resolve({})).doors == 0
        assert ua_envelope(resolve(inputs)) == pytest.approx(170)

    def test_zero_r_replaced_by_era(self, simple_input):
        """R of zero falls back to the era value rather than dividing by zero."""
        eff = resolve({**simple_input, "wall_R": 0})
        assert envelope_conductance(eff).wall == pytest.approx(1000 / 13)


class TestAnnualLoads:
    """Tests for degree-day loads and solar gain."""

    def test_base_loads(self, simple_eff):
        assert base_heating_load(simple_eff) == pytest.approx(28_512_000)
        assert base_cooling_load(simple_eff) == pytest.approx(5_702_400)

    def test_solar_gain(self, simple_eff):
        """0.3 × 25 ft² × (35 + 140 + 90 + 90) kBtu/ft²."""
        assert annual_window_solar_gain(simple_eff) == pytest.approx(2_662_500)

    def test_solar_adjusted_loads(self, simple_eff):
        loads = compute_loads(simple_eff)
        assert loads.heating == pytest.approx(27_047_625)
        assert loads.cooling == pytest.approx(6_900_525)
        assert loads.solar_to_cooling == pytest.approx(0.45 * 2_662_500)

    def test_shading_scales_solar(self, simple_input):
        eff = resolve({**simple_input, "shadingFactor": 0.5})
        assert annual_window_solar_gain(eff) == pytest.approx(2_662_500 / 2)

    def test_heating_never_negative(self, simple_input):
        eff = resolve({**simple_input, "HDD65": 1, "window_S_ft2": 2000, "solarToHeating_frac": 1})
        loads = compute_loads(eff)
        assert loads.heating == 0
        assert loads.cooling > 0

    def test_zero_fractions_leave_base(self, simple_input):
        eff = resolve({**simple_input, "solarToHeating_frac": 0, "solarToCooling_frac": 0})
        loads = compute_loads(eff)
        assert loads.heating == pytest.approx(loads.base_heating)
        assert loads.cooling == pytest.approx(loads.base_cooling)
