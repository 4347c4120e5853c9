"""
Tests for equipment energy mapping (thermal load → fuel).

Run with: pytest tests/test_mapper.py -v
"""

import logging

import pytest

from homeenergy.baseline import resolve
from homeenergy.core.equipment import (
    AirConditioner,
    CombustionHeater,
    ConventionalWaterHeater,
    CoolingKind,
    DHWKind,
    HeatingKind,
    HeatPumpHeater,
    HeatPumpWaterHeater,
    NoCooling,
    ResistanceHeater,
    SolidFuelHeater,
    UnrecognizedCooler,
    UnrecognizedHeater,
    UnrecognizedWaterHeater,
)
from homeenergy.hvac import (
    cooling_fuel,
    delivered_hot_water_btu,
    dhw_delivered_btu,
    has_fuel_mapping,
    heating_fuel,
    map_cooling_fuel,
    map_dhw_fuel,
    map_heating_fuel,
    water_heating_fuel,
)


def _gas_furnace(afue):
    return CombustionHeater(kind=HeatingKind.CENTRAL_GAS_FURNACE, afue=afue)


# =============================================================================
# HEATING
# =============================================================================

class TestHeatingFuel:
    """Tests for heating load → fuel."""

    def test_resistance(self):
        fuel = heating_fuel(ResistanceHeater(kind=HeatingKind.ELECTRIC_BASEBOARD), 3_412_000)
        assert fuel.elec_kwh == pytest.approx(1000)
        assert fuel.gas_therms == 0

    def test_gas_furnace(self):
        fuel = heating_fuel(_gas_furnace(0.8), 8_000_000)
        assert fuel.gas_therms == pytest.approx(100)
        assert fuel.elec_kwh == 0

    @pytest.mark.parametrize("afue,effective", [(1.5, 0.99), (0.2, 0.5)])
    def test_afue_clamped(self, afue, effective):
        fuel = heating_fuel(_gas_furnace(afue), 10_000_000)
        assert fuel.gas_therms == pytest.approx(10_000_000 / (effective * 100_000))

    def test_propane(self):
        system = CombustionHeater(kind=HeatingKind.PROPANE_CENTRAL_FURNACE, afue=0.9)
        assert heating_fuel(system, 823_500).propane_gal == pytest.approx(10)

    def test_oil(self):
        system = CombustionHeater(kind=HeatingKind.OIL_BOILER, afue=0.85)
        assert heating_fuel(system, 1_177_250).oil_gal == pytest.approx(10)

    def test_air_source_cop_clamped(self):
        system = HeatPumpHeater(kind=HeatingKind.ELECTRIC_HEAT_PUMP, cop=10)
        assert heating_fuel(system, 20_472_000).elec_kwh == pytest.approx(1000)

    def test_ground_source_cop_clamped(self):
        system = HeatPumpHeater(kind=HeatingKind.GROUND_COUPLED_HEAT_PUMP, cop=10)
        assert heating_fuel(system, 27_296_000).elec_kwh == pytest.approx(1000)

    def test_wood(self):
        system = SolidFuelHeater(kind=HeatingKind.WOOD_STOVE, efficiency=0.5)
        assert heating_fuel(system, 10_000_000).wood_cords == pytest.approx(1)

    def test_pellets_clamped(self):
        system = SolidFuelHeater(kind=HeatingKind.PELLET_STOVE, efficiency=1.0)
        assert heating_fuel(system, 15_675_000).pellets_tons == pytest.approx(1)

    def test_missing_rating_uses_kind_default(self):
        system = CombustionHeater(kind=HeatingKind.GAS_BOILER)
        assert heating_fuel(system, 8_600_000).gas_therms == pytest.approx(100)

    def test_unrecognized_is_zero(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="homeenergy.hvac.mapper"):
            fuel = heating_fuel(UnrecognizedHeater(kind="Volcano"), 10_000_000)
        assert fuel.is_zero
        assert any(getattr(r, "kind", None) == "Volcano" for r in caplog.records)

    @pytest.mark.parametrize("load", [0, -1_000_000, float("nan"), float("inf")])
    @pytest.mark.parametrize("kind", list(HeatingKind), ids=lambda k: k.name)
    def test_unusable_load_is_zero(self, kind, load):
        """Every heating kind burns nothing for a zero, negative or non-finite load."""
        system = resolve({"heating": {"kind": kind.value}}).heating
        assert heating_fuel(system, load).is_zero

    @pytest.mark.parametrize("kind", list(HeatingKind), ids=lambda k: k.name)
    def test_every_kind_maps_positive_load(self, kind):
        system = resolve({"heating": {"kind": kind.value}}).heating
        assert not heating_fuel(system, 10_000_000).is_zero


# =============================================================================
# COOLING
# =============================================================================

class TestCoolingFuel:
    """Tests for cooling load → electricity."""

    def test_seer(self):
        system = AirConditioner(kind=CoolingKind.ROOM_AC, seer=10)
        assert cooling_fuel(system, 10_000_000).elec_kwh == pytest.approx(1000)

    @pytest.mark.parametrize("seer,effective", [(4, 8), (60, 40)])
    def test_seer_clamped(self, seer, effective):
        system = AirConditioner(kind=CoolingKind.CENTRAL_AC, seer=seer)
        assert cooling_fuel(system, 8_000_000).elec_kwh == pytest.approx(8_000_000 / effective / 1000)

    def test_missing_seer_fallback(self):
        system = AirConditioner(kind=CoolingKind.CENTRAL_AC)
        assert cooling_fuel(system, 14_000_000).elec_kwh == pytest.approx(1000)

    def test_no_cooling_and_unrecognized(self):
        assert cooling_fuel(NoCooling(), 10_000_000).is_zero
        assert cooling_fuel(UnrecognizedCooler(kind="Igloo"), 10_000_000).is_zero

    def test_non_positive_load(self):
        system = AirConditioner(kind=CoolingKind.CENTRAL_AC, seer=15)
        assert cooling_fuel(system, -5).is_zero

    @pytest.mark.parametrize("load", [0, -1_000_000, float("nan"), float("inf")])
    @pytest.mark.parametrize("kind", list(CoolingKind), ids=lambda k: k.name)
    def test_unusable_load_is_zero(self, kind, load):
        system = resolve({"cooling": {"kind": kind.value}}).cooling
        assert cooling_fuel(system, load).is_zero


# =============================================================================
# DOMESTIC HOT WATER
# =============================================================================

def _gas_storage(**draw):
    profile = dict(setpoint_f=120, inlet_f=60, gal_per_person_per_day=10, days_per_year=365)
    profile.update(draw)
    return ConventionalWaterHeater(kind=DHWKind.GAS_STORAGE, uef=0.6, **profile)


class TestWaterHeating:
    """Tests for hot-water demand and water heater fuel."""

    def test_delivered_load(self):
        """8.34 × 10 gal × 60 °F × 365 days for one occupant."""
        assert delivered_hot_water_btu(_gas_storage(), 1) == pytest.approx(1_826_460)

    def test_gas_storage_fuel(self):
        fuel = water_heating_fuel(_gas_storage(), 1_826_460)
        assert fuel.gas_therms == pytest.approx(30.441)

    def test_minimum_temperature_rise(self):
        system = _gas_storage(setpoint_f=60, inlet_f=58)
        assert delivered_hot_water_btu(system, 1) == pytest.approx(8.34 * 10 * 10 * 365)

    def test_scales_with_occupants(self):
        assert delivered_hot_water_btu(_gas_storage(), 4) == pytest.approx(4 * 1_826_460)

    def test_uef_clamped(self):
        system = ConventionalWaterHeater(kind=DHWKind.ELECTRIC_STORAGE, uef=3.0)
        assert water_heating_fuel(system, 4_094_400).elec_kwh == pytest.approx(1000)

    def test_heat_pump_water_heater(self):
        system = HeatPumpWaterHeater(cop=2.5)
        assert water_heating_fuel(system, 8_530_000).elec_kwh == pytest.approx(1000)

    def test_hpwh_cop_clamped(self):
        system = HeatPumpWaterHeater(cop=9)
        assert water_heating_fuel(system, 17_060_000).elec_kwh == pytest.approx(1000)

    def test_unrecognized_is_zero(self):
        assert water_heating_fuel(UnrecognizedWaterHeater(kind="Kettle"), 1_000_000).is_zero

    @pytest.mark.parametrize("delivered", [0, -1_000_000, float("nan"), float("inf")])
    @pytest.mark.parametrize("kind", list(DHWKind), ids=lambda k: k.name)
    def test_unusable_delivered_load_is_zero(self, kind, delivered):
        """Every water heater kind uses nothing when no usable hot water is delivered."""
        system = resolve({"dhw": {"kind": kind.value}}).dhw
        assert water_heating_fuel(system, delivered).is_zero

    @pytest.mark.parametrize("kind", list(DHWKind), ids=lambda k: k.name)
    def test_every_kind_maps_positive_load(self, kind):
        system = resolve({"dhw": {"kind": kind.value}}).dhw
        assert not water_heating_fuel(system, 1_000_000).is_zero

    def test_record_level(self):
        eff = resolve({
            "occupants": 1,
            "dhw": {
                "kind": "Natural Gas Storage",
                "UEF": 0.6,
                "setpoint_F": 120,
                "inlet_F": 60,
                "gal_per_person_per_day": 10,
                "days_per_year": 365,
            },
        })
        assert dhw_delivered_btu(eff) == pytest.approx(1_826_460)
        assert map_dhw_fuel(eff).gas_therms == pytest.approx(30.441)


# =============================================================================
# RECORD-LEVEL HEATING AND COOLING
# =============================================================================

class TestRecordMapping:
    """Tests for mapping through an effective record."""

    def test_old_home(self, old_home_eff):
        assert map_heating_fuel(old_home_eff, 8_000_000).gas_therms == pytest.approx(100)
        assert map_cooling_fuel(old_home_eff, 13_000_000).elec_kwh == pytest.approx(1000)

    def test_has_fuel_mapping(self):
        assert has_fuel_mapping(_gas_furnace(0.9))
        assert has_fuel_mapping(HeatPumpWaterHeater(cop=2.5))
        assert not has_fuel_mapping(NoCooling())
        assert not has_fuel_mapping(UnrecognizedHeater(kind="Volcano"))
