"""
Tests for input and effective record models and equipment variants.

Run with: pytest tests/test_models.py -v
"""

import math

import pytest
from pydantic import ValidationError as PydanticValidationError

from homeenergy.core.energy_breakdown import EnergyCarrier
from homeenergy.core.equipment import (
    AirConditioner,
    CombustionHeater,
    ConventionalWaterHeater,
    CoolingKind,
    HeatingKind,
    HeatPumpHeater,
    HeatPumpWaterHeater,
    NoCooling,
    ResistanceHeater,
    SolidFuelHeater,
    UnrecognizedCooler,
    UnrecognizedHeater,
    UnrecognizedWaterHeater,
    is_heat_pump,
)
from homeenergy.core.models import EffectiveRecord, InputRecord, Orientation, to_input_record


# =============================================================================
# INPUT RECORD
# =============================================================================

class TestInputRecord:
    """Tests for the raw input schema."""

    def test_defaults(self):
        record = InputRecord()
        assert record.floor_area_ft2 == 1800
        assert record.hdd65 == 5000
        assert record.wall_r is None
        assert isinstance(record.heating, CombustionHeater)
        assert isinstance(record.cooling, AirConditioner)
        assert isinstance(record.dhw, ConventionalWaterHeater)

    def test_file_keys_and_field_names(self):
        """Both the saved-file keys and snake_case names populate fields."""
        by_alias = InputRecord.model_validate({"floorArea_ft2": 2400, "wall_R": 13, "HDD65": 7000})
        by_name = InputRecord.model_validate({"floor_area_ft2": 2400, "wall_r": 13, "hdd65": 7000})
        assert by_alias.floor_area_ft2 == by_name.floor_area_ft2 == 2400
        assert by_alias.wall_r == by_name.wall_r == 13
        assert by_alias.hdd65 == by_name.hdd65 == 7000

    def test_dump_uses_file_keys(self):
        dumped = InputRecord(floor_area_ft2=1200).model_dump(by_alias=True)
        assert dumped["floorArea_ft2"] == 1200
        assert "zip" in dumped
        assert dumped["heating"]["kind"] == "Central gas furnace"

    def test_junk_numbers_become_nan(self):
        record = InputRecord.model_validate({"wall_R": "thick", "stories": [2]})
        assert math.isnan(record.wall_r)
        assert math.isnan(record.stories)

    def test_numeric_strings_parse(self):
        assert InputRecord.model_validate({"floorArea_ft2": "1500"}).floor_area_ft2 == 1500.0

    def test_blank_string_is_missing(self):
        assert InputRecord.model_validate({"roof_R": "  "}).roof_r is None

    def test_unknown_keys_ignored(self):
        record = InputRecord.model_validate({"floorArea_ft2": 900, "favoriteColor": "blue"})
        assert record.floor_area_ft2 == 900
        assert not hasattr(record, "favoriteColor")

    def test_window_properties(self):
        record = InputRecord.model_validate({"window_S_ft2": 40, "window_N_ft2": 10})
        assert record.window_areas[Orientation.SOUTH] == 40
        assert record.window_areas[Orientation.EAST] == 0.0
        assert record.window_area_ft2 == 50
        assert record.incident_solar[Orientation.SOUTH] == 140

    def test_accepted_keys(self):
        keys = InputRecord.accepted_keys()
        assert "floorArea_ft2" in keys
        assert "floor_area_ft2" in keys
        assert "emission_kg_per_therm" in keys

    def test_to_input_record(self):
        assert to_input_record(None) == InputRecord()
        record = InputRecord(stories=3)
        assert to_input_record(record) is record


# =============================================================================
# EQUIPMENT VARIANTS
# =============================================================================

class TestEquipmentVariants:
    """Tests for kind-tagged equipment dispatch."""

    @pytest.mark.parametrize("kind,variant", [
        ("Central gas furnace", CombustionHeater),
        ("Oil boiler", CombustionHeater),
        ("Electric baseboard heater", ResistanceHeater),
        ("Electric heat pump", HeatPumpHeater),
        ("Ground coupled heat pump", HeatPumpHeater),
        ("Pellet stove", SolidFuelHeater),
        ("Geothermal unicorn", UnrecognizedHeater),
    ])
    def test_heating_dispatch(self, kind, variant):
        record = InputRecord.model_validate({"heating": {"kind": kind}})
        assert isinstance(record.heating, variant)

    def test_shared_kind_string_resolves_per_family(self):
        """'Electric heat pump' is a heat pump heater and an air conditioner."""
        record = InputRecord.model_validate({
            "heating": {"kind": "Electric heat pump", "COP": 3.0},
            "cooling": {"kind": "Electric heat pump", "SEER": 18},
        })
        assert isinstance(record.heating, HeatPumpHeater)
        assert record.heating.kind is HeatingKind.ELECTRIC_HEAT_PUMP
        assert isinstance(record.cooling, AirConditioner)
        assert record.cooling.kind is CoolingKind.ELECTRIC_HEAT_PUMP

    def test_cooling_none(self):
        record = InputRecord.model_validate({"cooling": {"kind": "None"}})
        assert isinstance(record.cooling, NoCooling)

    def test_unrecognized_kinds_keep_their_text(self):
        record = InputRecord.model_validate({
            "cooling": {"kind": "Swamp thing"},
            "dhw": {"kind": "Solar thermal"},
        })
        assert isinstance(record.cooling, UnrecognizedCooler)
        assert record.cooling.kind == "Swamp thing"
        assert isinstance(record.dhw, UnrecognizedWaterHeater)

    def test_missing_kind_uses_default(self):
        record = InputRecord.model_validate({"heating": {"AFUE": 0.8}, "dhw": None})
        assert record.heating.kind is HeatingKind.CENTRAL_GAS_FURNACE
        assert record.heating.afue == 0.8
        assert isinstance(record.dhw, ConventionalWaterHeater)

    def test_efficiency_aliases(self):
        record = InputRecord.model_validate({
            "heating": {"kind": "Wood stove", "eff_wood": 0.6},
            "dhw": {"kind": "Natural Gas Storage", "UEF": 0.62, "setpoint_F": 125, "inlet_F": 50},
        })
        assert record.heating.efficiency == 0.6
        assert record.heating.carrier is EnergyCarrier.WOOD
        assert record.dhw.uef == 0.62
        assert record.dhw.setpoint_f == 125
        assert record.dhw.carrier is EnergyCarrier.NATURAL_GAS

    def test_tankless_and_heat_pump_water_heater(self):
        tankless = InputRecord.model_validate({"dhw": {"kind": "Gas Instantaneous"}}).dhw
        assert tankless.tankless
        hpwh = InputRecord.model_validate({"dhw": {"kind": "Electric Heat Pump", "COP": 3}}).dhw
        assert isinstance(hpwh, HeatPumpWaterHeater)
        assert hpwh.cop == 3

    def test_is_heat_pump(self):
        assert is_heat_pump(HeatPumpHeater(kind=HeatingKind.MINISPLIT_HEAT_PUMP, cop=3.2))
        assert not is_heat_pump(ResistanceHeater(kind=HeatingKind.ELECTRIC_BASEBOARD))


# =============================================================================
# EFFECTIVE RECORD
# =============================================================================

class TestEffectiveRecord:
    """Tests for the resolved record."""

    def test_frozen(self, simple_eff):
        with pytest.raises(PydanticValidationError):
            simple_eff.roof_r = 60

    def test_with_changes_leaves_original(self, simple_eff):
        changed = simple_eff.with_changes(roof_r=60.0)
        assert changed.roof_r == 60.0
        assert simple_eff.roof_r == 50
        assert isinstance(changed, EffectiveRecord)
