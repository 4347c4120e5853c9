"""Core models, units and equipment catalog."""

from .units import (
    BTU_PER_KWH,
    BTU_PER_THERM,
    BTU_PER_GAL_PROPANE,
    BTU_PER_GAL_OIL,
    BTU_PER_CORD_WOOD,
    BTU_PER_TON_PELLETS,
    clamp,
    to_number,
    is_missing,
    first_valid,
    u_from_r,
)
from .energy_breakdown import EnergyCarrier, EndUse, FuelBreakdown, sum_fuel
from .equipment import (
    HeatingKind,
    CoolingKind,
    DHWKind,
    CombustionHeater,
    ResistanceHeater,
    HeatPumpHeater,
    SolidFuelHeater,
    UnrecognizedHeater,
    AirConditioner,
    NoCooling,
    UnrecognizedCooler,
    ConventionalWaterHeater,
    HeatPumpWaterHeater,
    UnrecognizedWaterHeater,
    is_heat_pump,
)
from .models import (
    InfiltrationCategory,
    Orientation,
    InputRecord,
    EffectiveRecord,
    to_input_record,
)
from .config import Settings, settings

__all__ = [
    # Units
    "BTU_PER_KWH",
    "BTU_PER_THERM",
    "BTU_PER_GAL_PROPANE",
    "BTU_PER_GAL_OIL",
    "BTU_PER_CORD_WOOD",
    "BTU_PER_TON_PELLETS",
    "clamp",
    "to_number",
    "is_missing",
    "first_valid",
    "u_from_r",
    # Fuel
    "EnergyCarrier",
    "EndUse",
    "FuelBreakdown",
    "sum_fuel",
    # Equipment
    "HeatingKind",
    "CoolingKind",
    "DHWKind",
    "CombustionHeater",
    "ResistanceHeater",
    "HeatPumpHeater",
    "SolidFuelHeater",
    "UnrecognizedHeater",
    "AirConditioner",
    "NoCooling",
    "UnrecognizedCooler",
    "ConventionalWaterHeater",
    "HeatPumpWaterHeater",
    "UnrecognizedWaterHeater",
    "is_heat_pump",
    # Records
    "InfiltrationCategory",
    "Orientation",
    "InputRecord",
    "EffectiveRecord",
    "to_input_record",
    # Config
    "Settings",
    "settings",
]
