"""
Residential heating, cooling and water-heating equipment.

Each equipment block in an input record is a tagged variant: the ``kind``
string selects a model class, and only that class's efficiency field is
meaningful. Kinds not in the catalog validate into an ``Unrecognized*``
variant instead of failing, and contribute no fuel use downstream.

Kind values are the display strings used in saved input files, e.g.
``{"kind": "Central gas furnace", "AFUE": 0.92}``.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, FrozenSet, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator
from typing_extensions import Annotated

from .energy_breakdown import EnergyCarrier
from .fields import Number, Text


class HeatingKind(str, Enum):
    """Primary space-heating equipment."""
    CENTRAL_GAS_FURNACE = "Central gas furnace"
    ROOM_GAS_FURNACE = "Room (through-the-wall) gas furnace"
    GAS_BOILER = "Gas boiler"
    PROPANE_CENTRAL_FURNACE = "Propane (LPG) central furnace"
    PROPANE_WALL_FURNACE = "Propane (LPG) wall furnace"
    PROPANE_BOILER = "Propane (LPG) boiler"
    OIL_FURNACE = "Oil furnace"
    OIL_BOILER = "Oil boiler"
    ELECTRIC_FURNACE = "Electric furnace"
    ELECTRIC_HEAT_PUMP = "Electric heat pump"
    ELECTRIC_BASEBOARD = "Electric baseboard heater"
    GROUND_COUPLED_HEAT_PUMP = "Ground coupled heat pump"
    MINISPLIT_HEAT_PUMP = "Minisplit (ductless) heat pump"
    ELECTRIC_BOILER = "Electric boiler"
    WOOD_STOVE = "Wood stove"
    PELLET_STOVE = "Pellet stove"


class CoolingKind(str, Enum):
    """Space-cooling equipment."""
    CENTRAL_AC = "Central air conditioner"
    ROOM_AC = "Room air conditioner"
    ELECTRIC_HEAT_PUMP = "Electric heat pump"
    MINISPLIT_HEAT_PUMP = "Minisplit (ductless) heat pump"
    GROUND_COUPLED_HEAT_PUMP = "Ground coupled heat pump"
    DIRECT_EVAPORATIVE = "Direct evaporative cooling"
    NONE = "None"


class DHWKind(str, Enum):
    """Domestic hot water heaters."""
    ELECTRIC_STORAGE = "Electric Storage"
    GAS_STORAGE = "Natural Gas Storage"
    PROPANE_STORAGE = "Propane (LPG) Storage"
    OIL_STORAGE = "Oil Storage"
    ELECTRIC_INSTANTANEOUS = "Electric Instantaneous"
    GAS_INSTANTANEOUS = "Gas Instantaneous"
    PROPANE_INSTANTANEOUS = "Propane Instantaneous"
    OIL_INSTANTANEOUS = "Oil Instantaneous"
    HEAT_PUMP = "Electric Heat Pump"


DEFAULT_HEATING_KIND = HeatingKind.CENTRAL_GAS_FURNACE
DEFAULT_COOLING_KIND = CoolingKind.CENTRAL_AC
DEFAULT_DHW_KIND = DHWKind.ELECTRIC_STORAGE


# =============================================================================
# Kind → family and carrier tables
# =============================================================================

COMBUSTION_HEATING_CARRIER: Mapping[HeatingKind, EnergyCarrier] = MappingProxyType({
    HeatingKind.CENTRAL_GAS_FURNACE: EnergyCarrier.NATURAL_GAS,
    HeatingKind.ROOM_GAS_FURNACE: EnergyCarrier.NATURAL_GAS,
    HeatingKind.GAS_BOILER: EnergyCarrier.NATURAL_GAS,
    HeatingKind.PROPANE_CENTRAL_FURNACE: EnergyCarrier.PROPANE,
    HeatingKind.PROPANE_WALL_FURNACE: EnergyCarrier.PROPANE,
    HeatingKind.PROPANE_BOILER: EnergyCarrier.PROPANE,
    HeatingKind.OIL_FURNACE: EnergyCarrier.OIL,
    HeatingKind.OIL_BOILER: EnergyCarrier.OIL,
})

RESISTANCE_HEATING_KINDS: FrozenSet[HeatingKind] = frozenset({
    HeatingKind.ELECTRIC_FURNACE,
    HeatingKind.ELECTRIC_BASEBOARD,
    HeatingKind.ELECTRIC_BOILER,
})

HEAT_PUMP_HEATING_KINDS: FrozenSet[HeatingKind] = frozenset({
    HeatingKind.ELECTRIC_HEAT_PUMP,
    HeatingKind.MINISPLIT_HEAT_PUMP,
    HeatingKind.GROUND_COUPLED_HEAT_PUMP,
})

SOLID_FUEL_HEATING_CARRIER: Mapping[HeatingKind, EnergyCarrier] = MappingProxyType({
    HeatingKind.WOOD_STOVE: EnergyCarrier.WOOD,
    HeatingKind.PELLET_STOVE: EnergyCarrier.PELLETS,
})

CONVENTIONAL_DHW_CARRIER: Mapping[DHWKind, EnergyCarrier] = MappingProxyType({
    DHWKind.ELECTRIC_STORAGE: EnergyCarrier.ELECTRICITY,
    DHWKind.GAS_STORAGE: EnergyCarrier.NATURAL_GAS,
    DHWKind.PROPANE_STORAGE: EnergyCarrier.PROPANE,
    DHWKind.OIL_STORAGE: EnergyCarrier.OIL,
    DHWKind.ELECTRIC_INSTANTANEOUS: EnergyCarrier.ELECTRICITY,
    DHWKind.GAS_INSTANTANEOUS: EnergyCarrier.NATURAL_GAS,
    DHWKind.PROPANE_INSTANTANEOUS: EnergyCarrier.PROPANE,
    DHWKind.OIL_INSTANTANEOUS: EnergyCarrier.OIL,
})

TANKLESS_DHW_KINDS: FrozenSet[DHWKind] = frozenset({
    DHWKind.ELECTRIC_INSTANTANEOUS,
    DHWKind.GAS_INSTANTANEOUS,
    DHWKind.PROPANE_INSTANTANEOUS,
    DHWKind.OIL_INSTANTANEOUS,
})


def _kind_key(value: Any) -> Any:
    """Extract the raw kind string from a dict or a model."""
    kind = value.get("kind") if isinstance(value, dict) else getattr(value, "kind", None)
    if isinstance(kind, Enum):
        kind = kind.value
    return kind if isinstance(kind, str) else None


def _tags_by_value(groups: Mapping[str, Any]) -> Mapping[str, str]:
    return MappingProxyType({
        kind.value: tag for tag, kinds in groups.items() for kind in kinds
    })


_HEATING_TAGS = _tags_by_value({
    "combustion": COMBUSTION_HEATING_CARRIER,
    "resistance": RESISTANCE_HEATING_KINDS,
    "heat_pump": HEAT_PUMP_HEATING_KINDS,
    "solid_fuel": SOLID_FUEL_HEATING_CARRIER,
})

_COOLING_TAGS = _tags_by_value({
    "air_conditioner": [k for k in CoolingKind if k is not CoolingKind.NONE],
    "none": [CoolingKind.NONE],
})

_DHW_TAGS = _tags_by_value({
    "conventional": CONVENTIONAL_DHW_CARRIER,
    "heat_pump": [DHWKind.HEAT_PUMP],
})


def _heating_tag(value: Any) -> str:
    return _HEATING_TAGS.get(_kind_key(value), "unrecognized")


def _cooling_tag(value: Any) -> str:
    return _COOLING_TAGS.get(_kind_key(value), "unrecognized")


def _dhw_tag(value: Any) -> str:
    return _DHW_TAGS.get(_kind_key(value), "unrecognized")


def _require_kind(kind, allowed, variant: str):
    if kind not in allowed:
        raise ValueError(f"{kind.value!r} is not a {variant} kind")
    return kind


class _Equipment(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


# =============================================================================
# Heating variants
# =============================================================================

class CombustionHeater(_Equipment):
    """Gas, propane or oil furnace/boiler rated by AFUE."""
    kind: HeatingKind
    afue: Number = Field(default=None, alias="AFUE")

    @field_validator("kind")
    @classmethod
    def _check_kind(cls, kind):
        return _require_kind(kind, COMBUSTION_HEATING_CARRIER, "combustion heating")

    @property
    def carrier(self) -> EnergyCarrier:
        return COMBUSTION_HEATING_CARRIER[self.kind]


class ResistanceHeater(_Equipment):
    """Electric resistance furnace, baseboard or boiler (100% conversion)."""
    kind: HeatingKind

    @field_validator("kind")
    @classmethod
    def _check_kind(cls, kind):
        return _require_kind(kind, RESISTANCE_HEATING_KINDS, "resistance heating")


class HeatPumpHeater(_Equipment):
    """Air-source, ductless or ground-coupled heat pump rated by heating COP."""
    kind: HeatingKind
    cop: Number = Field(default=None, alias="COP")

    @field_validator("kind")
    @classmethod
    def _check_kind(cls, kind):
        return _require_kind(kind, HEAT_PUMP_HEATING_KINDS, "heat pump")


class SolidFuelHeater(_Equipment):
    """Wood or pellet stove rated by appliance efficiency (0-1)."""
    kind: HeatingKind
    efficiency: Number = Field(default=None, alias="eff_wood")

    @field_validator("kind")
    @classmethod
    def _check_kind(cls, kind):
        return _require_kind(kind, SOLID_FUEL_HEATING_CARRIER, "solid fuel")

    @property
    def carrier(self) -> EnergyCarrier:
        return SOLID_FUEL_HEATING_CARRIER[self.kind]


class UnrecognizedHeater(_Equipment):
    """Heating kind outside the catalog; uses no fuel."""
    kind: Text = ""


HeatingSystem = Annotated[
    Union[
        Annotated[CombustionHeater, Tag("combustion")],
        Annotated[ResistanceHeater, Tag("resistance")],
        Annotated[HeatPumpHeater, Tag("heat_pump")],
        Annotated[SolidFuelHeater, Tag("solid_fuel")],
        Annotated[UnrecognizedHeater, Tag("unrecognized")],
    ],
    Discriminator(_heating_tag),
]


# =============================================================================
# Cooling variants
# =============================================================================

class AirConditioner(_Equipment):
    """Vapor-compression or evaporative cooler rated by SEER (Btu/Wh)."""
    kind: CoolingKind
    seer: Number = Field(default=None, alias="SEER")

    @field_validator("kind")
    @classmethod
    def _check_kind(cls, kind):
        if kind is CoolingKind.NONE:
            raise ValueError("use NoCooling for homes without cooling")
        return kind


class NoCooling(_Equipment):
    """Home without mechanical cooling."""
    kind: CoolingKind = CoolingKind.NONE

    @field_validator("kind")
    @classmethod
    def _check_kind(cls, kind):
        return _require_kind(kind, {CoolingKind.NONE}, "no-cooling")


class UnrecognizedCooler(_Equipment):
    """Cooling kind outside the catalog; uses no fuel."""
    kind: Text = ""


CoolingSystem = Annotated[
    Union[
        Annotated[AirConditioner, Tag("air_conditioner")],
        Annotated[NoCooling, Tag("none")],
        Annotated[UnrecognizedCooler, Tag("unrecognized")],
    ],
    Discriminator(_cooling_tag),
]


# =============================================================================
# Domestic hot water variants
# =============================================================================

class _WaterHeater(_Equipment):
    """Draw profile shared by every water heater."""
    setpoint_f: Number = Field(default=None, alias="setpoint_F")
    inlet_f: Number = Field(default=None, alias="inlet_F")
    gal_per_person_per_day: Number = None
    days_per_year: Number = None


class ConventionalWaterHeater(_WaterHeater):
    """Storage tank or instantaneous heater rated by UEF."""
    kind: DHWKind
    uef: Number = Field(default=None, alias="UEF")

    @field_validator("kind")
    @classmethod
    def _check_kind(cls, kind):
        return _require_kind(kind, CONVENTIONAL_DHW_CARRIER, "conventional water heater")

    @property
    def carrier(self) -> EnergyCarrier:
        return CONVENTIONAL_DHW_CARRIER[self.kind]

    @property
    def tankless(self) -> bool:
        return self.kind in TANKLESS_DHW_KINDS


class HeatPumpWaterHeater(_WaterHeater):
    """Heat pump water heater rated by COP."""
    kind: DHWKind = DHWKind.HEAT_PUMP
    cop: Number = Field(default=None, alias="COP")

    @field_validator("kind")
    @classmethod
    def _check_kind(cls, kind):
        return _require_kind(kind, {DHWKind.HEAT_PUMP}, "heat pump water heater")


class UnrecognizedWaterHeater(_WaterHeater):
    """Water heater kind outside the catalog; uses no fuel."""
    kind: Text = ""


DHWSystem = Annotated[
    Union[
        Annotated[ConventionalWaterHeater, Tag("conventional")],
        Annotated[HeatPumpWaterHeater, Tag("heat_pump")],
        Annotated[UnrecognizedWaterHeater, Tag("unrecognized")],
    ],
    Discriminator(_dhw_tag),
]


def is_heat_pump(system: Optional[BaseModel]) -> bool:
    """True for any heat-pump heating variant."""
    return isinstance(system, HeatPumpHeater)
