"""
Pydantic models for a home energy estimate.

Covers the raw input schema (what a form or saved file supplies, possibly
incomplete) and the effective schema (the same fields after fallback
resolution, with every value the calculations read guaranteed present).

Attribute names are snake_case; each field also accepts the key used in
saved input files (``floorArea_ft2``, ``wall_R``, ``HDD65``...), and
``model_dump(by_alias=True)`` writes those keys back out.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .equipment import (
    AirConditioner,
    CombustionHeater,
    ConventionalWaterHeater,
    CoolingSystem,
    DEFAULT_COOLING_KIND,
    DEFAULT_DHW_KIND,
    DEFAULT_HEATING_KIND,
    DHWSystem,
    HeatingSystem,
)
from .fields import Number, OptionalText, Text


# =============================================================================
# ENUMS
# =============================================================================


class InfiltrationCategory(str, Enum):
    """Qualitative air leakage when no blower-door result is available."""
    TIGHT = "Tight"
    AVERAGE = "Average"
    LEAKY = "Leaky"


class Orientation(str, Enum):
    NORTH = "N"
    SOUTH = "S"
    EAST = "E"
    WEST = "W"


def _default_heating() -> CombustionHeater:
    return CombustionHeater(kind=DEFAULT_HEATING_KIND, afue=0.92)


def _default_cooling() -> AirConditioner:
    return AirConditioner(kind=DEFAULT_COOLING_KIND, seer=15)


def _default_dhw() -> ConventionalWaterHeater:
    return ConventionalWaterHeater(
        kind=DEFAULT_DHW_KIND,
        uef=0.92,
        setpoint_f=120,
        inlet_f=55,
        gal_per_person_per_day=20,
        days_per_year=365,
    )


def _equipment_block(value: Any, default_kind: Enum) -> Any:
    """Normalize an equipment block so a missing kind means the default kind."""
    if isinstance(value, BaseModel):
        return value
    if not isinstance(value, dict):
        return {"kind": default_kind.value}
    if not value.get("kind"):
        return {**value, "kind": default_kind.value}
    return value


# =============================================================================
# HOME RECORD
# =============================================================================


class _HomeRecord(BaseModel):
    """Field layout shared by raw and effective records."""

    # 1) Home basics
    zip_code: Text = Field(default="", alias="zip")
    state: Text = ""
    floor_area_ft2: Number = Field(default=1800, alias="floorArea_ft2", description="Conditioned floor area")
    stories: Number = 2
    ceiling_height_ft: Number = Field(default=8, alias="ceilingHeight_ft")
    year_built: Number = Field(default=1995, alias="yearBuilt")
    foundation: Text = "Basement (partial)"
    occupants: Number = 3

    # 2) Envelope: None means "estimate from geometry and construction era"
    wall_area_ft2: Number = Field(default=None, alias="wallArea_ft2", description="Net opaque above-grade wall")
    wall_r: Number = Field(default=None, alias="wall_R")
    roof_area_ft2: Number = Field(default=None, alias="roofArea_ft2")
    roof_r: Number = Field(default=None, alias="roof_R")
    floor_area_over_uncond_ft2: Number = Field(default=None, alias="floorAreaOverUncond_ft2")
    floor_r: Number = Field(default=None, alias="floor_R")
    door_area_ft2: Number = Field(default=None, alias="doorArea_ft2")
    door_u: Number = Field(default=None, alias="door_U")

    # Windows by orientation, plus U-factor and SHGC
    window_n_ft2: Number = Field(default=None, alias="window_N_ft2")
    window_s_ft2: Number = Field(default=None, alias="window_S_ft2")
    window_e_ft2: Number = Field(default=None, alias="window_E_ft2")
    window_w_ft2: Number = Field(default=None, alias="window_W_ft2")
    window_u: Number = Field(default=None, alias="window_U")
    window_shgc: Number = Field(default=None, alias="window_SHGC")

    # 2b) Solar model (advanced): vertical insolation in kBtu/ft²·yr
    incident_solar_n: Number = Field(default=35, alias="incidentSolar_kBtu_ft2yr_N")
    incident_solar_s: Number = Field(default=140, alias="incidentSolar_kBtu_ft2yr_S")
    incident_solar_e: Number = Field(default=90, alias="incidentSolar_kBtu_ft2yr_E")
    incident_solar_w: Number = Field(default=90, alias="incidentSolar_kBtu_ft2yr_W")
    shading_factor: Number = Field(default=1.0, alias="shadingFactor", description="1 = unshaded")
    solar_to_heating_frac: Number = Field(default=0.55, alias="solarToHeating_frac")
    solar_to_cooling_frac: Number = Field(default=0.45, alias="solarToCooling_frac")

    # 3) Infiltration (advanced)
    ach50: Number = Field(default=None, description="Blower-door air changes per hour at 50 Pa")
    n_factor: Number = Field(default=0.07, alias="nFactor", description="LBL ACH50 → natural ACH factor")
    infiltration_category: OptionalText = Field(
        default=InfiltrationCategory.AVERAGE.value, alias="infiltrationCategory"
    )

    # 4) Systems
    heating: HeatingSystem = Field(default_factory=_default_heating)
    cooling: CoolingSystem = Field(default_factory=_default_cooling)
    dhw: DHWSystem = Field(default_factory=_default_dhw)

    # 5) Climate, base 65 °F
    hdd65: Number = Field(default=5000, alias="HDD65")
    cdd65: Number = Field(default=1000, alias="CDD65")

    # 6) Emission factors (advanced), kg CO2e per unit
    emission_kg_per_kwh: Number = Field(default=0.39, alias="emission_kg_per_kWh")
    emission_kg_per_therm: Number = 5.3
    emission_kg_per_gal_propane: Number = 5.74
    emission_kg_per_gal_oil: Number = 10.16
    emission_kg_per_cord_wood: Number = 0.0
    emission_kg_per_ton_pellets: Number = 0.0

    # 7) Energy prices, $ per unit
    price_per_kwh: Number = Field(default=0.15, alias="price_per_kWh")
    price_per_therm: Number = 1.20
    price_per_gal_propane: Number = 2.75
    price_per_gal_oil: Number = 4.00
    price_per_cord_wood: Number = 300
    price_per_ton_pellets: Number = 300

    @field_validator("heating", mode="before")
    @classmethod
    def _heating_kind(cls, value):
        return _equipment_block(value, DEFAULT_HEATING_KIND)

    @field_validator("cooling", mode="before")
    @classmethod
    def _cooling_kind(cls, value):
        return _equipment_block(value, DEFAULT_COOLING_KIND)

    @field_validator("dhw", mode="before")
    @classmethod
    def _dhw_kind(cls, value):
        return _equipment_block(value, DEFAULT_DHW_KIND)

    @property
    def window_areas(self) -> Dict[Orientation, float]:
        """Window area by orientation (missing treated as 0)."""
        return {
            Orientation.NORTH: self.window_n_ft2 or 0.0,
            Orientation.SOUTH: self.window_s_ft2 or 0.0,
            Orientation.EAST: self.window_e_ft2 or 0.0,
            Orientation.WEST: self.window_w_ft2 or 0.0,
        }

    @property
    def incident_solar(self) -> Dict[Orientation, float]:
        """Incident solar by orientation, kBtu/ft²·yr."""
        return {
            Orientation.NORTH: self.incident_solar_n,
            Orientation.SOUTH: self.incident_solar_s,
            Orientation.EAST: self.incident_solar_e,
            Orientation.WEST: self.incident_solar_w,
        }

    @property
    def window_area_ft2(self) -> float:
        return sum(self.window_areas.values())

    @classmethod
    def field_default(cls, name: str) -> Any:
        """Documented default for a field."""
        return cls.model_fields[name].get_default(call_default_factory=True)

    @classmethod
    def accepted_keys(cls) -> set:
        """Field names plus their serialized aliases."""
        keys = set(cls.model_fields)
        keys.update(f.alias for f in cls.model_fields.values() if f.alias)
        return keys


class InputRecord(_HomeRecord):
    """
    Raw description of a home, as supplied by a caller.

    Every field is optional. Unknown keys are ignored; malformed numbers
    become NaN and are defaulted later by the fallback resolver.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class EffectiveRecord(_HomeRecord):
    """
    Fully resolved home description.

    Produced by ``homeenergy.baseline.resolve``. Every value read by the load
    model and the equipment mapper is present and physically plausible.
    ``ach50`` stays None when no blower-door test was supplied; a None or
    unrecognized ``infiltration_category`` is read as Average.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    def with_changes(self, **changes: Any) -> "EffectiveRecord":
        """Return a new record with some fields replaced (counterfactuals)."""
        return self.model_copy(update=changes)


def to_input_record(data: Optional[Any]) -> InputRecord:
    """Coerce a mapping, raw record or effective record into an InputRecord."""
    if isinstance(data, InputRecord):
        return data
    if isinstance(data, BaseModel):
        return InputRecord.model_validate(dict(data))
    return InputRecord.model_validate(data or {})
