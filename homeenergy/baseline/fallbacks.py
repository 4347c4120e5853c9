"""
Fallback resolution for incomplete home descriptions.

Turns an InputRecord (possibly sparse, possibly holding junk) into an
EffectiveRecord where every value the load model and equipment mapper read
is present and plausible.

Defaults come from three places:
- Construction-era envelope typicals (insulation, glazing, air leakage)
- Geometry estimated from floor area, stories and ceiling height
  (square footprint assumption)
- Per-kind equipment efficiency tables

Usage:
    from homeenergy.baseline import resolve

    eff = resolve({"floorArea_ft2": 2400, "yearBuilt": 1972})
    eff.wall_r  # 9.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Union

from ..core.equipment import (
    AirConditioner,
    CombustionHeater,
    ConventionalWaterHeater,
    CoolingKind,
    DHWKind,
    HeatingKind,
    HeatPumpHeater,
    HeatPumpWaterHeater,
    SolidFuelHeater,
)
from ..core.models import EffectiveRecord, InputRecord, Orientation, to_input_record
from ..core.units import clamp, first_valid, is_missing, to_number

logger = logging.getLogger(__name__)


# =============================================================================
# CONSTRUCTION ERA DEFAULTS
# =============================================================================

DEFAULT_YEAR_BUILT = 1995


class ConstructionEra(Enum):
    """Code-era bands for US single-family construction."""
    PRE_1980 = "pre-1980"
    FROM_1980 = "1980-1999"
    FROM_2000 = "2000-2015"
    FROM_2016 = "2016+"


@dataclass(frozen=True)
class EraDefaults:
    """Typical envelope for a construction era."""
    wall_r: float       # hr·ft²·°F/Btu
    roof_r: float
    floor_r: float
    window_u: float     # Btu/hr·ft²·°F
    ach_natural: float  # natural air changes per hour


ERA_DEFAULTS: Mapping[ConstructionEra, EraDefaults] = MappingProxyType({
    ConstructionEra.PRE_1980: EraDefaults(wall_r=9, roof_r=19, floor_r=11, window_u=0.65, ach_natural=0.7),
    ConstructionEra.FROM_1980: EraDefaults(wall_r=13, roof_r=30, floor_r=13, window_u=0.55, ach_natural=0.5),
    ConstructionEra.FROM_2000: EraDefaults(wall_r=19, roof_r=38, floor_r=19, window_u=0.35, ach_natural=0.4),
    ConstructionEra.FROM_2016: EraDefaults(wall_r=21, roof_r=49, floor_r=30, window_u=0.28, ach_natural=0.3),
})


def construction_era(year_built: Any) -> ConstructionEra:
    """Classify a build year; missing years count as 1995."""
    year = first_valid(year_built, DEFAULT_YEAR_BUILT)
    if year < 1980:
        return ConstructionEra.PRE_1980
    elif year < 2000:
        return ConstructionEra.FROM_1980
    elif year < 2016:
        return ConstructionEra.FROM_2000
    else:
        return ConstructionEra.FROM_2016


def typical_by_era(year_built: Any) -> EraDefaults:
    """Get envelope typicals for the construction era of a build year."""
    return ERA_DEFAULTS[construction_era(year_built)]


# =============================================================================
# GEOMETRY
# =============================================================================

DEFAULT_STORIES = 1
DEFAULT_CEILING_HEIGHT_FT = 8.0
DEFAULT_FLOOR_AREA_FT2 = 1000.0
MIN_FLOOR_AREA_FT2 = 100.0
DEFAULT_DOOR_AREA_FT2 = 40.0
DEFAULT_WINDOW_TO_WALL = 0.15
MIN_OPAQUE_WALL_FRACTION = 0.7

# Share of total glazing per orientation when none is given
WINDOW_SPLIT: Mapping[Orientation, float] = MappingProxyType({
    Orientation.SOUTH: 0.30,
    Orientation.NORTH: 0.25,
    Orientation.EAST: 0.225,
    Orientation.WEST: 0.225,
})

_WINDOW_FIELDS: Mapping[Orientation, str] = MappingProxyType({
    Orientation.NORTH: "window_n_ft2",
    Orientation.SOUTH: "window_s_ft2",
    Orientation.EAST: "window_e_ft2",
    Orientation.WEST: "window_w_ft2",
})


@dataclass(frozen=True)
class EstimatedGeometry:
    """Envelope areas estimated from basic dimensions (ft²)."""
    stories: float
    ceiling_height_ft: float
    floor_area_ft2: float
    perimeter_ft: float
    gross_wall_ft2: float
    wall_area_ft2: float
    roof_area_ft2: float
    floor_area_over_uncond_ft2: float
    door_area_ft2: float
    window_areas: Mapping[Orientation, float]

    @property
    def window_area_ft2(self) -> float:
        return sum(self.window_areas.values())


def estimate_geometry(record: InputRecord) -> EstimatedGeometry:
    """
    Estimate envelope areas, keeping any valid area the record supplies.

    Assumes a square footprint: side = sqrt(floor area / stories).
    Missing glazing is 15% of gross wall, split S 30% / N 25% / E 22.5% / W 22.5%.
    Missing net wall is gross minus openings, but never below 70% of gross.
    """
    stories = max(first_valid(record.stories, DEFAULT_STORIES), 1)
    height = first_valid(record.ceiling_height_ft, DEFAULT_CEILING_HEIGHT_FT)
    floor_area = max(first_valid(record.floor_area_ft2, DEFAULT_FLOOR_AREA_FT2), MIN_FLOOR_AREA_FT2)

    side = math.sqrt(floor_area / stories)
    perimeter = 4 * side
    gross_wall = perimeter * height * stories

    door_area = first_valid(record.door_area_ft2, DEFAULT_DOOR_AREA_FT2)

    window_areas = {
        orientation: first_valid(getattr(record, name), 0.0)
        for orientation, name in _WINDOW_FIELDS.items()
    }
    window_total = sum(window_areas.values())
    if window_total <= 0:
        window_total = DEFAULT_WINDOW_TO_WALL * gross_wall
        window_areas = {o: WINDOW_SPLIT[o] * window_total for o in _WINDOW_FIELDS}

    default_wall = max(gross_wall - (door_area + window_total), MIN_OPAQUE_WALL_FRACTION * gross_wall)

    return EstimatedGeometry(
        stories=stories,
        ceiling_height_ft=height,
        floor_area_ft2=floor_area,
        perimeter_ft=perimeter,
        gross_wall_ft2=gross_wall,
        wall_area_ft2=first_valid(record.wall_area_ft2, default_wall),
        roof_area_ft2=first_valid(record.roof_area_ft2, floor_area / stories),  # top story
        floor_area_over_uncond_ft2=first_valid(record.floor_area_over_uncond_ft2, 0.0),
        door_area_ft2=door_area,
        window_areas=MappingProxyType(window_areas),
    )


# =============================================================================
# EQUIPMENT DEFAULTS
# =============================================================================

# AFUE for combustion, COP for heat pumps, appliance efficiency for stoves
HEATING_EFFICIENCY_DEFAULTS: Mapping[HeatingKind, float] = MappingProxyType({
    HeatingKind.CENTRAL_GAS_FURNACE: 0.92,
    HeatingKind.ROOM_GAS_FURNACE: 0.82,
    HeatingKind.GAS_BOILER: 0.86,
    HeatingKind.PROPANE_CENTRAL_FURNACE: 0.90,
    HeatingKind.PROPANE_WALL_FURNACE: 0.80,
    HeatingKind.PROPANE_BOILER: 0.86,
    HeatingKind.OIL_FURNACE: 0.83,
    HeatingKind.OIL_BOILER: 0.85,
    HeatingKind.ELECTRIC_HEAT_PUMP: 2.8,
    HeatingKind.GROUND_COUPLED_HEAT_PUMP: 3.5,
    HeatingKind.MINISPLIT_HEAT_PUMP: 3.2,
    HeatingKind.WOOD_STOVE: 0.70,
    HeatingKind.PELLET_STOVE: 0.78,
})

COOLING_SEER_DEFAULTS: Mapping[CoolingKind, Optional[float]] = MappingProxyType({
    CoolingKind.CENTRAL_AC: 15,
    CoolingKind.ROOM_AC: 12,
    CoolingKind.ELECTRIC_HEAT_PUMP: 16,
    CoolingKind.MINISPLIT_HEAT_PUMP: 20,
    CoolingKind.GROUND_COUPLED_HEAT_PUMP: 22,
    CoolingKind.DIRECT_EVAPORATIVE: 25,
    CoolingKind.NONE: None,
})

# UEF for conventional heaters, COP for the heat pump water heater
DHW_EFFICIENCY_DEFAULTS: Mapping[DHWKind, float] = MappingProxyType({
    DHWKind.ELECTRIC_STORAGE: 0.92,
    DHWKind.GAS_STORAGE: 0.65,
    DHWKind.PROPANE_STORAGE: 0.65,
    DHWKind.OIL_STORAGE: 0.60,
    DHWKind.ELECTRIC_INSTANTANEOUS: 0.98,
    DHWKind.GAS_INSTANTANEOUS: 0.82,
    DHWKind.PROPANE_INSTANTANEOUS: 0.82,
    DHWKind.OIL_INSTANTANEOUS: 0.78,
    DHWKind.HEAT_PUMP: 2.5,
})

DHW_SETPOINT_F = 120.0
DHW_INLET_F = 55.0
DHW_GAL_PER_PERSON_PER_DAY = 20.0
DHW_DAYS_PER_YEAR = 365.0

DEFAULT_WINDOW_SHGC = 0.30
DEFAULT_OCCUPANTS = 1


_DEFAULTS_BY_FAMILY: Mapping[type, Mapping[Any, Optional[float]]] = MappingProxyType({
    HeatingKind: HEATING_EFFICIENCY_DEFAULTS,
    CoolingKind: COOLING_SEER_DEFAULTS,
    DHWKind: DHW_EFFICIENCY_DEFAULTS,
})


def default_efficiency(kind: Enum) -> Optional[float]:
    """Documented default efficiency for any equipment kind (None if not rated)."""
    # Kind families share display strings ("Electric heat pump"), so pick the table by type
    table = _DEFAULTS_BY_FAMILY.get(type(kind), {})
    return table.get(kind)


def resolve_heating(system):
    """Fill a missing or invalid efficiency with the kind's default."""
    if isinstance(system, CombustionHeater):
        return system.model_copy(update={"afue": first_valid(system.afue, HEATING_EFFICIENCY_DEFAULTS[system.kind])})
    if isinstance(system, HeatPumpHeater):
        return system.model_copy(update={"cop": first_valid(system.cop, HEATING_EFFICIENCY_DEFAULTS[system.kind])})
    if isinstance(system, SolidFuelHeater):
        return system.model_copy(
            update={"efficiency": first_valid(system.efficiency, HEATING_EFFICIENCY_DEFAULTS[system.kind])}
        )
    return system


def resolve_cooling(system):
    if isinstance(system, AirConditioner):
        return system.model_copy(update={"seer": first_valid(system.seer, COOLING_SEER_DEFAULTS[system.kind])})
    return system


def resolve_dhw(system):
    """Fill the draw profile and the efficiency of a water heater."""
    setpoint = to_number(system.setpoint_f, DHW_SETPOINT_F)
    inlet = to_number(system.inlet_f, DHW_INLET_F)
    update: Dict[str, Any] = {
        "setpoint_f": setpoint,
        "inlet_f": inlet,
        "gal_per_person_per_day": first_valid(system.gal_per_person_per_day, DHW_GAL_PER_PERSON_PER_DAY),
        "days_per_year": first_valid(system.days_per_year, DHW_DAYS_PER_YEAR),
    }
    if isinstance(system, ConventionalWaterHeater):
        update["uef"] = first_valid(system.uef, DHW_EFFICIENCY_DEFAULTS[system.kind])
    elif isinstance(system, HeatPumpWaterHeater):
        update["cop"] = first_valid(system.cop, DHW_EFFICIENCY_DEFAULTS[system.kind])
    return system.model_copy(update=update)


# =============================================================================
# RESOLVER
# =============================================================================

# Fields where zero is a legitimate value: only non-finite or negative is replaced
_NON_NEGATIVE_FIELDS = (
    "incident_solar_n",
    "incident_solar_s",
    "incident_solar_e",
    "incident_solar_w",
    "emission_kg_per_kwh",
    "emission_kg_per_therm",
    "emission_kg_per_gal_propane",
    "emission_kg_per_gal_oil",
    "emission_kg_per_cord_wood",
    "emission_kg_per_ton_pellets",
    "price_per_kwh",
    "price_per_therm",
    "price_per_gal_propane",
    "price_per_gal_oil",
    "price_per_cord_wood",
    "price_per_ton_pellets",
)

# Fractions: non-finite replaced, then clamped to [0, 1]
_FRACTION_FIELDS = ("shading_factor", "solar_to_heating_frac", "solar_to_cooling_frac")


def _non_negative(value: Any, default: float) -> float:
    number = to_number(value, math.nan)
    if not math.isfinite(number) or number < 0:
        return default
    return number


def resolve(raw: Union[InputRecord, EffectiveRecord, Mapping[str, Any], None]) -> EffectiveRecord:
    """
    Resolve an input record into an effective record.

    Never raises: malformed or missing values are replaced by documented
    defaults. Resolving an already-effective record returns an equal record.

    Args:
        raw: InputRecord, EffectiveRecord or a plain mapping (saved-file keys
            or snake_case names)

    Returns:
        EffectiveRecord ready for the load model and equipment mapper
    """
    record = to_input_record(raw)
    defaulted: List[str] = []

    def pick(name: str, value: Any, resolved: Any) -> Any:
        if value != resolved and not (value is None and resolved is None):
            defaulted.append(name)
        return resolved

    era = typical_by_era(record.year_built)
    geo = estimate_geometry(record)

    values: Dict[str, Any] = dict(record)

    # Basics
    values["stories"] = pick("stories", record.stories, geo.stories)
    values["ceiling_height_ft"] = pick("ceiling_height_ft", record.ceiling_height_ft, geo.ceiling_height_ft)
    values["floor_area_ft2"] = pick("floor_area_ft2", record.floor_area_ft2, geo.floor_area_ft2)
    values["year_built"] = pick("year_built", record.year_built, first_valid(record.year_built, DEFAULT_YEAR_BUILT))
    values["occupants"] = pick("occupants", record.occupants, first_valid(record.occupants, DEFAULT_OCCUPANTS))

    # Envelope
    values["wall_r"] = pick("wall_r", record.wall_r, first_valid(record.wall_r, era.wall_r))
    values["roof_r"] = pick("roof_r", record.roof_r, first_valid(record.roof_r, era.roof_r))
    values["floor_r"] = pick("floor_r", record.floor_r, first_valid(record.floor_r, era.floor_r))
    values["window_u"] = pick("window_u", record.window_u, first_valid(record.window_u, era.window_u))
    values["window_shgc"] = pick(
        "window_shgc", record.window_shgc, clamp(first_valid(record.window_shgc, DEFAULT_WINDOW_SHGC), 0, 1)
    )
    values["door_u"] = pick("door_u", record.door_u, _non_negative(record.door_u, 0.0))

    values["wall_area_ft2"] = pick("wall_area_ft2", record.wall_area_ft2, geo.wall_area_ft2)
    values["roof_area_ft2"] = pick("roof_area_ft2", record.roof_area_ft2, geo.roof_area_ft2)
    values["floor_area_over_uncond_ft2"] = pick(
        "floor_area_over_uncond_ft2", record.floor_area_over_uncond_ft2, geo.floor_area_over_uncond_ft2
    )
    values["door_area_ft2"] = pick("door_area_ft2", record.door_area_ft2, geo.door_area_ft2)
    for orientation, name in _WINDOW_FIELDS.items():
        values[name] = pick(name, getattr(record, name), geo.window_areas[orientation])

    # Solar, emission factors and prices: zero is legitimate
    for name in _NON_NEGATIVE_FIELDS:
        values[name] = pick(name, values[name], _non_negative(values[name], InputRecord.field_default(name)))
    for name in _FRACTION_FIELDS:
        value = values[name]
        values[name] = pick(name, value, clamp(to_number(value, InputRecord.field_default(name)), 0, 1))

    # Infiltration and climate
    values["n_factor"] = pick("n_factor", record.n_factor, first_valid(record.n_factor, InputRecord.field_default("n_factor")))
    values["ach50"] = None if is_missing(record.ach50) else record.ach50
    values["hdd65"] = pick("hdd65", record.hdd65, first_valid(record.hdd65, InputRecord.field_default("hdd65")))
    values["cdd65"] = pick("cdd65", record.cdd65, first_valid(record.cdd65, InputRecord.field_default("cdd65")))

    # Equipment
    values["heating"] = pick("heating", record.heating, resolve_heating(record.heating))
    values["cooling"] = pick("cooling", record.cooling, resolve_cooling(record.cooling))
    values["dhw"] = pick("dhw", record.dhw, resolve_dhw(record.dhw))

    if defaulted:
        logger.debug(f"Defaulted {len(defaulted)} fields: {', '.join(defaulted)}")

    return EffectiveRecord.model_validate(values)
