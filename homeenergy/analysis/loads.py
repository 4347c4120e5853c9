"""
Annual heating and cooling loads from envelope conductance and degree days.

Steady-state, degree-day method (base 65 °F):

    Q = DD × 24 × (UA_envelope + UA_infiltration)   [Btu/yr]

Window solar gain is split between the seasons: a fraction offsets
heating, a fraction adds to cooling.

    Qh = max(Q_heat − f_h × Q_solar, 0)
    Qc = max(Q_cool + f_c × Q_solar, 0)
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from ..core.models import EffectiveRecord, InfiltrationCategory
from ..core.units import (
    AIR_HEAT_CAPACITY,
    BTU_PER_KBTU,
    HOURS_PER_DAY,
    MINUTES_PER_HOUR,
    clamp,
    is_missing,
    to_number,
    u_from_r,
)

# Natural ACH by qualitative leakage
CATEGORY_ACH: Mapping[InfiltrationCategory, float] = MappingProxyType({
    InfiltrationCategory.TIGHT: 0.25,
    InfiltrationCategory.AVERAGE: 0.4,
    InfiltrationCategory.LEAKY: 0.6,
})

# LBL ACH50 → natural ACH factor band
N_FACTOR_MIN = 0.03
N_FACTOR_MAX = 0.2


@dataclass(frozen=True)
class ConductanceBreakdown:
    """Heat loss coefficient by path (Btu/hr·°F)."""
    wall: float
    roof: float
    floor: float
    doors: float
    windows: float
    infiltration: float

    @property
    def envelope(self) -> float:
        return max(self.wall + self.roof + self.floor + self.doors + self.windows, 0.0)

    @property
    def total(self) -> float:
        return self.envelope + self.infiltration

    @property
    def infiltration_share(self) -> float:
        """Air leakage as a fraction of total UA (0 when total is 0)."""
        return self.infiltration / self.total if self.total > 0 else 0.0


@dataclass(frozen=True)
class AnnualLoads:
    """Annual thermal loads (Btu/yr)."""
    base_heating: float
    base_cooling: float
    solar_gain: float
    heating: float
    cooling: float

    @property
    def solar_to_cooling(self) -> float:
        """Cooling load added by window solar gain."""
        return max(self.cooling - self.base_cooling, 0.0)


def envelope_conductance(eff: EffectiveRecord) -> ConductanceBreakdown:
    """UA of each envelope path plus infiltration."""
    return ConductanceBreakdown(
        wall=u_from_r(eff.wall_r) * eff.wall_area_ft2,
        roof=u_from_r(eff.roof_r) * eff.roof_area_ft2,
        floor=u_from_r(eff.floor_r) * eff.floor_area_over_uncond_ft2,
        doors=eff.door_u * max(eff.door_area_ft2, 0.0),
        windows=eff.window_u * eff.window_area_ft2,
        infiltration=ua_infiltration(eff),
    )


def ua_envelope(eff: EffectiveRecord) -> float:
    """Conductive UA of walls, roof, floor, doors and windows (Btu/hr·°F)."""
    c = envelope_conductance(eff)
    return c.envelope


def house_volume_ft3(floor_area_ft2: float, ceiling_height_ft: float, stories: float) -> float:
    """Conditioned volume with floors of 100 ft², 8 ft and one story."""
    return max(floor_area_ft2, 100.0) * max(ceiling_height_ft, 8.0) * max(stories, 1.0)


def estimate_ach_natural(eff: EffectiveRecord) -> float:
    """
    Natural air changes per hour.

    A valid blower-door ACH50 wins (scaled by the n-factor, clamped to
    0.03-0.2). Otherwise the qualitative category sets it; a missing or
    unrecognized category counts as Average.
    """
    if not is_missing(eff.ach50):
        n_factor = clamp(to_number(eff.n_factor, 0.07), N_FACTOR_MIN, N_FACTOR_MAX)
        return eff.ach50 * n_factor

    try:
        category = InfiltrationCategory(eff.infiltration_category)
    except ValueError:
        category = InfiltrationCategory.AVERAGE
    return CATEGORY_ACH[category]


def ua_infiltration(eff: EffectiveRecord, ach: Optional[float] = None) -> float:
    """
    Infiltration conductance: 1.08 × CFM, CFM = ACH × volume / 60.

    Args:
        eff: Effective record
        ach: Natural ACH to evaluate at (default: the home's own)
    """
    if ach is None:
        ach = estimate_ach_natural(eff)
    volume = max(house_volume_ft3(eff.floor_area_ft2, eff.ceiling_height_ft, eff.stories), 1.0)
    cfm = max(ach, 0.0) * volume / MINUTES_PER_HOUR
    return AIR_HEAT_CAPACITY * cfm


def base_heating_load(eff: EffectiveRecord) -> float:
    """Heating load before solar gain (Btu/yr)."""
    ua = ua_envelope(eff) + ua_infiltration(eff)
    return max(eff.hdd65 * HOURS_PER_DAY * ua, 0.0)


def base_cooling_load(eff: EffectiveRecord) -> float:
    """Cooling load before solar gain (Btu/yr)."""
    ua = ua_envelope(eff) + ua_infiltration(eff)
    return max(eff.cdd65 * HOURS_PER_DAY * ua, 0.0)


def annual_window_solar_gain(eff: EffectiveRecord) -> float:
    """Solar heat through the glazing: SHGC × shading × Σ(A × I) (Btu/yr)."""
    shading = clamp(to_number(eff.shading_factor, 1.0), 0.0, 1.0)
    shgc = clamp(to_number(eff.window_shgc, 0.30), 0.0, 1.0)
    areas = eff.window_areas
    incident = eff.incident_solar
    gain = sum(
        areas[orientation] * max(incident[orientation], 0.0) * BTU_PER_KBTU
        for orientation in areas
    )
    return max(shgc * shading * gain, 0.0)


def compute_loads(eff: EffectiveRecord) -> AnnualLoads:
    """
    Annual heating and cooling loads including window solar gain.

    Args:
        eff: Effective record (see homeenergy.baseline.resolve)

    Returns:
        AnnualLoads with base, solar and solar-adjusted loads in Btu/yr
    """
    base_heating = base_heating_load(eff)
    base_cooling = base_cooling_load(eff)
    solar = annual_window_solar_gain(eff)
    f_heating = clamp(to_number(eff.solar_to_heating_frac, 0.55), 0.0, 1.0)
    f_cooling = clamp(to_number(eff.solar_to_cooling_frac, 0.45), 0.0, 1.0)

    return AnnualLoads(
        base_heating=base_heating,
        base_cooling=base_cooling,
        solar_gain=solar,
        heating=max(base_heating - f_heating * solar, 0.0),
        cooling=max(base_cooling + f_cooling * solar, 0.0),
    )
