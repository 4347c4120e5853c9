"""
Recommendation engine - what-if evaluation of retrofit measures.

Each measure is a pure transform from the home's effective record to a
counterfactual record (better attic insulation, tighter envelope, a heat
pump...). Savings are the difference between the baseline and the
counterfactual, computed with the same load model, equipment mapper and
accounting used for the baseline itself. Behavioral measures apply a flat
fraction to current use.

Generated recommendations pass a global impact filter (dollars OR kg CO2
above threshold), are ranked by the chosen key and truncated to the top N.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple, Union

from ..analysis.accounting import cost, emissions
from ..analysis.loads import (
    AnnualLoads,
    base_cooling_load,
    base_heating_load,
    compute_loads,
    estimate_ach_natural,
)
from ..core.config import settings
from ..core.energy_breakdown import FuelBreakdown
from ..core.equipment import (
    AirConditioner,
    HeatingKind,
    HeatPumpHeater,
    HeatPumpWaterHeater,
    is_heat_pump,
)
from ..core.models import EffectiveRecord, InfiltrationCategory
from ..core.units import is_missing, to_number
from ..hvac.mapper import map_cooling_fuel, map_dhw_fuel, map_heating_fuel
from .catalog import MEASURE_CATALOG, Measure, Recommendation, Savings, SortKey

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Baseline:
    """Current performance of the home, shared by every measure."""
    eff: EffectiveRecord
    loads: AnnualLoads
    heating_fuel: FuelBreakdown
    cooling_fuel: FuelBreakdown
    dhw_fuel: FuelBreakdown


def _build(
    measure: Measure,
    eff: EffectiveRecord,
    fuel: FuelBreakdown,
    heating_load_btu: Optional[float] = None,
    cooling_load_btu: Optional[float] = None,
    **values: float,
) -> Recommendation:
    """Price a fuel saving and fill in the measure's text."""
    fmt = {**measure.parameters, **values}
    return Recommendation(
        id=measure.id,
        category=measure.category,
        title=measure.title.format(**fmt),
        explanation=measure.explanation.format(**fmt),
        savings=Savings(
            fuel=fuel,
            dollars=cost(eff, fuel),
            kg_co2=emissions(eff, fuel).total_kg,
            heating_load_btu=heating_load_btu,
            cooling_load_btu=cooling_load_btu,
        ),
    )


def _avoided_loads(eff: EffectiveRecord, counterfactual: EffectiveRecord) -> Tuple[float, float]:
    """Reduction in base heating and cooling load (Btu/yr, never negative)."""
    heating = max(base_heating_load(eff) - base_heating_load(counterfactual), 0.0)
    cooling = max(base_cooling_load(eff) - base_cooling_load(counterfactual), 0.0)
    return heating, cooling


def _envelope_measure(
    measure: Measure,
    base: Baseline,
    counterfactual: EffectiveRecord,
    **values: float,
) -> Recommendation:
    """Savings of an envelope change through the current heating and cooling equipment."""
    heating_save, cooling_save = _avoided_loads(base.eff, counterfactual)
    fuel = map_heating_fuel(base.eff, heating_save) + map_cooling_fuel(base.eff, cooling_save)
    return _build(measure, base.eff, fuel, heating_save, cooling_save, **values)


# =============================================================================
# MEASURES
# =============================================================================

def attic_insulation(measure: Measure, base: Baseline) -> Optional[Recommendation]:
    eff = base.eff
    p = measure.parameters
    target_r = p["target_r_cold"] if eff.hdd65 >= p["cold_climate_hdd65"] else p["target_r"]
    if is_missing(eff.roof_r) or eff.roof_r >= target_r - p["min_gap_r"] or eff.roof_area_ft2 <= 0:
        return None

    counterfactual = eff.with_changes(roof_r=float(target_r))
    return _envelope_measure(measure, base, counterfactual, target_r=target_r, current_r=eff.roof_r)


def air_sealing(measure: Measure, base: Baseline) -> Optional[Recommendation]:
    eff = base.eff
    p = measure.parameters
    current_ach = estimate_ach_natural(eff)
    if current_ach <= p["trigger_ach"]:
        return None

    # Tight category is the sealed target
    counterfactual = eff.with_changes(ach50=None, infiltration_category=InfiltrationCategory.TIGHT.value)
    leakage = "leaky" if current_ach >= p["leaky_ach"] else "average"
    return _envelope_measure(measure, base, counterfactual, current_ach=current_ach, leakage=leakage)


def window_upgrade(measure: Measure, base: Baseline) -> Optional[Recommendation]:
    eff = base.eff
    p = measure.parameters
    if eff.window_area_ft2 <= p["min_window_area_ft2"] or eff.window_u <= p["trigger_u"]:
        return None

    counterfactual = eff.with_changes(window_u=p["target_u"])
    return _envelope_measure(measure, base, counterfactual, current_u=eff.window_u)


def solar_control(measure: Measure, base: Baseline) -> Optional[Recommendation]:
    eff = base.eff
    p = measure.parameters
    solar_cooling = base.loads.solar_to_cooling
    if solar_cooling <= p["min_share_of_cooling"] * base.loads.cooling:
        return None
    if not (eff.shading_factor > p["trigger_shading"] or eff.window_shgc > p["trigger_shgc"]):
        return None

    counterfactual = eff.with_changes(shading_factor=eff.shading_factor * (1 - p["solar_reduction"]))
    cooling_save = max(base.loads.cooling - compute_loads(counterfactual).cooling, 0.0)
    fuel = map_cooling_fuel(eff, cooling_save)
    return _build(measure, eff, fuel, cooling_load_btu=cooling_save)


def heat_pump_upgrade(measure: Measure, base: Baseline) -> Optional[Recommendation]:
    eff = base.eff
    p = measure.parameters
    if is_heat_pump(eff.heating) or base.loads.heating <= 0:
        return None

    counterfactual = eff.with_changes(
        heating=HeatPumpHeater(kind=HeatingKind.MINISPLIT_HEAT_PUMP, cop=p["target_cop"])
    )
    fuel = base.heating_fuel - map_heating_fuel(counterfactual, base.loads.heating)
    rec = _build(measure, eff, fuel, heating_load_btu=base.loads.heating)
    if not (rec.savings.dollars > p["min_dollars"] or rec.savings.kg_co2 > p["min_kg_co2"]):
        return None
    return rec


def cooling_upgrade(measure: Measure, base: Baseline) -> Optional[Recommendation]:
    eff = base.eff
    p = measure.parameters
    if not isinstance(eff.cooling, AirConditioner) or base.loads.cooling <= 0:
        return None
    current_seer = to_number(eff.cooling.seer, 15.0)
    if current_seer >= p["trigger_seer"]:
        return None

    counterfactual = eff.with_changes(cooling=eff.cooling.model_copy(update={"seer": p["target_seer"]}))
    fuel = base.cooling_fuel - map_cooling_fuel(counterfactual, base.loads.cooling)
    return _build(measure, eff, fuel, cooling_load_btu=base.loads.cooling, current_seer=current_seer)


def heat_pump_water_heater(measure: Measure, base: Baseline) -> Optional[Recommendation]:
    eff = base.eff
    if isinstance(eff.dhw, HeatPumpWaterHeater):
        return None

    dhw = eff.dhw
    counterfactual = eff.with_changes(dhw=HeatPumpWaterHeater(
        cop=measure.parameters["target_cop"],
        setpoint_f=dhw.setpoint_f,
        inlet_f=dhw.inlet_f,
        gal_per_person_per_day=dhw.gal_per_person_per_day,
        days_per_year=dhw.days_per_year,
    ))
    fuel = base.dhw_fuel - map_dhw_fuel(counterfactual)
    return _build(measure, eff, fuel)


def dhw_behavior(measure: Measure, base: Baseline) -> Optional[Recommendation]:
    f = base.dhw_fuel
    if f.elec_kwh + f.gas_therms + f.propane_gal + f.oil_gal <= 0:
        return None
    return _build(measure, base.eff, f.scale(measure.parameters["fraction"]))


def thermostat_setback(measure: Measure, base: Baseline) -> Optional[Recommendation]:
    if base.loads.heating <= 0:
        return None
    heating_save = measure.parameters["fraction"] * base.loads.heating
    fuel = map_heating_fuel(base.eff, heating_save)
    return _build(measure, base.eff, fuel, heating_load_btu=heating_save)


MeasureFn = Callable[[Measure, Baseline], Optional[Recommendation]]

MEASURE_EVALUATORS: Dict[str, MeasureFn] = {
    "attic-insulation": attic_insulation,
    "air-sealing": air_sealing,
    "window-upgrade": window_upgrade,
    "solar-control": solar_control,
    "heat-pump-upgrade": heat_pump_upgrade,
    "cooling-upgrade": cooling_upgrade,
    "hpwh": heat_pump_water_heater,
    "dhw-behavior": dhw_behavior,
    "thermostat-setback": thermostat_setback,
}


# =============================================================================
# ENGINE
# =============================================================================

def _sort_key(sort_key: Union[SortKey, str]) -> SortKey:
    if isinstance(sort_key, SortKey):
        return sort_key
    try:
        return SortKey(str(sort_key).lower())
    except ValueError:
        logger.warning(f"Unknown sort key {sort_key!r}, ranking by cost")
        return SortKey.COST


def generate_candidates(base: Baseline) -> List[Recommendation]:
    """Every applicable measure, in catalog order, before filtering."""
    candidates = []
    for measure_id, measure in MEASURE_CATALOG.items():
        rec = MEASURE_EVALUATORS[measure_id](measure, base)
        if rec is None:
            logger.debug("Measure not applicable", extra={"recommendation_id": measure_id})
            continue
        candidates.append(rec)
    return candidates


def recommendations(
    eff: EffectiveRecord,
    loads: AnnualLoads,
    heating_fuel: FuelBreakdown,
    cooling_fuel: FuelBreakdown,
    dhw_fuel: FuelBreakdown,
    sort_key: Union[SortKey, str] = SortKey.COST,
    *,
    limit: Optional[int] = None,
    min_dollars: Optional[float] = None,
    min_kg_co2: Optional[float] = None,
) -> List[Recommendation]:
    """
    Ranked retrofit recommendations for a home.

    Args:
        eff: Effective record
        loads: Baseline loads from compute_loads(eff)
        heating_fuel: Baseline heating fuel
        cooling_fuel: Baseline cooling electricity
        dhw_fuel: Baseline water-heating fuel
        sort_key: SortKey.COST (dollars) or SortKey.CO2 (kg), descending
        limit: Maximum number returned (default settings.max_recommendations)
        min_dollars: Dollar threshold of the impact filter
        min_kg_co2: CO2 threshold of the impact filter

    Returns:
        At most `limit` recommendations; equal savings keep catalog order
    """
    limit = settings.max_recommendations if limit is None else max(int(limit), 0)
    min_dollars = settings.min_savings_dollars if min_dollars is None else min_dollars
    min_kg_co2 = settings.min_savings_kg_co2 if min_kg_co2 is None else min_kg_co2

    base = Baseline(eff, loads, heating_fuel, cooling_fuel, dhw_fuel)
    candidates = generate_candidates(base)
    kept = [r for r in candidates if r.meets_threshold(min_dollars, min_kg_co2)]

    key = _sort_key(sort_key)
    if key is SortKey.CO2:
        ranked = sorted(kept, key=lambda r: r.savings.kg_co2, reverse=True)
    else:
        ranked = sorted(kept, key=lambda r: r.savings.dollars, reverse=True)

    logger.debug(f"{len(candidates)} candidate measures, {len(kept)} above threshold, returning {min(len(ranked), limit)}")
    return ranked[:limit]
