"""
End-to-end estimate for one home.

    raw input → resolve → loads → fuel per end use → totals,
    emissions, cost → recommendations

Usage:
    from homeenergy.analysis.pipeline import evaluate

    estimate = evaluate({"floorArea_ft2": 2200, "yearBuilt": 1968})
    estimate.total_cost
    estimate.recommendations[0].title
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from ..baseline.fallbacks import resolve
from ..core.config import settings
from ..core.energy_breakdown import EndUse, FuelBreakdown
from ..core.equipment import NoCooling
from ..core.models import EffectiveRecord, InputRecord
from ..ecm.catalog import Recommendation, SortKey
from ..ecm.recommender import recommendations
from ..hvac.mapper import dhw_delivered_btu, has_fuel_mapping, map_cooling_fuel, map_dhw_fuel, map_heating_fuel
from .accounting import EmissionsResult, aggregate, cost, emissions
from .loads import AnnualLoads, ConductanceBreakdown, compute_loads, envelope_conductance

logger = logging.getLogger(__name__)


@dataclass
class EnergyEstimate:
    """Complete annual estimate for a home."""
    effective: EffectiveRecord
    conductance: ConductanceBreakdown
    loads: AnnualLoads
    dhw_delivered_btu: float
    fuel_by_end_use: Dict[EndUse, FuelBreakdown]
    total_fuel: FuelBreakdown
    emissions: EmissionsResult
    cost_by_end_use: Dict[EndUse, float]
    recommendations: List[Recommendation] = field(default_factory=list)

    @property
    def total_cost(self) -> float:
        return sum(self.cost_by_end_use.values())

    @property
    def total_kg_co2(self) -> float:
        return self.emissions.total_kg


def _warn_unmapped_equipment(eff: EffectiveRecord) -> None:
    """One warning per end use whose equipment kind is not in the catalog."""
    systems = {EndUse.HEATING: eff.heating, EndUse.COOLING: eff.cooling, EndUse.DHW: eff.dhw}
    for end_use, system in systems.items():
        if isinstance(system, NoCooling) or has_fuel_mapping(system):
            continue
        kind = getattr(system, "kind", "")
        logger.warning(
            f"Unrecognized {end_use.value} equipment {kind!r}: counted as zero fuel use",
            extra={"end_use": end_use.value, "kind": kind},
        )


def evaluate(
    raw: Union[InputRecord, EffectiveRecord, Mapping[str, Any], None],
    sort_key: Optional[Union[SortKey, str]] = None,
    *,
    limit: Optional[int] = None,
) -> EnergyEstimate:
    """
    Run the full estimate for a home.

    Args:
        raw: Input record, effective record or plain mapping
        sort_key: Recommendation ranking (default settings.default_sort)
        limit: Number of recommendations (default settings.max_recommendations)

    Returns:
        EnergyEstimate
    """
    eff = resolve(raw)
    _warn_unmapped_equipment(eff)

    loads = compute_loads(eff)
    heating = map_heating_fuel(eff, loads.heating)
    cooling = map_cooling_fuel(eff, loads.cooling)
    dhw = map_dhw_fuel(eff)

    fuel_by_end_use = {EndUse.HEATING: heating, EndUse.COOLING: cooling, EndUse.DHW: dhw}
    total = aggregate(heating, cooling, dhw)

    recs = recommendations(
        eff, loads, heating, cooling, dhw,
        sort_key if sort_key is not None else settings.default_sort,
        limit=limit,
    )

    estimate = EnergyEstimate(
        effective=eff,
        conductance=envelope_conductance(eff),
        loads=loads,
        dhw_delivered_btu=dhw_delivered_btu(eff),
        fuel_by_end_use=fuel_by_end_use,
        total_fuel=total,
        emissions=emissions(eff, total),
        cost_by_end_use={end_use: cost(eff, fuel) for end_use, fuel in fuel_by_end_use.items()},
        recommendations=recs,
    )
    logger.debug(
        f"Estimate: heating {loads.heating:,.0f} Btu, cooling {loads.cooling:,.0f} Btu, "
        f"${estimate.total_cost:,.0f}/yr, {estimate.total_kg_co2:,.0f} kg CO2e/yr"
    )
    return estimate
