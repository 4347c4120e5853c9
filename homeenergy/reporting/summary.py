"""
Plain-text and JSON summaries of an energy estimate.
"""

from typing import Any, Dict, List

from ..analysis.pipeline import EnergyEstimate
from ..core.energy_breakdown import EnergyCarrier, FuelBreakdown
from ..ecm.catalog import Recommendation

# Minimum quantity shown, and decimals, per carrier
_DISPLAY = (
    (EnergyCarrier.ELECTRICITY, 0.05, 0),
    (EnergyCarrier.NATURAL_GAS, 0.05, 1),
    (EnergyCarrier.PROPANE, 0.05, 0),
    (EnergyCarrier.OIL, 0.05, 0),
    (EnergyCarrier.WOOD, 0.01, 2),
    (EnergyCarrier.PELLETS, 0.01, 2),
)


def format_fuel_breakdown(fuel: FuelBreakdown, separator: str = " • ") -> str:
    """
    One-line summary of a breakdown, e.g. "1234 kWh • 56.7 therms".

    Negligible quantities are left out; an all-zero breakdown gives "".
    """
    parts = []
    for carrier, minimum, decimals in _DISPLAY:
        quantity = fuel.get(carrier)
        if quantity > minimum:
            parts.append(f"{quantity:.{decimals}f} {carrier.unit}")
    return separator.join(parts)


def recommendation_to_dict(rec: Recommendation) -> Dict[str, Any]:
    savings = rec.savings
    return {
        "id": rec.id,
        "category": rec.category.value,
        "title": rec.title,
        "explanation": rec.explanation,
        "savings": {
            "fuel": savings.fuel.to_dict(),
            "dollars": savings.dollars,
            "kg_co2": savings.kg_co2,
            "heating_load_btu": savings.heating_load_btu,
            "cooling_load_btu": savings.cooling_load_btu,
        },
    }


def estimate_to_dict(estimate: EnergyEstimate) -> Dict[str, Any]:
    """JSON-ready document of an estimate (effective inputs use the file keys)."""
    c = estimate.conductance
    loads = estimate.loads
    recs: List[Dict[str, Any]] = [recommendation_to_dict(r) for r in estimate.recommendations]
    return {
        "effective_inputs": estimate.effective.model_dump(mode="json", by_alias=True),
        "conductance_btu_hr_f": {
            "wall": c.wall,
            "roof": c.roof,
            "floor": c.floor,
            "doors": c.doors,
            "windows": c.windows,
            "infiltration": c.infiltration,
            "envelope": c.envelope,
            "total": c.total,
            "infiltration_share": c.infiltration_share,
        },
        "loads_btu": {
            "base_heating": loads.base_heating,
            "base_cooling": loads.base_cooling,
            "solar_gain": loads.solar_gain,
            "heating": loads.heating,
            "cooling": loads.cooling,
            "dhw_delivered": estimate.dhw_delivered_btu,
        },
        "fuel": {
            end_use.value: fuel.to_dict() for end_use, fuel in estimate.fuel_by_end_use.items()
        },
        "total_fuel": estimate.total_fuel.to_dict(),
        "emissions_kg_co2": {
            "total": estimate.emissions.total_kg,
            "by_carrier": dict(estimate.emissions.by_carrier),
        },
        "cost_usd": {
            **{end_use.value: value for end_use, value in estimate.cost_by_end_use.items()},
            "total": estimate.total_cost,
        },
        "recommendations": recs,
    }
