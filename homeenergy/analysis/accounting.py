"""
Emissions and cost accounting for fuel breakdowns.

Emission factors (kg CO2e per unit) and prices ($ per unit) are read from
the effective record, so a caller can override any of them per home.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping

from ..core.energy_breakdown import EnergyCarrier, FuelBreakdown, sum_fuel
from ..core.models import EffectiveRecord

# Record fields holding the per-unit factors for each carrier
EMISSION_FACTOR_FIELDS: Mapping[EnergyCarrier, str] = MappingProxyType({
    EnergyCarrier.ELECTRICITY: "emission_kg_per_kwh",
    EnergyCarrier.NATURAL_GAS: "emission_kg_per_therm",
    EnergyCarrier.PROPANE: "emission_kg_per_gal_propane",
    EnergyCarrier.OIL: "emission_kg_per_gal_oil",
    EnergyCarrier.WOOD: "emission_kg_per_cord_wood",
    EnergyCarrier.PELLETS: "emission_kg_per_ton_pellets",
})

PRICE_FIELDS: Mapping[EnergyCarrier, str] = MappingProxyType({
    EnergyCarrier.ELECTRICITY: "price_per_kwh",
    EnergyCarrier.NATURAL_GAS: "price_per_therm",
    EnergyCarrier.PROPANE: "price_per_gal_propane",
    EnergyCarrier.OIL: "price_per_gal_oil",
    EnergyCarrier.WOOD: "price_per_cord_wood",
    EnergyCarrier.PELLETS: "price_per_ton_pellets",
})


@dataclass(frozen=True)
class EmissionsResult:
    """Annual emissions, total and per carrier (kg CO2e)."""
    total_kg: float
    by_carrier: Dict[str, float]


def aggregate(*breakdowns: FuelBreakdown) -> FuelBreakdown:
    """Total fuel across end uses (zero when called with nothing)."""
    return sum_fuel(*breakdowns)


def emissions(eff: EffectiveRecord, breakdown: FuelBreakdown) -> EmissionsResult:
    """
    Emissions of a fuel breakdown using the home's emission factors.

    Returns:
        EmissionsResult with by_carrier keyed by display label
        (Electricity, Natural Gas, Propane, Oil, Wood, Pellets)
    """
    by_carrier = {
        carrier.label: breakdown.get(carrier) * getattr(eff, field)
        for carrier, field in EMISSION_FACTOR_FIELDS.items()
    }
    return EmissionsResult(total_kg=sum(by_carrier.values()), by_carrier=by_carrier)


def cost_by_carrier(eff: EffectiveRecord, breakdown: FuelBreakdown) -> Dict[str, float]:
    """Dollar cost per carrier, keyed by display label."""
    return {
        carrier.label: breakdown.get(carrier) * getattr(eff, field)
        for carrier, field in PRICE_FIELDS.items()
    }


def cost(eff: EffectiveRecord, breakdown: FuelBreakdown) -> float:
    """Annual dollar cost of a fuel breakdown at the home's prices."""
    return sum(cost_by_carrier(eff, breakdown).values())
