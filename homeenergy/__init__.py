"""
Home Energy Calculator.

Annual heating, cooling and hot-water energy for a single-family home,
with emissions, cost and ranked retrofit recommendations, from a compact
and possibly incomplete description of the house.

Usage:
    from homeenergy import evaluate

    estimate = evaluate({"floorArea_ft2": 1800, "yearBuilt": 1972, "HDD65": 6500})
    estimate.total_cost
"""

__version__ = "0.1.0"

from .core import (
    EnergyCarrier,
    EndUse,
    FuelBreakdown,
    HeatingKind,
    CoolingKind,
    DHWKind,
    InputRecord,
    EffectiveRecord,
    Settings,
    settings,
)
from .baseline import resolve, typical_by_era, estimate_geometry
from .hvac import map_heating_fuel, map_cooling_fuel, map_dhw_fuel, dhw_delivered_btu
from .analysis import (
    AnnualLoads,
    ConductanceBreakdown,
    EmissionsResult,
    compute_loads,
    aggregate,
    emissions,
    cost,
)
from .ecm import Recommendation, RecommendationCategory, Savings, SortKey, recommendations
from .analysis.pipeline import EnergyEstimate, evaluate

__all__ = [
    "__version__",
    # Core types
    "EnergyCarrier",
    "EndUse",
    "FuelBreakdown",
    "HeatingKind",
    "CoolingKind",
    "DHWKind",
    "InputRecord",
    "EffectiveRecord",
    "Settings",
    "settings",
    # Engine
    "resolve",
    "typical_by_era",
    "estimate_geometry",
    "compute_loads",
    "AnnualLoads",
    "ConductanceBreakdown",
    "map_heating_fuel",
    "map_cooling_fuel",
    "map_dhw_fuel",
    "dhw_delivered_btu",
    "aggregate",
    "emissions",
    "cost",
    "EmissionsResult",
    "recommendations",
    "Recommendation",
    "RecommendationCategory",
    "Savings",
    "SortKey",
    # Pipeline
    "evaluate",
    "EnergyEstimate",
]
