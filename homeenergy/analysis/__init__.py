"""Load model and energy accounting."""

from .loads import (
    AnnualLoads,
    ConductanceBreakdown,
    CATEGORY_ACH,
    ua_envelope,
    envelope_conductance,
    house_volume_ft3,
    estimate_ach_natural,
    ua_infiltration,
    base_heating_load,
    base_cooling_load,
    annual_window_solar_gain,
    compute_loads,
)
from .accounting import (
    EmissionsResult,
    aggregate,
    emissions,
    cost,
    cost_by_carrier,
)

__all__ = [
    # Loads
    "AnnualLoads",
    "ConductanceBreakdown",
    "CATEGORY_ACH",
    "ua_envelope",
    "envelope_conductance",
    "house_volume_ft3",
    "estimate_ach_natural",
    "ua_infiltration",
    "base_heating_load",
    "base_cooling_load",
    "annual_window_solar_gain",
    "compute_loads",
    # Accounting
    "EmissionsResult",
    "aggregate",
    "emissions",
    "cost",
    "cost_by_carrier",
]
