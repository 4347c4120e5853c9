"""Fallback resolution: construction-era typicals, geometry and equipment defaults."""

from .fallbacks import (
    ConstructionEra,
    EraDefaults,
    ERA_DEFAULTS,
    EstimatedGeometry,
    HEATING_EFFICIENCY_DEFAULTS,
    COOLING_SEER_DEFAULTS,
    DHW_EFFICIENCY_DEFAULTS,
    construction_era,
    typical_by_era,
    estimate_geometry,
    default_efficiency,
    resolve,
)

__all__ = [
    "ConstructionEra",
    "EraDefaults",
    "ERA_DEFAULTS",
    "EstimatedGeometry",
    "HEATING_EFFICIENCY_DEFAULTS",
    "COOLING_SEER_DEFAULTS",
    "DHW_EFFICIENCY_DEFAULTS",
    "construction_era",
    "typical_by_era",
    "estimate_geometry",
    "default_efficiency",
    "resolve",
]
