"""
Physical constants and numeric helpers.

All energy quantities are in Btu unless a name says otherwise. Fuel
heat contents are higher-heating-value averages for US residential fuels.
"""

from __future__ import annotations

import math
from typing import Any

# Energy per unit of fuel
BTU_PER_KWH = 3412.0              # Btu/kWh
BTU_PER_THERM = 100_000.0         # Btu/therm
BTU_PER_GAL_PROPANE = 91_500.0    # Btu/gal LPG
BTU_PER_GAL_OIL = 138_500.0       # Btu/gal No. 2 heating oil
BTU_PER_CORD_WOOD = 20.0e6        # Btu/cord, mixed hardwood average
BTU_PER_TON_PELLETS = 16.5e6      # Btu/ton

# Air and water
AIR_HEAT_CAPACITY = 1.08          # Btu/(hr·CFM·°F), sensible
WATER_LB_PER_GAL = 8.34           # lb/gal (1 Btu raises 1 lb by 1 °F)

# Conversions
HOURS_PER_DAY = 24
MINUTES_PER_HOUR = 60
BTU_PER_KBTU = 1000.0
WH_PER_KWH = 1000.0


def clamp(value: float, low: float, high: float) -> float:
    """Limit value to [low, high]."""
    return min(high, max(low, value))


def to_number(value: Any, fallback: float = 0.0) -> float:
    """
    Coerce anything to a finite float.

    Returns fallback for None, unparseable strings, NaN and infinities.
    """
    if isinstance(value, bool):
        return fallback
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    return number if math.isfinite(number) else fallback


def is_missing(value: Any) -> bool:
    """True when value is absent, non-finite or not strictly positive."""
    number = to_number(value, math.nan)
    return not math.isfinite(number) or number <= 0


def first_valid(value: Any, default: float) -> float:
    """Return value as a float unless it is missing, else default."""
    return default if is_missing(value) else float(value)


def u_from_r(r_value: float) -> float:
    """
    Convert an R-value to a U-factor.

    R <= 0 (or non-finite) means "no resistance path modeled" and yields
    zero conductance rather than an infinite one.
    """
    if is_missing(r_value):
        return 0.0
    return 1.0 / r_value
