"""
Fuel consumption by energy carrier.

The FuelBreakdown is the common currency of the engine: every end use
(space heating, cooling, domestic hot water) is converted into one, and
totals, savings, emissions and cost are all computed from it.

Units per carrier:
- Electricity: kWh
- Natural gas: therms
- Propane (LPG): gallons
- Heating oil: gallons
- Cord wood: cords
- Pellets: tons
"""

from __future__ import annotations

import math
from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict


class EnergyCarrier(Enum):
    """Energy carriers with their breakdown field, display label and unit."""
    ELECTRICITY = ("elec_kwh", "Electricity", "kWh")
    NATURAL_GAS = ("gas_therms", "Natural Gas", "therms")
    PROPANE = ("propane_gal", "Propane", "gal propane")
    OIL = ("oil_gal", "Oil", "gal oil")
    WOOD = ("wood_cords", "Wood", "cords wood")
    PELLETS = ("pellets_tons", "Pellets", "tons pellets")

    def __init__(self, field_name: str, label: str, unit: str):
        self.field_name = field_name
        self.label = label
        self.unit = unit


class EndUse(Enum):
    """End uses tracked separately in the results."""
    HEATING = "heating"
    COOLING = "cooling"
    DHW = "dhw"


def _non_negative(value: float) -> float:
    if not math.isfinite(value) or value < 0:
        return 0.0
    return float(value)


@dataclass(frozen=True)
class FuelBreakdown:
    """
    Annual fuel use, one non-negative quantity per carrier.

    Breakdowns add element-wise, subtract with each field clamped at zero,
    and scale by a factor. Negative or non-finite quantities passed to the
    constructor are stored as zero.
    """
    elec_kwh: float = 0.0
    gas_therms: float = 0.0
    propane_gal: float = 0.0
    oil_gal: float = 0.0
    wood_cords: float = 0.0
    pellets_tons: float = 0.0

    def __post_init__(self):
        for f in fields(self):
            object.__setattr__(self, f.name, _non_negative(getattr(self, f.name)))

    @classmethod
    def zero(cls) -> "FuelBreakdown":
        return cls()

    @classmethod
    def of(cls, carrier: EnergyCarrier, quantity: float) -> "FuelBreakdown":
        """Breakdown with a single carrier populated."""
        return cls(**{carrier.field_name: quantity})

    def get(self, carrier: EnergyCarrier) -> float:
        return getattr(self, carrier.field_name)

    def __add__(self, other: "FuelBreakdown") -> "FuelBreakdown":
        if not isinstance(other, FuelBreakdown):
            return NotImplemented
        return FuelBreakdown(**{
            c.field_name: self.get(c) + other.get(c) for c in EnergyCarrier
        })

    def __sub__(self, other: "FuelBreakdown") -> "FuelBreakdown":
        if not isinstance(other, FuelBreakdown):
            return NotImplemented
        return FuelBreakdown(**{
            c.field_name: max(self.get(c) - other.get(c), 0.0) for c in EnergyCarrier
        })

    def scale(self, factor: float) -> "FuelBreakdown":
        """Multiply every carrier by factor (negative results clamp to zero)."""
        return FuelBreakdown(**{c.field_name: self.get(c) * factor for c in EnergyCarrier})

    @property
    def is_zero(self) -> bool:
        return all(self.get(c) == 0 for c in EnergyCarrier)

    def to_dict(self) -> Dict[str, float]:
        """Convert to dictionary keyed by field name."""
        return {c.field_name: self.get(c) for c in EnergyCarrier}

    def by_label(self) -> Dict[str, float]:
        """Convert to dictionary keyed by carrier display label."""
        return {c.label: self.get(c) for c in EnergyCarrier}


def sum_fuel(*parts: FuelBreakdown) -> FuelBreakdown:
    """Element-wise sum of any number of breakdowns (zero when empty)."""
    total = FuelBreakdown.zero()
    for part in parts:
        total = total + part
    return total
