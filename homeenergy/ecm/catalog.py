"""
Retrofit measure catalog for single-family homes.

Defines every retrofit the recommender can propose with:
- Category (envelope, system, windows, water heating, behavior)
- Title and explanation templates
- Trigger thresholds and target values

Catalog order is the tie-break order when two recommendations save the
same amount.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from ..core.energy_breakdown import FuelBreakdown


class RecommendationCategory(Enum):
    """Recommendation categories."""
    ENVELOPE = "envelope"
    SYSTEM = "system"
    WINDOWS = "windows"
    WATER_HEATING = "water_heating"
    BEHAVIOR = "behavior"


class SortKey(Enum):
    """Ranking for recommendations."""
    COST = "cost"   # dollars saved, descending
    CO2 = "co2"     # kg CO2e avoided, descending


@dataclass(frozen=True)
class Measure:
    """Retrofit measure definition."""
    id: str
    category: RecommendationCategory
    title: str         # may contain {placeholders} filled at generation
    explanation: str
    parameters: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class Savings:
    """Annual savings of a recommendation."""
    fuel: FuelBreakdown
    dollars: float
    kg_co2: float
    heating_load_btu: Optional[float] = None  # heating load avoided, or moved onto new equipment
    cooling_load_btu: Optional[float] = None


@dataclass(frozen=True)
class Recommendation:
    """A retrofit recommendation with its estimated savings."""
    id: str
    category: RecommendationCategory
    title: str
    explanation: str
    savings: Savings

    def meets_threshold(self, min_dollars: float, min_kg_co2: float) -> bool:
        """Kept when either dollar or CO2 savings clears its threshold."""
        return self.savings.dollars >= min_dollars or self.savings.kg_co2 >= min_kg_co2


# =============================================================================
# MEASURE CATALOG
# =============================================================================

MEASURE_CATALOG: Dict[str, Measure] = {

    # =========================================================================
    # ENVELOPE
    # =========================================================================

    "attic-insulation": Measure(
        id="attic-insulation",
        category=RecommendationCategory.ENVELOPE,
        title="Add attic insulation to R{target_r:.0f}",
        explanation="Current roof R≈{current_r:.0f}; raising to R{target_r:.0f} cuts conduction.",
        parameters={
            "target_r": 49,
            "target_r_cold": 60,
            "cold_climate_hdd65": 6000,
            "min_gap_r": 1,
        },
    ),

    "air-sealing": Measure(
        id="air-sealing",
        category=RecommendationCategory.ENVELOPE,
        title="Air sealing & weatherstrip (blower-door guided)",
        explanation=(
            "Leakage looks {leakage} (ACHnat≈{current_ach:.2f}). "
            "Target ≈{target_ach:.2f} to cut infiltration."
        ),
        parameters={
            "trigger_ach": 0.35,
            "target_ach": 0.25,
            "leaky_ach": 0.6,
        },
    ),

    # =========================================================================
    # WINDOWS
    # =========================================================================

    "window-upgrade": Measure(
        id="window-upgrade",
        category=RecommendationCategory.WINDOWS,
        title="Upgrade to low-U windows",
        explanation="Avg U≈{current_u:.2f} → U≈{target_u:.2f} lowers conductive losses.",
        parameters={
            "min_window_area_ft2": 80,
            "trigger_u": 0.35,
            "target_u": 0.30,
        },
    ),

    "solar-control": Measure(
        id="solar-control",
        category=RecommendationCategory.WINDOWS,
        title="Add west/south shading or low-SHGC glazing",
        explanation="Exterior shading/films cut solar-driven cooling.",
        parameters={
            "min_share_of_cooling": 0.05,
            "trigger_shading": 0.6,
            "trigger_shgc": 0.30,
            "solar_reduction": 0.3,
        },
    ),

    # =========================================================================
    # SYSTEMS
    # =========================================================================

    "heat-pump-upgrade": Measure(
        id="heat-pump-upgrade",
        category=RecommendationCategory.SYSTEM,
        title="Replace main heater with a heat pump (ductless minisplit)",
        explanation="COP≈{target_cop:.1f} often cuts 50–70% vs. resistance/older fossil systems.",
        parameters={
            "target_cop": 3.2,
            "min_dollars": 10,
            "min_kg_co2": 25,
        },
    ),

    "cooling-upgrade": Measure(
        id="cooling-upgrade",
        category=RecommendationCategory.SYSTEM,
        title="Upgrade cooling to SEER {target_seer:.0f}+ (e.g., ductless)",
        explanation="Your current SEER≈{current_seer:.0f}. High-SEER uses fewer kWh for same cooling.",
        parameters={
            "trigger_seer": 18,
            "target_seer": 20,
        },
    ),

    # =========================================================================
    # WATER HEATING
    # =========================================================================

    "hpwh": Measure(
        id="hpwh",
        category=RecommendationCategory.WATER_HEATING,
        title="Install a heat pump water heater",
        explanation="HPWH uses ~60–70% less electricity than standard electric; often lower CO₂.",
        parameters={
            "target_cop": 2.5,
        },
    ),

    # =========================================================================
    # BEHAVIOR (flat fractions of current use)
    # =========================================================================

    "dhw-behavior": Measure(
        id="dhw-behavior",
        category=RecommendationCategory.BEHAVIOR,
        title="Low-flow showerheads & 20% shorter showers",
        explanation="Immediate, low-cost savings on hot water.",
        parameters={
            "fraction": 0.20,
        },
    ),

    "thermostat-setback": Measure(
        id="thermostat-setback",
        category=RecommendationCategory.BEHAVIOR,
        title="3°F heating setback overnight / when away",
        explanation="Smart thermostat scheduling ~2% per °F setback.",
        parameters={
            "fraction": 0.06,
        },
    ),
}


def get_measure(measure_id: str) -> Optional[Measure]:
    """Get a measure by ID."""
    return MEASURE_CATALOG.get(measure_id)


def list_measure_ids() -> List[str]:
    """List measure IDs in catalog order."""
    return list(MEASURE_CATALOG.keys())


def get_measures_by_category(category: RecommendationCategory) -> List[Measure]:
    """Get all measures in a category."""
    return [m for m in MEASURE_CATALOG.values() if m.category == category]
