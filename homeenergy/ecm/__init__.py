"""Retrofit measures and the recommendation engine."""

from .catalog import (
    RecommendationCategory,
    SortKey,
    Measure,
    Savings,
    Recommendation,
    MEASURE_CATALOG,
    get_measure,
    list_measure_ids,
    get_measures_by_category,
)
from .recommender import (
    Baseline,
    MEASURE_EVALUATORS,
    generate_candidates,
    recommendations,
)

__all__ = [
    # Catalog
    "RecommendationCategory",
    "SortKey",
    "Measure",
    "Savings",
    "Recommendation",
    "MEASURE_CATALOG",
    "get_measure",
    "list_measure_ids",
    "get_measures_by_category",
    # Engine
    "Baseline",
    "MEASURE_EVALUATORS",
    "generate_candidates",
    "recommendations",
]
