"""Report generation module."""

from .summary import format_fuel_breakdown, recommendation_to_dict, estimate_to_dict

__all__ = ["format_fuel_breakdown", "recommendation_to_dict", "estimate_to_dict"]
