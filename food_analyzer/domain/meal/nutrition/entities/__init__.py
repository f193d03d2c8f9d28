"""Nutrition entities."""

from .nutrient_record import NUTRIENT_FIELDS, NutrientRecord, round_half_up
from .resolution import LookupOutcome, LookupStatus, Resolution

__all__ = [
    "NUTRIENT_FIELDS",
    "NutrientRecord",
    "round_half_up",
    "LookupOutcome",
    "LookupStatus",
    "Resolution",
]
