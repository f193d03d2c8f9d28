"""Meal core entities."""

from .analysis_result import AnalysisResult
from .food_entry import FoodEntry

__all__ = ["AnalysisResult", "FoodEntry"]
