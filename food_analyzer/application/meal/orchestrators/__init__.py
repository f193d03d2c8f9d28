"""Meal analysis orchestrators."""

from .fan_out_aggregator import FanOutAggregator
from .photo_orchestrator import AnalysisOutcome, AnalysisProgress, MealAnalysisOrchestrator

__all__ = [
    "AnalysisOutcome",
    "AnalysisProgress",
    "FanOutAggregator",
    "MealAnalysisOrchestrator",
]
