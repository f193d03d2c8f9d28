"""Nutrition services."""

from .resolver_service import DEFAULT_FALLBACK_RECORDS, NutrientResolver

__all__ = ["DEFAULT_FALLBACK_RECORDS", "NutrientResolver"]
