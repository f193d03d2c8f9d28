"""Meal value objects."""

from .meal_type import MealType

__all__ = ["MealType"]
