"""Edamam food-database adapter."""

from .client import EdamamClient, map_nutrients

__all__ = ["EdamamClient", "map_nutrients"]
