"""Recognition services."""

from .recognition_service import FoodRecognitionService

__all__ = ["FoodRecognitionService"]
