"""Recognition ports."""

from .vision_provider import IVisionProvider

__all__ = ["IVisionProvider"]
