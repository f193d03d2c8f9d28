"""Chat-completion vision adapter."""

from .client import OpenAIVisionClient

__all__ = ["OpenAIVisionClient"]
