"""Recognition entities."""

from .encoded_image import EncodedImage

__all__ = ["EncodedImage"]
