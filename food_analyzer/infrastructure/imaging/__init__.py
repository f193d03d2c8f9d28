"""Image encoding."""

from .jpeg_encoder import JpegImageEncoder, load_image

__all__ = ["JpegImageEncoder", "load_image"]
