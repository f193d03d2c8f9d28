"""JPEG encoder for vision requests.

Converts a decoded image (or raw image bytes) into the base64 JPEG
payload embedded in recognition requests.
"""

import base64
import io
import logging
from typing import Union

from PIL import Image, UnidentifiedImageError

from food_analyzer.domain.meal.recognition.entities.encoded_image import EncodedImage
from food_analyzer.domain.shared.errors import EncodingFailedError

logger = logging.getLogger(__name__)

JPEG_MEDIA_TYPE = "image/jpeg"
DEFAULT_JPEG_QUALITY = 85

ImageInput = Union[Image.Image, bytes, bytearray]


def load_image(data: Union[bytes, bytearray]) -> Image.Image:
    """
    Decode raw image bytes.

    Raises:
        EncodingFailedError: If the bytes are not a readable image
    """
    if not data:
        raise EncodingFailedError("Unable to load image: no data")
    try:
        img = Image.open(io.BytesIO(bytes(data)))
        img.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise EncodingFailedError(f"Unable to load image: {e}") from e
    return img


def _to_rgb(img: Image.Image) -> Image.Image:
    """RGB copy of ``img``; transparency is composited on white."""
    if img.mode in ("RGBA", "LA", "P"):
        source = img.convert("RGBA") if img.mode == "P" else img
        background = Image.new("RGB", source.size, (255, 255, 255))
        background.paste(source, mask=source.split()[-1])
        return background
    return img.convert("RGB")


class JpegImageEncoder:
    """
    Encode images as base64 JPEG with a fixed quality.

    Deterministic for a given image and quality; the input image is
    never modified.

    Example:
        >>> encoder = JpegImageEncoder(quality=85)
        >>> encoded = encoder.encode(Image.new("RGB", (8, 8), "red"))
        >>> encoded.media_type
        'image/jpeg'
    """

    def __init__(self, quality: int = DEFAULT_JPEG_QUALITY):
        if not 1 <= quality <= 100:
            raise ValueError(f"JPEG quality must be between 1 and 100, got {quality}")
        self._quality = quality

    @property
    def quality(self) -> int:
        return self._quality

    def encode(self, image: ImageInput) -> EncodedImage:
        """
        Encode ``image`` for a recognition request.

        Args:
            image: Pillow image or raw bytes of any Pillow-readable format

        Returns:
            EncodedImage with base64 payload and ``image/jpeg`` media type

        Raises:
            EncodingFailedError: If decoding fails or no bytes are produced
        """
        img = load_image(image) if isinstance(image, (bytes, bytearray)) else image

        output = io.BytesIO()
        try:
            _to_rgb(img).save(output, format="JPEG", quality=self._quality, optimize=True)
        except (OSError, ValueError) as e:
            logger.error("Error encoding image to JPEG", extra={"error": str(e)})
            raise EncodingFailedError(f"Image encoding failed: {e}") from e

        data = output.getvalue()
        if not data:
            raise EncodingFailedError("Image encoding failed: encoder produced no bytes")

        logger.debug(
            "Image encoded",
            extra={"size": img.size, "jpeg_bytes": len(data), "quality": self._quality},
        )
        return EncodedImage(
            payload=base64.b64encode(data).decode("ascii"),
            media_type=JPEG_MEDIA_TYPE,
        )
