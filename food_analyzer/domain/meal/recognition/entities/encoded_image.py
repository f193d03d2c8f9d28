"""EncodedImage value object - image payload ready for a vision request."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EncodedImage:
    """
    Value Object: base64 image payload plus its media type.

    Example:
        >>> EncodedImage(payload="aGk=", media_type="image/jpeg").data_url()
        'data:image/jpeg;base64,aGk='
    """

    payload: str  # base64, no line breaks
    media_type: str = "image/jpeg"

    def __post_init__(self) -> None:
        """Validate invariants after initialization."""
        if not self.payload:
            raise ValueError("Encoded image payload cannot be empty")
        if "/" not in self.media_type:
            raise ValueError(f"Invalid media type: {self.media_type}")

    def data_url(self) -> str:
        """Inline ``data:`` URL accepted by the ``image_url`` content part."""
        return f"data:{self.media_type};base64,{self.payload}"
