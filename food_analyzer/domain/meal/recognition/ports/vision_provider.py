"""Port (interface) for vision AI providers.

This port defines the contract that external vision-language endpoints
must implement to be used by the domain layer.
"""

from typing import Protocol

from food_analyzer.domain.meal.recognition.entities.encoded_image import EncodedImage


class IVisionProvider(Protocol):
    """
    Interface for vision AI providers.

    This port follows the Dependency Inversion Principle:
    - Domain layer defines the interface (port)
    - Infrastructure layer implements it (adapter)

    Implementations can be:
    - Azure-style chat completion deployment (default)
    - Fake provider (for testing)
    """

    async def describe_foods(self, image: EncodedImage, prompt: str) -> str:
        """
        Ask the model which foods appear in the image.

        Args:
            image: Encoded image payload
            prompt: Instruction text sent alongside the image

        Returns:
            Raw completion text (e.g. "fried rice, egg")

        Raises:
            RecognitionNetworkError: Transport or HTTP failure
            InvalidResponseError: Response body has an unexpected shape
            EmptyResultError: Completion text is blank
        """
        ...
