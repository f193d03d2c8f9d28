"""Domain service for AI-powered food recognition.

This service asks a vision provider which foods appear in a photo and
returns the raw comma separated answer.
"""

import logging
import time

from food_analyzer.domain.meal.recognition.entities.encoded_image import EncodedImage
from food_analyzer.domain.meal.recognition.ports.vision_provider import IVisionProvider
from food_analyzer.domain.meal.recognition.prompts import FOOD_LIST_PROMPT
from food_analyzer.domain.shared.errors import EmptyResultError, RecognitionError

logger = logging.getLogger(__name__)


class FoodRecognitionService:
    """
    Domain service for AI-powered food recognition.

    Delegates the model call to a vision provider while providing
    domain-level validation and logging. One attempt per call: a failed
    recognition is reported, never retried.
    """

    def __init__(self, vision_provider: IVisionProvider, prompt: str = FOOD_LIST_PROMPT):
        """
        Initialize recognition service with vision provider.

        Args:
            vision_provider: Implementation of IVisionProvider
            prompt: Instruction sent with every image
        """
        self._vision = vision_provider
        self._prompt = prompt

    @property
    def prompt(self) -> str:
        return self._prompt

    async def recognize(self, image: EncodedImage) -> str:
        """
        Recognize food names in an encoded image.

        Args:
            image: Encoded image payload

        Returns:
            Raw completion text, stripped

        Raises:
            RecognitionError: Any recognition-stage failure (network,
                invalid response, empty result)

        Example:
            >>> service = FoodRecognitionService(provider)
            >>> await service.recognize(encoded)
            'fried rice, egg'
        """
        start_time = time.time()
        logger.info(
            "Recognizing food from photo",
            extra={"media_type": image.media_type, "payload_chars": len(image.payload)},
        )

        try:
            text = await self._vision.describe_foods(image, self._prompt)
        except RecognitionError as e:
            logger.error(
                "Photo recognition failed",
                extra={"error_type": type(e).__name__, "error": str(e)},
            )
            raise

        text = text.strip()
        if not text:
            raise EmptyResultError("No foods recognized in image")

        logger.info(
            "Recognition complete",
            extra={
                "raw_text": text,
                "processing_time_ms": int((time.time() - start_time) * 1000),
            },
        )
        return text
