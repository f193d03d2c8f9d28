"""Vision chat-completion client - Implements IVisionProvider port.

Talks to an Azure-style deployment:
``{base_url}/deployments/{model}/chat/completions?api-version=...``
authenticated with an ``api-key`` header.

Key Features:
- Single attempt per call (SDK retries disabled)
- Explicit request timeout
- Response body validated against an explicit schema
"""

import logging
import time
from typing import Any, Dict, Optional

from openai import (
    APIConnectionError,
    APIResponseValidationError,
    APIStatusError,
    AsyncAzureOpenAI,
)
from pydantic import ValidationError

from food_analyzer.domain.meal.recognition.entities.encoded_image import EncodedImage
from food_analyzer.domain.shared.errors import (
    EmptyResultError,
    InvalidResponseError,
    RecognitionNetworkError,
)
from food_analyzer.infrastructure.ai.openai.models import ChatCompletionBody

logger = logging.getLogger(__name__)


class OpenAIVisionClient:
    """
    Chat-completion vision client implementing IVisionProvider port.

    Follows Dependency Inversion Principle:
    - Domain defines IVisionProvider interface (port)
    - Infrastructure provides OpenAIVisionClient implementation (adapter)

    Example:
        >>> async with OpenAIVisionClient(api_key="...") as client:
        ...     text = await client.describe_foods(encoded, FOOD_LIST_PROMPT)
        >>> text
        'fried rice, egg'
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://genai.hkbu.edu.hk/api/v0/rest",
        model: str = "gpt-4.1",
        api_version: str = "2024-12-01-preview",
        timeout: float = 30.0,
        max_tokens: int = 2000,
        temperature: float = 0.7,
        top_p: float = 1.0,
        client: Optional[AsyncAzureOpenAI] = None,
    ):
        """
        Initialize client.

        Args:
            api_key: Credential sent in the ``api-key`` header
            base_url: REST root that contains ``/deployments``
            model: Deployment (model) name
            api_version: ``api-version`` query parameter
            timeout: Request timeout in seconds
            max_tokens: Completion token limit
            temperature: Sampling temperature
            top_p: Nucleus sampling
            client: Optional pre-configured AsyncAzureOpenAI (for testing)
        """
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._top_p = top_p
        self._client = client or AsyncAzureOpenAI(
            api_key=api_key,
            api_version=api_version,
            base_url=f"{base_url.rstrip('/')}/deployments/{model}",
            timeout=timeout,
            max_retries=0,
        )

    async def __aenter__(self) -> "OpenAIVisionClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        await self._client.close()

    def build_messages(self, image: EncodedImage, prompt: str) -> list[Dict[str, Any]]:
        """Single user message carrying the prompt and the inline image."""
        return [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": prompt},
                    {"type": "image_url", "image_url": {"url": image.data_url()}},
                ],
            }
        ]

    async def describe_foods(self, image: EncodedImage, prompt: str) -> str:
        """
        Send one recognition request and return the completion text.

        Implements IVisionProvider.describe_foods() port.

        Raises:
            RecognitionNetworkError: Connection failure, timeout, or HTTP error status
            InvalidResponseError: Body does not match the completion schema
            EmptyResultError: Completion text is blank
        """
        start_time = time.time()
        logger.info("Calling recognition endpoint", extra={"model": self._model})

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=self.build_messages(image, prompt),  # type: ignore[arg-type]
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                top_p=self._top_p,
                stream=False,
            )
        except APIResponseValidationError as e:
            raise InvalidResponseError(f"Failed to parse response: {e}") from e
        except APIStatusError as e:
            logger.warning(
                "Recognition endpoint returned error status",
                extra={"status": e.status_code, "model": self._model},
            )
            raise RecognitionNetworkError(f"HTTP {e.status_code}: {e.message}") from e
        except APIConnectionError as e:
            # APITimeoutError is a subclass
            raise RecognitionNetworkError(str(e) or type(e).__name__) from e

        text = self.parse_completion(response)

        logger.info(
            "Recognition response received",
            extra={
                "model": self._model,
                "processing_time_ms": int((time.time() - start_time) * 1000),
            },
        )
        return text

    @staticmethod
    def parse_completion(response: Any) -> str:
        """
        Extract ``choices[0].message.content`` from a completion.

        Args:
            response: SDK ChatCompletion object or plain dict body

        Raises:
            InvalidResponseError: Missing choices or content
            EmptyResultError: Content is blank
        """
        raw = response.model_dump() if hasattr(response, "model_dump") else response
        try:
            body = ChatCompletionBody.model_validate(raw)
        except ValidationError as e:
            raise InvalidResponseError(f"Failed to parse response: {e}") from e

        content = body.first_content()
        if content is None:
            raise InvalidResponseError("Failed to parse response: message content missing")
        if not content.strip():
            raise EmptyResultError("Recognition returned an empty answer")
        return content
