"""Pydantic models for the chat-completion response body.

Only the fields the recognizer reads are declared; everything else in the
body is ignored. A body that does not match raises ``ValidationError``,
which the client reports as an invalid response.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CompletionMessage(BaseModel):
    """``choices[i].message``"""

    model_config = ConfigDict(extra="ignore", frozen=True)

    role: Optional[str] = None
    content: Optional[str] = Field(None, description="Completion text")


class CompletionChoice(BaseModel):
    """``choices[i]``"""

    model_config = ConfigDict(extra="ignore", frozen=True)

    index: int = 0
    message: CompletionMessage
    finish_reason: Optional[str] = None


class ChatCompletionBody(BaseModel):
    """
    Chat completion response body.

    Example:
        >>> body = ChatCompletionBody.model_validate(
        ...     {"choices": [{"message": {"role": "assistant", "content": "rice"}}]}
        ... )
        >>> body.first_content()
        'rice'
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Optional[str] = None
    model: Optional[str] = None
    choices: List[CompletionChoice] = Field(..., min_length=1)

    def first_content(self) -> Optional[str]:
        return self.choices[0].message.content
