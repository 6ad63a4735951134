"""Response validation models."""

from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field

from prompt_layout.core.prompts.models import Message

TValue = TypeVar("TValue")


class PromptResponse(BaseModel):
    """A model completion handed to validators."""

    status: Literal["success", "error", "rate_limited", "invalid_response", "too_long"] = (
        "success"
    )
    input: Message | list[Message] | None = Field(
        default=None, description="Prompt that produced the response"
    )
    message: Message | None = Field(default=None, description="Model reply")
    error: str | None = Field(default=None, description="Error detail")


class Validation(BaseModel, Generic[TValue]):
    """Outcome of validating a response."""

    type: Literal["Validation"] = "Validation"
    valid: bool = Field(description="Whether the response passed validation")
    value: TValue | None = Field(
        default=None, description="Parsed value extracted by the validator"
    )
    feedback: str | None = Field(
        default=None, description="Repair instructions for the model when invalid"
    )


