"""Plan and moderation result models."""

from typing import Any, Literal

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Action names emitted by moderators
# ---------------------------------------------------------------------------

FLAGGED_INPUT_ACTION = "___FlaggedInput___"
FLAGGED_OUTPUT_ACTION = "___FlaggedOutput___"
HTTP_ERROR_ACTION = "___HttpError___"

COMMAND_TYPE_DO = "DO"
COMMAND_TYPE_SAY = "SAY"


class PredictedDoCommand(BaseModel):
    """Instructs the caller to run a named action."""

    type: Literal["DO"] = COMMAND_TYPE_DO
    action: str = Field(default="", description="Action name to run")
    parameters: dict[str, Any] = Field(
        default_factory=dict, description="Named action arguments"
    )


class PredictedSayCommand(BaseModel):
    """Instructs the caller to send a response to the user."""

    type: Literal["SAY"] = COMMAND_TYPE_SAY
    response: str = Field(default="", description="Text to send")


PredictedCommand = PredictedDoCommand | PredictedSayCommand


class Plan(BaseModel):
    """Ordered commands produced by the model (or by a moderator)."""

    type: Literal["plan"] = "plan"
    commands: list[PredictedCommand] = Field(default_factory=list)


class ModerationResult(BaseModel):
    """Outcome of analyzing one piece of text."""

    flagged: bool = Field(description="True when any category was flagged")
    categories: dict[str, bool] = Field(
        description="Flag per moderation category"
    )
    category_scores: dict[str, float] = Field(
        description="Normalized severity per moderation category"
    )
