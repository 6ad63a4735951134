"""Content moderation for prompt input and model output."""

from .azure import AzureContentSafetyModerator
from .base import DefaultModerator, Moderator
from .models import (
    FLAGGED_INPUT_ACTION,
    FLAGGED_OUTPUT_ACTION,
    HTTP_ERROR_ACTION,
    ModerationResult,
    Plan,
    PredictedDoCommand,
    PredictedSayCommand,
)

__all__ = [
    "AzureContentSafetyModerator",
    "DefaultModerator",
    "FLAGGED_INPUT_ACTION",
    "FLAGGED_OUTPUT_ACTION",
    "HTTP_ERROR_ACTION",
    "ModerationResult",
    "Moderator",
    "Plan",
    "PredictedDoCommand",
    "PredictedSayCommand",
]
