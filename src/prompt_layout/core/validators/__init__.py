"""Post-hoc validation of model responses."""

from .base import DefaultResponseValidator, PromptResponseValidator
from .models import PromptResponse, Validation

__all__ = [
    "DefaultResponseValidator",
    "PromptResponse",
    "PromptResponseValidator",
    "Validation",
]
