"""Exceptions raised by prompt rendering."""

__all__ = [
    "PromptLayoutError",
    "TemplateResolutionError",
    "InvalidSectionError",
]


class PromptLayoutError(Exception):
    """Base class for all prompt layout errors."""


class TemplateResolutionError(PromptLayoutError):
    """Raised when a leaf section's content cannot be produced."""

    def __init__(self, message: str, *, template: str | None = None) -> None:
        super().__init__(message)
        self.template = template


class InvalidSectionError(PromptLayoutError, ValueError):
    """Raised when a section is constructed with an invalid sizing policy."""
