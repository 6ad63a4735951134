"""Top-level prompt section."""

from collections.abc import Sequence

from .base import PromptSection
from .layout import LayoutEngine
from .models import DEFAULT_PARAGRAPH_SEPARATOR, TOKENS_AUTO


class Prompt(LayoutEngine):
    """Root of a prompt tree.

    Prompts are compositional: a ``Prompt`` is itself a section and can be
    nested inside another layout.
    """

    def __init__(
        self,
        sections: Sequence[PromptSection],
        tokens: float = TOKENS_AUTO,
        required: bool = True,
        separator: str = DEFAULT_PARAGRAPH_SEPARATOR,
    ) -> None:
        super().__init__(sections, tokens, required, separator)
