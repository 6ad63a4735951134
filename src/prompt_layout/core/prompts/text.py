"""Static text section."""

from typing import Any

from prompt_layout.core.memory import Memory
from prompt_layout.infra.tokens import Tokenizer

from .base import PromptSectionBase, validate_role
from .models import DEFAULT_LINE_SEPARATOR, TOKENS_AUTO, Message, RenderedPromptSection
from .resolver import TemplateResolver


class TextSection(PromptSectionBase):
    """A section that always renders the same text as one message."""

    def __init__(
        self,
        text: str,
        role: str,
        tokens: float = TOKENS_AUTO,
        required: bool = True,
        separator: str = DEFAULT_LINE_SEPARATOR,
        text_prefix: str = "",
    ) -> None:
        super().__init__(tokens, required, separator, text_prefix)
        self.text = text
        self.role = validate_role(role)

    async def render_as_messages(
        self,
        context: Any,
        memory: Memory,
        functions: TemplateResolver,
        tokenizer: Tokenizer,
        max_tokens: int,
    ) -> RenderedPromptSection[list[Message]]:
        return self._return_messages(
            [Message(role=self.role, content=self.text)], tokenizer, max_tokens
        )
