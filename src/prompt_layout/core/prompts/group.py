"""Group section: collapses nested sections into one message."""

from collections.abc import Sequence
from typing import Any

from prompt_layout.core.memory import Memory
from prompt_layout.infra.tokens import Tokenizer

from .base import PromptSection, PromptSectionBase, validate_role
from .layout import LayoutEngine
from .models import (
    DEFAULT_PARAGRAPH_SEPARATOR,
    ROLE_SYSTEM,
    TOKENS_AUTO,
    Message,
    RenderedPromptSection,
)
from .resolver import TemplateResolver


class GroupSection(PromptSectionBase):
    """Lays out child sections as text and emits the result as one message.

    Useful for building a single system message out of several optional
    parts: the children share the group's budget exactly as they would in a
    ``LayoutEngine``, but message mode yields one ``role`` message instead
    of one message per child.
    """

    def __init__(
        self,
        sections: Sequence[PromptSection],
        role: str = ROLE_SYSTEM,
        tokens: float = TOKENS_AUTO,
        required: bool = True,
        separator: str = DEFAULT_PARAGRAPH_SEPARATOR,
        text_prefix: str = "",
    ) -> None:
        super().__init__(tokens, required, separator, text_prefix)
        self.role = validate_role(role)
        self._layout = LayoutEngine(sections, TOKENS_AUTO, True, separator)

    @property
    def sections(self) -> tuple[PromptSection, ...]:
        return self._layout.sections

    async def render_as_messages(
        self,
        context: Any,
        memory: Memory,
        functions: TemplateResolver,
        tokenizer: Tokenizer,
        max_tokens: int,
    ) -> RenderedPromptSection[list[Message]]:
        budget = self.get_token_budget(max_tokens)
        layout = await self._layout.render_as_text(
            context, memory, functions, tokenizer, budget
        )
        if not layout.output:
            return RenderedPromptSection(output=[], length=0, too_long=False)

        rendered = self._return_messages(
            [Message(role=self.role, content=layout.output)], tokenizer, max_tokens
        )
        if layout.too_long and not rendered.too_long:
            return RenderedPromptSection(
                output=rendered.output, length=rendered.length, too_long=True
            )
        return rendered
