"""Conversation history section."""

import logging
from typing import Any

from prompt_layout.core.memory import Memory
from prompt_layout.infra.tokens import Tokenizer

from .base import PromptSectionBase
from .converters import coerce_message, message_text
from .models import (
    DEFAULT_ASSISTANT_PREFIX,
    DEFAULT_HISTORY_VARIABLE,
    DEFAULT_LINE_SEPARATOR,
    DEFAULT_USER_PREFIX,
    ROLE_ASSISTANT,
    ROLE_USER,
    TOKENS_AUTO,
    Message,
    RenderedPromptSection,
)
from .resolver import TemplateResolver

logger = logging.getLogger(__name__)


class ConversationHistory(PromptSectionBase):
    """Renders the newest turns of a conversation stored in memory.

    Messages are read from ``variable`` (a list of ``Message``, LangChain
    messages or ``{"role", "content"}`` dicts), selected newest-first while
    they fit the budget, and emitted oldest-first. A required history that
    cannot fit even its newest message still emits that message and reports
    ``too_long``.
    """

    def __init__(
        self,
        variable: str = DEFAULT_HISTORY_VARIABLE,
        tokens: float = TOKENS_AUTO,
        required: bool = False,
        user_prefix: str = DEFAULT_USER_PREFIX,
        assistant_prefix: str = DEFAULT_ASSISTANT_PREFIX,
        separator: str = DEFAULT_LINE_SEPARATOR,
    ) -> None:
        super().__init__(tokens, required, separator, text_prefix="")
        self.variable = variable
        self.user_prefix = user_prefix
        self.assistant_prefix = assistant_prefix

    def _load(self, memory: Memory) -> list[Message]:
        history = memory.get_value(self.variable)
        if not history:
            return []
        return [coerce_message(item) for item in history]

    def _line(self, message: Message) -> str:
        if message.role == ROLE_USER:
            return self.user_prefix + message_text(message)
        if message.role == ROLE_ASSISTANT:
            return self.assistant_prefix + message_text(message)
        return message_text(message)

    def _select(self, items: list[Any], budget: int, cost_of) -> list[Any]:
        """Pick newest-first while the running cost fits *budget*."""
        kept: list[Any] = []
        used = 0
        for item in reversed(items):
            cost = cost_of(item, bool(kept))
            if used + cost > budget:
                break
            kept.append(item)
            used += cost
        if not kept and items and self.required:
            kept.append(items[-1])
        if len(kept) < len(items):
            logger.debug(
                "History trimmed to %d of %d messages (budget=%d)",
                len(kept),
                len(items),
                budget,
            )
        kept.reverse()
        return kept

    async def render_as_messages(
        self,
        context: Any,
        memory: Memory,
        functions: TemplateResolver,
        tokenizer: Tokenizer,
        max_tokens: int,
    ) -> RenderedPromptSection[list[Message]]:
        budget = self.get_token_budget(max_tokens)
        kept = self._select(
            self._load(memory),
            budget,
            lambda m, _: tokenizer.count(message_text(m)),
        )
        return self._return_messages(kept, tokenizer, max_tokens)

    async def render_as_text(
        self,
        context: Any,
        memory: Memory,
        functions: TemplateResolver,
        tokenizer: Tokenizer,
        max_tokens: int,
    ) -> RenderedPromptSection[str]:
        budget = self.get_token_budget(max_tokens)
        separator_length = tokenizer.count(self.separator)
        lines = [self._line(m) for m in self._load(memory)]
        kept = self._select(
            lines,
            budget,
            lambda line, joined: tokenizer.count(line)
            + (separator_length if joined else 0),
        )
        text = self.separator.join(kept)
        length = tokenizer.count(text)
        return RenderedPromptSection(output=text, length=length, too_long=length > budget)
