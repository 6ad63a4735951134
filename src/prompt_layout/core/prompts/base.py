"""Prompt section contract.

``PromptSection`` is the interface every section implements, leaf or
container: two async render entry points plus the ``tokens`` / ``required``
policy the parent layout reads. ``PromptSectionBase`` is the shared base
for leaves; it derives the text projection from the message projection so
the two can never disagree about content.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Any

from prompt_layout.core.memory import Memory
from prompt_layout.infra.tokens import Tokenizer

from .converters import message_text, messages_length
from .models import (
    DEFAULT_LINE_SEPARATOR,
    TOKENS_AUTO,
    VALID_ROLES,
    InvalidSectionError,
    Message,
    RenderedPromptSection,
)
from .resolver import TemplateResolver


def validate_role(role: str) -> str:
    """Check that a leaf section emits one of the chat roles."""
    if role not in VALID_ROLES:
        raise InvalidSectionError(
            f"role must be one of {sorted(VALID_ROLES)}, got {role!r}"
        )
    return role


def validate_tokens(tokens: float) -> float:
    """Check a sizing policy: ``-1``, a fraction in ``(0, 1)``, or ``>= 1``."""
    if isinstance(tokens, bool) or not isinstance(tokens, (int, float)):
        raise InvalidSectionError(f"tokens must be a number, got {tokens!r}")
    if tokens == TOKENS_AUTO or 0 < tokens < 1 or tokens >= 1:
        return tokens
    raise InvalidSectionError(
        f"tokens must be -1, a fraction in (0, 1) or >= 1, got {tokens!r}"
    )


def is_auto(tokens: float) -> bool:
    return tokens == TOKENS_AUTO


def is_proportional(tokens: float) -> bool:
    return 0 < tokens < 1


def is_fixed(tokens: float) -> bool:
    return tokens >= 1


def token_budget(tokens: float, max_tokens: int) -> int:
    """Budget a section works against when rendered with *max_tokens*.

    Fixed sections are capped at their own size. Proportional shares are
    applied by the parent layout before the call, so they pass through.
    """
    if is_fixed(tokens):
        return min(math.floor(tokens), max_tokens)
    return max_tokens


class PromptSection(ABC):
    """A renderable unit of a prompt tree."""

    tokens: float
    """Sizing policy: -1 automatic, (0, 1) proportional, >= 1 fixed."""

    required: bool
    """Whether the section must appear even when it overflows the budget."""

    @abstractmethod
    async def render_as_text(
        self,
        context: Any,
        memory: Memory,
        functions: TemplateResolver,
        tokenizer: Tokenizer,
        max_tokens: int,
    ) -> RenderedPromptSection[str]:
        """Render the section as a single string."""

    @abstractmethod
    async def render_as_messages(
        self,
        context: Any,
        memory: Memory,
        functions: TemplateResolver,
        tokenizer: Tokenizer,
        max_tokens: int,
    ) -> RenderedPromptSection[list[Message]]:
        """Render the section as an ordered list of messages."""


class PromptSectionBase(PromptSection):
    """Base for leaf sections.

    Subclasses implement ``render_as_messages``; the text projection joins
    the message contents with ``separator`` behind ``text_prefix`` and
    re-measures the result.
    """

    def __init__(
        self,
        tokens: float = TOKENS_AUTO,
        required: bool = True,
        separator: str = DEFAULT_LINE_SEPARATOR,
        text_prefix: str = "",
    ) -> None:
        self.tokens = validate_tokens(tokens)
        self.required = required
        self.separator = separator
        self.text_prefix = text_prefix

    def get_token_budget(self, max_tokens: int) -> int:
        return token_budget(self.tokens, max_tokens)

    async def render_as_text(
        self,
        context: Any,
        memory: Memory,
        functions: TemplateResolver,
        tokenizer: Tokenizer,
        max_tokens: int,
    ) -> RenderedPromptSection[str]:
        as_messages = await self.render_as_messages(
            context, memory, functions, tokenizer, max_tokens
        )
        if not as_messages.output:
            return RenderedPromptSection(output="", length=0, too_long=False)

        text = self.text_prefix + self.separator.join(
            message_text(m) for m in as_messages.output
        )
        length = tokenizer.count(text)
        too_long = length > self.get_token_budget(max_tokens) or as_messages.too_long
        return RenderedPromptSection(output=text, length=length, too_long=too_long)

    def _return_messages(
        self,
        output: list[Message],
        tokenizer: Tokenizer,
        max_tokens: int,
    ) -> RenderedPromptSection[list[Message]]:
        length = messages_length(output, tokenizer)
        return RenderedPromptSection(
            output=output,
            length=length,
            too_long=length > self.get_token_budget(max_tokens),
        )
