"""Template-backed message sections."""

import logging
from typing import Any

from prompt_layout.core.memory import Memory
from prompt_layout.infra.tokens import Tokenizer

from .base import PromptSectionBase, validate_role
from .models import (
    DEFAULT_ASSISTANT_PREFIX,
    DEFAULT_LINE_SEPARATOR,
    DEFAULT_USER_PREFIX,
    ROLE_ASSISTANT,
    ROLE_SYSTEM,
    ROLE_USER,
    TOKENS_AUTO,
    Message,
    RenderedPromptSection,
)
from .resolver import TemplateResolver

logger = logging.getLogger(__name__)


class TemplateSection(PromptSectionBase):
    """A message whose content is produced by the template resolver.

    Resolution failures propagate as ``TemplateResolutionError``; no partial
    result is returned.
    """

    def __init__(
        self,
        template: str,
        role: str,
        tokens: float = TOKENS_AUTO,
        required: bool = True,
        separator: str = DEFAULT_LINE_SEPARATOR,
        text_prefix: str = "",
    ) -> None:
        super().__init__(tokens, required, separator, text_prefix)
        self.template = template
        self.role = validate_role(role)

    async def render_as_messages(
        self,
        context: Any,
        memory: Memory,
        functions: TemplateResolver,
        tokenizer: Tokenizer,
        max_tokens: int,
    ) -> RenderedPromptSection[list[Message]]:
        text = await functions.resolve(self.template, context, memory)
        logger.debug("Resolved %s template (%d chars)", self.role, len(text))
        return self._return_messages(
            [Message(role=self.role, content=text)], tokenizer, max_tokens
        )


class UserMessage(TemplateSection):
    """A templated ``user`` message, prefixed ``user: `` in text mode."""

    def __init__(
        self,
        template: str,
        tokens: float = TOKENS_AUTO,
        required: bool = True,
        separator: str = DEFAULT_LINE_SEPARATOR,
        text_prefix: str = DEFAULT_USER_PREFIX,
    ) -> None:
        super().__init__(template, ROLE_USER, tokens, required, separator, text_prefix)


class AssistantMessage(TemplateSection):
    """A templated ``assistant`` message, prefixed ``assistant: `` in text mode."""

    def __init__(
        self,
        template: str,
        tokens: float = TOKENS_AUTO,
        required: bool = True,
        separator: str = DEFAULT_LINE_SEPARATOR,
        text_prefix: str = DEFAULT_ASSISTANT_PREFIX,
    ) -> None:
        super().__init__(
            template, ROLE_ASSISTANT, tokens, required, separator, text_prefix
        )


class SystemMessage(TemplateSection):
    """A templated ``system`` message. No text prefix by default."""

    def __init__(
        self,
        template: str,
        tokens: float = TOKENS_AUTO,
        required: bool = True,
        separator: str = DEFAULT_LINE_SEPARATOR,
        text_prefix: str = "",
    ) -> None:
        super().__init__(template, ROLE_SYSTEM, tokens, required, separator, text_prefix)
