"""Token-budgeted prompt sections."""

from .base import (
    PromptSection,
    PromptSectionBase,
    token_budget,
    validate_role,
    validate_tokens,
)
from .converters import (
    from_langchain_messages,
    message_text,
    messages_length,
    to_langchain_messages,
)
from .group import GroupSection
from .history import ConversationHistory
from .layout import LayoutEngine, reserve_tokens
from .models import (
    InvalidSectionError,
    Message,
    PromptLayoutError,
    RenderedPromptSection,
    TemplateResolutionError,
)
from .prompt import Prompt
from .render import render_prompt
from .resolver import TemplateResolver, VariableResolver
from .template import AssistantMessage, SystemMessage, TemplateSection, UserMessage
from .text import TextSection

__all__ = [
    "AssistantMessage",
    "ConversationHistory",
    "GroupSection",
    "InvalidSectionError",
    "LayoutEngine",
    "Message",
    "Prompt",
    "PromptLayoutError",
    "PromptSection",
    "PromptSectionBase",
    "RenderedPromptSection",
    "SystemMessage",
    "TemplateResolutionError",
    "TemplateResolver",
    "TemplateSection",
    "TextSection",
    "UserMessage",
    "VariableResolver",
    "from_langchain_messages",
    "message_text",
    "messages_length",
    "render_prompt",
    "reserve_tokens",
    "to_langchain_messages",
    "token_budget",
    "validate_role",
    "validate_tokens",
]
