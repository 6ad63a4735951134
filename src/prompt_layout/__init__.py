"""Hierarchical, token-budgeted prompt rendering."""

from prompt_layout.core.memory import Memory, TurnMemory
from prompt_layout.core.prompts import (
    AssistantMessage,
    ConversationHistory,
    GroupSection,
    LayoutEngine,
    Message,
    Prompt,
    PromptSection,
    RenderedPromptSection,
    SystemMessage,
    TemplateResolutionError,
    TemplateSection,
    TextSection,
    UserMessage,
    VariableResolver,
    render_prompt,
)
from prompt_layout.infra.tokens import TiktokenTokenizer, Tokenizer, get_tokenizer

__all__ = [
    "AssistantMessage",
    "ConversationHistory",
    "GroupSection",
    "LayoutEngine",
    "Memory",
    "Message",
    "Prompt",
    "PromptSection",
    "RenderedPromptSection",
    "SystemMessage",
    "TemplateResolutionError",
    "TemplateSection",
    "TextSection",
    "TiktokenTokenizer",
    "Tokenizer",
    "TurnMemory",
    "UserMessage",
    "VariableResolver",
    "get_tokenizer",
    "render_prompt",
]
