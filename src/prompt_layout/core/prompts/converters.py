"""Message converters and shape helpers.

Every translation between the text and message projections lives here:

- ``Message`` → text      (``message_text``, ``messages_length``)
- history item → ``Message``  (``coerce_message``)
- ``Message`` ↔ LangChain ``BaseMessage``
"""

from collections.abc import Iterable, Sequence
from typing import Any

from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    ChatMessage,
    HumanMessage,
    SystemMessage,
)

from prompt_layout.infra.tokens import Tokenizer

from .models import ROLE_ASSISTANT, ROLE_SYSTEM, ROLE_USER, Message

# LangChain message ``type`` values for the three standard roles.
_LC_TYPE_TO_ROLE = {
    "human": ROLE_USER,
    "ai": ROLE_ASSISTANT,
    "system": ROLE_SYSTEM,
}


def message_text(message: Message) -> str:
    """Return the counted text of *message* (content only, never the role)."""
    return message.content


def messages_length(messages: Iterable[Message], tokenizer: Tokenizer) -> int:
    """Message-mode length: the sum of each message's content token count."""
    return sum(tokenizer.count(message_text(m)) for m in messages)


# ------------------------------------------------------------------
# Loose history values → Message
# ------------------------------------------------------------------


def coerce_message(value: Any) -> Message:
    """Convert a stored history entry into a ``Message``.

    Accepts ``Message``, LangChain ``BaseMessage`` and ``{"role", "content"}``
    mappings.
    """
    if isinstance(value, Message):
        return value
    if isinstance(value, BaseMessage):
        return from_langchain_message(value)
    if isinstance(value, dict):
        return Message(
            role=value["role"],
            content=value.get("content") or "",
            name=value.get("name"),
        )
    raise TypeError(f"Cannot convert {type(value).__name__} to Message")


# ------------------------------------------------------------------
# Message ↔ LangChain
# ------------------------------------------------------------------


def to_langchain_message(message: Message) -> BaseMessage:
    """Convert a rendered ``Message`` to the matching LangChain message."""
    if message.role == ROLE_USER:
        return HumanMessage(content=message.content, name=message.name)
    if message.role == ROLE_ASSISTANT:
        return AIMessage(content=message.content, name=message.name)
    if message.role == ROLE_SYSTEM:
        return SystemMessage(content=message.content, name=message.name)
    return ChatMessage(role=message.role, content=message.content, name=message.name)


def to_langchain_messages(messages: Sequence[Message]) -> list[BaseMessage]:
    return [to_langchain_message(m) for m in messages]


def from_langchain_message(message: BaseMessage) -> Message:
    """Convert a LangChain message back to a ``Message``.

    Non-string (multi-part) content keeps only its text parts.
    """
    if isinstance(message, ChatMessage):
        role = message.role
    else:
        role = _LC_TYPE_TO_ROLE.get(message.type, message.type)
    content = message.content
    if not isinstance(content, str):
        content = "".join(
            part if isinstance(part, str) else part.get("text", "")
            for part in content
        )
    return Message(role=role, content=content, name=message.name)


def from_langchain_messages(messages: Sequence[BaseMessage]) -> list[Message]:
    return [from_langchain_message(m) for m in messages]
