"""Role, sizing and separator constants."""

__all__ = [
    "ROLE_USER",
    "ROLE_ASSISTANT",
    "ROLE_SYSTEM",
    "VALID_ROLES",
    "TOKENS_AUTO",
    "DEFAULT_LINE_SEPARATOR",
    "DEFAULT_PARAGRAPH_SEPARATOR",
    "DEFAULT_USER_PREFIX",
    "DEFAULT_ASSISTANT_PREFIX",
    "DEFAULT_HISTORY_VARIABLE",
]

# ---------------------------------------------------------------------------
# Message roles
# ---------------------------------------------------------------------------

ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"
ROLE_SYSTEM = "system"

VALID_ROLES = frozenset({ROLE_USER, ROLE_ASSISTANT, ROLE_SYSTEM})

# ---------------------------------------------------------------------------
# Sizing
# ---------------------------------------------------------------------------

TOKENS_AUTO = -1
"""Consume whatever budget is left after fixed/proportional siblings."""

# ---------------------------------------------------------------------------
# Constructor defaults (copied onto each instance, never read at render time)
# ---------------------------------------------------------------------------

DEFAULT_LINE_SEPARATOR = "\n"
DEFAULT_PARAGRAPH_SEPARATOR = "\n\n"
DEFAULT_USER_PREFIX = "user: "
DEFAULT_ASSISTANT_PREFIX = "assistant: "
DEFAULT_HISTORY_VARIABLE = "conversation.history"
