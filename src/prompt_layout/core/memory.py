"""Read-only state access for prompt rendering.

Sections look values up by dotted ``scope.name`` keys (``temp.input``,
``conversation.history``). Rendering only ever calls ``get_value`` and
``has_value``; writes belong to the caller that owns the turn.
"""

from __future__ import annotations

import copy
from typing import Any, Protocol, runtime_checkable

_SCOPE_SEPARATOR = "."
DEFAULT_SCOPE = "temp"


@runtime_checkable
class Memory(Protocol):
    """Read access to turn state."""

    def get_value(self, key: str) -> Any:
        """Return the value stored at *key*, or ``None`` when absent."""
        ...

    def has_value(self, key: str) -> bool:
        """Return whether *key* holds a value."""
        ...


def split_key(key: str) -> tuple[str, str]:
    """Split ``scope.name`` into its parts; bare names land in ``temp``."""
    scope, sep, name = key.partition(_SCOPE_SEPARATOR)
    if not sep:
        return DEFAULT_SCOPE, key
    if not scope or not name:
        raise KeyError(f"Invalid memory key: {key!r}")
    return scope, name


class TurnMemory:
    """Dict-backed ``Memory`` with per-scope namespaces."""

    def __init__(self, values: dict[str, dict[str, Any]] | None = None) -> None:
        self._scopes: dict[str, dict[str, Any]] = copy.deepcopy(values or {})

    def get_value(self, key: str) -> Any:
        scope, name = split_key(key)
        return self._scopes.get(scope, {}).get(name)

    def has_value(self, key: str) -> bool:
        scope, name = split_key(key)
        return name in self._scopes.get(scope, {})

    def set_value(self, key: str, value: Any) -> None:
        scope, name = split_key(key)
        self._scopes.setdefault(scope, {})[name] = value

    def delete_value(self, key: str) -> None:
        scope, name = split_key(key)
        self._scopes.get(scope, {}).pop(name, None)
