"""Template resolution capability.

Leaf sections hand their raw template to a ``TemplateResolver`` and get
finished text back. ``VariableResolver`` is the shipped implementation: it
replaces ``{{$scope.name}}`` references with values read from memory.
"""

from __future__ import annotations

import re
from typing import Any, Protocol, runtime_checkable

from prompt_layout.core.memory import Memory

from .models import TemplateResolutionError

_VARIABLE_PATTERN = re.compile(r"\{\{\s*\$([A-Za-z_][\w.]*)\s*\}\}")


@runtime_checkable
class TemplateResolver(Protocol):
    """Turns a leaf's raw template into finished text."""

    async def resolve(self, template: str, context: Any, memory: Memory) -> str:
        """Return the resolved text.

        Raises:
            TemplateResolutionError: when the text cannot be produced.
        """
        ...


def _stringify(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return "\n".join(_stringify(v) for v in value)
    return str(value)


class VariableResolver:
    """Substitutes ``{{$key}}`` references with memory values.

    Missing keys raise ``TemplateResolutionError`` unless ``strict`` is
    off, in which case they render as an empty string.
    """

    def __init__(self, *, strict: bool = True) -> None:
        self.strict = strict

    async def resolve(self, template: str, context: Any, memory: Memory) -> str:
        def _replace(match: re.Match[str]) -> str:
            key = match.group(1)
            if not memory.has_value(key):
                if self.strict:
                    raise TemplateResolutionError(
                        f"Template variable '{key}' is not set",
                        template=template,
                    )
                return ""
            value = memory.get_value(key)
            return "" if value is None else _stringify(value)

        try:
            return _VARIABLE_PATTERN.sub(_replace, template)
        except KeyError as e:
            raise TemplateResolutionError(str(e), template=template) from e
