"""Layout engine: distributes a token budget across child sections.

Allocation is *reserve-then-reconcile*:

1. Fixed and proportional children reserve their share up front, required
   children first, from a pool that never exceeds the budget.
2. Children render strictly in order. Each one sees the budget its
   predecessors actually left behind, so slack from short renders flows to
   later automatic siblings. In text mode a child's share already excludes
   the separator placed in front of it.
3. Required children are always kept; their overflow drives the container
   ``too_long`` flag. Optional children that do not fit are dropped whole.

The same loop serves both projections. Only the measuring differs: text
mode pays for separators and re-measures the joined string, message mode
sums per-message content lengths.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from prompt_layout.core.memory import Memory
from prompt_layout.infra.tokens import Tokenizer

from .base import PromptSection, is_auto, is_proportional, token_budget, validate_tokens
from .converters import messages_length
from .models import (
    DEFAULT_LINE_SEPARATOR,
    TOKENS_AUTO,
    Message,
    RenderedPromptSection,
)
from .resolver import TemplateResolver

logger = logging.getLogger(__name__)

T = TypeVar("T")

RenderFn = Callable[[PromptSection, int], Awaitable[RenderedPromptSection[T]]]
"""``async (section, sub_budget) -> rendered`` for one projection."""


@dataclass
class _Layout(Generic[T]):
    """Children kept by one layout pass."""

    kept: list[RenderedPromptSection[T]] = field(default_factory=list)
    required_too_long: bool = False


def reserve_tokens(sections: Sequence[PromptSection], max_tokens: int) -> list[int]:
    """Up-front reservation for each section, in section order.

    Proportional shares are floored; fixed sizes are capped at what is still
    unreserved. Required sections reserve before optional ones. Automatic
    sections reserve nothing. The total never exceeds ``max(max_tokens, 0)``.
    """
    budget = max(max_tokens, 0)
    pool = budget
    reservations = [0] * len(sections)
    by_priority = sorted(range(len(sections)), key=lambda i: not sections[i].required)
    for i in by_priority:
        tokens = sections[i].tokens
        if is_auto(tokens):
            continue
        if is_proportional(tokens):
            share = math.floor(tokens * budget)
        else:
            share = math.floor(tokens)
        share = min(share, pool)
        reservations[i] = share
        pool -= share
    return reservations


class LayoutEngine(PromptSection):
    """Container section that lays out an ordered list of child sections."""

    def __init__(
        self,
        sections: Sequence[PromptSection],
        tokens: float = TOKENS_AUTO,
        required: bool = True,
        separator: str = DEFAULT_LINE_SEPARATOR,
    ) -> None:
        self.sections: tuple[PromptSection, ...] = tuple(sections)
        self.tokens = validate_tokens(tokens)
        self.required = required
        self.separator = separator

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
        budget = self.get_token_budget(max_tokens)

        async def render(section: PromptSection, sub_budget: int):
            return await section.render_as_text(
                context, memory, functions, tokenizer, sub_budget
            )

        layout = await self._layout_sections(
            render, budget, separator_length=tokenizer.count(self.separator)
        )
        output = self.separator.join(r.output for r in layout.kept)
        length = tokenizer.count(output)
        return RenderedPromptSection(
            output=output,
            length=length,
            too_long=length > budget or layout.required_too_long,
        )

    async def render_as_messages(
        self,
        context: Any,
        memory: Memory,
        functions: TemplateResolver,
        tokenizer: Tokenizer,
        max_tokens: int,
    ) -> RenderedPromptSection[list[Message]]:
        budget = self.get_token_budget(max_tokens)

        async def render(section: PromptSection, sub_budget: int):
            return await section.render_as_messages(
                context, memory, functions, tokenizer, sub_budget
            )

        layout = await self._layout_sections(render, budget, separator_length=0)
        output = [m for r in layout.kept for m in r.output]
        length = messages_length(output, tokenizer)
        return RenderedPromptSection(
            output=output,
            length=length,
            too_long=length > budget or layout.required_too_long,
        )

    async def _layout_sections(
        self,
        render: RenderFn[T],
        max_tokens: int,
        separator_length: int,
    ) -> _Layout[T]:
        reservations = reserve_tokens(self.sections, max_tokens)
        pending_reserved = sum(reservations)
        pending_auto = sum(1 for s in self.sections if is_auto(s.tokens))
        remaining = max_tokens
        layout: _Layout[T] = _Layout()

        for index, (section, reserved) in enumerate(zip(self.sections, reservations)):
            unreserved = max(remaining - pending_reserved, 0)
            # Separator in front of this child, paid out of the child's share.
            overhead = separator_length if layout.kept else 0
            if is_auto(section.tokens):
                # Required sections claim the unreserved remainder outright;
                # optional ones get an even share with the automatic
                # siblings still to come.
                share = unreserved if section.required else unreserved // pending_auto
                sub_budget = max(share - overhead, 0)
                pending_auto -= 1
            else:
                pending_reserved -= reserved
                sub_budget = max(min(reserved, remaining - overhead), 0)

            rendered = await render(section, sub_budget)
            if not rendered.output:
                continue

            cost = rendered.length + overhead
            if section.required:
                if rendered.too_long:
                    layout.required_too_long = True
                    logger.debug(
                        "Required section %d overflows its budget (%d > %d)",
                        index,
                        rendered.length,
                        sub_budget,
                    )
            elif remaining <= 0 or rendered.too_long or cost > remaining:
                logger.debug(
                    "Dropping optional section %d (length=%d, remaining=%d)",
                    index,
                    rendered.length,
                    remaining,
                )
                continue

            layout.kept.append(rendered)
            remaining -= cost

        return layout
