"""Moderator interface and the pass-through default."""

from abc import ABC, abstractmethod
from typing import Any

from prompt_layout.core.memory import Memory

from .models import Plan


class Moderator(ABC):
    """Reviews user input before prompting and model output before sending."""

    @abstractmethod
    async def review_input(self, context: Any, memory: Memory) -> Plan | None:
        """Return a replacement plan to short-circuit the turn, or ``None``."""

    @abstractmethod
    async def review_output(self, context: Any, memory: Memory, plan: Plan) -> Plan:
        """Return the plan to execute, possibly replaced."""


class DefaultModerator(Moderator):
    """Moderator that lets everything through."""

    async def review_input(self, context: Any, memory: Memory) -> Plan | None:
        return None

    async def review_output(self, context: Any, memory: Memory, plan: Plan) -> Plan:
        return plan
