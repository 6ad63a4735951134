"""Result of a render call."""

from dataclasses import dataclass
from typing import Generic, TypeVar

__all__ = ["RenderedPromptSection"]

T = TypeVar("T")


@dataclass(frozen=True)
class RenderedPromptSection(Generic[T]):
    """Output of a section render together with its measured token length.

    ``length`` is always measured from ``output`` with the tokenizer that
    was passed to the render call. ``too_long`` is set when ``length``
    exceeds the budget the section was given.
    """

    output: T
    length: int
    too_long: bool
