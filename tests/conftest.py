"""Shared fixtures: an offline tokenizer, memory and resolver."""

import re

import pytest

from prompt_layout.core.memory import TurnMemory
from prompt_layout.core.prompts import VariableResolver

_PIECE = re.compile(r"\s+|\w+|[^\w\s]")


class WordTokenizer:
    """Deterministic tokenizer: each word, whitespace run and symbol is one token.

    ``"user: Hello World"`` → ``user`` ``:`` `` `` ``Hello`` `` `` ``World``.
    """

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}
        self._pieces: list[str] = []

    def _id(self, piece: str) -> int:
        if piece not in self._ids:
            self._ids[piece] = len(self._pieces)
            self._pieces.append(piece)
        return self._ids[piece]

    def encode(self, text: str) -> list[int]:
        return [self._id(p) for p in _PIECE.findall(text)]

    def decode(self, tokens: list[int]) -> str:
        return "".join(self._pieces[t] for t in tokens)

    def count(self, text: str) -> int:
        return len(_PIECE.findall(text))


@pytest.fixture
def tokenizer() -> WordTokenizer:
    return WordTokenizer()


@pytest.fixture
def memory() -> TurnMemory:
    return TurnMemory()


@pytest.fixture
def functions() -> VariableResolver:
    return VariableResolver()


@pytest.fixture
def context() -> object:
    """Opaque turn context; sections only pass it through."""
    return object()
