"""Tokenizer capability used for every token count in the package.

Sections never estimate lengths on their own: each ``length`` reported by a
render call comes from ``Tokenizer.count`` on the emitted text.
"""

from __future__ import annotations

import functools
from typing import Protocol, runtime_checkable

import tiktoken

from prompt_layout.configs.system import TokenizerConfig


@runtime_checkable
class Tokenizer(Protocol):
    """Encode, decode and count tokens for a model family."""

    def encode(self, text: str) -> list[int]:
        """Return the token ids for *text*."""
        ...

    def decode(self, tokens: list[int]) -> str:
        """Return the text for *tokens*."""
        ...

    def count(self, text: str) -> int:
        """Return the number of tokens in *text*."""
        ...


class TiktokenTokenizer:
    """Tokenizer backed by a tiktoken BPE encoding."""

    def __init__(self, encoding_name: str = "cl100k_base") -> None:
        self.encoding_name = encoding_name
        self._encoder = tiktoken.get_encoding(encoding_name)

    def encode(self, text: str) -> list[int]:
        if not text:
            return []
        return self._encoder.encode(text)

    def decode(self, tokens: list[int]) -> str:
        return self._encoder.decode(tokens)

    def count(self, text: str) -> int:
        return len(self.encode(text))


@functools.lru_cache(maxsize=8)
def _tokenizer_for(encoding_name: str) -> TiktokenTokenizer:
    return TiktokenTokenizer(encoding_name)


def get_tokenizer(config: TokenizerConfig | None = None) -> Tokenizer:
    """Return the shared tokenizer for the configured encoding."""
    if config is None:
        config = TokenizerConfig()
    return _tokenizer_for(config.encoding)
