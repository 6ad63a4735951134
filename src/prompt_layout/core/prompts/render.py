"""Render entry point for callers that do not manage budgets themselves."""

from typing import Any, Literal, overload

from prompt_layout.configs.config import get_app_config
from prompt_layout.core.memory import Memory
from prompt_layout.infra.telemetry import (
    ATTR_LENGTH,
    ATTR_MAX_TOKENS,
    ATTR_MODE,
    ATTR_TOO_LONG,
    SPAN_PROMPT_RENDER,
    tracer,
)
from prompt_layout.infra.tokens import Tokenizer, get_tokenizer

from .base import PromptSection
from .models import Message, RenderedPromptSection
from .resolver import TemplateResolver, VariableResolver

MODE_TEXT = "text"
MODE_MESSAGES = "messages"


@overload
async def render_prompt(
    prompt: PromptSection,
    context: Any,
    memory: Memory,
    *,
    functions: TemplateResolver | None = ...,
    tokenizer: Tokenizer | None = ...,
    max_tokens: int | None = ...,
    as_messages: Literal[True] = ...,
) -> RenderedPromptSection[list[Message]]: ...


@overload
async def render_prompt(
    prompt: PromptSection,
    context: Any,
    memory: Memory,
    *,
    functions: TemplateResolver | None = ...,
    tokenizer: Tokenizer | None = ...,
    max_tokens: int | None = ...,
    as_messages: Literal[False],
) -> RenderedPromptSection[str]: ...


async def render_prompt(
    prompt: PromptSection,
    context: Any,
    memory: Memory,
    *,
    functions: TemplateResolver | None = None,
    tokenizer: Tokenizer | None = None,
    max_tokens: int | None = None,
    as_messages: bool = True,
) -> RenderedPromptSection[Any]:
    """Render *prompt* with configured defaults filled in.

    ``functions`` defaults to a strict ``VariableResolver``, ``tokenizer``
    to the configured tiktoken encoding and ``max_tokens`` to
    ``render.max_tokens``.
    """
    if tokenizer is None or max_tokens is None:
        config = get_app_config()
        if tokenizer is None:
            tokenizer = get_tokenizer(config.tokenizer)
        if max_tokens is None:
            max_tokens = config.render.max_tokens
    if functions is None:
        functions = VariableResolver()

    with tracer.start_as_current_span(SPAN_PROMPT_RENDER) as span:
        span.set_attribute(ATTR_MAX_TOKENS, max_tokens)
        span.set_attribute(ATTR_MODE, MODE_MESSAGES if as_messages else MODE_TEXT)
        if as_messages:
            rendered: RenderedPromptSection[Any] = await prompt.render_as_messages(
                context, memory, functions, tokenizer, max_tokens
            )
        else:
            rendered = await prompt.render_as_text(
                context, memory, functions, tokenizer, max_tokens
            )
        span.set_attribute(ATTR_LENGTH, rendered.length)
        span.set_attribute(ATTR_TOO_LONG, rendered.too_long)
        return rendered
