"""Tests for the top-level Prompt section and render_prompt."""

import os
from unittest.mock import patch

import pytest

from prompt_layout.core.prompts import (
    ConversationHistory,
    LayoutEngine,
    Message,
    Prompt,
    SystemMessage,
    TextSection,
    UserMessage,
    render_prompt,
)


def _chat_prompt() -> Prompt:
    return Prompt(
        [
            SystemMessage("Be brief."),
            ConversationHistory(),
            UserMessage("{{$input}}"),
        ]
    )


class TestPromptDefaults:
    def test_defaults(self):
        prompt = Prompt([])
        assert prompt.tokens == -1
        assert prompt.required is True
        assert prompt.separator == "\n\n"

    def test_is_a_layout_engine(self):
        assert isinstance(Prompt([]), LayoutEngine)

    @pytest.mark.asyncio
    async def test_empty_prompt(self, context, memory, functions, tokenizer):
        rendered = await Prompt([]).render_as_text(
            context, memory, functions, tokenizer, 10
        )
        assert rendered.output == ""
        assert rendered.length == 0
        assert rendered.too_long is False


class TestChatPrompt:
    @pytest.fixture(autouse=True)
    def _state(self, memory):
        memory.set_value("temp.input", "What's up?")
        memory.set_value(
            "conversation.history",
            [
                {"role": "user", "content": "Hi"},
                {"role": "assistant", "content": "Hello!"},
            ],
        )

    @pytest.mark.asyncio
    async def test_render_as_messages(self, context, memory, functions, tokenizer):
        rendered = await _chat_prompt().render_as_messages(
            context, memory, functions, tokenizer, 100
        )
        assert rendered.output == [
            Message(role="system", content="Be brief."),
            Message(role="user", content="Hi"),
            Message(role="assistant", content="Hello!"),
            Message(role="user", content="What's up?"),
        ]
        assert rendered.length == 13
        assert rendered.too_long is False

    @pytest.mark.asyncio
    async def test_render_as_text(self, context, memory, functions, tokenizer):
        rendered = await _chat_prompt().render_as_text(
            context, memory, functions, tokenizer, 100
        )
        assert rendered.output == (
            "Be brief.\n\nuser: Hi\nassistant: Hello!\n\nuser: What's up?"
        )
        assert rendered.length == 25
        assert rendered.too_long is False

    @pytest.mark.asyncio
    async def test_history_dropped_before_user_input(
        self, context, memory, functions, tokenizer
    ):
        memory.set_value(
            "conversation.history",
            [{"role": "assistant", "content": "A long answer with many words in it"}],
        )
        rendered = await _chat_prompt().render_as_messages(
            context, memory, functions, tokenizer, 12
        )
        assert [m.role for m in rendered.output] == ["system", "user"]
        assert rendered.length == 10
        assert rendered.too_long is False

    @pytest.mark.asyncio
    async def test_nested_prompt(self, context, memory, functions, tokenizer):
        outer = Prompt([TextSection("Intro.", "system"), _chat_prompt()])
        rendered = await outer.render_as_messages(
            context, memory, functions, tokenizer, 100
        )
        assert rendered.output[0] == Message(role="system", content="Intro.")
        assert len(rendered.output) == 5


class TestRenderPrompt:
    @pytest.mark.asyncio
    async def test_defaults_to_messages(self, context, memory, tokenizer):
        memory.set_value("temp.input", "Hello World")
        rendered = await render_prompt(
            Prompt([UserMessage("{{$input}}")]),
            context,
            memory,
            tokenizer=tokenizer,
            max_tokens=100,
        )
        assert rendered.output == [Message(role="user", content="Hello World")]

    @pytest.mark.asyncio
    async def test_text_mode(self, context, memory, tokenizer):
        rendered = await render_prompt(
            Prompt([UserMessage("Hello World")]),
            context,
            memory,
            tokenizer=tokenizer,
            max_tokens=100,
            as_messages=False,
        )
        assert rendered.output == "user: Hello World"

    @pytest.mark.asyncio
    async def test_budget_from_config(self, context, memory, tokenizer):
        with patch.dict(os.environ, {"PROMPT_LAYOUT_RENDER__MAX_TOKENS": "2"}):
            rendered = await render_prompt(
                Prompt([UserMessage("Hello World")]),
                context,
                memory,
                tokenizer=tokenizer,
            )
        assert rendered.length == 3
        assert rendered.too_long is True
