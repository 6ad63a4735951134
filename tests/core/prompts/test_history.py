"""Tests for ConversationHistory."""

import pytest
from langchain_core.messages import AIMessage, HumanMessage

from prompt_layout.core.prompts import ConversationHistory, Message


def _history() -> list[dict[str, str]]:
    return [
        {"role": "user", "content": "one"},
        {"role": "assistant", "content": "two"},
        {"role": "user", "content": "three four"},
    ]


class TestConversationHistory:
    def test_defaults(self):
        section = ConversationHistory()
        assert section.variable == "conversation.history"
        assert section.tokens == -1
        assert section.required is False
        assert section.user_prefix == "user: "
        assert section.assistant_prefix == "assistant: "
        assert section.separator == "\n"

    @pytest.mark.asyncio
    async def test_all_messages_fit(self, context, memory, functions, tokenizer):
        memory.set_value("conversation.history", _history())
        rendered = await ConversationHistory().render_as_messages(
            context, memory, functions, tokenizer, 100
        )
        assert [m.content for m in rendered.output] == ["one", "two", "three four"]
        assert rendered.length == 5
        assert rendered.too_long is False

    @pytest.mark.asyncio
    async def test_keeps_newest_messages_in_order(
        self, context, memory, functions, tokenizer
    ):
        memory.set_value("conversation.history", _history())
        rendered = await ConversationHistory().render_as_messages(
            context, memory, functions, tokenizer, 4
        )
        assert rendered.output == [
            Message(role="assistant", content="two"),
            Message(role="user", content="three four"),
        ]
        assert rendered.length == 4

    @pytest.mark.asyncio
    async def test_text_mode_counts_prefixes_and_separators(
        self, context, memory, functions, tokenizer
    ):
        memory.set_value("conversation.history", _history())
        rendered = await ConversationHistory().render_as_text(
            context, memory, functions, tokenizer, 11
        )
        assert rendered.output == "assistant: two\nuser: three four"
        assert rendered.length == 11
        assert rendered.too_long is False

    @pytest.mark.asyncio
    async def test_missing_history_renders_nothing(
        self, context, memory, functions, tokenizer
    ):
        section = ConversationHistory()
        as_messages = await section.render_as_messages(
            context, memory, functions, tokenizer, 100
        )
        as_text = await section.render_as_text(context, memory, functions, tokenizer, 100)
        assert as_messages.output == []
        assert as_messages.length == 0
        assert as_text.output == ""
        assert as_text.length == 0

    @pytest.mark.asyncio
    async def test_required_history_keeps_newest_when_nothing_fits(
        self, context, memory, functions, tokenizer
    ):
        memory.set_value("conversation.history", _history())
        rendered = await ConversationHistory(required=True).render_as_messages(
            context, memory, functions, tokenizer, 1
        )
        assert rendered.output == [Message(role="user", content="three four")]
        assert rendered.too_long is True

    @pytest.mark.asyncio
    async def test_accepts_langchain_messages(
        self, context, memory, functions, tokenizer
    ):
        memory.set_value(
            "session.turns",
            [HumanMessage(content="hey"), AIMessage(content="hello")],
        )
        rendered = await ConversationHistory("session.turns").render_as_text(
            context, memory, functions, tokenizer, 100
        )
        assert rendered.output == "user: hey\nassistant: hello"

    @pytest.mark.asyncio
    async def test_system_entries_have_no_prefix(
        self, context, memory, functions, tokenizer
    ):
        memory.set_value(
            "conversation.history",
            [Message(role="system", content="Summary."), Message(role="user", content="ok")],
        )
        rendered = await ConversationHistory().render_as_text(
            context, memory, functions, tokenizer, 100
        )
        assert rendered.output == "Summary.\nuser: ok"
