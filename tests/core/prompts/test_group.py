"""Tests for GroupSection."""

import pytest

from prompt_layout.core.prompts import (
    GroupSection,
    InvalidSectionError,
    Message,
    Prompt,
    TextSection,
    UserMessage,
)


def _rule(text: str, *, required: bool = True) -> TextSection:
    return TextSection(text, "system", required=required)


class TestGroupSection:
    def test_defaults(self):
        group = GroupSection([_rule("Rule one.")])
        assert group.role == "system"
        assert group.separator == "\n\n"
        assert group.tokens == -1
        assert group.required is True
        assert len(group.sections) == 1

    def test_unknown_role_rejected(self):
        with pytest.raises(InvalidSectionError):
            GroupSection([_rule("Rule one.")], role="narrator")

    @pytest.mark.asyncio
    async def test_children_collapse_into_one_message(
        self, context, memory, functions, tokenizer
    ):
        group = GroupSection([_rule("Rule one."), _rule("Rule two.")])
        rendered = await group.render_as_messages(
            context, memory, functions, tokenizer, 100
        )
        assert rendered.output == [
            Message(role="system", content="Rule one.\n\nRule two.")
        ]
        assert rendered.length == 9
        assert rendered.too_long is False

    @pytest.mark.asyncio
    async def test_text_matches_message_content(
        self, context, memory, functions, tokenizer
    ):
        group = GroupSection([_rule("Rule one."), _rule("Rule two.")])
        rendered = await group.render_as_text(context, memory, functions, tokenizer, 100)
        assert rendered.output == "Rule one.\n\nRule two."
        assert rendered.length == 9

    @pytest.mark.asyncio
    async def test_optional_child_dropped(self, context, memory, functions, tokenizer):
        group = GroupSection(
            [_rule("Rule one."), _rule("word " * 10, required=False)]
        )
        rendered = await group.render_as_messages(
            context, memory, functions, tokenizer, 6
        )
        assert rendered.output == [Message(role="system", content="Rule one.")]
        assert rendered.too_long is False

    @pytest.mark.asyncio
    async def test_required_overflow_reported(
        self, context, memory, functions, tokenizer
    ):
        group = GroupSection([_rule("Rule one.")])
        as_messages = await group.render_as_messages(
            context, memory, functions, tokenizer, 3
        )
        as_text = await group.render_as_text(context, memory, functions, tokenizer, 3)
        assert as_messages.too_long is True
        assert as_text.too_long is True

    @pytest.mark.asyncio
    async def test_empty_group_renders_nothing(
        self, context, memory, functions, tokenizer
    ):
        group = GroupSection([_rule("Too long for the budget.", required=False)])
        as_messages = await group.render_as_messages(
            context, memory, functions, tokenizer, 2
        )
        as_text = await group.render_as_text(context, memory, functions, tokenizer, 2)
        assert as_messages.output == []
        assert as_text.output == ""

    @pytest.mark.asyncio
    async def test_group_inside_prompt(self, context, memory, functions, tokenizer):
        prompt = Prompt(
            [GroupSection([_rule("Rule one."), _rule("Rule two.")]), UserMessage("Hi")]
        )
        rendered = await prompt.render_as_messages(
            context, memory, functions, tokenizer, 100
        )
        assert [m.role for m in rendered.output] == ["system", "user"]
