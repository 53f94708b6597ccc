"""Tests for argument parsing."""

from unittest.mock import AsyncMock

import pytest

from ticketbot.commands.descriptor import ArgumentMode, Command, CommandArgument
from ticketbot.commands.parsers import (
    ArgumentParserFactory,
    NamedArgumentParser,
    PositionalArgumentParser,
    count_positional_arguments,
    parse_named_arguments,
)


def make_command(mode, *arguments):
    return Command(name="test", execute=AsyncMock(), arguments=arguments, mode=mode)


class TestParseNamedArguments:
    """Test the key: value; tokenizer."""

    def test_single_entry(self):
        assert parse_named_arguments("target: 123;") == {"target": "123"}

    def test_multiple_entries(self):
        result = parse_named_arguments("target: 123; reason: spam;")

        assert result == {"target": "123", "reason": "spam"}

    def test_escaped_delimiter(self):
        """Doubled semicolons decode to one."""
        assert parse_named_arguments("key: a;;b;") == {"key": "a;b"}

    def test_escaped_delimiter_at_end_of_value(self):
        assert parse_named_arguments("key: a;;;") == {"key": "a;"}

    def test_trailing_pair_without_terminator(self):
        """The last escaped pair gives up its first semicolon as terminator."""
        assert parse_named_arguments("key: a;;") == {"key": "a"}
        assert parse_named_arguments("key: a;;b;;c") == {"key": "a;b"}

    def test_missing_terminator(self):
        assert parse_named_arguments("key: value") == {}

    def test_optional_marker_and_spacing(self):
        result = parse_named_arguments("topic?: help me;name:bob;")

        assert result == {"topic": "help me", "name": "bob"}

    def test_single_space_only_is_trimmed(self):
        assert parse_named_arguments("key:  padded;") == {"key": " padded"}

    def test_space_before_colon(self):
        assert parse_named_arguments("key : value;") == {"key": "value"}

    def test_duplicate_keys_last_wins(self):
        assert parse_named_arguments("a: 1; a: 2;") == {"a": "2"}

    def test_value_spans_lines(self):
        assert parse_named_arguments("reason: line one\nline two;") == {"reason": "line one\nline two"}

    def test_value_swallows_text_until_terminator(self):
        assert parse_named_arguments("target: 123 reason: spam;") == {"target": "123 reason: spam"}

    def test_noise_is_skipped(self):
        result = parse_named_arguments("please, target: 1; thanks")

        assert result == {"target": "1"}

    def test_key_must_be_word_characters(self):
        assert parse_named_arguments("my-key: 1;") == {"key": "1"}

    def test_empty_value(self):
        assert parse_named_arguments("key: ;") == {"key": ""}

    def test_empty_input(self):
        assert parse_named_arguments("") == {}

    def test_deterministic(self):
        raw = "a: x;; y; b: z;"

        assert parse_named_arguments(raw) == parse_named_arguments(raw) == {"a": "x; y", "b": "z"}

    @pytest.mark.parametrize("value", ["plain", "semi;colon", "a;b;c", ";leading", "spaces and; more"])
    def test_escaped_values_decode_exactly(self, value):
        escaped = value.replace(";", ";;")

        assert parse_named_arguments(f"key: {escaped};") == {"key": value}


class TestCountPositionalArguments:
    def test_counts_whitespace_separated_words(self):
        assert count_positional_arguments("foo  bar\tbaz\n") == 3

    def test_empty(self):
        assert count_positional_arguments("   ") == 0


class TestPositionalArgumentParser:
    """Test positional validation."""

    def test_insufficient_arguments(self):
        cmd = make_command(ArgumentMode.POSITIONAL, CommandArgument("a"), CommandArgument("b"))

        result = PositionalArgumentParser().parse(cmd, "foo")

        assert not result.ok
        assert [arg.name for arg in result.missing] == ["b"]

    def test_enough_arguments_passes_raw_text(self):
        cmd = make_command(ArgumentMode.POSITIONAL, CommandArgument("a"), CommandArgument("b"))

        result = PositionalArgumentParser().parse(cmd, "foo bar")

        assert result.ok
        assert result.args == "foo bar"

    def test_optional_arguments_not_counted(self):
        cmd = make_command(
            ArgumentMode.POSITIONAL,
            CommandArgument("a"),
            CommandArgument("b", required=False),
        )

        assert PositionalArgumentParser().parse(cmd, "foo").ok


class TestNamedArgumentParser:
    """Test named validation."""

    def test_missing_required_key(self):
        cmd = make_command(ArgumentMode.NAMED, CommandArgument("target"))

        result = NamedArgumentParser().parse(cmd, "other: 1;")

        assert not result.ok
        assert [arg.name for arg in result.missing] == ["target"]
        assert result.args == {"other": "1"}

    def test_required_key_present(self):
        cmd = make_command(
            ArgumentMode.NAMED,
            CommandArgument("target"),
            CommandArgument("reason", required=False),
        )

        result = NamedArgumentParser().parse(cmd, "target: 123;")

        assert result.ok
        assert result.args == {"target": "123"}


class TestArgumentParserFactory:
    def test_get_parser(self):
        assert isinstance(ArgumentParserFactory.get_parser(ArgumentMode.NAMED), NamedArgumentParser)
        assert isinstance(ArgumentParserFactory.get_parser(ArgumentMode.POSITIONAL), PositionalArgumentParser)

    def test_parse_arguments_uses_command_mode(self):
        named = make_command(ArgumentMode.NAMED, CommandArgument("target"))
        positional = make_command(ArgumentMode.POSITIONAL, CommandArgument("target"))

        assert ArgumentParserFactory.parse_arguments(named, "target: 1;").args == {"target": "1"}
        assert ArgumentParserFactory.parse_arguments(positional, "target: 1;").args == "target: 1;"
