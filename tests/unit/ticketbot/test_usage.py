"""Tests for usage and response embeds."""

from unittest.mock import AsyncMock

import hikari

from ticketbot.commands.descriptor import ArgumentMode, Command, CommandArgument
from ticketbot.commands.usage import (
    EXECUTION_ERROR_COLOUR,
    build_command_help_embed,
    build_execution_error_embed,
    build_missing_permissions_embed,
    build_staff_only_embed,
    build_usage_embed,
    format_usage,
)

ARGUMENTS = (
    CommandArgument("target", description="Member to kick", example="@someone", required=True),
    CommandArgument("reason", description="Why", example="spam", required=False),
)


def make_command(mode):
    return Command(name="kick", execute=AsyncMock(), arguments=ARGUMENTS, mode=mode)


class TestFormatUsage:
    def test_positional(self):
        usage, example = format_usage(make_command(ArgumentMode.POSITIONAL), "kick", "!")

        assert usage == "!kick <target> [reason]"
        assert example == "!kick @someone spam"

    def test_named(self):
        usage, example = format_usage(make_command(ArgumentMode.NAMED), "kick", "!")

        assert usage == "!kick <target;> [reason;]"
        assert example == "!kick target: @someone; reason: spam;"

    def test_uses_invoked_alias(self):
        usage, _ = format_usage(make_command(ArgumentMode.POSITIONAL), "boot", "t/")

        assert usage.startswith("t/boot ")

    def test_no_arguments(self):
        cmd = Command(name="ping", execute=AsyncMock())

        assert format_usage(cmd, "ping", "!") == ("!ping", "!ping")


class TestBuildUsageEmbed:
    """Test the usage help embed."""

    def test_positional_embed(self, i18n):
        translate = i18n.resolve("en-GB")

        embed = build_usage_embed(make_command(ArgumentMode.POSITIONAL), "kick", "!", translate, "#E74C3C")

        assert "kick" in embed.title
        assert "!kick <target> [reason]" in embed.description
        assert "!kick @someone spam" in embed.description
        assert translate("cmd_usage.named_args") not in embed.description
        assert embed.color == hikari.Color(0xE74C3C)

    def test_named_embed(self, i18n):
        translate = i18n.resolve("en-GB")

        embed = build_usage_embed(make_command(ArgumentMode.NAMED), "kick", "!", translate, "#E74C3C")

        assert embed.description.startswith(translate("cmd_usage.named_args"))
        assert "!kick target: @someone; reason: spam;" in embed.description

    def test_one_field_per_argument(self, i18n):
        translate = i18n.resolve("en-GB")

        embed = build_usage_embed(make_command(ArgumentMode.POSITIONAL), "kick", "!", translate, "#E74C3C")

        assert len(embed.fields) == 2
        target, reason = embed.fields
        assert "❗" in target.name and "target" in target.name
        assert "❗" not in reason.name
        assert "Member to kick" in target.value
        assert "`@someone`" in target.value


class TestResponseEmbeds:
    def test_missing_permissions_lists_tokens(self, i18n):
        embed = build_missing_permissions_embed(["KICK_MEMBERS", "BAN_MEMBERS"], i18n.resolve("en-GB"), "#E74C3C")

        assert "`KICK_MEMBERS`, `BAN_MEMBERS`" in embed.description

    def test_staff_only(self, i18n):
        translate = i18n.resolve("en-GB")

        embed = build_staff_only_embed(translate, "#E74C3C")

        assert embed.title == translate("staff_only.title")
        assert embed.description == translate("staff_only.description")

    def test_execution_error_is_generic(self, i18n):
        translate = i18n.resolve("en-GB")

        embed = build_execution_error_embed(translate)

        assert embed.description == translate("command_execution_error.description")
        assert embed.color == EXECUTION_ERROR_COLOUR

    def test_command_help(self, i18n):
        cmd = Command(
            name="kick",
            execute=AsyncMock(),
            description="Kick a member",
            aliases=("boot",),
            arguments=ARGUMENTS,
        )

        embed = build_command_help_embed(cmd, "!", i18n.resolve("en-GB"), "#2ECC71")

        assert "Kick a member" in embed.description
        assert "`boot`" in embed.description
        assert len(embed.fields) == 2
