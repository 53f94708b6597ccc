"""Embeds shown to members when a command cannot run."""

from collections.abc import Iterable

import hikari

from ..i18n import Translator
from .descriptor import ArgumentMode, Command, CommandArgument


REQUIRED_MARKER = "`❗`"
EXECUTION_ERROR_COLOUR = hikari.Color(0xE67E22)


def format_usage(command: Command, invoked_as: str, prefix: str) -> tuple[str, str]:
    """Return the ``(usage, example)`` lines for a command."""
    named = command.mode is ArgumentMode.NAMED
    usage_parts = []
    example_parts = []
    for arg in command.arguments:
        if named:
            usage_parts.append(f"<{arg.name};>" if arg.required else f"[{arg.name};]")
            example_parts.append(f"{arg.name}: {arg.example};")
        else:
            usage_parts.append(f"<{arg.name}>" if arg.required else f"[{arg.name}]")
            example_parts.append(arg.example)

    invocation = f"{prefix}{invoked_as}"
    usage = " ".join([invocation, *usage_parts]).rstrip()
    example = " ".join([invocation, *example_parts]).rstrip()
    return usage, example


def _add_argument_fields(embed: hikari.Embed, arguments: Iterable[CommandArgument], translate: Translator) -> None:
    for arg in arguments:
        name = f"{REQUIRED_MARKER} {arg.name}" if arg.required else arg.name
        embed.add_field(
            name,
            f"» {translate('cmd_usage.args.description')} {arg.description}\n"
            f"» {translate('cmd_usage.args.example')} `{arg.example}`",
        )


def build_usage_embed(
    command: Command,
    invoked_as: str,
    prefix: str,
    translate: Translator,
    colour: hikari.Colorish,
) -> hikari.Embed:
    """Build the usage help sent when a command's arguments are missing."""
    usage, example = format_usage(command, invoked_as, prefix)

    description = translate("cmd_usage.description", usage, example)
    if command.mode is ArgumentMode.NAMED:
        description = translate("cmd_usage.named_args") + description

    embed = hikari.Embed(
        title=translate("cmd_usage.title", invoked_as),
        description=description,
        color=colour,
    )
    _add_argument_fields(embed, command.arguments, translate)
    return embed


def build_missing_permissions_embed(
    missing: Iterable[str], translate: Translator, colour: hikari.Colorish
) -> hikari.Embed:
    perms = ", ".join(f"`{token}`" for token in missing)
    return hikari.Embed(
        title=translate("missing_perms.title"),
        description=translate("missing_perms.description", perms),
        color=colour,
    )


def build_staff_only_embed(translate: Translator, colour: hikari.Colorish) -> hikari.Embed:
    return hikari.Embed(
        title=translate("staff_only.title"),
        description=translate("staff_only.description"),
        color=colour,
    )


def build_execution_error_embed(translate: Translator) -> hikari.Embed:
    # Never carries error details
    return hikari.Embed(
        title=translate("command_execution_error.title"),
        description=translate("command_execution_error.description"),
        color=EXECUTION_ERROR_COLOUR,
    )


def build_command_help_embed(
    command: Command, prefix: str, translate: Translator, colour: hikari.Colorish
) -> hikari.Embed:
    """Describe a single command for the help command."""
    usage, example = format_usage(command, command.name, prefix)
    lines = [command.description] if command.description else []
    lines.append(translate("cmd_usage.description", usage, example))
    if len(command.aliases) > 1:
        aliases = ", ".join(f"`{alias}`" for alias in command.aliases if alias != command.name)
        lines.append(translate("help.aliases", aliases))

    embed = hikari.Embed(
        title=translate("help.command_title", command.name),
        description="\n\n".join(lines),
        color=colour,
    )
    _add_argument_fields(embed, command.arguments, translate)
    return embed
