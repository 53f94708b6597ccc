from __future__ import annotations

from typing import TYPE_CHECKING

import hikari

from ..decorators import command
from ..descriptor import Command, CommandArgument
from ..usage import build_command_help_embed

if TYPE_CHECKING:
    from ...core.dispatcher import InvocationContext
    from ..registry import CommandRegistry


def create(registry: CommandRegistry) -> Command:
    @command(
        name="help",
        description="List the available commands or show how to use one of them",
        aliases=["h", "commands"],
        arguments=[
            CommandArgument(
                name="command",
                description="The command to show information about",
                example="help",
                required=False,
            )
        ],
        internal=True,
    )
    async def help_command(ctx: InvocationContext, args: str) -> None:
        translate = ctx.translate
        words = args.split()

        if words:
            target = registry.lookup(words[0])
            if target is None:
                await ctx.respond(
                    embed=hikari.Embed(
                        title=translate("help.title"),
                        description=translate("help.unknown_command", words[0]),
                        color=ctx.settings.error_colour,
                    )
                )
                return
            await ctx.respond(
                embed=build_command_help_embed(target, ctx.prefix, translate, ctx.settings.success_colour)
            )
            return

        lines = [translate("help.description", ctx.prefix), ""]
        for cmd in sorted(registry, key=lambda c: c.name):
            lines.append(f"**`{ctx.prefix}{cmd.name}`** · {cmd.description}")

        await ctx.respond(
            embed=hikari.Embed(
                title=translate("help.title"),
                description="\n".join(lines),
                color=ctx.settings.success_colour,
            )
        )

    return help_command
