"""Command decorator."""

from collections.abc import Callable

from .descriptor import ArgumentMode, Command, CommandArgument, CommandCallback


def command(
    name: str,
    description: str = "",
    aliases: list[str] | None = None,
    arguments: list[CommandArgument] | None = None,
    mode: ArgumentMode = ArgumentMode.POSITIONAL,
    permissions: list[str] | None = None,
    staff_only: bool = False,
    internal: bool = False,
) -> Callable[[CommandCallback], Command]:
    """
    Turn an async handler into a :class:`Command` descriptor.

    The handler is called as ``handler(ctx, args)`` where ``args`` is the raw
    argument text for positional commands and a ``dict[str, str]`` for named
    commands.
    """

    def decorator(func: CommandCallback) -> Command:
        return Command(
            name=name,
            execute=func,
            description=description or (func.__doc__ or "").strip(),
            aliases=tuple(aliases or ()),
            arguments=tuple(arguments or ()),
            mode=mode,
            permissions=tuple(permissions or ()),
            staff_only=staff_only,
            internal=internal,
        )

    return decorator
