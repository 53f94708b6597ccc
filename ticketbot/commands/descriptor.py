"""Command descriptors and argument definitions."""

from __future__ import annotations

import enum
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import hikari

if TYPE_CHECKING:
    from ..core.dispatcher import InvocationContext

CommandCallback = Callable[["InvocationContext", Any], Awaitable[Any]]


class ArgumentMode(enum.Enum):
    """Grammar used to read the text following the command name."""

    POSITIONAL = "positional"
    """Whitespace separated values; the handler receives the raw text."""

    NAMED = "named"
    """``key: value;`` pairs; the handler receives a ``dict[str, str]``."""


@dataclass(frozen=True)
class CommandArgument:
    """Defines one argument shown in usage help and checked before invocation."""

    name: str
    description: str = ""
    example: str = ""
    required: bool = True


@dataclass(frozen=True)
class Command:
    """Immutable definition of a message command.

    ``aliases`` always contains ``name``. ``permissions`` holds
    ``hikari.Permissions`` member names such as ``"KICK_MEMBERS"``.
    """

    name: str
    execute: CommandCallback
    description: str = ""
    aliases: tuple[str, ...] = ()
    arguments: tuple[CommandArgument, ...] = ()
    mode: ArgumentMode = ArgumentMode.POSITIONAL
    permissions: tuple[str, ...] = ()
    staff_only: bool = False
    internal: bool = False
    plugin_name: str | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not self.name or any(ch.isspace() for ch in self.name):
            raise ValueError(f"Invalid command name: {self.name!r}")

        name = self.name.lower()
        aliases = [name]
        for alias in self.aliases:
            alias = alias.lower()
            if alias not in aliases:
                aliases.append(alias)

        permissions: list[str] = []
        for token in self.permissions:
            if not isinstance(getattr(hikari.Permissions, token, None), hikari.Permissions):
                raise ValueError(f'Unknown permission "{token}" on command "{self.name}"')
            if token not in permissions:
                permissions.append(token)

        # frozen dataclass, normalise through object.__setattr__
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "aliases", tuple(aliases))
        object.__setattr__(self, "arguments", tuple(self.arguments))
        object.__setattr__(self, "permissions", tuple(permissions))

    @property
    def required_arguments(self) -> tuple[CommandArgument, ...]:
        return tuple(arg for arg in self.arguments if arg.required)

    @property
    def required_permissions(self) -> hikari.Permissions:
        """The declared permission tokens combined into one flag value."""
        combined = hikari.Permissions.NONE
        for token in self.permissions:
            combined |= getattr(hikari.Permissions, token)
        return combined
