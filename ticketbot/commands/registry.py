"""Command registration system."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING

from ..errors import AliasConflictError, CommandLoadError, DuplicateCommandError, RegistrationError
from .descriptor import Command

if TYPE_CHECKING:
    from ..core.plugin_loader import PluginMetadata

logger = logging.getLogger(__name__)

CommandFactory = Callable[["CommandRegistry"], Command]


class CommandRegistry:
    """Maps canonical command names to commands.

    Built-in (internal) commands may be overridden by plugin commands, never
    the other way round, and two plugin commands may not share a name.
    Every mutation swaps in a fresh mapping so lookups always read a
    consistent snapshot.
    """

    def __init__(self, plugins: Callable[[], Iterable[PluginMetadata]] | None = None) -> None:
        self._commands: dict[str, Command] = {}
        self._plugins = plugins

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._commands

    def __iter__(self) -> Iterator[Command]:
        return iter(list(self._commands.values()))

    def __len__(self) -> int:
        return len(self._commands)

    def names(self) -> list[str]:
        return list(self._commands)

    def get(self, name: str) -> Command | None:
        return self._commands.get(name.lower())

    def register(self, command: Command) -> None:
        """Register a command, applying the override rules.

        Raises:
            DuplicateCommandError: if a non-internal command with the same
                name is already registered and ``command`` is non-internal.
            AliasConflictError: if one of the aliases is claimed by another
                command.
        """
        existing = self._commands.get(command.name)

        if existing is not None:
            if not (existing.internal or command.internal):
                raise DuplicateCommandError(command.name)

            if command.internal and existing.internal:
                logger.warning(
                    f'Internal command "{command.name}" is already registered, keeping the first definition'
                )
                return

            provider = self._find_provider(command.name)
            if provider:
                logger.info(f'The "{provider}" plugin has overridden the internal "{command.name}" command')
            else:
                logger.info(f'An unknown plugin has overridden the internal "{command.name}" command')

            if command.internal:
                return

        self._check_aliases(command)

        commands = dict(self._commands)
        commands[command.name] = command
        self._commands = commands

        internal = "internal " if command.internal else ""
        logger.info(f'Loaded {internal}"{command.name}" command')

    def register_all(self, commands: Iterable[Command]) -> None:
        """Register several commands as one unit.

        If any of them is rejected, none of them stay registered.
        """
        snapshot = self._commands
        try:
            for command in commands:
                self.register(command)
        except RegistrationError:
            # register never mutates the mapping in place
            self._commands = snapshot
            raise

    def load(self, factories: Iterable[CommandFactory]) -> int:
        """Build and register built-in commands.

        A factory that fails is logged and skipped; the rest still load.
        Returns the number of factories that loaded.
        """
        loaded = 0
        for factory in factories:
            factory_name = getattr(factory, "__name__", repr(factory))
            try:
                command = factory(self)
                if not isinstance(command, Command):
                    raise CommandLoadError(f"{factory_name} did not produce a Command")
                if not command.internal:
                    command = dataclasses.replace(command, internal=True)
                self.register(command)
            except Exception as e:
                logger.warning(f"An error occurred whilst loading internal command {factory_name}: {e}")
                continue
            loaded += 1

        logger.info(f"Loaded {loaded} internal commands")
        return loaded

    def lookup(self, token: str) -> Command | None:
        """Find the command called ``token`` or aliased by it (case-insensitive)."""
        commands = self._commands
        token = token.lower()

        command = commands.get(token)
        if command is not None:
            return command

        for command in commands.values():
            if token in command.aliases:
                return command
        return None

    def _check_aliases(self, command: Command) -> None:
        for other in self._commands.values():
            if other.name == command.name:
                # Being replaced
                continue
            for alias in command.aliases:
                if alias in other.aliases:
                    raise AliasConflictError(alias, command.name, other.name)

    def _find_provider(self, name: str) -> str | None:
        if self._plugins is None:
            return None
        for plugin in self._plugins():
            if name in plugin.commands:
                return plugin.name
        return None
