"""Exceptions raised by the command system."""


class CommandError(Exception):
    """Base class for command system errors."""


class RegistrationError(CommandError):
    """A command could not be registered."""


class DuplicateCommandError(RegistrationError):
    """Two external commands claim the same name."""

    def __init__(self, name: str) -> None:
        super().__init__(f'A non-internal command with the name "{name}" already exists')
        self.name = name


class AliasConflictError(RegistrationError):
    """An alias is already claimed by another registered command."""

    def __init__(self, alias: str, name: str, owner: str) -> None:
        super().__init__(f'Alias "{alias}" of command "{name}" is already used by command "{owner}"')
        self.alias = alias
        self.name = name
        self.owner = owner


class CommandLoadError(CommandError):
    """A single command unit failed to load."""


class GuildSettingsUnavailable(CommandError):
    """Guild settings could not be fetched or created."""

    def __init__(self, guild_id: int, cause: Exception | None = None) -> None:
        super().__init__(f"Settings for guild {guild_id} are unavailable: {cause}")
        self.guild_id = guild_id
