"""Built-in commands, registered before any plugin."""

from . import help

BUILTIN_COMMANDS = [help.create]

__all__ = ["BUILTIN_COMMANDS"]
