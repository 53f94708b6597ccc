"""Command system: descriptors, registry, argument parsing and usage help."""

from .decorators import command
from .descriptor import ArgumentMode, Command, CommandArgument
from .parsers import ArgumentParserFactory, ParseResult, parse_named_arguments
from .registry import CommandRegistry

__all__ = [
    "ArgumentMode",
    "Command",
    "CommandArgument",
    "command",
    "CommandRegistry",
    "ArgumentParserFactory",
    "ParseResult",
    "parse_named_arguments",
]
