"""Argument parsers using strategy pattern."""

import logging
import string
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from .descriptor import ArgumentMode, Command, CommandArgument

logger = logging.getLogger(__name__)

_KEY_CHARS = frozenset(string.ascii_letters + string.digits + "_")
_DELIMITER = ";"
_ESCAPED_DELIMITER = ";;"


@dataclass(frozen=True)
class ParseResult:
    """Outcome of reading a command's arguments."""

    args: Any
    missing: tuple[CommandArgument, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.missing


def _read_entry(text: str, start: int) -> tuple[str, str, int] | None:
    """Read one ``key[?][ ]:[ ]value;`` entry whose key begins at ``start``.

    Returns ``(key, value, end)`` or ``None`` when no entry starts here.
    """
    length = len(text)
    pos = start
    while pos < length and text[pos] in _KEY_CHARS:
        pos += 1
    if pos == start:
        return None
    key = text[start:pos]

    if pos < length and text[pos] == "?":
        pos += 1
    if pos < length and text[pos].isspace():
        pos += 1
    if pos >= length or text[pos] != ":":
        return None
    pos += 1
    if pos < length and text[pos].isspace():
        pos += 1

    value_start = pos
    last_pair = -1
    while pos < length:
        if text[pos] != _DELIMITER:
            pos += 1
        elif text.startswith(_ESCAPED_DELIMITER, pos):
            last_pair = pos
            pos += 2
        else:
            return key, _unescape(text[value_start:pos]), pos + 1

    # No single delimiter left: the last escaped pair gives up its first
    # character as the terminator.
    if last_pair < 0:
        return None
    return key, _unescape(text[value_start:last_pair]), last_pair + 1


def _unescape(value: str) -> str:
    return value.replace(_ESCAPED_DELIMITER, _DELIMITER)


def parse_named_arguments(raw: str) -> dict[str, str]:
    """Extract ``key: value;`` entries from ``raw``.

    ``;;`` inside a value stands for a literal ``;``. Text that does not form
    an entry is skipped and a repeated key keeps its last value.
    """
    parsed: dict[str, str] = {}
    length = len(raw)
    pos = 0
    while pos < length:
        if raw[pos] not in _KEY_CHARS:
            pos += 1
            continue

        entry = _read_entry(raw, pos)
        if entry is None:
            # Every later start inside this key run sees the same remainder
            while pos < length and raw[pos] in _KEY_CHARS:
                pos += 1
            continue

        key, value, pos = entry
        parsed[key] = value
    return parsed


def count_positional_arguments(raw: str) -> int:
    return len(raw.split())


class ArgumentParser(ABC):
    """Base class for argument parsers."""

    @abstractmethod
    def parse(self, command: Command, raw: str) -> ParseResult:
        """Read ``raw`` according to the command's argument schema."""
        pass


class PositionalArgumentParser(ArgumentParser):
    """Counts whitespace separated values; the raw text is passed through."""

    def parse(self, command: Command, raw: str) -> ParseResult:
        required = command.required_arguments
        given = count_positional_arguments(raw)
        missing = required[given:] if given < len(required) else ()
        return ParseResult(args=raw, missing=tuple(missing))


class NamedArgumentParser(ArgumentParser):
    """Builds a key to value mapping from ``key: value;`` entries."""

    def parse(self, command: Command, raw: str) -> ParseResult:
        parsed = parse_named_arguments(raw)
        missing = tuple(arg for arg in command.required_arguments if arg.name not in parsed)
        return ParseResult(args=parsed, missing=missing)


class ArgumentParserFactory:
    """Factory for creating argument parsers."""

    _parsers: dict[ArgumentMode, ArgumentParser] = {
        ArgumentMode.POSITIONAL: PositionalArgumentParser(),
        ArgumentMode.NAMED: NamedArgumentParser(),
    }

    @classmethod
    def get_parser(cls, mode: ArgumentMode) -> ArgumentParser:
        """Get the parser for a grammar mode."""
        return cls._parsers[mode]

    @classmethod
    def parse_arguments(cls, command: Command, raw: str) -> ParseResult:
        """Parse the text following a command name."""
        result = cls.get_parser(command.mode).parse(command, raw)
        if not result.ok:
            logger.debug(
                f"Command {command.name} is missing arguments: {[arg.name for arg in result.missing]}"
            )
        return result
