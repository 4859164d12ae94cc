"""Extraction and validation of command options from interactions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Sequence

from othellocord.board import InvalidTileError, Tile
from othellocord.commands import EXPECTED_TILE_VALUE, MAX_DELAY, MIN_DELAY, OptionType
from othellocord.errors import OptionError
from othellocord.player import Player, is_invalid_bot_level

DEFAULT_LEVEL = 3
DEFAULT_DELAY = 2.0


class PlayerSource(Protocol):
    def get_player(self, player_id: str) -> Player: ...


@dataclass
class InteractionOption:
    """An option value received with a command interaction."""

    name: str
    value: Any = None
    type: Optional[OptionType] = None
    options: list[InteractionOption] = field(default_factory=list)


def _find(options: Sequence[InteractionOption], name: str) -> Optional[InteractionOption]:
    return next((option for option in options if option.name == name), None)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def get_subcommand(options: Sequence[InteractionOption]) -> tuple[str, list[InteractionOption]]:
    """Name and options of the subcommand, or ``("", [])`` if there is none."""
    if options and options[0].type == OptionType.SUB_COMMAND:
        return options[0].name, list(options[0].options)
    return "", []


def get_player_option(users: PlayerSource, options: Sequence[InteractionOption], name: str) -> Player:
    """The player referred to by the user option ``name``."""
    option = _find(options, name)
    if option is None:
        raise OptionError(name)
    return users.get_player(str(option.value))


def get_level_option(options: Sequence[InteractionOption], name: str) -> int:
    """A bot level, defaulting when absent and checked against the allowed range."""
    option = _find(options, name)
    if option is None:
        return DEFAULT_LEVEL
    if not _is_number(option.value):
        raise OptionError(name, option.value)
    level = int(option.value)
    if is_invalid_bot_level(level):
        raise OptionError(name, level)
    return level


def get_delay_option(options: Sequence[InteractionOption], name: str) -> float:
    """A delay in seconds, defaulting when absent and checked against the allowed range."""
    option = _find(options, name)
    if option is None:
        return DEFAULT_DELAY
    if not _is_number(option.value):
        raise OptionError(name, option.value)
    delay = int(option.value)
    if delay < MIN_DELAY or delay > MAX_DELAY:
        raise OptionError(name, delay)
    return float(delay)


def get_tile_option(options: Sequence[InteractionOption], name: str) -> tuple[Tile, str]:
    """The tile given by option ``name`` together with its original text."""
    option = _find(options, name)
    if option is None:
        raise OptionError(name, expected_value=EXPECTED_TILE_VALUE)
    if not isinstance(option.value, str):
        raise OptionError(name, option.value, EXPECTED_TILE_VALUE)
    try:
        tile = Tile.parse(option.value)
    except InvalidTileError:
        raise OptionError(name, option.value, EXPECTED_TILE_VALUE) from None
    return tile, option.value


def format_options(options: Sequence[InteractionOption]) -> str:
    """Option names in brackets, for logging."""
    return "[" + ", ".join(option.name for option in options) + "]"