"""Definitions of the slash commands the bot registers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from othellocord.player import MAX_BOT_LEVEL, MIN_BOT_LEVEL

MIN_DELAY = 1
MAX_DELAY = 5

LEVEL_DESC = f"Level of the service between {MIN_BOT_LEVEL} and {MAX_BOT_LEVEL}"
EXPECTED_TILE_VALUE = "be a string of the form 'a1' where 'a' is the column and '1' is the row"
DELAY_DESC = f"Minimum delay between moves in seconds between {MIN_DELAY} and {MAX_DELAY} secs"


class OptionType(IntEnum):
    """Kinds of command options as numbered by the chat platform."""

    SUB_COMMAND = 1
    SUB_COMMAND_GROUP = 2
    STRING = 3
    INTEGER = 4
    BOOLEAN = 5
    USER = 6


@dataclass(frozen=True)
class CommandOption:
    """An option or subcommand of a slash command."""

    type: OptionType
    name: str
    description: str
    required: bool = False
    autocomplete: bool = False
    options: tuple[CommandOption, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        """The option as a registration payload, omitting unset fields."""
        payload: dict[str, Any] = {
            "type": int(self.type),
            "name": self.name,
            "description": self.description,
        }
        if self.required:
            payload["required"] = True
        if self.autocomplete:
            payload["autocomplete"] = True
        if self.options:
            payload["options"] = [option.to_dict() for option in self.options]
        return payload


@dataclass(frozen=True)
class ApplicationCommand:
    """A top-level slash command."""

    name: str
    description: str
    options: tuple[CommandOption, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"name": self.name, "description": self.description}
        if self.options:
            payload["options"] = [option.to_dict() for option in self.options]
        return payload


def _level_option(name: str) -> CommandOption:
    return CommandOption(OptionType.INTEGER, name, LEVEL_DESC)


COMMANDS: tuple[ApplicationCommand, ...] = (
    ApplicationCommand(
        "challenge",
        "Challenges the service or another user to an Othello game",
        (
            CommandOption(
                OptionType.SUB_COMMAND,
                "user",
                "Challenges another user to a game",
                options=(
                    CommandOption(OptionType.USER, "opponent", "The opponent to challenge", required=True),
                ),
            ),
            CommandOption(
                OptionType.SUB_COMMAND,
                "service",
                "Challenges the service to a game",
                options=(_level_option("level"),),
            ),
        ),
    ),
    ApplicationCommand(
        "accept",
        "Accepts a challenge from another discord user",
        (CommandOption(OptionType.USER, "challenger", "User who made the challenge", required=True),),
    ),
    ApplicationCommand("forfeit", "Forfeits the user's current game"),
    ApplicationCommand(
        "move",
        "Makes a move on user's current game",
        (
            CommandOption(
                OptionType.STRING,
                "move",
                "Move to make on the OthelloBoard",
                required=True,
                autocomplete=True,
            ),
        ),
    ),
    ApplicationCommand("view", "Displays the game State including all the moves that can be made this turn"),
    ApplicationCommand("analyze", "Runs an analysis of the OthelloBoard", (_level_option("level"),)),
    ApplicationCommand(
        "simulate",
        "Simulates a game between two bots",
        (
            _level_option("black-level"),
            _level_option("white-level"),
            CommandOption(OptionType.INTEGER, "delay", DELAY_DESC),
        ),
    ),
    ApplicationCommand(
        "stats",
        "Retrieves the stats profile for a player",
        (CommandOption(OptionType.USER, "player", "Player to get stats profile for"),),
    ),
    ApplicationCommand("leaderboard", "Retrieves the highest rated players by ELO"),
)


def command_payload() -> list[dict[str, Any]]:
    """Every command as a payload for bulk registration."""
    return [command.to_dict() for command in COMMANDS]