"""Message embeds and components shown to users."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional, Sequence

from othellocord.board import Tile
from othellocord.game import GameNotFoundError, InvalidMoveError, OthelloGame, TurnError
from othellocord.player import Player, User
from othellocord.stats import GameResult, Stats, StatsResult
from othellocord.text import left_pad, right_pad

if TYPE_CHECKING:
    from PIL import Image

logger = logging.getLogger(__name__)

GREEN_EMBED = 0x00FF00
LEADERBOARD_SIZE = 50
SIM_PAUSE_KEY = "sim-pause-key"
SIM_STOP_KEY = "sim-stop-key"
PRIMARY_BUTTON = 1
DANGER_BUTTON = 4

IMAGE_NAME = "image.png"
IMAGE_CONTENT_TYPE = "image/png"
IMAGE_ATTACHMENT_URL = "attachment://image.png"
THUMBNAIL_SIZE = 1024


@dataclass(frozen=True)
class EmbedField:
    name: str
    value: str
    inline: bool = False


@dataclass
class Embed:
    """A rich message card."""

    title: str = ""
    description: str = ""
    color: Optional[int] = None
    footer: Optional[str] = None
    fields: list[EmbedField] = field(default_factory=list)
    image_url: Optional[str] = None
    thumbnail_url: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """The embed as a message payload, omitting unset parts."""
        payload: dict[str, Any] = {}
        if self.title:
            payload["title"] = self.title
        if self.description:
            payload["description"] = self.description
        if self.color is not None:
            payload["color"] = self.color
        if self.footer is not None:
            payload["footer"] = {"text": self.footer}
        if self.fields:
            payload["fields"] = [
                {"name": item.name, "value": item.value, "inline": item.inline} for item in self.fields
            ]
        if self.image_url is not None:
            payload["image"] = {"url": self.image_url}
        if self.thumbnail_url is not None:
            payload["thumbnail"] = {
                "url": self.thumbnail_url,
                "width": THUMBNAIL_SIZE,
                "height": THUMBNAIL_SIZE,
            }
        return payload


@dataclass(frozen=True)
class Button:
    custom_id: str
    label: str
    style: int


def attach_image(embed: Embed, image: Optional["Image.Image"]) -> list[tuple[str, str, bytes]]:
    """Encode ``image`` for upload and point the embed at it.

    Returns ``(filename, content type, data)`` entries, empty when there is no image.
    """
    if image is None:
        return []
    buffer = io.BytesIO()
    try:
        image.convert("RGB").save(buffer, format="JPEG")
    except (OSError, ValueError):
        logger.exception("failed to encode image")
        return []
    embed.image_url = IMAGE_ATTACHMENT_URL
    return [(IMAGE_NAME, IMAGE_CONTENT_TYPE, buffer.getvalue())]


def move_error_message(error: Optional[BaseException], move_text: str) -> Optional[str]:
    """The reply for a rejected move, or None if the error is not a move error."""
    if isinstance(error, GameNotFoundError):
        return "You're not currently playing a OthelloGame."
    if isinstance(error, InvalidMoveError):
        return f"Can't make a Move to {move_text}."
    if isinstance(error, TurnError):
        return "It isn't your turn."
    return None


def simulation_action_row(simulation_id: str, is_paused: bool) -> list[list[Button]]:
    """One row holding the stop button and a play or pause button."""
    stop = Button(f"{SIM_STOP_KEY}+{simulation_id}", "Stop", DANGER_BUTTON)
    pause = Button(f"{SIM_PAUSE_KEY}+{simulation_id}", "Play" if is_paused else "Pause", PRIMARY_BUTTON)
    return [[stop, pause]]


def _turn_footer(game: OthelloGame) -> str:
    return "Black to Move" if game.board.is_black_move else "White to Move"


def _versus(game: OthelloGame) -> str:
    return f"{game.black_player.name} vs {game.white_player.name}"


def create_game_start_embed(game: OthelloGame) -> Embed:
    description = (
        f"Black: {game.black_player.name}\n White: {game.white_player.name}\n "
        "Use `/view` to view the OthelloGame and use `/Move` to make a Move."
    )
    return Embed(title="OthelloGame Started!", description=description, color=GREEN_EMBED)


def create_simulation_start_embed(game: OthelloGame) -> Embed:
    description = f"Black: {game.black_player.name}\n White: {game.white_player.name}"
    return Embed(title="Simulation started!", description=description, color=GREEN_EMBED)


def create_game_move_embed(game: OthelloGame, move: Tile) -> Embed:
    return Embed(
        title=f"Your OthelloGame with {game.other_player().name}",
        description=f"{score_text(game)}Your opponent has moved: {move}",
        footer=_turn_footer(game),
        color=GREEN_EMBED,
    )


def create_simulation_embed(game: OthelloGame, move: Tile) -> Embed:
    return Embed(
        title=_versus(game),
        description=f"{score_text(game)}{game.other_player().name} has moved: {move}",
        footer=_turn_footer(game),
        color=GREEN_EMBED,
    )


def create_game_embed(game: OthelloGame) -> Embed:
    return Embed(
        title=_versus(game),
        description=f"{score_text(game)}{game.current_player().name} to Move",
        footer=_turn_footer(game),
        color=GREEN_EMBED,
    )


def create_analysis_embed(game: OthelloGame, level: int) -> Embed:
    return Embed(
        title=f"OthelloGame Analysis using service level {level}",
        description=score_text(game),
        footer="Positive heuristics are better for black, and negative heuristics are better for white",
    )


def create_game_over_embed(
    game: OthelloGame, result: GameResult, stats_result: StatsResult, move: Tile
) -> Embed:
    description = (
        f"{move_message(result.winner, str(move))}"
        f"{score_message(game.board.white_score(), game.board.black_score())}\n"
        f"{stats_message(result, stats_result)}"
    )
    return Embed(title="OthelloGame has ended", description=description)


def create_forfeit_embed(result: GameResult, stats_result: StatsResult) -> Embed:
    description = f"{forfeit_message(result.winner)}\n{stats_message(result, stats_result)}"
    return Embed(title="OthelloGame has ended", description=description, color=GREEN_EMBED)


def create_simulation_end_embed(game: OthelloGame, move: Tile) -> Embed:
    result = game.create_result()
    description = (
        f"{move_message(result.winner, str(move))}"
        f"{score_message(game.board.white_score(), game.board.black_score())}"
    )
    return Embed(title="Simulation has ended", description=description, color=GREEN_EMBED)


def create_stats_embed(user: User, stats: Stats) -> Embed:
    return Embed(
        title=f"{user.username}'s stats",
        fields=[
            EmbedField("Rating", f"{stats.elo:0.2f}", False),
            EmbedField("Win Rate", stats.win_rate(), False),
            EmbedField("Won", str(stats.won), True),
            EmbedField("Lost", str(stats.lost), True),
            EmbedField("Drawn", str(stats.drawn), True),
        ],
        thumbnail_url=user.avatar_url,
        color=GREEN_EMBED,
    )


def create_leaderboard_embed(stats: Sequence[Stats]) -> Embed:
    lines = "".join(
        f"{right_pad(f'{rank})', 4)}{left_pad(entry.player.name, 32)}{left_pad(f'{entry.elo:.2f}', 12)}\n"
        for rank, entry in enumerate(stats, start=1)
    )
    return Embed(
        title="Leaderboard",
        description=f"```\n{lines}```",
        color=GREEN_EMBED,
        footer=f"Top {LEADERBOARD_SIZE} rated players",
    )


def score_text(game: OthelloGame) -> str:
    return f"Black: {game.board.black_score()} points\nWhite: {game.board.white_score()} points\n"


def stats_message(game_result: GameResult, stats_result: StatsResult) -> str:
    return (
        f"{game_result.winner.name}'s new rating is {int(stats_result.winner_elo)} "
        f"({stats_result.format_winner_elo_diff()}) \n "
        f"{game_result.loser.name}'s new rating is {int(stats_result.loser_elo)} "
        f"({stats_result.format_loser_elo_diff()})\n"
    )


def forfeit_message(winner: Player) -> str:
    return f"{winner.name} won by forfeit\n"


def score_message(white_score: int, black_score: int) -> str:
    return f"Score: {black_score} - {white_score}\n"


def move_message(winner: Player, move: str) -> str:
    return f"{winner.name} won with {move}\n"