import pytest
from PIL import Image

from othellocord.board import OthelloBoard, Tile
from othellocord.embeds import (
    GREEN_EMBED,
    IMAGE_ATTACHMENT_URL,
    LEADERBOARD_SIZE,
    SIM_PAUSE_KEY,
    SIM_STOP_KEY,
    Embed,
    attach_image,
    create_analysis_embed,
    create_forfeit_embed,
    create_game_embed,
    create_game_move_embed,
    create_game_over_embed,
    create_game_start_embed,
    create_leaderboard_embed,
    create_simulation_end_embed,
    create_stats_embed,
    forfeit_message,
    move_error_message,
    move_message,
    score_message,
    score_text,
    simulation_action_row,
    stats_message,
)
from othellocord.game import GameNotFoundError, InvalidMoveError, OthelloGame, TurnError
from othellocord.player import Player, User, make_bot_player
from othellocord.stats import GameResult, Stats, StatsResult
from othellocord.text import parse_custom_id

BLACK = Player(id="id1", name="Player1")
WHITE = Player(id="id2", name="Player2")


def _game():
    return OthelloGame(board=OthelloBoard.initial(), white_player=WHITE, black_player=BLACK)


def _stats_result():
    return StatsResult(winner_elo=1515.0, loser_elo=1486.0, win_diff=15.0, lose_diff=-14.0)


def test_move_error_messages():
    assert move_error_message(GameNotFoundError(), "c4") == "You're not currently playing a OthelloGame."
    assert move_error_message(InvalidMoveError(), "c4") == "Can't make a Move to c4."
    assert move_error_message(TurnError(), "c4") == "It isn't your turn."
    assert move_error_message(RuntimeError("boom"), "c4") is None
    assert move_error_message(None, "c4") is None


@pytest.mark.parametrize("paused, label", [(True, "Play"), (False, "Pause")])
def test_simulation_action_row(paused, label):
    (row,) = simulation_action_row("sim1", paused)
    stop, pause = row
    assert stop.label == "Stop"
    assert pause.label == label
    assert parse_custom_id(stop.custom_id) == (SIM_STOP_KEY, "sim1")
    assert parse_custom_id(pause.custom_id) == (SIM_PAUSE_KEY, "sim1")


def test_attach_image_encodes_jpeg():
    embed = Embed(title="t")
    files = attach_image(embed, Image.new("RGBA", (16, 16), (10, 20, 30, 255)))
    assert len(files) == 1
    name, content_type, data = files[0]
    assert (name, content_type) == ("image.png", "image/png")
    assert data[:2] == b"\xff\xd8"
    assert embed.image_url == IMAGE_ATTACHMENT_URL
    assert embed.to_dict()["image"] == {"url": IMAGE_ATTACHMENT_URL}


def test_attach_image_without_image():
    embed = Embed(title="t")
    assert attach_image(embed, None) == []
    assert embed.image_url is None
    assert "image" not in embed.to_dict()


def test_game_embed_for_initial_board():
    game = _game()
    embed = create_game_embed(game)
    assert embed.title == "Player1 vs Player2"
    assert embed.footer == "Black to Move"
    assert embed.description == score_text(game) + "Player1 to Move"
    assert embed.to_dict()["color"] == GREEN_EMBED


def test_game_move_embed_after_move():
    game = _game()
    move = game.board.find_current_moves()[0]
    game.make_move(move)
    embed = create_game_move_embed(game, move)
    assert embed.footer == "White to Move"
    assert embed.title == f"Your OthelloGame with {game.other_player().name}"
    assert embed.description.endswith(f"Your opponent has moved: {move}")


def test_score_text_counts_discs():
    game = _game()
    text = score_text(game)
    assert text.startswith(f"Black: {game.board.black_score()} points\n")
    assert text.endswith(f"White: {game.board.white_score()} points\n")


def test_start_embed_names_players():
    embed = create_game_start_embed(_game())
    assert embed.title == "OthelloGame Started!"
    assert "Player1" in embed.description and "Player2" in embed.description


def test_analysis_embed_has_no_color():
    embed = create_analysis_embed(_game(), 4)
    assert embed.title == "OthelloGame Analysis using service level 4"
    assert "color" not in embed.to_dict()


def test_score_message_orders_black_first():
    assert score_message(10, 20) == "Score: 20 - 10\n"


def test_simple_messages():
    assert forfeit_message(BLACK) == "Player1 won by forfeit\n"
    assert move_message(WHITE, "A1") == "Player2 won with A1\n"


def test_stats_message_contains_both_ratings():
    result = GameResult(winner=BLACK, loser=WHITE)
    sr = _stats_result()
    message = stats_message(result, sr)
    assert f"Player1's new rating is {int(sr.winner_elo)} ({sr.format_winner_elo_diff()})" in message
    assert f"Player2's new rating is {int(sr.loser_elo)} ({sr.format_loser_elo_diff()})" in message


def test_game_over_embed_composition():
    game = _game()
    result = GameResult(winner=BLACK, loser=WHITE)
    sr = _stats_result()
    move = Tile.parse("c4")
    embed = create_game_over_embed(game, result, sr, move)
    assert embed.title == "OthelloGame has ended"
    assert embed.description == (
        move_message(BLACK, str(move))
        + score_message(game.board.white_score(), game.board.black_score())
        + "\n"
        + stats_message(result, sr)
    )


def test_forfeit_embed():
    result = GameResult(winner=WHITE, loser=BLACK)
    embed = create_forfeit_embed(result, _stats_result())
    assert embed.description.startswith(forfeit_message(WHITE) + "\n")
    assert embed.color == GREEN_EMBED


def test_simulation_end_embed_draw_names_black():
    game = OthelloGame(board=OthelloBoard.initial(), white_player=make_bot_player(2), black_player=make_bot_player(3))
    embed = create_simulation_end_embed(game, Tile())
    assert embed.title == "Simulation has ended"
    assert embed.description.startswith(move_message(make_bot_player(3), "A1"))


def test_stats_embed_fields():
    user = User(id="id1", username="Player1", avatar_url="https://example.com/avatar.png")
    stats = Stats(player=BLACK, elo=1750.0, won=3, drawn=1, lost=2)
    embed = create_stats_embed(user, stats)
    assert embed.title == "Player1's stats"
    values = {item.name: item.value for item in embed.fields}
    assert values["Win Rate"] == stats.win_rate()
    assert (values["Won"], values["Lost"], values["Drawn"]) == ("3", "2", "1")
    assert values["Rating"] == "1750.00"
    assert embed.to_dict()["thumbnail"]["url"] == user.avatar_url


def test_leaderboard_embed():
    stats = [Stats(player=BLACK, elo=1750.0), Stats(player=make_bot_player(3), elo=1550.0)]
    embed = create_leaderboard_embed(stats)
    assert embed.description.startswith("```\n")
    assert embed.description.endswith("```")
    lines = embed.description.splitlines()[1:-1]
    assert len(lines) == 2
    assert lines[0].startswith("1)") and lines[0].rstrip().endswith("1750.00")
    assert "NTest level 3" in lines[1]
    assert embed.footer == f"Top {LEADERBOARD_SIZE} rated players"