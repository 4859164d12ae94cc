import sqlite3
import threading
import time

import pytest

from othellocord.board import BLACK, WHITE, OthelloBoard, Tile
from othellocord.db import connect
from othellocord.game import (
    AlreadyPlayingError,
    GameNotFoundError,
    InvalidMoveError,
    OthelloGame,
    TurnError,
    check_game_participation,
    count_games,
    create_bot_game,
    create_game,
    expire_games,
    game_expire_time,
    get_game,
    make_move,
    make_move_validated,
    run_expire_games,
    set_game,
)
from othellocord.player import Player, make_bot_player


def _seed_games():
    return [
        OthelloGame(
            board=OthelloBoard.initial(),
            black_player=Player(id="id1", name="Player1"),
            white_player=Player(id="id2", name="Player2"),
        ),
        OthelloGame(
            board=OthelloBoard.initial(),
            black_player=Player(id="id10", name="Player10"),
            white_player=Player(id="id20", name="Player20"),
        ),
    ]


@pytest.fixture
def conn():
    connection = connect(":memory:")
    with connection:
        for game in _seed_games():
            set_game(connection, game, 0.0)
    yield connection
    connection.close()


def test_create_game(conn):
    game = create_game(conn, Player(id="id3", name="Player3"), Player(id="id4", name="Player4"))
    db_game = get_game(conn, "id3")
    expected = OthelloGame(
        board=OthelloBoard.initial(),
        black_player=Player(id="id3", name="Player3"),
        white_player=Player(id="id4", name="Player4"),
    )
    assert game == expected
    assert db_game == expected


def test_create_bot_game(conn):
    game = create_bot_game(conn, Player(id="id3", name="Player3"), 5)
    db_game = get_game(conn, "id3")
    expected = OthelloGame(
        board=OthelloBoard.initial(),
        black_player=Player(id="id3", name="Player3"),
        white_player=make_bot_player(5),
    )
    assert game == expected
    assert db_game == expected


def test_get_game(conn):
    expected = OthelloGame(
        board=OthelloBoard.initial(),
        black_player=Player(id="id1", name="Player1"),
        white_player=Player(id="id2", name="Player2"),
    )
    assert get_game(conn, "id1") == expected
    assert get_game(conn, "id2") == expected


def test_get_game_not_found(conn):
    with pytest.raises(GameNotFoundError):
        get_game(conn, "id5")


def test_create_game_already_playing(conn):
    with pytest.raises(AlreadyPlayingError):
        create_game(conn, Player(id="id1", name="Player1"), Player(id="id9", name="Player9"))
    assert count_games(conn) == 2


def test_check_game_participation_second_player(conn):
    with pytest.raises(AlreadyPlayingError):
        check_game_participation(conn, "id99", "id20")


def test_expire_games(conn):
    assert count_games(conn) == 2
    expired = expire_games(conn)
    assert len(expired) == 2
    assert count_games(conn) == 0


def test_expire_games_keeps_fresh_games(conn):
    expire_games(conn)
    create_game(conn, Player(id="id3", name="Player3"), Player(id="id4", name="Player4"))
    assert expire_games(conn) == []
    assert count_games(conn) == 1


def test_game_expire_time_is_in_future():
    assert game_expire_time() > time.time()


def test_run_expire_games_until_stopped(conn):
    stop = threading.Event()
    worker = threading.Thread(target=run_expire_games, args=(conn, stop, 0.01))
    worker.start()
    deadline = time.monotonic() + 5
    while count_games(conn) and time.monotonic() < deadline:
        time.sleep(0.01)
    stop.set()
    worker.join(timeout=5)
    assert not worker.is_alive()
    assert count_games(conn) == 0


@pytest.mark.parametrize(
    "player_id, move, error",
    [
        ("id5", Tile(), GameNotFoundError),
        ("id2", Tile(), TurnError),
        ("id1", Tile(row=0, col=1), InvalidMoveError),
    ],
)
def test_make_move_validated_errors(conn, player_id, move, error):
    with pytest.raises(error):
        make_move_validated(conn, player_id, move)
    assert get_game(conn, "id1").move_list == []


def test_make_move_validated(conn):
    initial = OthelloGame(
        board=OthelloBoard.initial(),
        black_player=Player(id="id1", name="Player1"),
        white_player=Player(id="id2", name="Player2"),
    )
    test_move = initial.board.find_current_moves()[0]
    expected = OthelloGame(
        board=OthelloBoard.initial(),
        black_player=Player(id="id1", name="Player1"),
        white_player=Player(id="id2", name="Player2"),
    )
    expected.make_move(test_move)

    game = make_move_validated(conn, "id1", test_move)
    assert game == expected
    assert get_game(conn, "id1") == expected


def test_make_move_does_not_mutate_input(conn):
    game = get_game(conn, "id1")
    move = game.load_potential_moves()[0]
    moved = make_move(conn, game, move)
    assert game.move_list == []
    assert moved.move_list == [move]
    assert game.board == OthelloBoard.initial()


def test_make_move_game_over_deletes_game():
    connection = connect(":memory:")
    board = OthelloBoard(is_black_move=True).with_square("a1", BLACK).with_square("a2", WHITE)
    game = OthelloGame(
        board=board,
        black_player=Player(id="b", name="Black"),
        white_player=Player(id="w", name="White"),
    )
    with connection:
        set_game(connection, game, game_expire_time())

    result = make_move_validated(connection, "b", Tile(row=2, col=0))
    assert result.is_game_over()
    assert result.board.white_score() == 0
    assert count_games(connection) == 0
    connection.close()


def test_try_skip_turn_without_moves():
    game = OthelloGame(board=OthelloBoard(is_black_move=True))
    game.try_skip_turn()
    assert game.board.is_black_move is False
    assert game.is_game_over()


def test_try_skip_turn_keeps_turn_with_moves():
    game = OthelloGame(board=OthelloBoard.initial())
    game.try_skip_turn()
    assert game.board.is_black_move is True
    assert len(game.load_potential_moves()) == 4


def test_current_and_other_player():
    black = Player(id="id1", name="Player1")
    white = Player(id="id2", name="Player2")
    game = OthelloGame(board=OthelloBoard.initial(), black_player=black, white_player=white)
    assert game.current_player() == black
    assert game.other_player() == white
    game.make_move(game.load_potential_moves()[0])
    assert game.current_player() == white
    assert game.other_player() == black


def test_create_result_draw_on_initial_board():
    black = Player(id="id1", name="Player1")
    white = Player(id="id2", name="Player2")
    result = OthelloGame(board=OthelloBoard.initial(), black_player=black, white_player=white).create_result()
    assert result.is_draw
    assert result.winner == black
    assert result.loser == white


def test_create_result_black_wins_after_move():
    black = Player(id="id1", name="Player1")
    white = Player(id="id2", name="Player2")
    game = OthelloGame(board=OthelloBoard.initial(), black_player=black, white_player=white)
    game.make_move(game.load_potential_moves()[0])
    result = game.create_result()
    assert not result.is_draw
    assert result.winner == black
    assert result.loser == white


def test_create_forfeit_result():
    black = Player(id="id1", name="Player1")
    white = Player(id="id2", name="Player2")
    game = OthelloGame(board=OthelloBoard.initial(), black_player=black, white_player=white)
    white_forfeit = game.create_forfeit_result("id2")
    assert (white_forfeit.winner, white_forfeit.loser, white_forfeit.is_draw) == (black, white, False)
    black_forfeit = game.create_forfeit_result("id1")
    assert (black_forfeit.winner, black_forfeit.loser, black_forfeit.is_draw) == (white, black, False)
    assert game.create_forfeit_result("id3").is_draw


def test_to_ggf():
    game = OthelloGame(
        white_player=Player(id="id1", name="Player1"),
        black_player=Player(id="id2", name="Player2"),
        board=OthelloBoard.initial(),
    )
    game.make_move(Tile())
    game.make_move(Tile(row=1))
    game.make_move(Tile(col=1))
    game.make_move(Tile(row=1, col=1))
    assert game.to_ggf() == (
        "(;GM[Othello]PB[Player2]PW[Player1]TY[8]BO[8 ---------------------------O*------*O"
        "--------------------------- *]B[A1]W[A2]B[B1]W[B2])"
    )


def test_stored_game_round_trips_moves(conn):
    game = get_game(conn, "id10")
    game.make_move(Tile())
    game.make_move(Tile(row=1))
    with conn:
        set_game(conn, game, game_expire_time())
    stored = get_game(conn, "id10")
    assert stored.move_list == [Tile(), Tile(row=1)]
    assert stored.board == game.board


def test_connection_type(conn):
    assert isinstance(conn, sqlite3.Connection) and count_games(conn) == 2