"""Othello board representation, move generation and move application."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

BOARD_SIZE = 8
HALF_SIZE = BOARD_SIZE // 2

EMPTY = 0
WHITE = 1
BLACK = 2

DIRECTIONS = (
    (0, 1),
    (0, -1),
    (1, 0),
    (-1, 0),
    (-1, -1),
    (-1, 1),
    (1, -1),
    (1, 1),
)

_SYMBOLS = {EMPTY: ".", WHITE: "w", BLACK: "b"}


class InvalidTileError(ValueError):
    """Raised when a tile notation such as ``a1`` cannot be parsed."""

    def __init__(self, text: str) -> None:
        super().__init__(f"invalid tile: {text!r}")
        self.text = text


@dataclass(frozen=True, order=True)
class Tile:
    """A square on the board, addressed by zero-based row and column."""

    row: int = 0
    col: int = 0

    @classmethod
    def parse(cls, text: str) -> Tile:
        """Parse notation like ``a1`` (column letter, row digit)."""
        if len(text) != 2:
            raise InvalidTileError(text)
        letter = text[0].upper() if text[0].isascii() else text[0]
        col = ord(letter) - ord("A")
        row = ord(text[1]) - ord("1")
        if row < 0 or row > BOARD_SIZE or col < 0 or col > BOARD_SIZE:
            raise InvalidTileError(text)
        return cls(row=row, col=col)

    def __str__(self) -> str:
        return f"{chr(self.col + ord('A'))}{self.row + 1}"


ZERO_TILE = Tile()

_TILES = tuple(Tile(row, col) for row in range(BOARD_SIZE) for col in range(BOARD_SIZE))


def all_tiles() -> tuple[Tile, ...]:
    """Every tile of the board in row-major order."""
    return _TILES


def in_bounds(row: int, col: int) -> bool:
    """Whether the coordinates lie on the board."""
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


@dataclass(frozen=True)
class RankTile:
    """A tile paired with a heuristic evaluation."""

    tile: Tile
    h: float

    @property
    def row(self) -> int:
        return self.tile.row

    @property
    def col(self) -> int:
        return self.tile.col


def _empty_squares() -> list[int]:
    return [EMPTY] * (BOARD_SIZE * BOARD_SIZE)


@dataclass
class OthelloBoard:
    """The discs on the board and whose turn it is."""

    is_black_move: bool = False
    squares: list[int] = field(default_factory=_empty_squares)

    @classmethod
    def initial(cls) -> OthelloBoard:
        """The standard starting position with black to move."""
        board = cls(is_black_move=True)
        board.set_square(HALF_SIZE - 1, HALF_SIZE - 1, WHITE)
        board.set_square(HALF_SIZE, HALF_SIZE, WHITE)
        board.set_square(HALF_SIZE - 1, HALF_SIZE, BLACK)
        board.set_square(HALF_SIZE, HALF_SIZE - 1, BLACK)
        return board

    def get_square(self, row: int, col: int) -> int:
        return self.squares[row * BOARD_SIZE + col]

    def set_square(self, row: int, col: int, color: int) -> None:
        self.squares[row * BOARD_SIZE + col] = color

    def with_square(self, notation: str, color: int) -> OthelloBoard:
        """A copy of this board with the square at ``notation`` set to ``color``."""
        tile = Tile.parse(notation)
        board = self.copy()
        board.set_square(tile.row, tile.col, color)
        return board

    def copy(self) -> OthelloBoard:
        return OthelloBoard(is_black_move=self.is_black_move, squares=list(self.squares))

    def white_score(self) -> int:
        return self.squares.count(WHITE)

    def black_score(self) -> int:
        return self.squares.count(BLACK)

    def _current_color(self) -> int:
        return BLACK if self.is_black_move else WHITE

    def _opponent_color(self) -> int:
        return WHITE if self.is_black_move else BLACK

    def iter_potential_moves(self, color: int) -> Iterator[Tile]:
        """Yield each empty tile that a disc of ``color`` flanks, once each."""
        opponent = self._opponent_color()
        seen: set[Tile] = set()
        for tile in _TILES:
            if self.get_square(tile.row, tile.col) != color:
                continue
            for d_row, d_col in DIRECTIONS:
                row, col = tile.row + d_row, tile.col + d_col
                count = 0
                while in_bounds(row, col) and self.get_square(row, col) == opponent:
                    row += d_row
                    col += d_col
                    count += 1
                if count > 0 and in_bounds(row, col) and self.get_square(row, col) == EMPTY:
                    target = Tile(row, col)
                    if target in seen:
                        continue
                    seen.add(target)
                    yield target

    def find_current_moves(self) -> list[Tile]:
        """All legal moves for the player whose turn it is."""
        return list(self.iter_potential_moves(self._current_color()))

    def count_potential_moves(self, color: int) -> int:
        return sum(1 for _ in self.iter_potential_moves(color))

    def make_move(self, move: Tile) -> None:
        """Place a disc for the side to move, flip flanked discs and pass the turn."""
        current = self._current_color()
        opponent = self._opponent_color()
        self.set_square(move.row, move.col, current)

        for d_row, d_col in DIRECTIONS:
            row, col = move.row + d_row, move.col + d_col
            flank = False
            while in_bounds(row, col):
                square = self.get_square(row, col)
                if square == current:
                    flank = True
                    break
                if square == EMPTY:
                    break
                row += d_row
                col += d_col
            if not flank:
                continue

            row, col = move.row + d_row, move.col + d_col
            while in_bounds(row, col) and self.get_square(row, col) == opponent:
                self.set_square(row, col, current)
                row += d_row
                col += d_col

        self.is_black_move = not self.is_black_move

    def make_moved(self, move: Tile) -> OthelloBoard:
        """A copy of this board with ``move`` applied."""
        board = self.copy()
        board.make_move(move)
        return board

    def __str__(self) -> str:
        header = " " + "".join(f"{chr(ord('a') + i)} " for i in range(BOARD_SIZE))
        lines = [header]
        for row in range(BOARD_SIZE):
            cells = "".join(f"{_SYMBOLS.get(self.get_square(row, col), '.')} " for col in range(BOARD_SIZE))
            lines.append(f"{row + 1} {cells}")
        return "\n".join(lines) + "\n"