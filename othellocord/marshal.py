"""Compact text encodings for boards and move lists."""

from __future__ import annotations

import re
from typing import Iterable

from othellocord.board import BLACK, BOARD_SIZE, EMPTY, WHITE, OthelloBoard, Tile

_DISC_OR_RUN = re.compile(r"[bw]|[^bw]+")
_COUNT = re.compile(r"[+-]?[0-9]+")


class BoardFormatError(ValueError):
    """Raised when a board string cannot be decoded."""

    def __init__(self, text: str) -> None:
        super().__init__(f"failed to unmarshal board from string: {text!r}")
        self.text = text


def marshal_board(board: OthelloBoard) -> str:
    """Encode a board as ``b+`` or ``w+`` followed by run-length square data."""
    parts = ["b+" if board.is_black_move else "w+"]
    empty_run = 0
    for square in board.squares:
        if square == EMPTY:
            empty_run += 1
            continue
        if empty_run:
            parts.append(str(empty_run))
            empty_run = 0
        parts.append("b" if square == BLACK else "w")
    if empty_run:
        parts.append(str(empty_run))
    return "".join(parts)


def unmarshal_board(text: str) -> OthelloBoard:
    """Decode a board string produced by :func:`marshal_board`."""
    board = OthelloBoard()
    if not text:
        return board
    if text[0] == "b":
        board.is_black_move = True
    elif text[0] != "w":
        raise BoardFormatError(text)
    if len(text) == 1:
        return board
    if text[1] != "+":
        raise BoardFormatError(text)

    size = BOARD_SIZE * BOARD_SIZE
    index = 0
    for match in _DISC_OR_RUN.finditer(text, 2):
        part = match.group()
        if part in ("b", "w"):
            if not 0 <= index < size:
                raise BoardFormatError(text)
            board.squares[index] = BLACK if part == "b" else WHITE
            index += 1
        else:
            if not _COUNT.fullmatch(part):
                raise BoardFormatError(text)
            index += int(part)
    return board


def marshal_move_list(moves: Iterable[Tile]) -> str:
    """Encode moves as comma-terminated notations, e.g. ``A1,B2,``."""
    return "".join(f"{move}," for move in moves)


def unmarshal_move_list(text: str) -> list[Tile]:
    """Decode a comma-separated move list, ignoring empty fields."""
    return [Tile.parse(field) for field in text.split(",") if field]