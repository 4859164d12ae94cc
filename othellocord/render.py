"""Drawing boards, discs and move analyses as images."""

from __future__ import annotations

import argparse
import functools
import logging
import os
from typing import Optional, Sequence

from PIL import Image, ImageDraw, ImageFont

from othellocord.board import BLACK, BOARD_SIZE, WHITE, OthelloBoard, RankTile, Tile, all_tiles

logger = logging.getLogger(__name__)

DISC_SIZE = 100
LINE_THICKNESS = 4
SIDE_OFFSET = 40
TILE_SIZE = DISC_SIZE + LINE_THICKNESS
DOT_SIZE = 8
SIDE_FONT = 25
ANALYSIS_FONT = 23

GREEN_BG = (88, 184, 91, 255)
WOOD_BG = (213, 176, 124, 255)
GREY_BG = (128, 128, 128, 255)
BLACK_BG = (0, 0, 0, 255)
CYAN_BG = (0, 255, 255, 255)
YELLOW_BG = (255, 255, 0, 255)
OUTLINE_BG = (40, 40, 40, 255)
BLACK_FILL = (20, 20, 20, 255)
WHITE_FILL = (250, 250, 250, 255)
NO_FILL = (0, 0, 0, 0)

DOT_LOCATIONS = ((2, 2), (6, 6), (2, 6), (6, 2))

BOARD_PATH = "test_board.png"
DISC_PATH = "test_disc.png"

Color = tuple[int, int, int, int]


@functools.lru_cache(maxsize=None)
def _font(size: int) -> ImageFont.ImageFont:
    for name in ("cour.ttf", "Courier New.ttf", "DejaVuSansMono.ttf", "LiberationMono-Regular.ttf"):
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    try:
        return ImageFont.load_default(size=size)
    except TypeError:
        return ImageFont.load_default()


def _draw_center_string(
    draw: ImageDraw.ImageDraw,
    font_size: int,
    text: str,
    fill: Color,
    x: int,
    y: int,
    width: int,
    height: int,
) -> None:
    """Draw ``text`` centred in the box at ``(x, y)`` of the given size."""
    font = _font(font_size)
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    x_draw = x + (width - (right - left)) / 2 - left
    y_draw = y + (height - (bottom - top)) / 2 - top
    draw.text((x_draw, y_draw), text, fill=fill, font=font)


def _tile_origin(tile: Tile) -> tuple[int, int]:
    return (
        SIDE_OFFSET + tile.col * TILE_SIZE - LINE_THICKNESS // 2,
        SIDE_OFFSET + tile.row * TILE_SIZE - LINE_THICKNESS // 2,
    )


def draw_background(board_size: int = BOARD_SIZE) -> Image.Image:
    """The empty board with grid, coordinate labels and marker dots."""
    width = TILE_SIZE * board_size + LINE_THICKNESS + SIDE_OFFSET
    height = width
    image = Image.new("RGBA", (width, height), NO_FILL)
    draw = ImageDraw.Draw(image)

    draw.rectangle((0, 0, width, height), fill=BLACK_BG)
    draw.rectangle(
        (SIDE_OFFSET, SIDE_OFFSET, width - LINE_THICKNESS, height - LINE_THICKNESS), fill=GREEN_BG
    )

    for i in range(board_size + 1):
        offset = i * TILE_SIZE + SIDE_OFFSET
        draw.line([(SIDE_OFFSET, offset), (width, offset)], fill=BLACK_BG, width=LINE_THICKNESS)
        draw.line([(offset, SIDE_OFFSET), (offset, height)], fill=BLACK_BG, width=LINE_THICKNESS)

    for i in range(board_size):
        _draw_center_string(
            draw, SIDE_FONT, chr(ord("A") + i), WHITE_FILL, SIDE_OFFSET + i * TILE_SIZE, 0, TILE_SIZE, SIDE_OFFSET
        )
        _draw_center_string(
            draw, SIDE_FONT, str(i + 1), WHITE_FILL, 0, SIDE_OFFSET + i * TILE_SIZE, SIDE_OFFSET, TILE_SIZE
        )

    for col, row in DOT_LOCATIONS:
        x = SIDE_OFFSET + col * TILE_SIZE
        y = SIDE_OFFSET + row * TILE_SIZE
        draw.ellipse((x - DOT_SIZE, y - DOT_SIZE, x + DOT_SIZE, y + DOT_SIZE), fill=BLACK_FILL)

    return image


def draw_disc(fill_color: Color, thickness: float) -> Image.Image:
    """A single outlined disc on a transparent tile-sized image."""
    image = Image.new("RGBA", (TILE_SIZE, TILE_SIZE), NO_FILL)
    draw = ImageDraw.Draw(image)
    center = LINE_THICKNESS // 2 + TILE_SIZE // 2
    radius = TILE_SIZE // 2 - 6
    draw.ellipse(
        (center - radius, center - radius, center + radius, center + radius),
        fill=fill_color,
        outline=OUTLINE_BG,
        width=max(1, round(thickness)),
    )
    return image


def format_heuristic(value: float) -> str:
    """A heuristic with one decimal, cut to 4 characters (5 when negative)."""
    text = f"{value:.1f}"
    limit = 4 if value >= 0.0 else 5
    return text[:limit]


class Renderer:
    """Draws boards from pre-rendered discs and background."""

    def __init__(self) -> None:
        self.white_disc = draw_disc(WHITE_FILL, 2.0)
        self.black_disc = draw_disc(BLACK_FILL, 2.0)
        self.no_disc = draw_disc(NO_FILL, 3.0)
        self.background = draw_background(BOARD_SIZE)

    def _blank(self) -> Image.Image:
        return Image.new("RGBA", self.background.size, NO_FILL)

    def draw_board(self, board: OthelloBoard) -> Image.Image:
        return self.draw_board_moves(board, ())

    def draw_board_moves(self, board: OthelloBoard, moves: Optional[Sequence[Tile]]) -> Image.Image:
        """The board with an empty ring marking each of ``moves``."""
        image = self._blank()
        self.draw_board_discs(board, image)
        for move in moves or ():
            image.alpha_composite(self.no_disc, dest=_tile_origin(move))
        return image

    def draw_board_analysis(self, board: OthelloBoard, best_moves: Sequence[RankTile]) -> Image.Image:
        """The board with each move's heuristic written on its tile; the first is highlighted."""
        image = self._blank()
        self.draw_board_discs(board, image)
        draw = ImageDraw.Draw(image)
        for index, move in enumerate(best_moves):
            fill = CYAN_BG if index == 0 else YELLOW_BG
            _draw_center_string(
                draw,
                ANALYSIS_FONT,
                format_heuristic(move.h),
                fill,
                SIDE_OFFSET + move.col * TILE_SIZE,
                SIDE_OFFSET + move.row * TILE_SIZE,
                TILE_SIZE,
                TILE_SIZE,
            )
        return image

    def draw_board_discs(self, board: OthelloBoard, image: Image.Image) -> None:
        """Paint the background and every disc of ``board`` onto ``image``."""
        image.paste(self.background, (0, 0))
        for tile in all_tiles():
            square = board.get_square(tile.row, tile.col)
            if square == BLACK:
                disc = self.black_disc
            elif square == WHITE:
                disc = self.white_disc
            else:
                continue
            image.alpha_composite(disc, dest=_tile_origin(tile))


def _remove(path: str) -> None:
    try:
        os.remove(path)
    except OSError as error:
        logger.error("failed to remove file %s: %s", path, error)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Render a sample analysis board and a sample disc to PNG files."""
    parser = argparse.ArgumentParser(prog="othellocord-render", description="Render sample images.")
    parser.add_argument("--board", default=BOARD_PATH, help="output path of the board image")
    parser.add_argument("--disc", default=DISC_PATH, help="output path of the disc image")
    args = parser.parse_args(argv)

    board = OthelloBoard.initial()
    moves = [
        RankTile(tile=tile, h=float(4 - 8 * (index % 2)))
        for index, tile in enumerate(board.find_current_moves())
    ]

    renderer = Renderer()
    board_image = renderer.draw_board_analysis(OthelloBoard.initial(), moves)
    _remove(args.board)
    board_image.save(args.board, format="PNG")

    disc_image = draw_disc(WHITE_FILL, 1)
    _remove(args.disc)
    disc_image.save(args.disc, format="PNG")
    return 0