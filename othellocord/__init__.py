"""Othello game service core: board rules, storage, ratings, challenges, embeds and rendering."""

__version__ = "0.1.0"