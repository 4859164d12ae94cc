"""Small text helpers for padding and custom-id parsing."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def column(text: str, size: int, tail: str) -> str:
    """Truncate or space-pad ``text`` to ``size`` characters, then append ``tail``."""
    return text[:size].ljust(size) + tail


def right_pad(text: str, size: int) -> str:
    return column(text, size, "")


def left_pad(text: str, size: int) -> str:
    """Prefix spaces so the UTF-8 length of ``text`` reaches ``size``."""
    padding = size - len(text.encode("utf-8"))
    if padding > 0:
        return " " * padding + text
    return text


def parse_custom_id(custom_id: str) -> tuple[str, str]:
    """Split ``cond+key`` at the first ``+``; ``("", "")`` when there is none."""
    cond, sep, key = custom_id.partition("+")
    if not sep:
        logger.warning("received a message component without a '+' delimiter: %s", custom_id)
        return "", ""
    return cond, key