"""Conversion between square names such as 'e2' and board coordinates."""

from __future__ import annotations

from termchess.pieces import BOARD_SIZE


class InvalidLocation(ValueError):
    """Raised for text that does not name a square on the board."""


def _ascii_lower(ch: str) -> str:
    return ch.lower() if "A" <= ch <= "Z" else ch


def parse_location(text: str) -> tuple[int, int]:
    """Return (row, col) for a square name; row 0 is the eighth rank."""
    if len(text) != 2:
        raise InvalidLocation("Invalid location. Use two characters like 'e2'.")
    col = ord(_ascii_lower(text[0])) - ord("a")
    if not 0 <= col < BOARD_SIZE:
        raise InvalidLocation("Invalid column. Must be a-h.")
    row = BOARD_SIZE - (ord(text[1]) - ord("0"))
    if not 0 <= row < BOARD_SIZE:
        raise InvalidLocation("Invalid row. Must be 1-8.")
    return row, col


def square_name(row: int, col: int) -> str:
    """Return the name of the square at (row, col)."""
    if not 0 <= col < BOARD_SIZE:
        raise InvalidLocation("Invalid column. Must be a-h.")
    if not 0 <= row < BOARD_SIZE:
        raise InvalidLocation("Invalid row. Must be 1-8.")
    return f"{chr(ord('a') + col)}{BOARD_SIZE - row}"