"""Chess pieces, their colours and the board size."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

BOARD_SIZE = 8


class Color(IntEnum):
    """Side a piece belongs to; NONE marks an empty square."""

    NONE = -1
    WHITE = 0
    BLACK = 1


class PieceType(IntEnum):
    """Kind of piece; EMPTY_SQUARE marks the absence of a piece."""

    EMPTY_SQUARE = -1
    KING = 0
    QUEEN = 1
    ROOK = 2
    BISHOP = 3
    KNIGHT = 4
    PAWN = 5


WHITE_SYMBOLS = {
    PieceType.KING: "\u2654",
    PieceType.QUEEN: "\u2655",
    PieceType.ROOK: "\u2656",
    PieceType.BISHOP: "\u2657",
    PieceType.KNIGHT: "\u2658",
    PieceType.PAWN: "\u2659",
}

BLACK_SYMBOLS = {
    PieceType.KING: "\u265A",
    PieceType.QUEEN: "\u265B",
    PieceType.ROOK: "\u265C",
    PieceType.BISHOP: "\u265D",
    PieceType.KNIGHT: "\u265E",
    PieceType.PAWN: "\u265F",
}


@dataclass(frozen=True)
class Piece:
    """An immutable piece; the default value is an empty square."""

    color: Color = Color.NONE
    type: PieceType = PieceType.EMPTY_SQUARE

    @staticmethod
    def empty() -> Piece:
        """Return the piece that stands for an empty square."""
        return Piece()

    def is_empty(self) -> bool:
        return self.color == Color.NONE or self.type == PieceType.EMPTY_SQUARE

    def symbol(self) -> str:
        """Unicode chess glyph, or a space for an empty square."""
        if self.color == Color.WHITE:
            return WHITE_SYMBOLS.get(self.type, " ")
        if self.color == Color.BLACK:
            return BLACK_SYMBOLS.get(self.type, " ")
        return " "

    def letter(self) -> str:
        """One-character code used to encode positions: upper case for white."""
        letter = chr(int(self.type) + ord("A"))
        return letter if self.color == Color.WHITE else letter.lower()