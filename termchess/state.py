"""Mutable game state and the record of positions seen so far."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class GameState:
    """Side to move, castling rights, king squares, en passant and clocks."""

    white_move: bool = True

    white_can_castle_long: bool = True
    white_can_castle_short: bool = True
    black_can_castle_long: bool = True
    black_can_castle_short: bool = True

    white_king: tuple[int, int] = (7, 4)
    black_king: tuple[int, int] = (0, 4)

    en_passant: tuple[int, int] | None = None

    white_time_ms: int = 0
    black_time_ms: int = 0
    increment_ms: int = 0
    timed_game: bool = False
    paused: bool = True

    def king_square(self, white: bool) -> tuple[int, int]:
        """Return the (row, col) of the white or black king."""
        return self.white_king if white else self.black_king


@dataclass
class PositionHistory:
    """Counts how often each encoded position has occurred, in first-seen order."""

    counts: dict[str, int] = field(default_factory=dict)

    def record(self, encoded: str) -> int:
        """Count one more occurrence of a position and return its total."""
        self.counts[encoded] = self.counts.get(encoded, 0) + 1
        return self.counts[encoded]

    def count(self, encoded: str) -> int:
        return self.counts.get(encoded, 0)

    def has_threefold_repetition(self) -> bool:
        return any(n >= 3 for n in self.counts.values())

    def items(self) -> list[tuple[str, int]]:
        return list(self.counts.items())

    def __len__(self) -> int:
        return len(self.counts)