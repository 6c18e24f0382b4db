"""Legality checks for chess moves on a shared board."""

from __future__ import annotations

from collections.abc import Iterable

from termchess.pieces import BOARD_SIZE, Color, Piece, PieceType
from termchess.state import GameState

Board = list[list[Piece]]

_KING_OFFSETS = ((1, 1), (0, 1), (-1, 1), (1, 0), (-1, 0), (1, -1), (0, -1), (-1, -1))
_KNIGHT_OFFSETS = ((2, 1), (1, 2), (-1, 2), (-2, 1), (2, -1), (1, -2), (-1, -2), (-2, -1))
_ROOK_DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1))
_BISHOP_DIRECTIONS = ((1, 1), (-1, 1), (1, -1), (-1, -1))


class InvalidMove(ValueError):
    """Raised when a requested move breaks the rules."""


def _on_board(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def _sign(n: int) -> int:
    return (n > 0) - (n < 0)


class MoveValidator:
    """Checks moves for the side to move against a board and game state."""

    def __init__(self, board: Board, state: GameState) -> None:
        self.board = board
        self.state = state

    def _is_enemy(self, row: int, col: int, kinds: Iterable[PieceType]) -> bool:
        if not _on_board(row, col):
            return False
        enemy = Color.BLACK if self.state.white_move else Color.WHITE
        piece = self.board[row][col]
        return piece.type in kinds and piece.color == enemy

    def _ray_attack(self, row: int, col: int, directions, kinds) -> bool:
        for dr, dc in directions:
            r, c = row + dr, col + dc
            while _on_board(r, c):
                if not self.board[r][c].is_empty():
                    if self._is_enemy(r, c, kinds):
                        return True
                    break
                r, c = r + dr, c + dc
        return False

    def _is_attacked(self, row: int, col: int) -> bool:
        if any(self._is_enemy(row + dr, col + dc, (PieceType.KING,)) for dr, dc in _KING_OFFSETS):
            return True
        pawn_dir = -1 if self.state.white_move else 1
        if self._is_enemy(row + pawn_dir, col + 1, (PieceType.PAWN,)) or self._is_enemy(
            row + pawn_dir, col - 1, (PieceType.PAWN,)
        ):
            return True
        if any(
            self._is_enemy(row + dr, col + dc, (PieceType.KNIGHT,)) for dr, dc in _KNIGHT_OFFSETS
        ):
            return True
        if self._ray_attack(row, col, _ROOK_DIRECTIONS, (PieceType.QUEEN, PieceType.ROOK)):
            return True
        return self._ray_attack(row, col, _BISHOP_DIRECTIONS, (PieceType.QUEEN, PieceType.BISHOP))

    def is_king_capturable(self, row: int, col: int) -> bool:
        """Whether the side to move's king would be attacked standing on (row, col)."""
        king_row, king_col = self.state.king_square(self.state.white_move)
        king = self.board[king_row][king_col]
        self.board[king_row][king_col] = Piece.empty()
        try:
            return self._is_attacked(row, col)
        finally:
            self.board[king_row][king_col] = king

    def _validate_castle(self, row_from: int, col_from: int, col_to: int) -> None:
        if col_from != 4:
            raise InvalidMove("Invalid castle: King not on starting square.")
        is_white = self.board[row_from][col_from].color == Color.WHITE
        row = 7 if is_white else 0
        state = self.state

        if col_to == 2:
            allowed = state.white_can_castle_long if is_white else state.black_can_castle_long
            if not allowed:
                raise InvalidMove("Cannot castle long.")
            if any(not self.board[row][c].is_empty() for c in (1, 2, 3)):
                raise InvalidMove("Cannot castle through pieces.")
            if any(self.is_king_capturable(row, c) for c in (4, 3, 2)):
                raise InvalidMove("Cannot castle through or into check.")
        elif col_to == 6:
            allowed = state.white_can_castle_short if is_white else state.black_can_castle_short
            if not allowed:
                raise InvalidMove("Cannot castle short.")
            if any(not self.board[row][c].is_empty() for c in (5, 6)):
                raise InvalidMove("Cannot castle through pieces.")
            if any(self.is_king_capturable(row, c) for c in (4, 5, 6)):
                raise InvalidMove("Cannot castle through or into check.")
        else:
            raise InvalidMove("Invalid castle target square.")

    def _validate_king(self, row_from: int, col_from: int, row_to: int, col_to: int) -> None:
        if abs(col_from - col_to) == 2 and row_from == row_to:
            self._validate_castle(row_from, col_from, col_to)
            return
        if abs(col_from - col_to) > 1 or abs(row_from - row_to) > 1:
            raise InvalidMove("Invalid move. King can only move to adjacent squares.")
        if self.is_king_capturable(row_to, col_to):
            raise InvalidMove("Invalid move. King cannot move into check.")

    def _validate_sliding(
        self, row_from, col_from, row_to, col_to, allow_diagonal: bool, allow_straight: bool
    ) -> None:
        row_diff = row_to - row_from
        col_diff = col_to - col_from
        is_diagonal = abs(row_diff) == abs(col_diff)
        is_straight = row_from == row_to or col_from == col_to

        if not ((allow_straight and is_straight) or (allow_diagonal and is_diagonal)):
            if allow_straight and not allow_diagonal:
                raise InvalidMove("Invalid rook move. Move must be a straight line.")
            if allow_diagonal and not allow_straight:
                raise InvalidMove("Invalid bishop move. Move must be a diagonal line.")
            raise InvalidMove("Invalid queen move. Move must be a diagonal or straight line.")

        dr, dc = _sign(row_diff), _sign(col_diff)
        r, c = row_from + dr, col_from + dc
        while (r, c) != (row_to, col_to):
            if not self.board[r][c].is_empty():
                raise InvalidMove("Invalid move. Path is blocked.")
            r, c = r + dr, c + dc

    @staticmethod
    def _validate_knight(row_from, col_from, row_to, col_to) -> None:
        if sorted((abs(row_to - row_from), abs(col_to - col_from))) != [1, 2]:
            raise InvalidMove("Invalid knight move. Must move in an L-shape.")

    def _validate_pawn(self, row_from, col_from, row_to, col_to) -> None:
        starting_row = 6 if self.state.white_move else 1
        direction = -1 if self.state.white_move else 1
        row_diff = row_to - row_from
        col_diff = col_to - col_from

        if abs(col_diff) == 1 and row_diff == direction:
            if not self.board[row_to][col_to].is_empty():
                return
            if self.state.en_passant == (row_to, col_to):
                return
            raise InvalidMove("Invalid pawn move. Diagonal move must capture.")

        if col_diff == 0:
            if not self.board[row_to][col_to].is_empty():
                raise InvalidMove("Invalid pawn move. Cannot capture vertically.")
            if row_diff == direction:
                return
            if row_diff == 2 * direction and row_from == starting_row:
                if not self.board[row_from + direction][col_from].is_empty():
                    raise InvalidMove("Invalid pawn move. Cannot jump over piece.")
                return
            raise InvalidMove("Invalid pawn move. Invalid vertical position.")

        raise InvalidMove(
            "Invalid pawn move. Pawns can only move forward or capture diagonally."
        )

    def _validate_king_safety(self, row_from, col_from, row_to, col_to) -> None:
        captured = self.board[row_to][col_to]
        self.board[row_to][col_to] = self.board[row_from][col_from]
        self.board[row_from][col_from] = Piece.empty()
        try:
            king_row, king_col = self.state.king_square(self.state.white_move)
            if self.is_king_capturable(king_row, king_col):
                raise InvalidMove("Invalid move. Your king will be in danger.")
        finally:
            self.board[row_from][col_from] = self.board[row_to][col_to]
            self.board[row_to][col_to] = captured

    def validate_move(self, row_from: int, col_from: int, row_to: int, col_to: int) -> None:
        """Raise InvalidMove unless the side to move may make this move."""
        if (row_from, col_from) == (row_to, col_to):
            raise InvalidMove("Invalid move. Select 2 different squares.")

        moving = self.board[row_from][col_from]
        target = self.board[row_to][col_to]
        own_color = Color.WHITE if self.state.white_move else Color.BLACK

        if moving.color != own_color:
            raise InvalidMove("Invalid move. Move only your own pieces.")
        if not target.is_empty() and target.color == moving.color:
            raise InvalidMove("Invalid move. Cannot capture your own piece.")

        kind = moving.type
        if kind == PieceType.KING:
            self._validate_king(row_from, col_from, row_to, col_to)
        elif kind == PieceType.QUEEN:
            self._validate_sliding(row_from, col_from, row_to, col_to, True, True)
        elif kind == PieceType.ROOK:
            self._validate_sliding(row_from, col_from, row_to, col_to, False, True)
        elif kind == PieceType.BISHOP:
            self._validate_sliding(row_from, col_from, row_to, col_to, True, False)
        elif kind == PieceType.KNIGHT:
            self._validate_knight(row_from, col_from, row_to, col_to)
        elif kind == PieceType.PAWN:
            self._validate_pawn(row_from, col_from, row_to, col_to)
        else:
            raise RuntimeError("Unknown piece type.")

        if kind != PieceType.KING:
            self._validate_king_safety(row_from, col_from, row_to, col_to)