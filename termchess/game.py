"""A game of chess: board, rules bookkeeping, clocks, rendering and save files."""

from __future__ import annotations

import struct
import time
from collections.abc import Callable
from pathlib import Path

from termchess.locations import parse_location
from termchess.pieces import BOARD_SIZE, Color, Piece, PieceType
from termchess.state import GameState, PositionHistory
from termchess.validator import MoveValidator

SAVE_FILE = "game_save.bin"

_BACK_RANK = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)
_PROMOTION_TYPES = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)

_CLEAR_SCREEN = "\033[2J\033[H"
_LIGHT_SQUARE = "\033[30;47m"
_DARK_SQUARE = "\033[30;100m"
_RESET = "\033[0m"

_STATE_FORMAT = struct.Struct("<5?4i2i3Q2?")
_SQUARE_FORMAT = struct.Struct("<ii")
_INT_FORMAT = struct.Struct("<i")
_ENCODED_LENGTH = BOARD_SIZE * BOARD_SIZE


class SaveFileError(RuntimeError):
    """Raised when a save file cannot be written or read."""


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class Game:
    """A chess game between two players sharing one board."""

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self.board: list[list[Piece]] = [
            [Piece.empty() for _ in range(BOARD_SIZE)] for _ in range(BOARD_SIZE)
        ]
        self.state = GameState()
        self.history = PositionHistory()
        self.validator = MoveValidator(self.board, self.state)
        self._clock = clock or _monotonic_ms
        self._last_move_timestamp = 0

        self._setup_back_rank(Color.BLACK, 0)
        self._setup_pawns(Color.BLACK, 1)
        self._setup_pawns(Color.WHITE, BOARD_SIZE - 2)
        self._setup_back_rank(Color.WHITE, BOARD_SIZE - 1)
        self.history.record(self.encode_board())

    def _setup_back_rank(self, color: Color, row: int) -> None:
        self.board[row][:] = [Piece(color, kind) for kind in _BACK_RANK]

    def _setup_pawns(self, color: Color, row: int) -> None:
        self.board[row][:] = [Piece(color, PieceType.PAWN) for _ in range(BOARD_SIZE)]

    def set_time_control(self, total_time_ms: int, increment_ms: int) -> None:
        """Give both players a clock with the given time and per-move increment."""
        self.state.timed_game = True
        self.state.white_time_ms = total_time_ms
        self.state.black_time_ms = total_time_ms
        self.state.increment_ms = increment_ms
        self.state.paused = True

    def encode_board(self) -> str:
        """Encode the position as one letter per square, row by row."""
        return "".join(piece.letter() for row in self.board for piece in row)

    def piece_at(self, location: str) -> Piece:
        row, col = parse_location(location)
        return self.board[row][col]

    def pause(self) -> None:
        """Stop the clocks until the next move is made."""
        self.state.paused = True

    def make_move(
        self,
        move_from: str,
        move_to: str,
        choose_promotion: Callable[[], PieceType] | None = None,
    ) -> None:
        """Play a move for the side to move; raise InvalidLocation or InvalidMove if illegal.

        choose_promotion is asked for the piece a pawn becomes on the last rank;
        without it the pawn becomes a queen.
        """
        row_from, col_from = parse_location(move_from)
        row_to, col_to = parse_location(move_to)
        self.validator.validate_move(row_from, col_from, row_to, col_to)

        self._handle_castling(row_from, col_from, row_to, col_to)
        self._handle_en_passant(row_from, col_from, row_to, col_to)
        self.board[row_to][col_to] = self.board[row_from][col_from]
        self.board[row_from][col_from] = Piece.empty()
        self._handle_promotion(row_to, col_to, choose_promotion)
        self._handle_time_control()
        self.state.white_move = not self.state.white_move
        self.history.record(self.encode_board())

    def _handle_castling(self, row_from: int, col_from: int, row_to: int, col_to: int) -> None:
        state = self.state
        moving = self.board[row_from][col_from]

        if moving.type == PieceType.KING:
            home = 7 if moving.color == Color.WHITE else 0
            if moving.color == Color.WHITE:
                state.white_can_castle_short = False
                state.white_can_castle_long = False
                state.white_king = (row_to, col_to)
            else:
                state.black_can_castle_short = False
                state.black_can_castle_long = False
                state.black_king = (row_to, col_to)
            if (row_from, col_from) == (home, 4) and row_to == home:
                if col_to == 6:
                    self.board[home][5] = self.board[home][7]
                    self.board[home][7] = Piece.empty()
                elif col_to == 2:
                    self.board[home][3] = self.board[home][0]
                    self.board[home][0] = Piece.empty()

        if moving.type == PieceType.ROOK:
            self._revoke_rook_rights(moving.color, row_from, col_from)

        target = self.board[row_to][col_to]
        if target.type == PieceType.ROOK:
            self._revoke_rook_rights(target.color, row_to, col_to)

    def _revoke_rook_rights(self, color: Color, row: int, col: int) -> None:
        state = self.state
        if color == Color.WHITE:
            if (row, col) == (7, 0):
                state.white_can_castle_long = False
            if (row, col) == (7, 7):
                state.white_can_castle_short = False
        else:
            if (row, col) == (0, 0):
                state.black_can_castle_long = False
            if (row, col) == (0, 7):
                state.black_can_castle_short = False

    def _handle_en_passant(self, row_from: int, col_from: int, row_to: int, col_to: int) -> None:
        is_pawn = self.board[row_from][col_from].type == PieceType.PAWN
        if is_pawn and self.state.en_passant == (row_to, col_to):
            self.board[row_from][col_to] = Piece.empty()
        if is_pawn and abs(row_to - row_from) == 2:
            self.state.en_passant = ((row_from + row_to) // 2, col_from)
        else:
            self.state.en_passant = None

    def _handle_promotion(
        self, row: int, col: int, choose_promotion: Callable[[], PieceType] | None
    ) -> None:
        promotion_row = 0 if self.state.white_move else BOARD_SIZE - 1
        color = Color.WHITE if self.state.white_move else Color.BLACK
        if self.board[row][col].type != PieceType.PAWN or row != promotion_row:
            return
        kind = choose_promotion() if choose_promotion else PieceType.QUEEN
        if kind not in _PROMOTION_TYPES:
            raise ValueError("Invalid promotion piece selected.")
        self.board[row][col] = Piece(color, PieceType(kind))

    def _handle_time_control(self) -> None:
        state = self.state
        if not state.timed_game:
            return
        now = self._clock()
        if state.paused:
            state.paused = False
            self._last_move_timestamp = now
            return
        spent = now - self._last_move_timestamp
        if state.white_move:
            if state.white_time_ms < spent:
                state.white_time_ms = 0
            else:
                state.white_time_ms += state.increment_ms - spent
        else:
            if state.black_time_ms < spent:
                state.black_time_ms = 0
            else:
                state.black_time_ms += state.increment_ms - spent
        self._last_move_timestamp = now

    def _piece_has_legal_moves(self, row: int, col: int) -> bool:
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                if (r, c) == (row, col):
                    continue
                try:
                    self.validator.validate_move(row, col, r, c)
                except ValueError:
                    continue
                return True
        return False

    def has_legal_moves(self) -> bool:
        """Whether the side to move has at least one legal move."""
        color = Color.WHITE if self.state.white_move else Color.BLACK
        return any(
            self._piece_has_legal_moves(row, col)
            for row in range(BOARD_SIZE)
            for col in range(BOARD_SIZE)
            if self.board[row][col].color == color
        )

    def has_pieces_for_mate(self) -> bool:
        """Whether either side still has material that could give checkmate."""
        minor_pieces = {Color.WHITE: 0, Color.BLACK: 0}
        bishop_square = {Color.WHITE: Color.NONE, Color.BLACK: Color.NONE}
        for row, pieces in enumerate(self.board):
            for col, piece in enumerate(pieces):
                if piece.is_empty() or piece.type == PieceType.KING:
                    continue
                if piece.type in (PieceType.PAWN, PieceType.ROOK, PieceType.QUEEN):
                    return True
                square = Color.WHITE if (row + col) % 2 == 0 else Color.BLACK
                side = Color.WHITE if piece.color == Color.WHITE else Color.BLACK
                if piece.type == PieceType.KNIGHT or (
                    piece.type == PieceType.BISHOP and square != bishop_square[side]
                ):
                    minor_pieces[side] += 1
                if piece.type == PieceType.BISHOP:
                    bishop_square[side] = square
        return any(count >= 2 for count in minor_pieces.values())

    def has_threefold_repetition(self) -> bool:
        return self.history.has_threefold_repetition()

    def game_over_message(self) -> str | None:
        """Describe how the game ended, or return None while it goes on."""
        state = self.state
        if not self.has_legal_moves():
            king_row, king_col = state.king_square(state.white_move)
            if self.validator.is_king_capturable(king_row, king_col):
                return f"{'Black' if state.white_move else 'White'} wins!"
            side = "White" if state.white_move else "Black"
            return f"Game ends in a draw because {side} has no legal moves."
        if not self.has_pieces_for_mate():
            return "Game ends in a draw because of lack of pieces for checkmate."
        if self.has_threefold_repetition():
            return "Game ends in a draw due to threefold repetition."
        if state.timed_game and (state.white_time_ms <= 0 or state.black_time_ms <= 0):
            winner = "Black" if state.white_time_ms <= 0 else "White"
            return f"{winner} wins due to timeout!"
        return None

    @staticmethod
    def _columns_line(reverse: bool) -> str:
        letters = [chr(ord("a") + i) for i in range(BOARD_SIZE)]
        if reverse:
            letters.reverse()
        return "  " + "".join(f"{letter} " for letter in letters) + "\n"

    def render(self) -> str:
        """Return the screen showing the board from the mover's side, the clock and a prompt."""
        state = self.state
        reverse = not state.white_move
        parts = [_CLEAR_SCREEN, self._columns_line(reverse)]
        for i in range(BOARD_SIZE):
            label = i + 1 if reverse else BOARD_SIZE - i
            row = list(reversed(self.board[BOARD_SIZE - 1 - i])) if reverse else self.board[i]
            cells = []
            for j, piece in enumerate(row):
                background = _LIGHT_SQUARE if (i + j) % 2 == 0 else _DARK_SQUARE
                text = piece.symbol()
                if j != BOARD_SIZE - 1 or piece.is_empty():
                    text += " "
                cells.append(background + text)
            tail = "" if row[-1].is_empty() else " "
            parts.append(f"{label} {''.join(cells)}{_RESET}{tail} {label}\n")
        parts.append(self._columns_line(reverse))

        time_left = state.white_time_ms if state.white_move else state.black_time_ms
        seconds = time_left // 1000
        paused = " PAUSED" if state.paused else ""
        parts.append(f"Time left: {seconds // 60}:{seconds % 60}{paused}\n")
        parts.append(f"{'White' if state.white_move else 'Black'}'s move (e.g. e2 e4): ")
        return "".join(parts)

    def save(self, path: str | Path = SAVE_FILE) -> None:
        """Write the game to a binary save file."""
        state = self.state
        en_passant = state.en_passant or (-1, -1)
        chunks = [
            _STATE_FORMAT.pack(
                state.white_move,
                state.white_can_castle_long,
                state.white_can_castle_short,
                state.black_can_castle_long,
                state.black_can_castle_short,
                *state.white_king,
                *state.black_king,
                *en_passant,
                state.white_time_ms,
                state.black_time_ms,
                state.increment_ms,
                state.timed_game,
                state.paused,
            )
        ]
        chunks.extend(
            _SQUARE_FORMAT.pack(piece.type, piece.color) for row in self.board for piece in row
        )
        chunks.append(_INT_FORMAT.pack(len(self.history)))
        for encoded, count in self.history.items():
            chunks.append(encoded.encode("ascii"))
            chunks.append(_INT_FORMAT.pack(count))
        try:
            Path(path).write_bytes(b"".join(chunks))
        except OSError as exc:
            raise SaveFileError("Could not open save file.") from exc

    @classmethod
    def load(cls, path: str | Path = SAVE_FILE) -> Game:
        """Read a game from a binary save file; its clocks start paused."""
        try:
            data = Path(path).read_bytes()
        except OSError as exc:
            raise SaveFileError("Could not open save file.") from exc
        try:
            return cls._from_bytes(data)
        except (struct.error, ValueError, UnicodeDecodeError) as exc:
            raise SaveFileError("Corrupt save file.") from exc

    @classmethod
    def _from_bytes(cls, data: bytes) -> Game:
        fields = _STATE_FORMAT.unpack_from(data, 0)
        offset = _STATE_FORMAT.size
        (
            white_move, wcl, wcs, bcl, bcs,
            wkr, wkc, bkr, bkc, ep_row, ep_col,
            white_time, black_time, increment, timed, _paused,
        ) = fields
        state = GameState(
            white_move=white_move,
            white_can_castle_long=wcl,
            white_can_castle_short=wcs,
            black_can_castle_long=bcl,
            black_can_castle_short=bcs,
            white_king=(wkr, wkc),
            black_king=(bkr, bkc),
            en_passant=None if (ep_row, ep_col) == (-1, -1) else (ep_row, ep_col),
            white_time_ms=white_time,
            black_time_ms=black_time,
            increment_ms=increment,
            timed_game=timed,
            paused=True,
        )

        game = cls()
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                kind, color = _SQUARE_FORMAT.unpack_from(data, offset)
                offset += _SQUARE_FORMAT.size
                game.board[row][col] = Piece(Color(color), PieceType(kind))

        (size,) = _INT_FORMAT.unpack_from(data, offset)
        offset += _INT_FORMAT.size
        if size < 0:
            raise ValueError("negative position count")
        history = PositionHistory()
        for _ in range(size):
            raw = data[offset:offset + _ENCODED_LENGTH]
            if len(raw) != _ENCODED_LENGTH:
                raise ValueError("truncated position")
            offset += _ENCODED_LENGTH
            (count,) = _INT_FORMAT.unpack_from(data, offset)
            offset += _INT_FORMAT.size
            history.counts[raw.decode("ascii")] = count

        game.state = state
        game.history = history
        game.validator = MoveValidator(game.board, game.state)
        return game