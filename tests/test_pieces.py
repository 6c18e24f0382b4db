import pytest

from termchess.pieces import BLACK_SYMBOLS, WHITE_SYMBOLS, Color, Piece, PieceType

REAL_TYPES = [t for t in PieceType if t != PieceType.EMPTY_SQUARE]


def test_empty_piece_is_empty():
    assert Piece.empty().is_empty()
    assert Piece.empty() == Piece()


@pytest.mark.parametrize("color", [Color.WHITE, Color.BLACK])
def test_colored_empty_square_is_empty(color):
    assert Piece(color, PieceType.EMPTY_SQUARE).is_empty()


@pytest.mark.parametrize("kind", REAL_TYPES)
def test_colorless_piece_is_empty(kind):
    assert Piece(Color.NONE, kind).is_empty()


@pytest.mark.parametrize("kind", REAL_TYPES)
def test_real_pieces_are_not_empty(kind):
    assert not Piece(Color.WHITE, kind).is_empty()
    assert not Piece(Color.BLACK, kind).is_empty()


def test_symbols_match_glyphs():
    assert Piece(Color.WHITE, PieceType.KING).symbol() == "\u2654"
    assert Piece(Color.BLACK, PieceType.PAWN).symbol() == "\u265F"


@pytest.mark.parametrize("kind", REAL_TYPES)
def test_symbol_tables(kind):
    assert Piece(Color.WHITE, kind).symbol() == WHITE_SYMBOLS[kind]
    assert Piece(Color.BLACK, kind).symbol() == BLACK_SYMBOLS[kind]


def test_empty_symbol_is_space():
    assert Piece.empty().symbol() == " "


def test_letters():
    assert Piece(Color.WHITE, PieceType.KING).letter() == "A"
    assert Piece(Color.BLACK, PieceType.KING).letter() == "a"


@pytest.mark.parametrize("kind", REAL_TYPES)
def test_letter_case_follows_color(kind):
    white = Piece(Color.WHITE, kind).letter()
    black = Piece(Color.BLACK, kind).letter()
    assert white.isupper()
    assert black == white.lower()


def test_letters_are_distinct():
    letters = {Piece(Color.WHITE, t).letter() for t in REAL_TYPES}
    letters |= {Piece(Color.BLACK, t).letter() for t in REAL_TYPES}
    letters.add(Piece.empty().letter())
    assert len(letters) == 2 * len(REAL_TYPES) + 1


def test_pieces_are_immutable():
    piece = Piece(Color.WHITE, PieceType.ROOK)
    with pytest.raises(AttributeError):
        piece.color = Color.BLACK  # type: ignore[misc]
    assert piece.color == Color.WHITE
    assert piece.symbol() == WHITE_SYMBOLS[PieceType.ROOK]