import pytest

from termchess.locations import InvalidLocation, parse_location, square_name
from termchess.pieces import BOARD_SIZE

ALL_NAMES = [f"{f}{r}" for f in "abcdefgh" for r in range(1, 9)]


def test_corners():
    assert parse_location("a8") == (0, 0)
    assert parse_location("h1") == (BOARD_SIZE - 1, BOARD_SIZE - 1)


@pytest.mark.parametrize("name", ALL_NAMES)
def test_round_trip(name):
    assert square_name(*parse_location(name)) == name


def test_every_coordinate_round_trips():
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            assert parse_location(square_name(row, col)) == (row, col)


def test_upper_case_column_accepted():
    assert parse_location("E2") == parse_location("e2")


@pytest.mark.parametrize("text", ["", "e", "e22", "e2 "])
def test_wrong_length(text):
    with pytest.raises(InvalidLocation, match="Use two characters"):
        parse_location(text)


@pytest.mark.parametrize("text", ["i1", "z5", "@4", "14"])
def test_bad_column(text):
    with pytest.raises(InvalidLocation, match="Must be a-h"):
        parse_location(text)


@pytest.mark.parametrize("text", ["a0", "a9", "hx"])
def test_bad_row(text):
    with pytest.raises(InvalidLocation, match="Must be 1-8"):
        parse_location(text)


def test_invalid_location_is_value_error():
    with pytest.raises(ValueError):
        parse_location("zz")


@pytest.mark.parametrize("row, col", [(-1, 0), (BOARD_SIZE, 0), (0, -1), (0, BOARD_SIZE)])
def test_square_name_out_of_range(row, col):
    with pytest.raises(InvalidLocation):
        square_name(row, col)