"""Interactive two-player chess in the terminal."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable
from typing import TextIO

from termchess.game import SAVE_FILE, Game, SaveFileError
from termchess.pieces import PieceType

_PROMOTION_CHOICES = {
    1: PieceType.QUEEN,
    2: PieceType.ROOK,
    3: PieceType.BISHOP,
    4: PieceType.KNIGHT,
}


def select_option(
    low: int, high: int, read: Callable[[], str], write: Callable[[str], object]
) -> int:
    """Read numbers until one lies between low and high inclusive, and return it."""
    while True:
        token = read()
        try:
            option = int(token)
        except ValueError:
            option = None
        if option is not None and low <= option <= high:
            return option
        write(f"Select number between {low} and {high}:\n")


def _token_reader(stream: TextIO) -> Callable[[], str]:
    def tokens():
        for line in iter(stream.readline, ""):
            yield from line.split()

    source = tokens()

    def read() -> str:
        try:
            return next(source)
        except StopIteration:
            raise EOFError from None

    return read


def _write(text: str) -> None:
    sys.stdout.write(text)
    sys.stdout.flush()


def _new_game(read: Callable[[], str]) -> Game:
    game = Game()
    _write("Select the type of the game: \n(1) No time control \n(2) Timed game \n")
    if select_option(1, 2, read, _write) == 2:
        _write("Choose total time per player in minutes(1-300)\n")
        minutes = select_option(1, 300, read, _write)
        _write("Choose added time per move in seconds(0-300)\n")
        seconds = select_option(0, 300, read, _write)
        game.set_time_control(minutes * 60 * 1000, seconds * 1000)
    return game


def _play_turn(game: Game, read: Callable[[], str], save_path: str) -> None:
    """Read and play one move, handling the save and pause commands."""

    def choose_promotion() -> PieceType:
        _write("Promote pawn into: \n(1) Queen \n(2) Rook \n(3) Bishop \n(4) Knight\n")
        return _PROMOTION_CHOICES[select_option(1, 4, read, _write)]

    while True:
        move_from = read()
        while move_from.lower() == "save":
            try:
                game.save(save_path)
                _write("Game saved\n")
            except SaveFileError as exc:
                _write(f"{exc}\n")
            move_from = read()
        if move_from.lower() == "pause":
            game.pause()
            return
        move_to = read()
        try:
            game.make_move(move_from, move_to, choose_promotion)
            return
        except ValueError as exc:
            _write(f"{exc}\n")


def main(argv: list[str] | None = None) -> int:
    """Run an interactive game on standard input and output."""
    parser = argparse.ArgumentParser(prog="termchess", description="Two-player chess.")
    parser.add_argument("--save-file", default=SAVE_FILE, help="file used by save and load")
    args = parser.parse_args(argv)

    read = _token_reader(sys.stdin)
    try:
        _write("Welcome to chess. Select one of the options below: \n(1) New Game \n(2) Load Game \n")
        if select_option(1, 2, read, _write) == 1:
            game = _new_game(read)
        else:
            try:
                game = Game.load(args.save_file)
            except SaveFileError as exc:
                _write(f"{exc}\n")
                return 0

        _write(game.render())
        while (message := game.game_over_message()) is None:
            _play_turn(game, read, args.save_file)
            _write(game.render())
        _write(message + "\n")
    except EOFError:
        _write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())