# termchess

Two players, one terminal, one game of chess.

The board is drawn with Unicode chess symbols on a light and dark grid,
using ANSI escape codes for the colours. After every move the board is
turned so that the side to move sees its own pieces at the bottom.

## Installing

    pip install .

## Playing

    termchess

or, to use a save file other than `game_save.bin` in the current directory:

    termchess --save-file mygame.bin

When it starts you choose between:

1. **New Game**, then either no time control or a timed game. A timed game
   asks for the total time per player in minutes (1-300) and the time added
   after each move in seconds (0-300).
2. **Load Game**, which resumes the game stored in the save file. If the
   file cannot be read, the message is shown and the program exits.

Moves are entered as two squares separated by whitespace, for example
`e2 e4`. Castling is entered as the king's move (`e1 g1`, `e1 c1`), and
en passant as the pawn's diagonal move. When a pawn reaches the last rank
you choose a queen, rook, bishop or knight.

Two words can be typed in place of a move:

- `save` writes the game to the save file and waits for your move.
- `pause` stops the clock; it starts again with the next move.

An illegal move or a malformed square is explained and you are asked
again. The program ends when the game is over or when input runs out.

## How a game ends

- Checkmate: the player to move has no legal moves and is in check.
- Stalemate: the player to move has no legal moves and is not in check.
- Insufficient material: neither side has a pawn, rook or queen, nor two
  minor pieces (two bishops count only if they stand on squares of
  different colours).
- Threefold repetition: the same arrangement of pieces has occurred three
  times.
- Timeout, in a timed game: a player's clock has reached zero.

## Using it from Python

    from termchess.game import Game

    game = Game()
    game.make_move("e2", "e4", choose_promotion=None)
    print(game.render())
    print(game.piece_at("e4").symbol())

`make_move` takes an optional `choose_promotion` callable returning a
`termchess.pieces.PieceType`; without it a promoting pawn becomes a queen.
`Game.game_over_message()` gives the reason the game has ended, or `None`
while it goes on. `Game.set_time_control(total_time_ms, increment_ms)`
starts clocks, and `Game.pause()` stops them until the next move.
`game.save(path)` and `Game.load(path)` write and read save files; failures
raise `termchess.game.SaveFileError`.

Illegal moves raise `termchess.validator.InvalidMove`, and malformed squares
raise `termchess.locations.InvalidLocation`; both are subclasses of
`ValueError`. `termchess.locations.parse_location` and `square_name` convert
between square names and `(row, col)` coordinates, with row 0 the eighth
rank.

## What it does not do

There is no computer opponent: both sides are played by people at the same
keyboard. There are no draw offers, resignation or fifty-move rule, and
games cannot be exported in any standard chess notation.

## Running the tests

    pip install .[test]
    pytest