# tinychess

A small chess game for the terminal. Two people can play each other at the
keyboard, or one person can play against a UCI engine such as Stockfish.

## Installing

    pip install .

## Playing

    tinychess

You are first asked to choose a mode:

- `2` — player against the computer; you are then asked whether the engine
  plays white (`w` or `W`) or black (any other answer)
- anything else — player against player

Moves are typed in coordinate notation, from-square then to-square:
`e2e4` or `e2-e4`. A fifth letter picks the piece a pawn promotes to
(`q`, `r`, `b` or `n`; queen when left out or unrecognised), for example
`e7e8n`. Castling is entered as the king's two-square move, such as `e1g1`.
En passant captures are supported. Type `quit` or `exit` (or end the input)
to leave the game.

The board is drawn before every turn with white's pieces in capitals and
black's in lower case, rank 8 at the top. Illegal moves are refused with a
reason, and "Check!" is printed when a move gives check. The game ends on
checkmate or stalemate.

### The computer opponent

In player-against-computer mode the engine is started afresh for each of its
moves, given the position as FEN and asked to search to depth 20. By default
the executable `stockfish.exe` is run; choose another with `--engine`:

    tinychess --engine stockfish

If the engine cannot be started or gives no usable move, the game ends with
"Game ended due to engine error."

## Using it as a library

    from tinychess.board import ChessBoard
    from tinychess.types import Color, Move, Position

    board = ChessBoard()
    board.move_piece(Move(Position.from_algebraic("e2"),
                          Position.from_algebraic("e4")))
    print(board.render())
    print(board.fen(Color.BLACK))
    print(len(board.all_legal_moves(Color.BLACK)))

`ChessBoard(empty=True)` gives an empty board, and `place()` puts pieces
(made with `tinychess.pieces.make_piece`) on chosen squares, so any
position can be set up. The board also answers `is_in_check`,
`is_checkmate`, `is_stalemate`, `can_castle` and `is_square_attacked`.

`ChessGame` in `tinychess.game` drives a whole game and accepts its own
input and output streams, so it can be scripted. `tinychess.engine` has
`best_move_from_stockfish(fen, stockfish_path)` and `parse_bestmove(output)`
for talking to a UCI engine directly; failures raise `EngineError`.

## What it does not do

- No draw by the fifty-move rule, threefold repetition or insufficient
  material; only checkmate and stalemate end a game.
- The FEN produced holds piece placement and side to move only; castling
  rights, en passant square and move counters are always `- - 0 1`.
- Moves played by the engine are not checked for legality.
- Games cannot be saved, loaded or undone, and there is no move history.

## Running the tests

    pip install ".[test]"
    pytest