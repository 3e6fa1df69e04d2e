import io
import sys
import textwrap

import pytest

from tinychess.board import ChessBoard
from tinychess.game import ChessGame, parse_algebraic_notation
from tinychess.pieces import King, Pawn, Queen
from tinychess.types import Color, PieceType, Position

FAKE_ENGINE = textwrap.dedent(
    """
    import sys

    move = sys.argv[1]
    for line in sys.stdin:
        if line.startswith("go"):
            print("bestmove " + move)
        sys.stdout.flush()
    """
)


def make_game(moves="", **kwargs):
    out = io.StringIO()
    game = ChessGame(input_stream=io.StringIO(moves), output=out, **kwargs)
    return game, out


def sq(name):
    return Position.from_algebraic(name)


def test_parse_plain_and_dashed_agree():
    assert parse_algebraic_notation("e2-e4") == parse_algebraic_notation("e2e4")


def test_parse_squares_round_trip():
    move = parse_algebraic_notation("G1 F3")
    assert (move.start.to_algebraic(), move.end.to_algebraic()) == ("g1", "f3")


@pytest.mark.parametrize(
    "notation, kind",
    [
        ("e7e8q", PieceType.QUEEN),
        ("e7e8r", PieceType.ROOK),
        ("e7e8b", PieceType.BISHOP),
        ("e7e8n", PieceType.KNIGHT),
        ("e7e8x", PieceType.QUEEN),
        ("e7e8", PieceType.QUEEN),
    ],
)
def test_parse_promotion(notation, kind):
    assert parse_algebraic_notation(notation).promotion is kind


def test_parse_too_short():
    with pytest.raises(ValueError, match="Move too short"):
        parse_algebraic_notation("e2-e")


def test_legal_move_is_made():
    game, _ = make_game()
    assert game.make_move("e2e4") is True
    assert game.board.piece_at(sq("e4")).piece_type is PieceType.PAWN
    assert game.board.is_empty(sq("e2"))


def test_illegal_move_rejected():
    game, out = make_game()
    assert game.make_move("e2e5") is False
    assert "Illegal move." in out.getvalue()
    assert game.board.piece_at(sq("e2")) is not None and game.board.is_empty(sq("e5"))


def test_wrong_colour_rejected():
    game, out = make_game()
    assert game.make_move("e7e5") is False
    assert "That's not your piece!" in out.getvalue()


def test_empty_square_rejected():
    game, out = make_game()
    assert game.make_move("e4e5") is False
    assert "No piece at the specified position." in out.getvalue()


def test_off_board_rejected():
    game, out = make_game()
    assert game.make_move("z9e4") is False
    assert "Invalid move format" in out.getvalue()


def test_parse_error_reported():
    game, out = make_game()
    assert game.make_move("e2") is False
    assert "Move too short" in out.getvalue()


def test_promotion_choice_is_used():
    game, _ = make_game()
    board = ChessBoard(empty=True)
    board.place(sq("e1"), King(Color.WHITE))
    board.place(sq("a8"), King(Color.BLACK))
    board.place(sq("h7"), Pawn(Color.WHITE, has_moved=True))
    game.board = board
    assert game.make_move("h7h8n") is True
    assert board.piece_at(sq("h8")).piece_type is PieceType.KNIGHT


def test_play_turn_switches_player():
    game, _ = make_game("e2e4\n")
    game.play_turn()
    assert game.current_player is Color.BLACK


def test_play_turn_invalid_keeps_player():
    game, out = make_game("e2e5\n")
    game.play_turn()
    assert game.current_player is Color.WHITE
    assert "Invalid move. Please try again." in out.getvalue()


@pytest.mark.parametrize("word", ["quit", "exit", "  quit  "])
def test_quit(word):
    game, _ = make_game(word + "\n")
    game.play_turn()
    assert game.game_over
    assert game.game_result == "Game terminated by user"


def test_switch_player_twice_returns():
    game, _ = make_game()
    game.switch_player()
    assert game.current_player is Color.BLACK
    game.switch_player()
    assert game.current_player is Color.WHITE


def test_fools_mate_through_start_game():
    game, out = make_game("f2f3\ne7e5\ng2g4\nd8h4\n")
    game.start_game()
    assert game.game_result == "Black wins by checkmate!"
    assert "Check!" in out.getvalue()
    assert "Game Over: Black wins by checkmate!" in out.getvalue()


def test_stalemate_detected():
    game, _ = make_game()
    board = ChessBoard(empty=True)
    board.place(sq("a8"), King(Color.BLACK))
    board.place(sq("b6"), Queen(Color.WHITE))
    board.place(sq("c1"), King(Color.WHITE))
    game.board = board
    game.current_player = Color.BLACK
    game.check_game_end()
    assert game.game_over
    assert game.game_result == "Draw by stalemate!"


def test_start_position_not_over():
    game, _ = make_game()
    game.check_game_end()
    assert not game.game_over


def test_cpu_turn_uses_engine(tmp_path):
    script = tmp_path / "engine.py"
    script.write_text(FAKE_ENGINE)
    game, out = make_game(
        enable_cpu=True,
        cpu_color=Color.WHITE,
        engine_path=[sys.executable, str(script), "d2d4"],
    )
    game.play_turn()
    assert game.board.piece_at(sq("d4")).piece_type is PieceType.PAWN
    assert game.current_player is Color.BLACK
    assert "Stockfish plays: d2d4" in out.getvalue()


def test_cpu_engine_failure_ends_game(tmp_path):
    game, _ = make_game(
        enable_cpu=True, cpu_color=Color.WHITE, engine_path=str(tmp_path / "missing")
    )
    game.play_turn()
    assert game.game_over
    assert game.game_result == "Game ended due to engine error."


def test_human_colour_is_opposite_of_cpu():
    game, _ = make_game(enable_cpu=True, cpu_color=Color.WHITE)
    assert game.human_color is Color.BLACK