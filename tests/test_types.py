import pytest

from tinychess.types import Color, Move, PieceType, Position


def test_opponent_swaps_and_is_involution():
    assert Color.WHITE.opponent() is Color.BLACK
    assert Color.BLACK.opponent() is Color.WHITE
    for color in Color:
        assert color.opponent().opponent() is color


def test_default_position_is_origin():
    assert Position() == Position(0, 0)


@pytest.mark.parametrize(
    "row, col, valid",
    [(0, 0, True), (7, 7, True), (8, 0, False), (0, 8, False), (-1, 3, False), (3, -1, False)],
)
def test_is_valid_bounds(row, col, valid):
    assert Position(row, col).is_valid() is valid


def test_from_algebraic_reads_file_then_rank():
    assert Position.from_algebraic("e4") == Position(3, 4)


@pytest.mark.parametrize("text", ["", "e", "e44", "e2e4"])
def test_from_algebraic_wrong_length_gives_off_board(text):
    pos = Position.from_algebraic(text)
    assert pos == Position(-1, -1)
    assert not pos.is_valid()


def test_from_algebraic_out_of_range_is_invalid():
    assert not Position.from_algebraic("z9").is_valid()


def test_algebraic_round_trip_for_every_square():
    squares = [Position(r, c) for r in range(8) for c in range(8)]
    texts = [sq.to_algebraic() for sq in squares]
    assert len(set(texts)) == len(squares)
    for sq, text in zip(squares, texts):
        assert Position.from_algebraic(text) == sq


def test_to_algebraic_corner():
    assert Position(0, 0).to_algebraic() == "a1"


def test_to_algebraic_invalid_is_empty():
    assert Position(8, 8).to_algebraic() == ""


def test_move_default_promotion_is_queen():
    move = Move(Position(6, 0), Position(7, 0))
    assert move.promotion is PieceType.QUEEN


def test_move_equality_includes_promotion():
    a = Move(Position(6, 0), Position(7, 0), PieceType.KNIGHT)
    b = Move(Position(6, 0), Position(7, 0), PieceType.KNIGHT)
    c = Move(Position(6, 0), Position(7, 0), PieceType.ROOK)
    assert a == b
    assert (a == c) is False


def test_position_is_hashable_and_immutable():
    pos = Position(2, 3)
    assert {pos: "x"}[Position(2, 3)] == "x"
    with pytest.raises(AttributeError):
        pos.row = 5