"""Core value types: colours, piece kinds, board squares and moves."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

BOARD_SIZE = 8


class Color(Enum):
    """Side of a piece or player."""

    WHITE = "white"
    BLACK = "black"

    def opponent(self) -> Color:
        """Return the other side."""
        return Color.BLACK if self is Color.WHITE else Color.WHITE

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class PieceType(Enum):
    """Kind of chess piece."""

    PAWN = "pawn"
    ROOK = "rook"
    KNIGHT = "knight"
    BISHOP = "bishop"
    QUEEN = "queen"
    KING = "king"


@dataclass(frozen=True)
class Position:
    """A square given by zero-based row (rank) and column (file)."""

    row: int = 0
    col: int = 0

    def is_valid(self) -> bool:
        """True if the square lies on the board."""
        return 0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE

    @classmethod
    def from_algebraic(cls, algebraic: str) -> Position:
        """Parse a square such as ``e4``; anything not two characters long gives (-1, -1)."""
        if len(algebraic) != 2:
            return cls(-1, -1)
        file_char, rank_char = algebraic
        return cls(ord(rank_char) - ord("1"), ord(file_char) - ord("a"))

    def to_algebraic(self) -> str:
        """Return the square in algebraic notation, or an empty string if off the board."""
        if not self.is_valid():
            return ""
        return chr(ord("a") + self.col) + chr(ord("1") + self.row)

    def offset(self, d_row: int, d_col: int) -> Position:
        """Return the square shifted by the given amounts."""
        return Position(self.row + d_row, self.col + d_col)


@dataclass(frozen=True)
class Move:
    """A move from one square to another, with the piece a pawn promotes to."""

    start: Position
    end: Position
    promotion: PieceType = PieceType.QUEEN