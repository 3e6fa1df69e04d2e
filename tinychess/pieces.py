"""Chess pieces and the moves each can make on a board."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from typing import ClassVar, Optional, Protocol

from .types import Color, Move, PieceType, Position

_PROMOTION_CHOICES = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)

_ORTHOGONAL = ((0, 1), (0, -1), (1, 0), (-1, 0))
_DIAGONAL = ((1, 1), (1, -1), (-1, 1), (-1, -1))
_ALL_DIRECTIONS = _ORTHOGONAL + _DIAGONAL
_KNIGHT_JUMPS = ((2, 1), (2, -1), (-2, 1), (-2, -1), (1, 2), (1, -2), (-1, 2), (-1, -2))


class BoardView(Protocol):
    """What a piece needs to know about the board it stands on."""

    def piece_at(self, pos: Position) -> Optional[Piece]: ...

    def is_empty(self, pos: Position) -> bool: ...

    def is_en_passant_target(self, pos: Position) -> bool: ...

    def can_castle(self, color: Color, king_side: bool) -> bool: ...


class Piece(ABC):
    """A piece of one colour that remembers whether it has moved."""

    piece_type: ClassVar[PieceType]
    letter: ClassVar[str]

    def __init__(self, color: Color, has_moved: bool = False) -> None:
        self.color = color
        self.has_moved = has_moved

    @property
    def symbol(self) -> str:
        """Upper-case letter for white, lower-case for black."""
        return self.letter.upper() if self.color is Color.WHITE else self.letter.lower()

    @abstractmethod
    def possible_moves(self, pos: Position, board: BoardView) -> list[Move]:
        """Moves this piece could make from ``pos``, ignoring checks on its own king."""

    def clone(self) -> Piece:
        """Return an independent copy of this piece."""
        return copy.copy(self)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.color.name}, has_moved={self.has_moved})"


def directional_moves(
    pos: Position, board: BoardView, row_dir: int, col_dir: int, max_steps: int = 8
) -> list[Move]:
    """Slide from ``pos`` in one direction until blocked, including a final capture."""
    mover = board.piece_at(pos)
    if mover is None:
        raise ValueError(f"no piece at {pos}")
    moves: list[Move] = []
    for step in range(1, max_steps + 1):
        target = pos.offset(step * row_dir, step * col_dir)
        if not target.is_valid():
            break
        occupant = board.piece_at(target)
        if occupant is None:
            moves.append(Move(pos, target))
            continue
        if occupant.color is not mover.color:
            moves.append(Move(pos, target))
        break
    return moves


def _slide_moves(pos: Position, board: BoardView, directions) -> list[Move]:
    return [
        move
        for row_dir, col_dir in directions
        for move in directional_moves(pos, board, row_dir, col_dir)
    ]


def _step_moves(piece: Piece, pos: Position, board: BoardView, offsets) -> list[Move]:
    moves = []
    for d_row, d_col in offsets:
        target = pos.offset(d_row, d_col)
        if not target.is_valid():
            continue
        occupant = board.piece_at(target)
        if occupant is None or occupant.color is not piece.color:
            moves.append(Move(pos, target))
    return moves


class Pawn(Piece):
    piece_type = PieceType.PAWN
    letter = "P"

    def possible_moves(self, pos: Position, board: BoardView) -> list[Move]:
        white = self.color is Color.WHITE
        direction = 1 if white else -1
        start_row = 1 if white else 6
        promotion_row = 7 if white else 0
        moves: list[Move] = []

        def add(target: Position) -> None:
            if target.row == promotion_row:
                moves.extend(Move(pos, target, kind) for kind in _PROMOTION_CHOICES)
            else:
                moves.append(Move(pos, target))

        one_forward = pos.offset(direction, 0)
        if one_forward.is_valid() and board.is_empty(one_forward):
            add(one_forward)
            if pos.row == start_row:
                two_forward = pos.offset(2 * direction, 0)
                if two_forward.is_valid() and board.is_empty(two_forward):
                    moves.append(Move(pos, two_forward))

        for col_offset in (-1, 1):
            target = pos.offset(direction, col_offset)
            if not target.is_valid():
                continue
            occupant = board.piece_at(target)
            if occupant is not None and occupant.color is not self.color:
                add(target)
            elif board.is_en_passant_target(target):
                moves.append(Move(pos, target))
        return moves


class Rook(Piece):
    piece_type = PieceType.ROOK
    letter = "R"

    def possible_moves(self, pos: Position, board: BoardView) -> list[Move]:
        return _slide_moves(pos, board, _ORTHOGONAL)


class Bishop(Piece):
    piece_type = PieceType.BISHOP
    letter = "B"

    def possible_moves(self, pos: Position, board: BoardView) -> list[Move]:
        return _slide_moves(pos, board, _DIAGONAL)


class Queen(Piece):
    piece_type = PieceType.QUEEN
    letter = "Q"

    def possible_moves(self, pos: Position, board: BoardView) -> list[Move]:
        return _slide_moves(pos, board, _ALL_DIRECTIONS)


class Knight(Piece):
    piece_type = PieceType.KNIGHT
    letter = "N"

    def possible_moves(self, pos: Position, board: BoardView) -> list[Move]:
        return _step_moves(self, pos, board, _KNIGHT_JUMPS)


class King(Piece):
    piece_type = PieceType.KING
    letter = "K"

    def possible_moves(self, pos: Position, board: BoardView) -> list[Move]:
        moves = _step_moves(self, pos, board, _ALL_DIRECTIONS)
        if not self.has_moved:
            if board.can_castle(self.color, True):
                moves.append(Move(pos, pos.offset(0, 2)))
            if board.can_castle(self.color, False):
                moves.append(Move(pos, pos.offset(0, -2)))
        return moves


_PIECE_CLASSES: dict[PieceType, type[Piece]] = {
    cls.piece_type: cls for cls in (Pawn, Rook, Knight, Bishop, Queen, King)
}


def make_piece(piece_type: PieceType, color: Color) -> Piece:
    """Create a fresh, unmoved piece of the given kind and colour."""
    return _PIECE_CLASSES[piece_type](color)