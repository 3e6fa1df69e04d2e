"""The chess board: piece placement, move execution and rule checks."""

from __future__ import annotations

import sys
from typing import Iterator, Optional, TextIO

from .pieces import Piece, make_piece
from .types import BOARD_SIZE, Color, Move, PieceType, Position

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
_PROMOTION_KINDS = (PieceType.QUEEN, PieceType.ROOK, PieceType.BISHOP, PieceType.KNIGHT)
_KING_STEPS = ((0, 1), (0, -1), (1, 0), (-1, 0), (1, 1), (1, -1), (-1, 1), (-1, -1))
_BORDER = "  +---+---+---+---+---+---+---+---+\n"
_FILES = "    a   b   c   d   e   f   g   h\n"


class ChessBoard:
    """An 8x8 board; row 0 is white's back rank."""

    def __init__(self, *, empty: bool = False) -> None:
        self._squares: list[list[Optional[Piece]]] = self._blank()
        self._en_passant_target = Position()
        self._en_passant_available = False
        if not empty:
            self.setup_initial_position()

    @staticmethod
    def _blank() -> list[list[Optional[Piece]]]:
        return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]

    def copy(self) -> ChessBoard:
        """Return a deep copy: pieces are cloned, en passant state is kept."""
        other = ChessBoard(empty=True)
        other._squares = [
            [piece.clone() if piece is not None else None for piece in row]
            for row in self._squares
        ]
        other._en_passant_target = self._en_passant_target
        other._en_passant_available = self._en_passant_available
        return other

    def setup_initial_position(self) -> None:
        """Put every piece on its starting square."""
        self._squares = self._blank()
        for col, kind in enumerate(_BACK_RANK):
            self._squares[0][col] = make_piece(kind, Color.WHITE)
            self._squares[1][col] = make_piece(PieceType.PAWN, Color.WHITE)
            self._squares[6][col] = make_piece(PieceType.PAWN, Color.BLACK)
            self._squares[7][col] = make_piece(kind, Color.BLACK)
        self._en_passant_available = False

    def place(self, pos: Position, piece: Optional[Piece]) -> None:
        """Put ``piece`` on ``pos``, or empty the square when ``piece`` is None."""
        if not pos.is_valid():
            raise ValueError(f"square off the board: {pos}")
        self._squares[pos.row][pos.col] = piece

    def _occupied(self) -> Iterator[tuple[Position, Piece]]:
        for row, pieces in enumerate(self._squares):
            for col, piece in enumerate(pieces):
                if piece is not None:
                    yield Position(row, col), piece

    def render(self) -> str:
        """Return a text drawing of the board, rank 8 at the top."""
        parts = ["\n", _BORDER]
        for row in reversed(range(BOARD_SIZE)):
            cells = "".join(
                f" {piece.symbol} |" if piece is not None else "   |"
                for piece in self._squares[row]
            )
            parts.append(f"{row + 1} |{cells}\n")
            parts.append(_BORDER)
        parts.append(_FILES + "\n")
        return "".join(parts)

    def display(self, out: Optional[TextIO] = None) -> None:
        """Write the drawing of the board to ``out`` (standard output by default)."""
        (out if out is not None else sys.stdout).write(self.render())

    def piece_at(self, pos: Position) -> Optional[Piece]:
        """The piece on ``pos``, or None for an empty or off-board square."""
        if not pos.is_valid():
            return None
        return self._squares[pos.row][pos.col]

    def is_empty(self, pos: Position) -> bool:
        """True for an empty square on the board; off-board squares are not empty."""
        if not pos.is_valid():
            return False
        return self._squares[pos.row][pos.col] is None

    def move_piece(self, move: Move) -> bool:
        """Carry out ``move`` without checking legality; False if there is nothing to move."""
        start, end = move.start, move.end
        if not start.is_valid() or not end.is_valid():
            return False
        piece = self.piece_at(start)
        if piece is None:
            return False

        had_en_passant = self._en_passant_available
        old_target = self._en_passant_target
        self.clear_en_passant()

        white = piece.color is Color.WHITE
        is_pawn = piece.piece_type is PieceType.PAWN
        is_en_passant = is_pawn and had_en_passant and end == old_target
        is_castling = piece.piece_type is PieceType.KING and abs(end.col - start.col) == 2
        is_promotion = is_pawn and end.row == (7 if white else 0)

        self._squares[end.row][end.col] = piece
        self._squares[start.row][start.col] = None
        piece.has_moved = True

        if is_en_passant:
            captured_row = end.row - 1 if white else end.row + 1
            self._squares[captured_row][end.col] = None

        if is_castling:
            king_side = end.col > start.col
            rook_from, rook_to = (7, 5) if king_side else (0, 3)
            rook = self._squares[start.row][rook_from]
            self._squares[start.row][rook_from] = None
            self._squares[start.row][rook_to] = rook
            if rook is not None:
                rook.has_moved = True

        if is_promotion:
            kind = move.promotion if move.promotion in _PROMOTION_KINDS else PieceType.QUEEN
            promoted = make_piece(kind, piece.color)
            promoted.has_moved = True
            self._squares[end.row][end.col] = promoted

        if is_pawn and abs(end.row - start.row) == 2:
            self.set_en_passant(Position((start.row + end.row) // 2, start.col))
        return True

    def is_square_attacked(
        self, pos: Position, attacking_color: Color, castling_check: bool = False
    ) -> bool:
        """True if a piece of ``attacking_color`` attacks ``pos``.

        Kings are counted only when ``castling_check`` is set.
        """
        for piece_pos, piece in list(self._occupied()):
            if piece.color is not attacking_color:
                continue
            if piece.piece_type is PieceType.PAWN:
                direction = 1 if attacking_color is Color.WHITE else -1
                if pos in (piece_pos.offset(direction, -1), piece_pos.offset(direction, 1)):
                    return True
            elif piece.piece_type is PieceType.KING:
                if castling_check and any(
                    piece_pos.offset(dr, dc) == pos for dr, dc in _KING_STEPS
                ):
                    return True
            elif any(move.end == pos for move in piece.possible_moves(piece_pos, self)):
                return True
        return False

    def king_position(self, color: Color) -> Position:
        """Square of the king of ``color``, or (-1, -1) if there is none."""
        for pos, piece in self._occupied():
            if piece.piece_type is PieceType.KING and piece.color is color:
                return pos
        return Position(-1, -1)

    def is_in_check(self, king_color: Color) -> bool:
        """True if the king of ``king_color`` is attacked."""
        king_pos = self.king_position(king_color)
        if not king_pos.is_valid():
            return False
        return self.is_square_attacked(king_pos, king_color.opponent())

    def would_be_in_check(self, move: Move, king_color: Color) -> bool:
        """True if making ``move`` would leave the king of ``king_color`` in check."""
        trial = self.copy()
        trial.move_piece(move)
        return trial.is_in_check(king_color)

    def all_legal_moves(self, color: Color) -> list[Move]:
        """Every move of ``color`` that does not leave its own king in check."""
        return [
            move
            for pos, piece in list(self._occupied())
            if piece.color is color
            for move in piece.possible_moves(pos, self)
            if not self.would_be_in_check(move, color)
        ]

    def is_checkmate(self, color: Color) -> bool:
        return self.is_in_check(color) and not self.all_legal_moves(color)

    def is_stalemate(self, color: Color) -> bool:
        return not self.is_in_check(color) and not self.all_legal_moves(color)

    def can_castle(self, color: Color, king_side: bool) -> bool:
        """True if ``color`` may castle on the given side right now."""
        king_pos = self.king_position(color)
        if not king_pos.is_valid():
            return False
        king = self.piece_at(king_pos)
        if king is None or king.has_moved:
            return False
        if self.is_in_check(color):
            return False

        row = king_pos.row
        rook_col = 7 if king_side else 0
        rook = self.piece_at(Position(row, rook_col))
        if rook is None or rook.piece_type is not PieceType.ROOK or rook.has_moved:
            return False

        low, high = sorted((king_pos.col, rook_col))
        if not all(self.is_empty(Position(row, col)) for col in range(low + 1, high)):
            return False

        enemy = color.opponent()
        step = 1 if king_side else -1
        return not any(
            self.is_square_attacked(Position(row, king_pos.col + i * step), enemy, True)
            for i in (1, 2)
        )

    def fen(self, current_player: Color) -> str:
        """Piece placement and side to move in FEN; the other fields are fixed."""
        ranks = []
        for row in reversed(range(BOARD_SIZE)):
            text = ""
            empty = 0
            for piece in self._squares[row]:
                if piece is None:
                    empty += 1
                    continue
                if empty:
                    text += str(empty)
                    empty = 0
                text += piece.symbol
            if empty:
                text += str(empty)
            ranks.append(text)
        side = "w" if current_player is Color.WHITE else "b"
        return "/".join(ranks) + f" {side} - - 0 1"

    def set_en_passant(self, pos: Position) -> None:
        self._en_passant_target = pos
        self._en_passant_available = True

    def clear_en_passant(self) -> None:
        self._en_passant_available = False

    def is_en_passant_target(self, pos: Position) -> bool:
        return self._en_passant_available and self._en_passant_target == pos