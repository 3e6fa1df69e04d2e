"""An interactive game between two players, or a player and an engine."""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from .board import ChessBoard
from .engine import DEFAULT_ENGINE, EngineCommand, EngineError, best_move_from_stockfish
from .types import Color, Move, PieceType, Position

_PROMOTION_LETTERS = {
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
}


def parse_algebraic_notation(notation: str) -> Move:
    """Parse moves such as ``e2e4``, ``e2-e4`` or ``e7e8n``.

    Raises ValueError if fewer than four characters remain after cleaning.
    """
    clean = notation.replace("-", "", 1).replace(" ", "").lower()
    if len(clean) < 4:
        raise ValueError("Move too short")
    start = Position.from_algebraic(clean[0:2])
    end = Position.from_algebraic(clean[2:4])
    promotion = PieceType.QUEEN
    if len(clean) >= 5:
        promotion = _PROMOTION_LETTERS.get(clean[4], PieceType.QUEEN)
    return Move(start, end, promotion)


def _is_promotion_square(color: Color, pos: Position) -> bool:
    return pos.row == (7 if color is Color.WHITE else 0)


class ChessGame:
    """Game state plus the console loop that drives it."""

    def __init__(
        self,
        enable_cpu: bool = False,
        cpu_color: Color = Color.BLACK,
        engine_path: EngineCommand = DEFAULT_ENGINE,
        input_stream: Optional[TextIO] = None,
        output: Optional[TextIO] = None,
    ) -> None:
        self.board = ChessBoard()
        self.current_player = Color.WHITE
        self.game_over = False
        self.game_result = ""
        self.cpu_enabled = enable_cpu
        self.cpu_color = cpu_color
        self.human_color = cpu_color.opponent()
        self.engine_path = engine_path
        self._input = input_stream if input_stream is not None else sys.stdin
        self._out = output if output is not None else sys.stdout

    def _say(self, text: str, end: str = "\n") -> None:
        print(text, end=end, file=self._out)

    def start_game(self) -> None:
        """Run turns until the game ends, then report the result."""
        self._say("Welcome to Python Chess Game!")
        self._say("Enter moves in algebraic notation (e.g., 'e2e4' or 'e2-e4')")
        self._say("Type 'quit' to exit the game\n")
        while not self.game_over:
            self.board.display(self._out)
            self._say(f"{self.current_player.display_name} to move: ", end="")
            self._out.flush()
            self.play_turn()
            self.check_game_end()
        self._say(f"Game Over: {self.game_result}")

    def _end(self, result: str) -> None:
        self.game_over = True
        self.game_result = result

    def _announce_check(self) -> None:
        if self.board.is_in_check(self.current_player.opponent()):
            self._say("Check!")

    def _play_engine_turn(self) -> None:
        self._say("CPU is thinking using Stockfish...")
        fen = self.board.fen(self.current_player)
        try:
            best = best_move_from_stockfish(fen, self.engine_path)
        except EngineError:
            best = ""
        if not 4 <= len(best) <= 5:
            self._say(f"Invalid move from Stockfish: {best}")
            self._end("Game ended due to engine error.")
            return
        move = parse_algebraic_notation(best)
        self._say(f"Stockfish plays: {best}")
        self._say(f"Current player: {self.current_player.display_name}")
        self.board.move_piece(move)
        self._announce_check()
        self.switch_player()

    def play_turn(self) -> None:
        """Play one turn: the engine's if it is to move, otherwise read a move."""
        if self.cpu_enabled and self.current_player is self.cpu_color:
            self._play_engine_turn()
            return

        line = self._input.readline()
        if not line:
            self._end("Game terminated by user")
            return
        text = line.strip()
        if text in ("quit", "exit"):
            self._end("Game terminated by user")
            return
        if self.make_move(text):
            self.switch_player()
        else:
            self._say("Invalid move. Please try again.")

    def make_move(self, algebraic_move: str) -> bool:
        """Make the current player's move if it is legal; report why not otherwise."""
        try:
            move = parse_algebraic_notation(algebraic_move)
        except ValueError as exc:
            self._say(f"Error parsing move: {exc}")
            return False

        if not move.start.is_valid() or not move.end.is_valid():
            self._say("Invalid move format. Use format like 'e2e4' or 'e2-e4'")
            return False

        piece = self.board.piece_at(move.start)
        if piece is None:
            self._say("No piece at the specified position.")
            return False
        self._say(f"Piece at {move.start.to_algebraic()} is {piece.color.display_name}")

        if piece.color is not self.current_player:
            self._say("That's not your piece!")
            return False

        promoting = piece.piece_type is PieceType.PAWN and _is_promotion_square(
            piece.color, move.end
        )
        legal = any(
            candidate.start == move.start
            and candidate.end == move.end
            and (not promoting or candidate.promotion is move.promotion)
            for candidate in self.board.all_legal_moves(self.current_player)
        )
        if not legal:
            self._say("Illegal move.")
            return False

        self.board.move_piece(move)
        self._announce_check()
        return True

    def switch_player(self) -> None:
        self.current_player = self.current_player.opponent()

    def check_game_end(self) -> None:
        """End the game on checkmate or stalemate of the side to move."""
        if self.board.is_checkmate(self.current_player):
            winner = self.current_player.opponent().display_name
            self._end(f"{winner} wins by checkmate!")
        elif self.board.is_stalemate(self.current_player):
            self._end("Draw by stalemate!")