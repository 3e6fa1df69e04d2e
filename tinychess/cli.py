"""Command-line entry point: choose a mode and play."""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from .engine import DEFAULT_ENGINE
from .game import ChessGame
from .types import Color


def _ask(prompt: str) -> str:
    print(prompt, end="", flush=True)
    return sys.stdin.readline().rstrip("\r\n")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Ask for the game mode, then run the game. Returns the exit status."""
    parser = argparse.ArgumentParser(prog="tinychess", description="Play chess in the terminal.")
    parser.add_argument(
        "--engine",
        default=DEFAULT_ENGINE,
        help="UCI engine executable used in player-vs-CPU mode",
    )
    args = parser.parse_args(argv)

    try:
        mode = _ask("Choose mode: [1] Player vs Player, [2] Player vs CPU: ")
        if mode == "2":
            answer = _ask("Should CPU play as white or black? [w/b]: ")
            cpu_color = Color.WHITE if answer in ("w", "W") else Color.BLACK
            game = ChessGame(True, cpu_color, args.engine)
        else:
            game = ChessGame(False, engine_path=args.engine)
        game.start_game()
    except Exception as exc:  # noqa: BLE001 - report any failure and exit non-zero
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())