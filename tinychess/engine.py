"""Talking to a UCI chess engine such as Stockfish."""

from __future__ import annotations

import subprocess
from typing import Sequence, Union

DEFAULT_ENGINE = "stockfish.exe"
SEARCH_DEPTH = 20

EngineCommand = Union[str, Sequence[str]]


class EngineError(RuntimeError):
    """The engine could not be started or gave no usable answer."""


def parse_bestmove(output: str) -> str:
    """Return the move from the first ``bestmove`` line of engine output."""
    start = output.find("bestmove ")
    if start == -1:
        raise EngineError("engine output holds no bestmove line")
    end = output.find("\n", start)
    line = output[start:] if end == -1 else output[start:end]
    tokens = line.split()
    if len(tokens) < 2:
        raise EngineError("bestmove line holds no move")
    return tokens[1]


def _uci_commands(fen: str) -> str:
    return (
        "uci\n"
        "isready\n"
        "ucinewgame\n"
        f"position fen {fen}\n"
        f"go depth {SEARCH_DEPTH}\n"
    )


def best_move_from_stockfish(fen: str, stockfish_path: EngineCommand = DEFAULT_ENGINE) -> str:
    """Ask the engine for its best move in the position ``fen``.

    ``stockfish_path`` is either the engine's executable or a full command line
    given as a sequence of arguments.
    """
    command = [stockfish_path] if isinstance(stockfish_path, str) else list(stockfish_path)
    try:
        process = subprocess.Popen(
            command,
            stdin=subprocess.PIPE,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            bufsize=1,
        )
    except OSError as exc:
        raise EngineError(f"could not start engine: {exc}") from exc

    collected: list[str] = []
    try:
        assert process.stdin is not None and process.stdout is not None
        try:
            process.stdin.write(_uci_commands(fen))
            process.stdin.flush()
        except OSError as exc:
            raise EngineError(f"could not send commands to engine: {exc}") from exc
        for line in process.stdout:
            collected.append(line)
            if "bestmove" in line:
                break
    finally:
        process.terminate()
        for stream in (process.stdin, process.stdout):
            if stream is not None:
                try:
                    stream.close()
                except OSError:
                    pass
        process.wait()

    return parse_bestmove("".join(collected))