"""A small terminal chess game with an optional UCI engine opponent."""

__version__ = "0.1.0"