"""Output persistence for the normalized collections."""

from .json_output import read_games, render_games, write_games

__all__ = ["read_games", "render_games", "write_games"]
