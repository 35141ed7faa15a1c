"""LyricDrill utilities."""

from .lyrics import lyrics_to_lines
from .song_loader import load_songs_file

__all__ = ["lyrics_to_lines", "load_songs_file"]
