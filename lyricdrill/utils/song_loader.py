"""
Song file loader for LyricDrill.

Loads songs to import from a YAML file shaped like:

    songs:
      - title: Example
        artist: Someone
        lyrics: |
          first line of the song
          second line
"""

from pathlib import Path
from typing import Any

import yaml

from .lyrics import lyrics_to_lines


REQUIRED_KEYS = ("title", "lyrics")


def load_songs_file(path: Path) -> list[dict[str, Any]]:
    """
    Load song entries from a YAML file.

    Args:
        path: YAML file with a top-level `songs` list

    Returns:
        List of dicts with keys title, artist and lyrics, where lyrics is
        already split into lines of words

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file doesn't have the expected shape
        yaml.YAMLError: If YAML parsing fails
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Songs file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict) or not isinstance(data.get("songs"), list):
        raise ValueError(f"{path}: expected a top-level 'songs' list")

    songs = []
    for position, entry in enumerate(data["songs"]):
        if not isinstance(entry, dict):
            raise ValueError(f"{path}: song #{position} is not a mapping")
        missing = [key for key in REQUIRED_KEYS if not entry.get(key)]
        if missing:
            raise ValueError(f"{path}: song #{position} is missing {', '.join(missing)}")
        songs.append({
            "title": str(entry["title"]),
            "artist": str(entry.get("artist") or ""),
            "lyrics": lyrics_to_lines(str(entry["lyrics"])),
        })
    return songs
