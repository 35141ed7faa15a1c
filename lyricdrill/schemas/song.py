"""
Song schemas for LyricDrill.

A song's lyrics are stored pre-tokenized: an ordered list of lines,
each line an ordered list of words.
"""

from pydantic import BaseModel, Field


class Song(BaseModel):
    id: str
    title: str
    artist: str = ""
    lyrics: list[list[str]] = Field(default_factory=list)

    @property
    def line_count(self) -> int:
        return len(self.lyrics)
