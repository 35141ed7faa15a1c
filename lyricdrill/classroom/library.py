"""
SongLibrary - Song corpus in SQLite.

Provides:
- Song import (title, artist, tokenized lyrics)
- Full corpus listing for lesson generation
- Lookup by ID
"""

import json
import logging
import sqlite3
import uuid
from pathlib import Path
from typing import Optional

from lyricdrill.errors import StorageError
from lyricdrill.schemas import Song


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0


class SongLibrary:
    """
    Song corpus stored in SQLite.

    Each method creates a new connection, so one instance can be shared
    across requests.
    """

    def __init__(self, db_path: str | Path, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize library.

        Args:
            db_path: Path to the SQLite database (created if missing)
            timeout: Seconds to wait for a locked database
        """
        self.db_path = Path(db_path)
        self.timeout = timeout
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = self._get_connection()
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS songs (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    artist TEXT NOT NULL DEFAULT '',
                    lyrics JSON NOT NULL DEFAULT '[]'
                );
            """)
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"song library: schema setup failed: {e}") from e
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        try:
            conn = sqlite3.connect(str(self.db_path), timeout=self.timeout)
        except sqlite3.Error as e:
            raise StorageError(f"song library: connect failed: {e}") from e
        conn.row_factory = sqlite3.Row
        return conn

    @staticmethod
    def _row_to_song(row: sqlite3.Row) -> Song:
        return Song(
            id=row["id"],
            title=row["title"],
            artist=row["artist"],
            lyrics=json.loads(row["lyrics"] or "[]"),
        )

    def add_song(self, title: str, artist: str, lyrics: list[list[str]]) -> Song:
        """Insert a song and return it with its new ID."""
        song = Song(id=uuid.uuid4().hex, title=title, artist=artist, lyrics=lyrics)
        conn = self._get_connection()
        try:
            conn.execute(
                "INSERT INTO songs (id, title, artist, lyrics) VALUES (?, ?, ?, ?)",
                (song.id, song.title, song.artist, json.dumps(song.lyrics, ensure_ascii=False))
            )
            conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Failed to insert song {title!r}: {e}")
            raise StorageError(f"song library: insert failed: {e}") from e
        finally:
            conn.close()
        logger.info(f"Added song {song.id} ({song.title}, {song.line_count} lines)")
        return song

    def find_all_songs(self) -> list[Song]:
        """Get every song in insertion order."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT id, title, artist, lyrics FROM songs ORDER BY rowid"
            )
            return [self._row_to_song(row) for row in cursor.fetchall()]
        except sqlite3.Error as e:
            logger.error(f"Failed to list songs: {e}")
            raise StorageError(f"song library: find all failed: {e}") from e
        finally:
            conn.close()

    def get_song(self, song_id: str) -> Optional[Song]:
        """Get a song by ID."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT id, title, artist, lyrics FROM songs WHERE id = ?", (song_id,)
            )
            row = cursor.fetchone()
            return self._row_to_song(row) if row else None
        except sqlite3.Error as e:
            raise StorageError(f"song library: find one failed: {e}") from e
        finally:
            conn.close()

    def get_song_count(self) -> int:
        """Get total number of songs."""
        conn = self._get_connection()
        try:
            cursor = conn.execute("SELECT COUNT(*) FROM songs")
            return cursor.fetchone()[0]
        except sqlite3.Error as e:
            raise StorageError(f"song library: count failed: {e}") from e
        finally:
            conn.close()
