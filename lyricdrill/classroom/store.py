"""
LessonStore - Persist generated lessons and their answers in SQLite.

Also declares the repository contracts the lesson service depends on, so
other backends can be swapped in:
- SongRepository: song corpus access
- LessonRepository: lesson create / fetch / atomic answer append
"""

import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional, Protocol

from pydantic import TypeAdapter

from lyricdrill.errors import StorageError
from lyricdrill.schemas import ItemType, Lesson, LessonAnswer, LessonItem, Song


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0

_ITEMS_ADAPTER = TypeAdapter(list[LessonItem])


class AppendResult(str, Enum):
    """Outcome of a conditional answer append."""
    APPENDED = "appended"
    CONFLICT = "conflict"       # an answer for this item index already exists
    NOT_FOUND = "not_found"     # no such lesson


# -----------------------------------------------------------------------------
# Repository contracts
# -----------------------------------------------------------------------------

class SongRepository(Protocol):
    def find_all_songs(self) -> list[Song]: ...


class LessonRepository(Protocol):
    def create_lesson(self, user_id: str, lesson: Lesson) -> Lesson: ...

    def get_lesson_by_id(self, lesson_id: str) -> Optional[Lesson]: ...

    def append_answer(self, lesson_id: str, answer: LessonAnswer) -> AppendResult: ...


# -----------------------------------------------------------------------------
# SQLite implementation
# -----------------------------------------------------------------------------

class LessonStore:
    """
    Store lessons in SQLite.

    Items are written once as JSON. Answers live in their own table keyed by
    (lesson_id, item_index), which is what makes a second answer for the
    same item impossible even under concurrent submissions.
    """

    def __init__(self, db_path: str | Path, timeout: float = DEFAULT_TIMEOUT):
        """
        Initialize lesson store.

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
                CREATE TABLE IF NOT EXISTS lessons (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    song_id TEXT NOT NULL,
                    items JSON NOT NULL,
                    created_at TEXT NOT NULL
                );

                CREATE TABLE IF NOT EXISTS lesson_answers (
                    lesson_id TEXT NOT NULL REFERENCES lessons(id),
                    item_index INTEGER NOT NULL,
                    type TEXT NOT NULL,
                    user_input TEXT NOT NULL,
                    correct INTEGER NOT NULL,
                    answered_at TEXT NOT NULL,
                    PRIMARY KEY (lesson_id, item_index)
                );

                CREATE INDEX IF NOT EXISTS idx_lessons_user
                ON lessons(user_id);
            """)
            conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"lesson store: schema setup failed: {e}") from e
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        try:
            conn = sqlite3.connect(str(self.db_path), timeout=self.timeout)
        except sqlite3.Error as e:
            raise StorageError(f"lesson store: connect failed: {e}") from e
        conn.row_factory = sqlite3.Row
        return conn

    # -------------------------------------------------------------------------
    # Lessons
    # -------------------------------------------------------------------------

    def create_lesson(self, user_id: str, lesson: Lesson) -> Lesson:
        """
        Persist a new lesson for a user.

        Assigns an ID and creation time when missing and always starts with
        no answers.

        Returns:
            The persisted lesson
        """
        persisted = lesson.model_copy(update={
            "id": lesson.id or uuid.uuid4().hex,
            "user_id": user_id,
            "created_at": lesson.created_at or datetime.now(timezone.utc),
            "answers": [],
        })

        conn = self._get_connection()
        try:
            conn.execute(
                """INSERT INTO lessons (id, user_id, song_id, items, created_at)
                   VALUES (?, ?, ?, ?, ?)""",
                (
                    persisted.id,
                    persisted.user_id,
                    persisted.song_id,
                    _ITEMS_ADAPTER.dump_json(persisted.items).decode("utf-8"),
                    persisted.created_at.isoformat(),
                )
            )
            conn.commit()
        except sqlite3.Error as e:
            logger.error(f"Failed to insert lesson for user {user_id}: {e}")
            raise StorageError(f"lesson store: insert failed: {e}") from e
        finally:
            conn.close()
        return persisted

    def get_lesson_by_id(self, lesson_id: str) -> Optional[Lesson]:
        """Get a lesson with its answers, or None if it doesn't exist."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT id, user_id, song_id, items, created_at
                   FROM lessons WHERE id = ?""",
                (lesson_id,)
            )
            row = cursor.fetchone()
            if not row:
                return None
            answers = self._fetch_answers(conn, lesson_id)
            return self._row_to_lesson(row, answers)
        except sqlite3.Error as e:
            logger.error(f"Failed to load lesson {lesson_id}: {e}")
            raise StorageError(f"lesson store: find one failed: {e}") from e
        finally:
            conn.close()

    def list_lessons_for_user(self, user_id: str) -> list[Lesson]:
        """Get all lessons of a user, newest first."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT id, user_id, song_id, items, created_at
                   FROM lessons
                   WHERE user_id = ?
                   ORDER BY created_at DESC, rowid DESC""",
                (user_id,)
            )
            return [
                self._row_to_lesson(row, self._fetch_answers(conn, row["id"]))
                for row in cursor.fetchall()
            ]
        except sqlite3.Error as e:
            raise StorageError(f"lesson store: find all failed: {e}") from e
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Answers
    # -------------------------------------------------------------------------

    def append_answer(self, lesson_id: str, answer: LessonAnswer) -> AppendResult:
        """
        Record an answer unless one already exists for the same item.

        The insert is a single conditional statement: it only writes when the
        lesson exists and no row holds (lesson_id, item_index) yet.
        """
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """INSERT INTO lesson_answers
                       (lesson_id, item_index, type, user_input, correct, answered_at)
                   SELECT ?, ?, ?, ?, ?, ?
                   WHERE EXISTS (SELECT 1 FROM lessons WHERE id = ?)
                   ON CONFLICT(lesson_id, item_index) DO NOTHING""",
                (
                    lesson_id,
                    answer.item_index,
                    answer.type.value,
                    answer.user_input,
                    int(answer.correct),
                    datetime.now(timezone.utc).isoformat(),
                    lesson_id,
                )
            )
            if cursor.rowcount == 1:
                conn.commit()
                return AppendResult.APPENDED

            exists = conn.execute(
                "SELECT 1 FROM lessons WHERE id = ?", (lesson_id,)
            ).fetchone()
            conn.commit()
            return AppendResult.CONFLICT if exists else AppendResult.NOT_FOUND
        except sqlite3.Error as e:
            logger.error(f"Failed to append answer to lesson {lesson_id}: {e}")
            raise StorageError(f"lesson store: append answer failed: {e}") from e
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Row mapping
    # -------------------------------------------------------------------------

    @staticmethod
    def _fetch_answers(conn: sqlite3.Connection, lesson_id: str) -> list[LessonAnswer]:
        cursor = conn.execute(
            """SELECT item_index, type, user_input, correct
               FROM lesson_answers
               WHERE lesson_id = ?
               ORDER BY rowid""",
            (lesson_id,)
        )
        return [
            LessonAnswer(
                item_index=row["item_index"],
                type=ItemType(row["type"]),
                user_input=row["user_input"],
                correct=bool(row["correct"]),
            )
            for row in cursor.fetchall()
        ]

    @staticmethod
    def _row_to_lesson(row: sqlite3.Row, answers: list[LessonAnswer]) -> Lesson:
        return Lesson(
            id=row["id"],
            user_id=row["user_id"],
            song_id=row["song_id"],
            items=_ITEMS_ADAPTER.validate_json(row["items"]),
            answers=answers,
            created_at=datetime.fromisoformat(row["created_at"]),
        )
