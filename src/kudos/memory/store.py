"""SQLite storage for contributor notes."""

import sqlite3
from pathlib import Path

from .models import StoredNote


class MemoryStore:
    """Persistent storage for free-text notes using SQLite.

    Tags are kept as the comma-joined string they were written with.
    """

    def __init__(self, db_path: Path) -> None:
        """Initialize the store with a database path.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_connection(self) -> sqlite3.Connection:
        """Get or create the database connection."""
        if self._conn is None:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self.db_path)
            self._conn.row_factory = sqlite3.Row
        return self._conn

    def init_db(self) -> None:
        """Create the notes table if it doesn't exist."""
        conn = self._get_connection()
        conn.execute("""
            CREATE TABLE IF NOT EXISTS notes (
                id           INTEGER PRIMARY KEY AUTOINCREMENT,
                information  TEXT NOT NULL,
                tags         TEXT NOT NULL DEFAULT '',
                created_at   TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """)
        conn.commit()

    def store(self, information: str, tags: str = "") -> int:
        """Store a note.

        Args:
            information: The note text.
            tags: Comma-separated tags.

        Returns:
            The id of the new note.
        """
        conn = self._get_connection()
        cursor = conn.execute(
            "INSERT INTO notes (information, tags) VALUES (?, ?)",
            (information, tags),
        )
        conn.commit()
        return cursor.lastrowid

    def get_all(self) -> list[StoredNote]:
        """Get all notes, oldest first."""
        conn = self._get_connection()
        cursor = conn.execute(
            "SELECT id, information, tags, created_at FROM notes ORDER BY id"
        )
        return [self._row_to_note(row) for row in cursor.fetchall()]

    def find_by_tag(self, tag: str) -> list[StoredNote]:
        """Get notes carrying an exact tag.

        Args:
            tag: The tag to match.

        Returns:
            Matching notes, oldest first.
        """
        return [note for note in self.get_all() if tag in note.tag_list]

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _row_to_note(self, row: sqlite3.Row) -> StoredNote:
        """Convert a database row to a StoredNote."""
        return StoredNote(
            id=row["id"],
            information=row["information"],
            tags=row["tags"],
            created_at=row["created_at"],
        )


def open_store(db_path: Path) -> MemoryStore:
    """Create a store and make sure its schema exists."""
    store = MemoryStore(db_path)
    store.init_db()
    return store
