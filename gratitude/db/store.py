"""SQLite data store for Gratitude."""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Iterator, Optional
from uuid import UUID

from gratitude.errors import DuplicateEntryError
from gratitude.models import JournalEntry, SpaceCategory, SpaceItem

logger = logging.getLogger(__name__)

ENTRY_COLUMNS = "id, date, entry1, entry2, entry3, notes, streak"


def _row_to_entry(row: sqlite3.Row) -> JournalEntry:
    return JournalEntry(
        id=UUID(row["id"]),
        date=date.fromisoformat(row["date"]),
        entry1=row["entry1"],
        entry2=row["entry2"],
        entry3=row["entry3"],
        notes=row["notes"],
        streak=row["streak"],
    )


def _row_to_space(row: sqlite3.Row) -> SpaceCategory:
    return SpaceCategory(
        id=UUID(row["id"]),
        name=row["name"],
        icon=row["icon"],
        color=row["color"],
    )


def _row_to_item(row: sqlite3.Row) -> SpaceItem:
    return SpaceItem(
        id=UUID(row["id"]),
        name=row["name"],
        type=row["type"],
        category_id=UUID(row["category_id"]),
        data_path=Path(row["data_path"]) if row["data_path"] else None,
        text=row["text"],
    )


def _entry_params(entry: JournalEntry) -> tuple:
    return (
        str(entry.id),
        entry.date.isoformat(),
        entry.entry1,
        entry.entry2,
        entry.entry3,
        entry.notes,
        entry.streak,
    )


class StoreTransaction:
    """Entry operations bound to one open SQLite transaction.

    Obtained from ``DataStore.transaction()``. Nothing is visible to other
    connections until the surrounding ``with`` block exits cleanly.
    """

    def __init__(self, conn: sqlite3.Connection):
        self._conn = conn

    def all_entries(self) -> list[JournalEntry]:
        """Every stored entry, oldest first."""
        cursor = self._conn.execute(
            f"SELECT {ENTRY_COLUMNS} FROM entries ORDER BY date, id"
        )
        return [_row_to_entry(row) for row in cursor.fetchall()]

    def insert_entry(self, entry: JournalEntry) -> None:
        """Insert a new entry.

        Raises:
            DuplicateEntryError: If the day already has an entry.
        """
        try:
            self._conn.execute(
                f"INSERT INTO entries ({ENTRY_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?)",
                _entry_params(entry),
            )
        except sqlite3.IntegrityError as e:
            if "entries.date" in str(e):
                raise DuplicateEntryError(entry.date) from e
            raise

    def save_entries(self, entries: list[JournalEntry]) -> None:
        """Write every field of existing entries back to the database.

        Raises:
            DuplicateEntryError: If a moved entry lands on an occupied day.
        """
        for entry in entries:
            try:
                self._conn.execute(
                    """
                    UPDATE entries
                    SET date = ?, entry1 = ?, entry2 = ?, entry3 = ?, notes = ?, streak = ?
                    WHERE id = ?
                    """,
                    (*_entry_params(entry)[1:], str(entry.id)),
                )
            except sqlite3.IntegrityError as e:
                if "entries.date" in str(e):
                    raise DuplicateEntryError(entry.date) from e
                raise

    def delete_entry(self, entry_id: UUID) -> bool:
        """Delete an entry.

        Returns:
            True if a row was deleted.
        """
        cursor = self._conn.execute("DELETE FROM entries WHERE id = ?", (str(entry_id),))
        return cursor.rowcount > 0

    def delete_all_entries(self) -> int:
        """Delete every entry, returning how many were removed."""
        cursor = self._conn.execute("DELETE FROM entries")
        return cursor.rowcount


class DataStore:
    """SQLite-based data store for Gratitude."""

    REQUIRED_TABLES = [
        "entries",
        "spaces",
        "items",
        "prompts",
        "meta",
    ]

    def __init__(self, db_path: Path):
        """Initialize the data store.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._lock = threading.RLock()
        self._ensure_db_dir()
        self._init_schema()

    def _ensure_db_dir(self) -> None:
        """Ensure the database directory exists."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get a database connection."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _init_schema(self) -> None:
        """Initialize database schema on first run."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()

            # Journal entries, at most one per day
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS entries (
                    id TEXT PRIMARY KEY,
                    date TEXT NOT NULL UNIQUE,
                    entry1 TEXT NOT NULL DEFAULT '',
                    entry2 TEXT NOT NULL DEFAULT '',
                    entry3 TEXT NOT NULL DEFAULT '',
                    notes TEXT NOT NULL DEFAULT '',
                    streak INTEGER NOT NULL DEFAULT 1
                )
            """)

            # Spaces table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS spaces (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    icon TEXT NOT NULL DEFAULT 'folder',
                    color TEXT NOT NULL DEFAULT 'blue'
                )
            """)

            # Space items table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS items (
                    id TEXT PRIMARY KEY,
                    name TEXT NOT NULL,
                    type TEXT NOT NULL,
                    category_id TEXT NOT NULL REFERENCES spaces(id) ON DELETE CASCADE,
                    data_path TEXT,
                    text TEXT
                )
            """)

            # Prompts table
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS prompts (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    text TEXT NOT NULL
                )
            """)

            # Key/value flags, e.g. whether default prompts were seeded
            cursor.execute("""
                CREATE TABLE IF NOT EXISTS meta (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
            """)

            conn.commit()
        finally:
            conn.close()

    def get_tables(self) -> list[str]:
        """Get list of all tables in the database."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            return [row["name"] for row in cursor.fetchall()]
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """Open an exclusive write transaction over the journal.

        Holds the store lock and an immediate SQLite write lock for the
        duration of the block. Commits on a clean exit and rolls back if the
        block raises.
        """
        with self._lock:
            conn = self._get_connection()
            try:
                conn.execute("BEGIN IMMEDIATE")
                yield StoreTransaction(conn)
                conn.commit()
            except Exception:
                conn.rollback()
                logger.debug("Rolled back journal transaction", exc_info=True)
                raise
            finally:
                conn.close()

    # ==================== Entries ====================

    def get_entries(
        self,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        newest_first: bool = False,
        limit: Optional[int] = None,
    ) -> list[JournalEntry]:
        """Get journal entries.

        Args:
            from_date: Optional first day (inclusive).
            to_date: Optional last day (inclusive).
            newest_first: Sort newest entries first.
            limit: Maximum number of entries to return.

        Returns:
            List of journal entries.
        """
        clauses = []
        params: list = []
        if from_date:
            clauses.append("date >= ?")
            params.append(from_date.isoformat())
        if to_date:
            clauses.append("date <= ?")
            params.append(to_date.isoformat())

        query = f"SELECT {ENTRY_COLUMNS} FROM entries"
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY date DESC, id DESC" if newest_first else " ORDER BY date, id"
        if limit is not None:
            query += " LIMIT ?"
            params.append(limit)

        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return [_row_to_entry(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_entry(self, entry_id: UUID) -> Optional[JournalEntry]:
        """Get an entry by ID.

        Returns:
            Entry if found, None otherwise.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {ENTRY_COLUMNS} FROM entries WHERE id = ?",
                (str(entry_id),),
            )
            row = cursor.fetchone()
            return _row_to_entry(row) if row else None
        finally:
            conn.close()

    def get_entry_for_day(self, day: date) -> Optional[JournalEntry]:
        """Get the entry written on ``day``, if any."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                f"SELECT {ENTRY_COLUMNS} FROM entries WHERE date = ?",
                (day.isoformat(),),
            )
            row = cursor.fetchone()
            return _row_to_entry(row) if row else None
        finally:
            conn.close()

    # ==================== Spaces ====================

    def save_space(self, space: SpaceCategory) -> None:
        """Insert or update a space.

        Args:
            space: Space to save.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO spaces (id, name, icon, color) VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name, icon = excluded.icon, color = excluded.color
                """,
                (str(space.id), space.name, space.icon, space.color.value),
            )
            conn.commit()
        finally:
            conn.close()

    def get_spaces(self) -> list[SpaceCategory]:
        """Get all spaces, sorted by name."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT id, name, icon, color FROM spaces ORDER BY name, id")
            return [_row_to_space(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_space(self, space_id: UUID) -> Optional[SpaceCategory]:
        """Get a space by ID."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, name, icon, color FROM spaces WHERE id = ?",
                (str(space_id),),
            )
            row = cursor.fetchone()
            return _row_to_space(row) if row else None
        finally:
            conn.close()

    def delete_space(self, space_id: UUID) -> bool:
        """Delete a space and, by cascade, its items.

        Returns:
            True if the space existed.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM spaces WHERE id = ?", (str(space_id),))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    def save_item(self, item: SpaceItem) -> None:
        """Insert a space item.

        Args:
            item: Item to save. Its space must exist.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                INSERT INTO items (id, name, type, category_id, data_path, text)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    str(item.id),
                    item.name,
                    item.type.value,
                    str(item.category_id),
                    str(item.data_path) if item.data_path else None,
                    item.text,
                ),
            )
            conn.commit()
        finally:
            conn.close()

    def get_items(self, space_id: Optional[UUID] = None) -> list[SpaceItem]:
        """Get items, optionally only those in one space."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            if space_id:
                cursor.execute(
                    """
                    SELECT id, name, type, category_id, data_path, text
                    FROM items WHERE category_id = ? ORDER BY name, id
                    """,
                    (str(space_id),),
                )
            else:
                cursor.execute(
                    """
                    SELECT id, name, type, category_id, data_path, text
                    FROM items ORDER BY name, id
                    """
                )
            return [_row_to_item(row) for row in cursor.fetchall()]
        finally:
            conn.close()

    def get_item(self, item_id: UUID) -> Optional[SpaceItem]:
        """Get an item by ID."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                """
                SELECT id, name, type, category_id, data_path, text
                FROM items WHERE id = ?
                """,
                (str(item_id),),
            )
            row = cursor.fetchone()
            return _row_to_item(row) if row else None
        finally:
            conn.close()

    def delete_item(self, item_id: UUID) -> bool:
        """Delete an item.

        Returns:
            True if the item existed.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM items WHERE id = ?", (str(item_id),))
            conn.commit()
            return cursor.rowcount > 0
        finally:
            conn.close()

    # ==================== Prompts ====================

    def get_prompts(self) -> list[str]:
        """Get all prompts in insertion order."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT text FROM prompts ORDER BY id")
            return [row["text"] for row in cursor.fetchall()]
        finally:
            conn.close()

    def add_prompts(self, prompts: list[str]) -> None:
        """Append prompts to the list."""
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.executemany(
                "INSERT INTO prompts (text) VALUES (?)",
                [(text,) for text in prompts],
            )
            conn.commit()
        finally:
            conn.close()

    def delete_prompt_at(self, index: int) -> Optional[str]:
        """Delete the prompt at a zero-based position.

        Returns:
            The removed prompt text, or None if the index is out of range.
        """
        if index < 0:
            return None
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT id, text FROM prompts ORDER BY id LIMIT 1 OFFSET ?",
                (index,),
            )
            row = cursor.fetchone()
            if row is None:
                return None
            cursor.execute("DELETE FROM prompts WHERE id = ?", (row["id"],))
            conn.commit()
            return row["text"]
        finally:
            conn.close()

    def seed_prompts(self, prompts: list[str]) -> bool:
        """Add ``prompts`` the first time this database is seeded.

        Prompts are only inserted if the table is empty. Later calls do
        nothing, even after every prompt has been removed.

        Returns:
            True if this call performed the seeding.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("SELECT value FROM meta WHERE key = 'prompts_seeded'")
            if cursor.fetchone() is not None:
                return False

            cursor.execute("SELECT COUNT(*) as count FROM prompts")
            if cursor.fetchone()["count"] == 0:
                cursor.executemany(
                    "INSERT INTO prompts (text) VALUES (?)",
                    [(text,) for text in prompts],
                )
            cursor.execute("INSERT INTO meta (key, value) VALUES ('prompts_seeded', '1')")
            conn.commit()
            return True
        finally:
            conn.close()

    def clear_prompts(self) -> None:
        """Delete every prompt."""
        conn = self._get_connection()
        try:
            conn.execute("DELETE FROM prompts")
            conn.commit()
        finally:
            conn.close()

    # ==================== Stats ====================

    def get_stats(self) -> dict:
        """Get database statistics.

        Returns:
            Dictionary with table record counts.
        """
        conn = self._get_connection()
        try:
            cursor = conn.cursor()
            stats = {}
            for table in self.REQUIRED_TABLES:
                cursor.execute(f"SELECT COUNT(*) as count FROM {table}")
                stats[table] = cursor.fetchone()["count"]
            return stats
        finally:
            conn.close()
