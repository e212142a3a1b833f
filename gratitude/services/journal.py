"""Journal entry operations.

Every mutation runs inside one store transaction: read all entries,
apply the change, recompute streaks, persist. Either all of it is saved or
none of it is.
"""

import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Callable, Iterable, Optional, Union
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from gratitude.db.store import DataStore
from gratitude.errors import DuplicateEntryError, EmptyEntryError, EntryNotFoundError
from gratitude.models import JournalEntry
from gratitude.streaks import normalize_day, order_entries, recompute, recompute_all

logger = logging.getLogger(__name__)

DayLike = Union[date, datetime]


class ImportResult(BaseModel):
    """Outcome of importing a batch of entries."""

    imported: int = Field(default=0, ge=0, description="Entries inserted")
    skipped: int = Field(default=0, ge=0, description="Entries on days already taken")


def _require_text(**fields: str) -> None:
    blank = [name for name, value in fields.items() if not value or not value.strip()]
    if blank:
        raise EmptyEntryError(f"Entries must not be blank: {', '.join(blank)}")


def _find(entries: list[JournalEntry], entry_id: UUID) -> JournalEntry:
    for entry in entries:
        if entry.id == entry_id:
            return entry
    raise EntryNotFoundError(entry_id)


class JournalService:
    """Creates, edits, deletes and imports journal entries."""

    def __init__(
        self,
        store: DataStore,
        tz: Optional[tzinfo] = None,
        now: Optional[Callable[[], datetime]] = None,
    ):
        """Initialize the service.

        Args:
            store: Data store holding the entries.
            tz: Timezone that decides which day a moment belongs to.
                None uses the local zone.
            now: Clock override, mainly for tests.
        """
        self.store = store
        self.tz = tz
        self._now = now or (lambda: datetime.now(self.tz))

    def today(self) -> date:
        """Current calendar day in the configured timezone."""
        return normalize_day(self._now(), self.tz)

    # ==================== Reads ====================

    def list_entries(
        self, newest_first: bool = True, limit: Optional[int] = None
    ) -> list[JournalEntry]:
        """List entries, newest first by default."""
        return self.store.get_entries(newest_first=newest_first, limit=limit)

    def get_entry(self, entry_id: UUID) -> JournalEntry:
        """Get an entry by ID.

        Raises:
            EntryNotFoundError: If no such entry exists.
        """
        entry = self.store.get_entry(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        return entry

    def entry_for_day(self, day: DayLike) -> Optional[JournalEntry]:
        """Entry for a given day, or None."""
        return self.store.get_entry_for_day(normalize_day(day, self.tz))

    def resolve(self, ref: str) -> JournalEntry:
        """Find an entry from user input.

        Args:
            ref: An ISO date (``2024-01-31``), ``today``, ``yesterday``,
                a full id or a unique id prefix.

        Raises:
            EntryNotFoundError: If nothing (or more than one entry) matches.
        """
        ref = ref.strip().lower()
        if not ref:
            raise EntryNotFoundError("''")
        day = None
        if ref == "today":
            day = self.today()
        elif ref == "yesterday":
            day = self.today() - timedelta(days=1)
        else:
            try:
                day = date.fromisoformat(ref)
            except ValueError:
                pass

        if day is not None:
            entry = self.store.get_entry_for_day(day)
            if entry is None:
                raise EntryNotFoundError(day.isoformat())
            return entry

        matches = [e for e in self.store.get_entries() if str(e.id).startswith(ref)]
        if len(matches) != 1:
            raise EntryNotFoundError(ref)
        return matches[0]

    # ==================== Mutations ====================

    def create_entry(
        self,
        entry1: str,
        entry2: str,
        entry3: str,
        notes: str = "",
        day: Optional[DayLike] = None,
    ) -> JournalEntry:
        """Create the entry for a day and update streaks.

        Args:
            entry1: First thing to be grateful for.
            entry2: Second thing.
            entry3: Third thing.
            notes: Optional notes.
            day: Day of the entry; defaults to today.

        Returns:
            The stored entry with its streak set.

        Raises:
            EmptyEntryError: If any of the three entries is blank.
            DuplicateEntryError: If the day already has an entry.
        """
        _require_text(entry1=entry1, entry2=entry2, entry3=entry3)
        entry = JournalEntry(
            date=normalize_day(day, self.tz) if day is not None else self.today(),
            entry1=entry1,
            entry2=entry2,
            entry3=entry3,
            notes=notes or "",
        )

        with self.store.transaction() as tx:
            entries = tx.all_entries()
            if any(e.date == entry.date for e in entries):
                raise DuplicateEntryError(entry.date)
            tx.insert_entry(entry)
            entries.append(entry)
            tx.save_entries(recompute(entry, entries))

        logger.info("Created entry for %s (streak %d)", entry.date.isoformat(), entry.streak)
        return entry

    def update_entry(
        self,
        entry_id: UUID,
        entry1: Optional[str] = None,
        entry2: Optional[str] = None,
        entry3: Optional[str] = None,
        notes: Optional[str] = None,
        day: Optional[DayLike] = None,
    ) -> JournalEntry:
        """Edit an entry. Fields left as None keep their value.

        Moving an entry to another day repairs streaks around both the old
        and the new day.

        Raises:
            EntryNotFoundError: If the entry does not exist.
            EmptyEntryError: If a new entry text is blank.
            DuplicateEntryError: If the new day already has an entry.
        """
        changes = {
            name: value
            for name, value in (("entry1", entry1), ("entry2", entry2), ("entry3", entry3))
            if value is not None
        }
        _require_text(**changes)

        with self.store.transaction() as tx:
            entries = tx.all_entries()
            entry = _find(entries, entry_id)
            old_day = entry.date

            for name, value in changes.items():
                setattr(entry, name, value)
            if notes is not None:
                entry.notes = notes

            if day is not None:
                new_day = normalize_day(day, self.tz)
                if new_day != old_day and any(
                    e.date == new_day for e in entries if e.id != entry.id
                ):
                    raise DuplicateEntryError(new_day)
                entry.date = new_day

            # Start at the earliest day whose streak may have changed.
            start_day = min(old_day, entry.date)
            start = next(e for e in order_entries(entries) if e.date >= start_day)
            tx.save_entries(recompute(start, entries))

        logger.info("Updated entry %s", entry.id)
        return entry

    def delete_entry(self, entry_id: UUID) -> JournalEntry:
        """Delete an entry and repair the streaks after it.

        Returns:
            The deleted entry.

        Raises:
            EntryNotFoundError: If the entry does not exist.
        """
        with self.store.transaction() as tx:
            entries = tx.all_entries()
            entry = _find(entries, entry_id)
            tx.delete_entry(entry.id)

            remaining = [e for e in entries if e.id != entry.id]
            successor = next(
                (e for e in order_entries(remaining) if e.date >= entry.date), None
            )
            if successor is not None:
                tx.save_entries(recompute(successor, remaining))

        logger.info("Deleted entry for %s", entry.date.isoformat())
        return entry

    def import_entries(self, incoming: Iterable[JournalEntry]) -> ImportResult:
        """Insert entries for days that have none yet.

        Entries whose day is already taken, by a stored entry or an earlier
        entry in the same batch, are skipped. Ids that clash with stored
        entries are replaced. Streaks are recomputed once from the earliest
        inserted day.
        """
        result = ImportResult()
        with self.store.transaction() as tx:
            entries = tx.all_entries()
            taken_days = {e.date for e in entries}
            taken_ids = {e.id for e in entries}
            first: Optional[JournalEntry] = None

            for entry in incoming:
                if entry.date in taken_days:
                    result.skipped += 1
                    continue
                if entry.id in taken_ids:
                    entry = entry.model_copy(update={"id": uuid4()})
                entry = entry.model_copy(update={"streak": 1})

                tx.insert_entry(entry)
                entries.append(entry)
                taken_days.add(entry.date)
                taken_ids.add(entry.id)
                result.imported += 1
                if first is None or entry.date < first.date:
                    first = entry

            if first is not None:
                tx.save_entries(recompute(first, entries))

        logger.info("Imported %d entries, skipped %d", result.imported, result.skipped)
        return result

    def delete_all(self) -> int:
        """Delete every entry, returning how many were removed."""
        with self.store.transaction() as tx:
            count = tx.delete_all_entries()
        logger.info("Deleted all %d entries", count)
        return count

    def recompute_all(self) -> list[JournalEntry]:
        """Re-derive every streak and save the result.

        Returns:
            All entries, oldest first.
        """
        with self.store.transaction() as tx:
            entries = recompute_all(tx.all_entries())
            tx.save_entries(entries)
        logger.info("Recomputed streaks for %d entries", len(entries))
        return entries
