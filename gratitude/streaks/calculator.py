"""Consecutive-day streak calculation for journal entries.

Every entry carries the length of the run of consecutive calendar days that
ends on its date. After an entry is inserted, edited or removed, the entries
from that point onward are re-derived from their immediate predecessors.
"""

import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Union

from gratitude.errors import ReferenceNotFound
from gratitude.models import JournalEntry

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def normalize_day(value: Union[date, datetime], tz: Optional[tzinfo] = None) -> date:
    """Truncate a date or datetime to its calendar day.

    Args:
        value: A date or datetime.
        tz: Reference timezone. Aware datetimes are converted into it before
            truncation; None means the local zone. Naive datetimes are taken
            as wall-clock time.

    Returns:
        The calendar day.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def is_next_day(previous: date, current: date) -> bool:
    """True if ``current`` is exactly one calendar day after ``previous``."""
    return current - previous == ONE_DAY


def order_entries(entries: list[JournalEntry]) -> list[JournalEntry]:
    """Sort entries by day, oldest first.

    Entries that share a day are ordered by id so the result never depends
    on the input order.
    """
    return sorted(entries, key=lambda e: (e.date, str(e.id)))


def _streak_after(previous: Optional[JournalEntry], entry: JournalEntry) -> int:
    if previous is not None and is_next_day(previous.date, entry.date):
        return previous.streak + 1
    return 1


def recompute(
    changed: JournalEntry, entries: list[JournalEntry]
) -> list[JournalEntry]:
    """Recompute streaks from ``changed`` to the newest entry.

    Entries are updated in place. Entries dated before ``changed`` are left
    alone.

    Args:
        changed: The entry that was inserted or edited. Must be present in
            ``entries`` (matched by id).
        entries: Every persisted entry, in any order.

    Returns:
        ``changed`` followed by every later entry, oldest first. These are the
        entries the caller has to persist.

    Raises:
        ReferenceNotFound: If ``changed`` is not in ``entries``.
    """
    ordered = order_entries(entries)

    index = next((i for i, e in enumerate(ordered) if e.id == changed.id), None)
    if index is None:
        raise ReferenceNotFound(changed.id)

    target = ordered[index]
    previous = ordered[index - 1] if index > 0 else None
    for entry in ordered[index:]:
        entry.streak = _streak_after(previous, entry)
        previous = entry

    # The caller may hold a separate copy of the same row.
    if target is not changed:
        changed.streak = target.streak

    updated = ordered[index:]
    logger.debug(
        "Recomputed %d streak(s) starting %s", len(updated), changed.date.isoformat()
    )
    return updated


def recompute_all(entries: list[JournalEntry]) -> list[JournalEntry]:
    """Re-derive every streak from scratch.

    Returns:
        All entries, oldest first.
    """
    ordered = order_entries(entries)
    if ordered:
        recompute(ordered[0], ordered)
    return ordered
