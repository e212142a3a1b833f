"""Summary statistics derived from entry streaks."""

import random
from datetime import date, timedelta
from typing import Optional

from gratitude.models import JournalEntry

# Streak lengths worth celebrating
MILESTONES = (7, 30, 100, 365)


def _by_day(entries: list[JournalEntry]) -> dict[date, JournalEntry]:
    # Later entries win on duplicate days, matching the ordering used for streaks.
    result = {}
    for entry in sorted(entries, key=lambda e: (e.date, str(e.id))):
        result[entry.date] = entry
    return result


def current_streak(entries: list[JournalEntry], today: date) -> int:
    """Length of the running streak.

    A streak is still alive if the last entry was yesterday; today's entry
    may not have been written yet.

    Args:
        entries: All journal entries.
        today: The current calendar day.

    Returns:
        Streak of today's entry, else of yesterday's, else 0.
    """
    days = _by_day(entries)
    for day in (today, today - timedelta(days=1)):
        if day in days:
            return days[day].streak
    return 0


def longest_streak(entries: list[JournalEntry]) -> int:
    """Longest streak ever reached, 0 when there are no entries."""
    return max((e.streak for e in entries), default=0)


def entries_this_week(entries: list[JournalEntry], today: date) -> int:
    """Number of distinct days with an entry in today's ISO week."""
    year, week, _ = today.isocalendar()
    return len({
        e.date for e in entries
        if e.date.isocalendar()[:2] == (year, week)
    })


def weekly_progress(entries: list[JournalEntry], today: date) -> float:
    """Fraction of the current week's seven days with an entry."""
    return min(entries_this_week(entries, today) / 7.0, 1.0)


def heatmap(
    entries: list[JournalEntry], today: date, days: int = 30
) -> list[tuple[date, int]]:
    """Streak value for each of the last ``days`` days.

    Args:
        entries: All journal entries.
        today: Last day of the window.
        days: Window length.

    Returns:
        ``(day, streak)`` pairs, oldest first. Days without an entry have
        streak 0.
    """
    if days < 1:
        raise ValueError("days must be at least 1")

    by_day = _by_day(entries)
    window = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    return [(day, by_day[day].streak if day in by_day else 0) for day in window]


def random_memory(
    entries: list[JournalEntry], rng: Optional[random.Random] = None
) -> Optional[JournalEntry]:
    """Pick a random past entry, or None if there are none."""
    if not entries:
        return None
    return (rng or random).choice(entries)


def next_milestone(streak: int) -> Optional[int]:
    """First milestone above ``streak``, None once all are reached."""
    return next((m for m in MILESTONES if m > streak), None)
