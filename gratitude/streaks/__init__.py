"""Streak calculation and statistics."""

from gratitude.streaks.calculator import (
    is_next_day,
    normalize_day,
    order_entries,
    recompute,
    recompute_all,
)
from gratitude.streaks.stats import (
    MILESTONES,
    current_streak,
    entries_this_week,
    heatmap,
    longest_streak,
    next_milestone,
    random_memory,
    weekly_progress,
)

__all__ = [
    "MILESTONES",
    "current_streak",
    "entries_this_week",
    "heatmap",
    "is_next_day",
    "longest_streak",
    "next_milestone",
    "normalize_day",
    "order_entries",
    "random_memory",
    "recompute",
    "recompute_all",
    "weekly_progress",
]
