"""Data models for Gratitude."""

from gratitude.models.entry import JournalEntry
from gratitude.models.space import CategoryColor, ItemType, SpaceCategory, SpaceItem

__all__ = [
    "JournalEntry",
    "SpaceCategory",
    "SpaceItem",
    "CategoryColor",
    "ItemType",
]
