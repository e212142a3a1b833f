"""Shared fixtures for Gratitude tests."""

import tempfile
from datetime import date, datetime
from pathlib import Path

import pytest

from gratitude.db.store import DataStore
from gratitude.models import JournalEntry
from gratitude.services import JournalService


def make_entry(day: date, streak: int = 1, text: str = "thing") -> JournalEntry:
    """Build an entry with filled-in text for ``day``."""
    return JournalEntry(
        date=day,
        entry1=f"{text} 1",
        entry2=f"{text} 2",
        entry3=f"{text} 3",
        streak=streak,
    )


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        yield DataStore(db_path)


@pytest.fixture
def journal(temp_db: DataStore) -> JournalService:
    """Journal service whose 'today' is fixed to 2024-01-10."""
    return JournalService(temp_db, now=lambda: datetime(2024, 1, 10, 21, 30))
