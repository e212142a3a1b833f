"""Property-based tests for the database store."""

import tempfile
from datetime import date, timedelta
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from gratitude.db.store import DataStore
from gratitude.errors import DuplicateEntryError
from gratitude.models import ItemType, SpaceCategory, SpaceItem

from conftest import make_entry


class TestDatabaseSchemaCompleteness:
    """
    *For any* fresh database, all required tables (entries, spaces, items,
    prompts, meta) should exist.
    """

    def test_schema_completeness(self, temp_db: DataStore):
        """Test that all required tables exist in a fresh database."""
        tables = temp_db.get_tables()

        for table in DataStore.REQUIRED_TABLES:
            assert table in tables, f"Required table '{table}' is missing"

    @given(st.integers(min_value=1, max_value=5))
    @settings(max_examples=10)
    def test_schema_completeness_multiple_instances(self, num_instances: int):
        """
        *For any* number of DataStore instances created with fresh databases,
        all required tables should exist in each.
        """
        with tempfile.TemporaryDirectory() as tmpdir:
            for i in range(num_instances):
                store = DataStore(Path(tmpdir) / f"test_{i}.db")
                tables = store.get_tables()

                for table in DataStore.REQUIRED_TABLES:
                    assert table in tables, f"Required table '{table}' missing in instance {i}"

    def test_reopening_keeps_data(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "nested" / "test.db"
            with DataStore(db_path).transaction() as tx:
                tx.insert_entry(make_entry(date(2024, 1, 1)))

            assert len(DataStore(db_path).get_entries()) == 1


class TestEntryRoundTrip:
    """
    *For any* entry text, what is stored is what comes back.
    """

    @given(
        text=st.text(
            alphabet=st.characters(blacklist_categories=("Cs", "Cc")),
            min_size=1,
            max_size=40,
        ),
        notes=st.text(
            alphabet=st.characters(blacklist_categories=("Cs", "Cc")),
            max_size=80,
        ),
        streak=st.integers(min_value=1, max_value=1000),
    )
    @settings(max_examples=30)
    def test_entry_fields_survive_storage(self, text: str, notes: str, streak: int):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = DataStore(Path(tmpdir) / "test.db")
            entry = make_entry(date(2024, 3, 1), streak=streak, text=text)
            entry.notes = notes

            with store.transaction() as tx:
                tx.insert_entry(entry)

            assert store.get_entry(entry.id) == entry


class TestEntryQueries:
    def test_ordering_and_filters(self, temp_db: DataStore):
        days = [date(2024, 1, d) for d in (3, 1, 2, 9)]
        with temp_db.transaction() as tx:
            for day in days:
                tx.insert_entry(make_entry(day))

        assert [e.date for e in temp_db.get_entries()] == sorted(days)
        assert [e.date for e in temp_db.get_entries(newest_first=True, limit=2)] == [
            date(2024, 1, 9),
            date(2024, 1, 3),
        ]
        assert [e.date for e in temp_db.get_entries(
            from_date=date(2024, 1, 2), to_date=date(2024, 1, 3)
        )] == [date(2024, 1, 2), date(2024, 1, 3)]

    def test_entry_for_day(self, temp_db: DataStore):
        entry = make_entry(date(2024, 1, 5))
        with temp_db.transaction() as tx:
            tx.insert_entry(entry)

        assert temp_db.get_entry_for_day(date(2024, 1, 5)).id == entry.id
        assert temp_db.get_entry_for_day(date(2024, 1, 6)) is None


class TestTransactions:
    """Work inside a transaction is all-or-nothing."""

    def test_commit_on_success(self, temp_db: DataStore):
        with temp_db.transaction() as tx:
            tx.insert_entry(make_entry(date(2024, 1, 1)))
            tx.insert_entry(make_entry(date(2024, 1, 2)))

        assert len(temp_db.get_entries()) == 2

    def test_rollback_on_error(self, temp_db: DataStore):
        entry = make_entry(date(2024, 1, 1))
        with temp_db.transaction() as tx:
            tx.insert_entry(entry)

        with pytest.raises(RuntimeError):
            with temp_db.transaction() as tx:
                tx.insert_entry(make_entry(date(2024, 1, 2)))
                entry.streak = 99
                tx.save_entries([entry])
                raise RuntimeError("storage failed midway")

        stored = temp_db.get_entries()
        assert [e.date for e in stored] == [date(2024, 1, 1)]
        assert stored[0].streak == 1

    def test_duplicate_day_rejected(self, temp_db: DataStore):
        with temp_db.transaction() as tx:
            tx.insert_entry(make_entry(date(2024, 1, 1)))

        with pytest.raises(DuplicateEntryError):
            with temp_db.transaction() as tx:
                tx.insert_entry(make_entry(date(2024, 1, 1)))

    def test_delete_entry_reports_missing(self, temp_db: DataStore):
        entry = make_entry(date(2024, 1, 1))
        with temp_db.transaction() as tx:
            tx.insert_entry(entry)
            assert tx.delete_entry(entry.id) is True
            assert tx.delete_entry(entry.id) is False

    def test_delete_all(self, temp_db: DataStore):
        with temp_db.transaction() as tx:
            for offset in range(5):
                tx.insert_entry(make_entry(date(2024, 1, 1) + timedelta(days=offset)))
        with temp_db.transaction() as tx:
            assert tx.delete_all_entries() == 5
        assert temp_db.get_entries() == []


class TestSpaces:
    def test_space_round_trip_and_update(self, temp_db: DataStore):
        space = SpaceCategory(name="Recipes", color="green")
        temp_db.save_space(space)
        assert temp_db.get_space(space.id) == space

        renamed = SpaceCategory(id=space.id, name="Cooking", icon="fork", color="red")
        temp_db.save_space(renamed)
        assert temp_db.get_spaces() == [renamed]

    def test_deleting_space_cascades_to_items(self, temp_db: DataStore):
        space = SpaceCategory(name="Notes")
        other = SpaceCategory(name="Other")
        temp_db.save_space(space)
        temp_db.save_space(other)
        temp_db.save_item(SpaceItem(name="a", category_id=space.id, text="alpha"))
        kept = SpaceItem(name="b", category_id=other.id, text="beta")
        temp_db.save_item(kept)

        assert temp_db.delete_space(space.id) is True
        assert temp_db.get_items() == [kept]
        assert temp_db.delete_space(space.id) is False

    def test_item_with_path(self, temp_db: DataStore):
        space = SpaceCategory(name="Docs")
        temp_db.save_space(space)
        item = SpaceItem(
            name="scan",
            type=ItemType.IMAGE,
            category_id=space.id,
            data_path=Path("/tmp/scan.png"),
        )
        temp_db.save_item(item)

        assert temp_db.get_item(item.id) == item
        assert temp_db.get_items(space.id) == [item]


class TestPrompts:
    def test_prompts_keep_order_and_delete_by_position(self, temp_db: DataStore):
        temp_db.add_prompts(["one", "two", "three"])

        assert temp_db.delete_prompt_at(1) == "two"
        assert temp_db.get_prompts() == ["one", "three"]
        assert temp_db.delete_prompt_at(5) is None
        assert temp_db.delete_prompt_at(-1) is None

        temp_db.clear_prompts()
        assert temp_db.get_prompts() == []

    def test_seeding_happens_once(self, temp_db: DataStore):
        assert temp_db.seed_prompts(["a", "b"]) is True
        temp_db.clear_prompts()

        assert temp_db.seed_prompts(["a", "b"]) is False
        assert temp_db.get_prompts() == []

    def test_seeding_keeps_existing_prompts(self, temp_db: DataStore):
        temp_db.add_prompts(["mine"])

        assert temp_db.seed_prompts(["a", "b"]) is True
        assert temp_db.get_prompts() == ["mine"]


class TestStats:
    def test_stats_counts(self, temp_db: DataStore):
        with temp_db.transaction() as tx:
            tx.insert_entry(make_entry(date(2024, 1, 1)))
        temp_db.add_prompts(["p"])

        stats = temp_db.get_stats()

        assert stats == {"entries": 1, "spaces": 0, "items": 0, "prompts": 1, "meta": 0}
