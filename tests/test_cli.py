"""Smoke tests for the command-line interface."""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from gratitude.cli import cli
from gratitude.db.store import DataStore
from gratitude.errors import GratitudeError
from gratitude.services import JournalService


@pytest.fixture
def runner(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    monkeypatch.setenv("GRATITUDE_HOME", str(tmp_path))
    monkeypatch.setenv("COLUMNS", "200")
    return CliRunner()


def invoke(runner: CliRunner, *args: str, input: str | None = None):
    return runner.invoke(cli, list(args), input=input, catch_exceptions=False)


class TestJournalCommands:
    def test_add_list_show(self, runner: CliRunner):
        result = invoke(runner, "add", "Coffee", "Sunshine", "Friends", "--day", "2024-01-01")
        assert result.exit_code == 0
        assert "Saved entry for 2024-01-01" in result.output

        invoke(runner, "add", "Tea", "Rain", "Books", "--day", "2024-01-02")

        listed = invoke(runner, "list")
        assert listed.exit_code == 0
        assert "2024-01-02" in listed.output
        assert "Total: 2 entries" in listed.output

        shown = invoke(runner, "show", "2024-01-02")
        assert shown.exit_code == 0
        assert "Streak: 2" in shown.output

    def test_add_prompts_for_missing_things(self, runner: CliRunner):
        result = invoke(runner, "add", "Coffee", "--day", "2024-01-01", input="Walk\nMusic\n")
        assert result.exit_code == 0
        assert "Saved entry" in result.output

    def test_duplicate_day_fails(self, runner: CliRunner):
        invoke(runner, "add", "a", "b", "c", "--day", "2024-01-01")
        result = invoke(runner, "add", "d", "e", "f", "--day", "2024-01-01")
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_too_many_things(self, runner: CliRunner):
        result = invoke(runner, "add", "a", "b", "c", "d")
        assert result.exit_code == 1

    def test_edit_and_delete(self, runner: CliRunner):
        invoke(runner, "add", "a", "b", "c", "--day", "2024-01-01")
        invoke(runner, "add", "a", "b", "c", "--day", "2024-01-02")

        edited = invoke(runner, "edit", "2024-01-01", "--notes", "lovely")
        assert edited.exit_code == 0
        assert "lovely" in edited.output

        deleted = invoke(runner, "delete", "2024-01-01", "--yes")
        assert deleted.exit_code == 0

        shown = invoke(runner, "show", "2024-01-02")
        assert "Streak: 1" in shown.output

    def test_delete_can_be_cancelled(self, runner: CliRunner):
        invoke(runner, "add", "a", "b", "c", "--day", "2024-01-01")
        result = invoke(runner, "delete", "2024-01-01", input="n\n")
        assert "Cancelled" in result.output
        assert invoke(runner, "show", "2024-01-01").exit_code == 0

    def test_unknown_entry(self, runner: CliRunner):
        result = invoke(runner, "show", "2020-02-02")
        assert result.exit_code == 1

    def test_empty_list(self, runner: CliRunner):
        result = invoke(runner, "list")
        assert result.exit_code == 0
        assert "No entries yet" in result.output


class TestStreakCommands:
    def test_streak_heatmap_memory_recompute(self, runner: CliRunner):
        invoke(runner, "add", "a", "b", "c")

        streak = invoke(runner, "streak")
        assert streak.exit_code == 0
        assert "Current streak" in streak.output

        heat = invoke(runner, "heatmap", "--days", "14")
        assert heat.exit_code == 0
        assert "1 of 14 days written" in heat.output

        assert invoke(runner, "memory").exit_code == 0

        recomputed = invoke(runner, "recompute")
        assert "Recomputed streaks for 1 entries" in recomputed.output


class TestDataCommands:
    def test_export_wipe_import(self, runner: CliRunner, tmp_path: Path):
        invoke(runner, "add", "a", "b", "c", "--day", "2024-01-01")
        invoke(runner, "add", "d", "e", "f", "--day", "2024-01-02")
        target = tmp_path / "backup.json"

        assert invoke(runner, "export", "-o", str(target)).exit_code == 0
        assert [e["streak"] for e in json.loads(target.read_text())] == [1, 2]

        assert invoke(runner, "wipe", "--yes").exit_code == 0
        assert "No entries yet" in invoke(runner, "list").output

        imported = invoke(runner, "import", str(target))
        assert imported.exit_code == 0
        assert "Imported: 2" in imported.output

    def test_export_csv_to_stdout(self, runner: CliRunner):
        invoke(runner, "add", "a", "b", "c", "--day", "2024-01-01")
        result = invoke(runner, "export", "--format", "csv")
        assert result.output.splitlines()[0] == "ID,Date,Entry1,Entry2,Entry3,Notes"

    def test_import_bad_file(self, runner: CliRunner, tmp_path: Path):
        bad = tmp_path / "bad.json"
        bad.write_text("nope")
        result = invoke(runner, "import", str(bad))
        assert result.exit_code == 1


class TestPromptAndSpaceCommands:
    def test_prompt_commands(self, runner: CliRunner):
        assert invoke(runner, "prompt", "show").exit_code == 0
        assert invoke(runner, "prompt", "add", "Who made you laugh?").exit_code == 0
        assert "Who made you laugh?" in invoke(runner, "prompt", "list").output
        assert invoke(runner, "prompt", "remove", "1").exit_code == 0
        assert invoke(runner, "prompt", "reset").exit_code == 0

    def test_space_commands(self, runner: CliRunner, tmp_path: Path):
        assert invoke(runner, "space", "add", "Recipes", "--color", "green").exit_code == 0
        note = invoke(runner, "space", "item-add", "Recipes", "--name", "Soup", "--text", "Leeks")
        assert note.exit_code == 0

        doc = tmp_path / "menu.txt"
        doc.write_text("menu")
        assert invoke(runner, "space", "item-add", "Recipes", "--file", str(doc)).exit_code == 0

        items = invoke(runner, "space", "item-list", "Recipes")
        assert "Soup" in items.output
        assert "menu.txt" in items.output

        assert invoke(runner, "space", "delete", "Recipes", "--yes").exit_code == 0
        assert "No spaces yet" in invoke(runner, "space", "list").output

    def test_item_add_needs_one_source(self, runner: CliRunner):
        invoke(runner, "space", "add", "Recipes")
        result = invoke(runner, "space", "item-add", "Recipes")
        assert result.exit_code == 1


class TestRootCommand:
    def test_init_writes_config(self, runner: CliRunner, tmp_path: Path):
        result = invoke(runner, "init")
        assert result.exit_code == 0
        assert (tmp_path / "config.toml").exists()

        again = invoke(runner, "init")
        assert "already exists" in again.output

    def test_broken_config(self, runner: CliRunner, tmp_path: Path):
        (tmp_path / "config.toml").write_text('[journal]\ntimezone = "unterminated')
        result = invoke(runner, "list")
        assert result.exit_code == 1


class TestRegressions:
    def test_blank_reference_is_rejected(self, runner: CliRunner):
        invoke(runner, "add", "a", "b", "c", "--day", "2024-01-01")
        assert invoke(runner, "show", "").exit_code == 1
        assert invoke(runner, "show", "  ").exit_code == 1

    def test_streak_reports_store_errors(self, runner: CliRunner, monkeypatch: pytest.MonkeyPatch):
        invoke(runner, "add", "a", "b", "c")

        def broken(self, day):
            raise GratitudeError("database is locked")

        monkeypatch.setattr(JournalService, "entry_for_day", broken)
        result = invoke(runner, "streak")

        assert result.exit_code == 1
        assert "database is locked" in result.output

    def test_empty_prompt_list_stays_empty(self, runner: CliRunner, tmp_path: Path):
        invoke(runner, "prompt", "list")
        DataStore(tmp_path / "gratitude.db").clear_prompts()

        result = invoke(runner, "prompt", "show")

        assert "No prompts" in result.output

    def test_import_uses_configured_timezone(self, runner: CliRunner, tmp_path: Path):
        (tmp_path / "config.toml").write_text('[journal]\ntimezone = "Asia/Tokyo"\n')
        source = tmp_path / "backup.json"
        source.write_text(json.dumps([
            {"date": "2024-01-01T20:00:00Z", "entry1": "a", "entry2": "b", "entry3": "c"},
        ]))

        assert invoke(runner, "import", str(source)).exit_code == 0
        assert invoke(runner, "show", "2024-01-02").exit_code == 0
