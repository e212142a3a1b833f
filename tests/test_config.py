"""Tests for configuration loading."""

from pathlib import Path
from zoneinfo import ZoneInfo

import pytest

from gratitude.config import (
    create_template_config,
    get_config_dir,
    get_db_path,
    get_files_dir,
    get_log_level,
    get_timezone,
    load_config,
)
from gratitude.errors import ConfigError


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("GRATITUDE_HOME", str(tmp_path))
    return tmp_path


class TestConfig:
    def test_missing_file_means_defaults(self, home: Path):
        config = load_config()

        assert config == {}
        assert get_config_dir() == home
        assert get_db_path(config) == home / "gratitude.db"
        assert get_files_dir(config) == home / "files"
        assert get_timezone(config) is None
        assert get_log_level(config) == "WARNING"

    def test_template_loads_to_defaults(self, home: Path):
        path = create_template_config()
        config = load_config(path)

        assert path == home / "config.toml"
        assert get_db_path(config) == home / "gratitude.db"
        assert get_timezone(config) is None

    def test_configured_values(self, home: Path):
        path = home / "custom.toml"
        path.write_text(
            '[journal]\ntimezone = "Europe/Madrid"\n'
            f'[storage]\ndb_path = "{(home / "j.db").as_posix()}"\n'
            '[logging]\nlevel = "debug"\n'
        )
        config = load_config(path)

        assert get_timezone(config) == ZoneInfo("Europe/Madrid")
        assert get_db_path(config) == home / "j.db"
        assert get_log_level(config) == "DEBUG"

    def test_unknown_timezone(self):
        with pytest.raises(ConfigError):
            get_timezone({"journal": {"timezone": "Mars/Olympus_Mons"}})

    def test_unparseable_file(self, home: Path):
        path = home / "config.toml"
        path.write_text('name = "unterminated')
        with pytest.raises(ConfigError):
            load_config(path)
