"""Tests for configuration loading."""

from pathlib import Path

from cadence.config import DATA_DIR, Config, load_config


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "nope.conf") == Config()

    def test_parses_values(self, tmp_path):
        conf = tmp_path / "cadence.conf"
        conf.write_text(
            "\n".join(
                [
                    "# Cadence settings",
                    'TODOS_FILE="~/todos.json"  # quoted',
                    "DEFAULT_LIST_ID = inbox # comment",
                    "LOG_LEVEL=debug",
                    "DATE_FORMAT='%Y-%m-%d'",
                    "not a setting",
                    "UNKNOWN_KEY=1",
                ]
            )
        )
        config = load_config(conf)
        assert config.todos_file == "~/todos.json"
        assert config.default_list_id == "inbox"
        assert config.log_level == "DEBUG"
        assert config.date_format == "%Y-%m-%d"

    def test_invalid_log_level_ignored(self, tmp_path):
        conf = tmp_path / "cadence.conf"
        conf.write_text("LOG_LEVEL=chatty\n")
        assert load_config(conf).log_level == "WARNING"


class TestTodosPath:
    def test_default(self):
        assert Config().todos_path == DATA_DIR / "todos.json"

    def test_expands_user(self):
        assert Config(todos_file="~/t.json").todos_path == Path.home() / "t.json"
