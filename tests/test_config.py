"""Tests for configuration loading."""

import logging
from unittest.mock import patch

from calgrid.config import Config, load_config, parse_pagination


def load_from(tmp_path, text: str) -> Config:
    config_file = tmp_path / "calgrid.conf"
    config_file.write_text(text)
    with patch("calgrid.config.CONFIG_FILE", config_file):
        return load_config()


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        with patch("calgrid.config.CONFIG_FILE", tmp_path / "missing.conf"):
            config = load_config()
        assert config == Config()

    def test_basic_values(self, tmp_path):
        config = load_from(
            tmp_path,
            "\n".join(
                [
                    "# calendar defaults",
                    "DEFAULT_VIEW=Week",
                    "WEEK_OFFSET=1",
                    "SHOW_ADJACENT=no",
                    "FORCE_SIX_ROWS=yes",
                    "EVENTS_FILE=~/events.json",
                    "EVENTS_TIMEOUT=5",
                ]
            ),
        )
        assert config.default_view == "week"
        assert config.week_offset == 1
        assert config.show_adjacent is False
        assert config.force_six_rows is True
        assert config.events_file == "~/events.json"
        assert config.events_timeout == 5

    def test_quoted_values_and_comments(self, tmp_path):
        config = load_from(
            tmp_path,
            'EVENTS_URL="https://example.com/feed#all" # team feed\n'
            "START_FIELD='from'\n"
            "END_FIELD=to # inline comment\n",
        )
        assert config.events_url == "https://example.com/feed#all"
        assert config.start_field == "from"
        assert config.end_field == "to"

    def test_invalid_values_keep_defaults(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            config = load_from(tmp_path, "WEEK_OFFSET=monday\nTRACK_SELECTED_DATE=maybe\n")
        assert config.week_offset == 0
        assert config.track_selected_date is True
        assert len(caplog.records) == 2

    def test_unknown_key_warns(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            load_from(tmp_path, "COLOR=blue\n")
        assert "COLOR" in caplog.records[0].getMessage()

    def test_lines_without_equals_ignored(self, tmp_path):
        config = load_from(tmp_path, "just some text\nDEFAULT_VIEW=year\n")
        assert config.default_view == "year"

    def test_constraints(self, tmp_path):
        config = load_from(tmp_path, "CONSTRAINT_START=1992-10-15\n")
        assert config.constraints() == {"start": "1992-10-15", "end": None}
        assert Config().constraints() is None

    def test_date_parameter(self, tmp_path):
        config = load_from(tmp_path, "DATE_FIELD=day\n")
        assert config.date_parameter() == {"date": "day", "start": "start", "end": "end"}


class TestParsePagination:
    def test_simple_format(self):
        assert parse_pagination("month:2, year:1") == {"month": {"size": 2}, "year": {"size": 1}}

    def test_simple_format_with_step(self):
        assert parse_pagination("month:3/1") == {"month": {"size": 3, "step": 1}}

    def test_json_format(self):
        assert parse_pagination('{"month": {"size": 2, "step": 1}, "week": 2}') == {
            "month": {"size": 2, "step": 1},
            "week": {"size": 2},
        }

    def test_invalid_json(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_pagination("{month") == {}
        assert "PAGINATION" in caplog.records[0].getMessage()

    def test_invalid_entries_skipped(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_pagination("month,week:x,day:3") == {"day": {"size": 3}}
        assert len(caplog.records) == 2

    def test_json_null_entry_skipped(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_pagination('{"month": null, "week": 2}') == {"week": {"size": 2}}
        assert "month" in caplog.records[0].getMessage()

    def test_json_list_entry_skipped(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_pagination('{"month": [2]}') == {}
        assert len(caplog.records) == 1

    def test_json_bool_entry_skipped(self):
        assert parse_pagination('{"month": true}') == {}

    def test_json_top_level_must_be_object(self, caplog):
        with caplog.at_level(logging.WARNING):
            assert parse_pagination("[1, 2]") == {}
        assert "expected a JSON object" in caplog.records[0].getMessage()

    def test_malformed_entry_in_file_keeps_default(self, tmp_path):
        config = load_from(tmp_path, 'PAGINATION={"month": null}\nDEFAULT_VIEW=week\n')
        assert config.pagination == {}
        assert config.default_view == "week"

    def test_from_file(self, tmp_path):
        config = load_from(tmp_path, 'PAGINATION="month:2"\n')
        assert config.pagination == {"month": {"size": 2}}
