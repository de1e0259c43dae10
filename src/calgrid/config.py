"""Configuration management for calgrid."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

CALGRID_HOME = Path(os.environ.get("CALGRID_HOME", Path.home() / ".calgrid"))
CONFIG_FILE = CALGRID_HOME / "calgrid.conf"

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class Config:
    """calgrid configuration."""

    default_view: str = "month"
    week_offset: int = 0
    # view -> {"size": n, "step": m}
    pagination: dict[str, dict] = field(default_factory=dict)
    show_adjacent: bool = True
    force_six_rows: bool = False
    track_selected_date: bool = True
    adjacent_items_change_page: bool = False
    ignore_inactive_in_selection: bool = False
    # Event sources
    events_file: str = ""
    events_url: str = ""
    events_timeout: int = 30
    # Constraints (ISO dates)
    constraint_start: str = ""
    constraint_end: str = ""
    # Event record field names
    date_field: str = "date"
    start_field: str = "start"
    end_field: str = "end"

    def date_parameter(self) -> dict[str, str]:
        return {"date": self.date_field, "start": self.start_field, "end": self.end_field}

    def constraints(self) -> dict[str, str] | None:
        if not (self.constraint_start or self.constraint_end):
            return None
        return {"start": self.constraint_start or None, "end": self.constraint_end or None}


def _parse_bool(key: str, value: str, default: bool) -> bool:
    lowered = value.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    logger.warning(f"Invalid boolean for {key.upper()}: {value!r}")
    return default


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key.upper()}: {value!r}")
        return default


def parse_pagination(value: str) -> dict[str, dict]:
    """
    Parse a pagination setting.

    JSON format: {"month": {"size": 2, "step": 1}, "year": 1}
    Simple format: "month:2,year:1" or "month:2/1" for size 2, step 1
    """
    pagination: dict[str, dict] = {}
    if value.lstrip().startswith(("{", "[")):
        try:
            data = json.loads(value)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse PAGINATION JSON: {e}")
            return pagination
        if not isinstance(data, dict):
            logger.warning(f"Ignoring PAGINATION, expected a JSON object: {value!r}")
            return pagination
        for view, entry in data.items():
            if isinstance(entry, int) and not isinstance(entry, bool):
                pagination[view] = {"size": entry}
            elif isinstance(entry, dict):
                pagination[view] = dict(entry)
            else:
                logger.warning(f"Ignoring invalid pagination entry for {view}: {entry!r}")
        return pagination

    for entry in value.split(","):
        entry = entry.strip()
        if not entry:
            continue
        if ":" not in entry:
            logger.warning(f"Ignoring pagination entry without size: {entry!r}")
            continue
        view, _, sizes = entry.partition(":")
        size, _, step = sizes.partition("/")
        try:
            parsed = {"size": int(size)}
            if step:
                parsed["step"] = int(step)
        except ValueError:
            logger.warning(f"Ignoring invalid pagination entry: {entry!r}")
            continue
        pagination[view.strip()] = parsed
    return pagination


def load_config() -> Config:
    """Load configuration from calgrid.conf file."""
    config = Config()

    if not CONFIG_FILE.exists():
        return config

    for line in CONFIG_FILE.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = value.strip()

        # Handle quoted values with inline comments: "value" # comment
        if value[:1] in ('"', "'"):
            quote = value[0]
            end_quote = value.find(quote, 1)
            value = value[1:end_quote] if end_quote != -1 else value[1:]
        elif "#" in value:
            value = value.split("#")[0].strip()

        match key:
            case "default_view":
                config.default_view = value.lower()
            case "week_offset":
                config.week_offset = _parse_int(key, value, config.week_offset)
            case "pagination":
                config.pagination = parse_pagination(value)
            case "show_adjacent":
                config.show_adjacent = _parse_bool(key, value, config.show_adjacent)
            case "force_six_rows":
                config.force_six_rows = _parse_bool(key, value, config.force_six_rows)
            case "track_selected_date":
                config.track_selected_date = _parse_bool(key, value, config.track_selected_date)
            case "adjacent_items_change_page":
                config.adjacent_items_change_page = _parse_bool(key, value, config.adjacent_items_change_page)
            case "ignore_inactive_in_selection":
                config.ignore_inactive_in_selection = _parse_bool(
                    key, value, config.ignore_inactive_in_selection
                )
            case "events_file":
                config.events_file = value
            case "events_url":
                config.events_url = value
            case "events_timeout":
                config.events_timeout = _parse_int(key, value, config.events_timeout)
            case "constraint_start":
                config.constraint_start = value
            case "constraint_end":
                config.constraint_end = value
            case "date_field":
                config.date_field = value
            case "start_field":
                config.start_field = value
            case "end_field":
                config.end_field = value
            case _:
                logger.warning(f"Unknown config key: {key.upper()}")

    return config
