"""JSON file adapter - reads event records from disk."""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def extract_records(data: Any, label: str) -> list[dict[str, Any]]:
    """Accept either a list of records or an object with an "events" list."""
    if isinstance(data, dict):
        data = data.get("events")
    if not isinstance(data, list):
        logger.warning(f"No event list found in {label}")
        return []
    return data


class JsonFileEventSource:
    """
    Loads events from a JSON file.

    Implements EventSource protocol.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()

    def fetch_events(self) -> list[dict[str, Any]]:
        """Read the file, returning no events if it is missing or malformed."""
        try:
            data = json.loads(self.path.read_text())
        except FileNotFoundError:
            logger.warning(f"Events file not found: {self.path}")
            return []
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read events from {self.path}: {e}")
            return []

        return extract_records(data, str(self.path))
