"""Event source interface."""

from typing import Any, Protocol


class EventSource(Protocol):
    """Interface for loading raw event records from any backend."""

    def fetch_events(self) -> list[dict[str, Any]]:
        """Fetch raw event records, ready for normalization."""
        ...
