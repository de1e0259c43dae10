"""Composite event source - combines multiple sources."""

from typing import Any

from calgrid.ports import EventSource


class CompositeEventSource:
    """
    Concatenates the records of several event sources, in order.

    Implements EventSource protocol.
    """

    def __init__(self, sources: list[EventSource]):
        self.sources = sources

    def fetch_events(self) -> list[dict[str, Any]]:
        events = []
        for source in self.sources:
            events.extend(source.fetch_events())
        return events
