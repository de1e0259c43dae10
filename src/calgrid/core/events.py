"""Event normalization - turns caller records into dated events."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from typing import Any

from .errors import ConfigurationError
from .interval import Interval, parse_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateParameter:
    """Field names used to read dates out of event records."""

    date: str | None = "date"
    start: str | None = "start"
    end: str | None = "end"

    @classmethod
    def from_value(cls, value) -> "DateParameter":
        """
        Build from None, a single field name, or a mapping.

        A single field name means every record is a single-day event. A mapping
        may name "date", "start" and "end"; keys it leaves out are not read.
        """
        if value is None:
            return cls()
        if isinstance(value, DateParameter):
            return value
        if isinstance(value, str):
            return cls(date=value, start=None, end=None)
        if isinstance(value, Mapping):
            unknown = set(value) - {"date", "start", "end"}
            if unknown:
                raise ConfigurationError(f"Unknown date parameter keys: {sorted(unknown)}")
            param = cls(date=value.get("date"), start=value.get("start"), end=value.get("end"))
            if not (param.date or param.start or param.end):
                raise ConfigurationError("Date parameter must name at least one field")
            return param
        raise ConfigurationError(f"Invalid date parameter: {value!r}")


@dataclass(frozen=True)
class CalendarEvent:
    """A caller record with its resolved date span."""

    start: date
    end: date
    original: Any

    @property
    def interval(self) -> Interval:
        return Interval(self.start, self.end)

    def overlaps(self, interval: Interval) -> bool:
        return self.start <= interval.end and interval.start <= self.end


def _read_field(record, name: str | None):
    if not name:
        return None
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def normalize_event(record, param: DateParameter | None = None) -> CalendarEvent:
    """
    Resolve one record into a CalendarEvent.

    A record with either range field is ranged, a missing bound taking the
    other bound's value. Otherwise the single date field is used.

    Raises:
        ValueError: If no date can be read, or start falls after end.
        TypeError: If a date field holds something that is not a date.
    """
    param = param or DateParameter()
    start_value = _read_field(record, param.start)
    end_value = _read_field(record, param.end)

    if start_value is not None or end_value is not None:
        start = parse_date(start_value if start_value is not None else end_value)
        end = parse_date(end_value if end_value is not None else start_value)
    else:
        single = _read_field(record, param.date)
        if single is None:
            raise ValueError("record has no date fields")
        start = end = parse_date(single)

    if start > end:
        raise ValueError(f"start {start} is after end {end}")
    return CalendarEvent(start=start, end=end, original=record)


def normalize_events(records: Iterable | None, param: DateParameter | None = None) -> list[CalendarEvent]:
    """Normalize records, dropping and logging any that cannot be dated."""
    events = []
    for record in records or []:
        try:
            events.append(normalize_event(record, param))
        except (ValueError, TypeError) as e:
            logger.warning(f"Dropping event {record!r}: {e}")
    return events


def events_overlapping(events: Iterable[CalendarEvent], interval: Interval) -> list[CalendarEvent]:
    return [event for event in events if event.overlaps(interval)]


def sort_events_by_start(events: list[CalendarEvent]) -> list[CalendarEvent]:
    return sorted(events, key=lambda e: (e.start, e.end))
