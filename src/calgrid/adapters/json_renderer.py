"""JSON renderer - serializes template data for other programs."""

import json
from datetime import date
from typing import Any

from calgrid.calendar import TemplateData
from calgrid.core import CalendarItem, Interval


def json_default(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def interval_to_dict(interval: Interval) -> dict[str, str]:
    return {"start": interval.start.isoformat(), "end": interval.end.isoformat()}


def item_to_dict(item: CalendarItem) -> dict[str, Any]:
    return {
        "date": item.date.isoformat() if item.date else None,
        "classes": item.classes,
        "events": list(item.events),
    }


def template_to_dict(data: TemplateData) -> dict[str, Any]:
    """Convert template data to plain JSON-compatible structures."""
    if len(data.pages) > 1:
        items = [[item_to_dict(item) for item in page] for page in data.items]
    else:
        items = [item_to_dict(item) for item in data.items]
    return {
        "view": data.view.value,
        "interval": interval_to_dict(data.interval),
        "pages": [interval_to_dict(page) for page in data.pages],
        "items": items,
        "events": {
            "current_page": data.events.current_page,
            "previous_page": data.events.previous_page,
            "next_page": data.events.next_page,
        },
        "days_of_the_week": data.days_of_the_week,
        "number_of_rows": data.number_of_rows,
        "columns": data.columns,
        "selected_date": data.selected_date.isoformat() if data.selected_date else None,
        "flags": {
            "can_go_back": data.flags.can_go_back,
            "can_go_forward": data.flags.can_go_forward,
            "can_go_previous_year": data.flags.can_go_previous_year,
            "can_go_next_year": data.flags.can_go_next_year,
            "can_go_today": data.flags.can_go_today,
        },
        "extras": data.extras,
    }


class JsonRenderer:
    """
    Renders template data as a JSON document.

    Implements Renderer protocol. Dates in event records are written as ISO
    strings; other unknown values fall back to str().
    """

    def __init__(self, indent: int | None = 2):
        self.indent = indent

    def __call__(self, data: TemplateData) -> str:
        return json.dumps(template_to_dict(data), indent=self.indent, default=json_default)
