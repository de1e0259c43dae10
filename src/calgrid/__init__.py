"""calgrid - a navigable calendar grid engine."""

from .calendar import Calendar, ClickTarget, Control, PageEvents, TemplateData
from .options import CalendarOptions, Callbacks

__all__ = [
    "Calendar",
    "CalendarOptions",
    "Callbacks",
    "ClickTarget",
    "Control",
    "PageEvents",
    "TemplateData",
]
