"""Plain-text renderer for terminal output."""

from collections.abc import Mapping

from calgrid.calendar import TemplateData
from calgrid.core import CalendarItem, Interval, ItemStatus, View


def _pages_with_items(data: TemplateData) -> list[tuple[Interval, list[CalendarItem]]]:
    if len(data.pages) == 1:
        return [(data.pages[0], data.items)]
    return list(zip(data.pages, data.items))


def event_title(record, title_key: str = "title") -> str:
    if isinstance(record, Mapping):
        return str(record.get(title_key) or record)
    return str(getattr(record, title_key, record))


class TextRenderer:
    """
    Renders template data as a text grid.

    Implements Renderer protocol. Cells are marked [n] for now, n* for days
    with events, >n for the selection and .n for adjacent items. Placeholders
    are blank.
    """

    def __init__(self, cell_width: int = 6, title_key: str = "title"):
        self.cell_width = cell_width
        self.title_key = title_key

    def __call__(self, data: TemplateData) -> str:
        if data.view is View.DAY:
            return self._render_days(data)
        blocks = [self._render_page(data, page, items) for page, items in _pages_with_items(data)]
        return "\n\n".join(blocks)

    def page_title(self, view: View, page: Interval) -> str:
        match view:
            case View.DECADE:
                return f"{page.start.year}-{page.end.year}"
            case View.YEAR:
                return str(page.start.year)
            case View.MONTH:
                return page.start.strftime("%B %Y")
            case _:
                return f"{page.start.strftime('%b %d')} - {page.end.strftime('%b %d, %Y')}"

    def cell_label(self, view: View, item: CalendarItem) -> str:
        if item.date is None:
            return ""
        match view:
            case View.DECADE:
                label = str(item.date.year)
            case View.YEAR:
                label = item.date.strftime("%b")
            case _:
                label = str(item.date.day)

        if item.has(ItemStatus.NOW):
            label = f"[{label}]"
        if item.has(ItemStatus.SELECTED):
            label = f">{label}"
        elif item.has(ItemStatus.ADJACENT):
            label = f".{label}"
        if item.has(ItemStatus.EVENT):
            label = f"{label}*"
        return label

    def _render_page(self, data: TemplateData, page: Interval, items: list[CalendarItem]) -> str:
        columns = data.columns
        width = self.cell_width
        lines = [self.page_title(data.view, page)]
        if data.view in (View.MONTH, View.WEEK):
            lines.append("".join(label.rjust(width) for label in data.days_of_the_week))
        for i in range(0, len(items), columns):
            row = items[i : i + columns]
            lines.append("".join(self.cell_label(data.view, item).rjust(width) for item in row).rstrip())
        return "\n".join(lines)

    def _render_days(self, data: TemplateData) -> str:
        """Day view lists each day with its event titles."""
        lines = []
        for item in data.items:
            marker = self.cell_label(data.view, item)
            lines.append(f"{item.date.strftime('%a %Y-%m-%d')} {marker}".rstrip())
            for record in item.events:
                lines.append(f"  - {event_title(record, self.title_key)}")
        return "\n".join(lines)
