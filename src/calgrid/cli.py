"""calgrid CLI - render navigable calendar grids in the terminal."""

import json
import logging
import sys

import click

from .adapters.json_renderer import JsonRenderer, json_default
from .adapters.text_renderer import TextRenderer, event_title
from .calendar import Calendar
from .config import load_config
from .core import View, events_overlapping
from .workflows import build_calendar, load_events

VIEW_CHOICES = [view.value for view in View]


@click.group()
@click.version_option()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """calgrid - calendar grids for the terminal."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


def _open_calendar(
    render,
    view: str | None,
    start_on: str | None,
    size: int | None,
    step: int | None,
    week_offset: int | None,
    events_file: str | None,
    events_url: str | None,
    constraint_start: str | None,
    constraint_end: str | None,
    **overrides,
) -> Calendar:
    """Build a calendar from config plus command line overrides."""
    config = load_config()
    view = view or config.default_view
    records = load_events(config, events_file, events_url)

    pagination = dict(config.pagination)
    if size is not None or step is not None:
        entry = dict(pagination.get(view, {}))
        if size is not None:
            entry["size"] = size
        if step is not None:
            entry["step"] = step
        pagination[view] = entry

    constraints = config.constraints() or {}
    if constraint_start:
        constraints["start"] = constraint_start
    if constraint_end:
        constraints["end"] = constraint_end

    if week_offset is not None:
        overrides["week_offset"] = week_offset
    return build_calendar(
        render,
        config=config,
        events=records,
        default_view=view,
        start_on=start_on,
        pagination=pagination,
        constraints=constraints or None,
        **overrides,
    )


def calendar_options(f):
    """Options shared by commands that build a calendar."""
    options = [
        click.option("--view", "-v", type=click.Choice(VIEW_CHOICES), default=None, help="Calendar view"),
        click.option("--date", "-d", "start_on", default=None, help="Date to show (YYYY-MM-DD)"),
        click.option("--size", type=int, default=None, help="Units per page"),
        click.option("--step", type=int, default=None, help="Units moved per step"),
        click.option("--week-offset", type=int, default=None, help="First day of the week (0=Sunday)"),
        click.option("--events", "events_file", default=None, help="JSON file of events"),
        click.option("--events-url", default=None, help="URL of a JSON event feed"),
        click.option("--start", "constraint_start", default=None, help="Earliest navigable date"),
        click.option("--end", "constraint_end", default=None, help="Latest navigable date"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


@main.command()
@calendar_options
@click.option("--select", default=None, help="Date to mark as selected")
@click.option("--forward", "steps_forward", type=int, default=0, help="Pages to step forward")
@click.option("--back", "steps_back", type=int, default=0, help="Pages to step back")
@click.option("--no-adjacent", is_flag=True, help="Hide days from adjacent months")
@click.option("--six-rows", is_flag=True, help="Always show six weeks in month view")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def show(
    view,
    start_on,
    size,
    step,
    week_offset,
    events_file,
    events_url,
    constraint_start,
    constraint_end,
    select,
    steps_forward,
    steps_back,
    no_adjacent,
    six_rows,
    as_json,
):
    """Show a calendar page."""
    renderer = JsonRenderer() if as_json else TextRenderer()
    overrides = {}
    if select:
        overrides["selected_date"] = select
    if no_adjacent:
        overrides["show_adjacent"] = False
    if six_rows:
        overrides["force_six_rows"] = True

    try:
        calendar = _open_calendar(
            renderer,
            view,
            start_on,
            size,
            step,
            week_offset,
            events_file,
            events_url,
            constraint_start,
            constraint_end,
            **overrides,
        )
        for _ in range(steps_forward):
            calendar.forward()
        for _ in range(steps_back):
            calendar.back()
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(calendar.markup)


@main.command()
@calendar_options
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def events(
    view,
    start_on,
    size,
    step,
    week_offset,
    events_file,
    events_url,
    constraint_start,
    constraint_end,
    as_json,
):
    """List events on the current page and the pages around it."""
    try:
        calendar = _open_calendar(
            TextRenderer(),
            view,
            start_on,
            size,
            step,
            week_offset,
            events_file,
            events_url,
            constraint_start,
            constraint_end,
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    normalized = calendar.calendar_events
    interval = calendar.get_interval()
    current = events_overlapping(normalized, interval)
    previous, following = calendar.adapter.adjacent_event_split(interval, normalized)
    sections = [("previous_page", previous), ("current_page", current), ("next_page", following)]

    if as_json:
        click.echo(
            json.dumps(
                {
                    "interval": {"start": interval.start.isoformat(), "end": interval.end.isoformat()},
                    **{
                        name: [
                            {"start": e.start.isoformat(), "end": e.end.isoformat(), "event": e.original}
                            for e in section
                        ]
                        for name, section in sections
                    },
                },
                indent=2,
                default=json_default,
            )
        )
        return

    if not any(section for _, section in sections):
        click.echo(f"No events between {interval.start} and {interval.end}.")
        return

    for name, section in sections:
        if not section:
            continue
        click.echo(name.replace("_", " ").capitalize() + ":")
        for e in section:
            span = str(e.start) if e.start == e.end else f"{e.start} - {e.end}"
            click.echo(f"  {span}  {event_title(e.original)}")
