"""
Calendar records from the Notion calendar database.

Properties: Name (title), Date (date), Notes (rich_text).
"""

from datetime import date, datetime

from core.config import NOTION_CALENDAR_DB_ID
from core.notion import (
    create_record,
    date_property,
    date_range_filter,
    query_records,
    read_date,
    read_plain_text,
    rich_text_property,
    title_property,
)
from core.validation import InvalidArgumentError
from models.entries import CalendarEvent
from services.periods import now_local, resolve_weekday, resolve_weekday_group


def calendar_event_from_page(page: dict) -> CalendarEvent:
    """Parse a Notion page into a CalendarEvent."""
    props = page.get("properties") or {}
    notes = read_plain_text(props.get("Notes"))
    return CalendarEvent(
        title=read_plain_text(props.get("Name")),
        date=read_date(props.get("Date")),
        notes=notes or None,
        id=page.get("id", ""),
    )


def fetch_events_for_dates(dates: list[date]) -> dict[date, list[CalendarEvent]]:
    """
    Fetch events on the given dates with a single range query.

    Every requested date is a key in the result, in the order given, even
    when it has no events.
    """
    if not dates:
        return {}

    pages = query_records(
        NOTION_CALENDAR_DB_ID,
        filter=date_range_filter("Date", min(dates), max(dates)),
        sorts=[{"property": "Date", "direction": "ascending"}],
    )

    events_by_date: dict[date, list[CalendarEvent]] = {d: [] for d in dates}
    for page in pages:
        event = calendar_event_from_page(page)
        if event.date in events_by_date:
            events_by_date[event.date].append(event)
    return events_by_date


def events_for_weekday(
    iso_weekday: int, now: datetime | date | None = None
) -> tuple[date, list[CalendarEvent]]:
    """Events on a weekday of the current week."""
    day = resolve_weekday(now or now_local(), iso_weekday)
    return day, fetch_events_for_dates([day])[day]


def events_for_weekdays(
    iso_weekdays: list[int], now: datetime | date | None = None
) -> dict[date, list[CalendarEvent]]:
    """Events for a group of weekdays, rolled to next week as a group."""
    days = resolve_weekday_group(now or now_local(), iso_weekdays)
    return fetch_events_for_dates(days)


def create_calendar_event(title: str, event_date: date, notes: str | None = None) -> CalendarEvent:
    """Create a calendar record."""
    if not title or not title.strip():
        raise InvalidArgumentError("title is required")

    properties = {
        "Name": title_property(title.strip()),
        "Date": date_property(event_date),
    }
    if notes:
        properties["Notes"] = rich_text_property(notes)

    page_id = create_record(NOTION_CALENDAR_DB_ID, properties)
    return CalendarEvent(title=title.strip(), date=event_date, notes=notes, id=page_id)
