"""
Time entry records in the Notion time-tracking database.

Properties: Date (date), Hours (number), Description (title), Notes (rich_text).
At most one entry may exist per calendar date; both the create and the update
path check this here.
"""

from datetime import date

from core.config import NOTION_TIME_TRACKING_DB_ID
from core.notion import (
    create_record,
    date_property,
    date_range_filter,
    number_property,
    query_records,
    read_date,
    read_number,
    read_plain_text,
    rich_text_property,
    title_property,
    update_record,
)
from core.validation import (
    DuplicateEntryError,
    InvalidArgumentError,
    validate_hours,
    validate_time_entry_fields,
)
from models.entries import Month, TimeEntry
from services.periods import today_local

DATE_SORT = [{"property": "Date", "direction": "ascending"}]


def time_entry_from_page(page: dict) -> TimeEntry:
    """Map a Notion page to a TimeEntry, defaulting malformed fields."""
    props = page.get("properties") or {}
    notes = read_plain_text(props.get("Notes"))
    return TimeEntry(
        date=read_date(props.get("Date")),
        hours=read_number(props.get("Hours")),
        description=read_plain_text(props.get("Description")),
        notes=notes or None,
        id=page.get("id", ""),
    )


def build_time_entry_properties(
    entry_date: date | None = None,
    hours: float | None = None,
    description: str | None = None,
    notes: str | None = None,
) -> dict:
    """Notion properties for the fields that are set. Empty notes clear the field."""
    properties = {}
    if entry_date is not None:
        properties["Date"] = date_property(entry_date)
    if hours is not None:
        properties["Hours"] = number_property(hours)
    if description is not None:
        properties["Description"] = title_property(description)
    if notes is not None:
        properties["Notes"] = rich_text_property(notes)
    return properties


def fetch_time_entries(start: date, end: date) -> list[TimeEntry]:
    """Entries dated start..end inclusive, in date order."""
    pages = query_records(
        NOTION_TIME_TRACKING_DB_ID,
        filter=date_range_filter("Date", start, end),
        sorts=DATE_SORT,
    )
    return [time_entry_from_page(page) for page in pages]


def fetch_month_entries(month: Month) -> list[TimeEntry]:
    return fetch_time_entries(month.first_day, month.last_day)


def find_entries_for_date(entry_date: date) -> list[TimeEntry]:
    pages = query_records(
        NOTION_TIME_TRACKING_DB_ID,
        filter={"property": "Date", "date": {"equals": entry_date.isoformat()}},
    )
    return [time_entry_from_page(page) for page in pages]


def find_entry_for_date(entry_date: date) -> TimeEntry | None:
    entries = find_entries_for_date(entry_date)
    return entries[0] if entries else None


def ensure_date_available(entry_date: date, exclude_id: str = "") -> None:
    """Raise DuplicateEntryError if any other entry already uses the date."""
    for existing in find_entries_for_date(entry_date):
        if existing.id != exclude_id:
            raise DuplicateEntryError(entry_date, existing.id)


def create_time_entry(
    hours: float,
    description: str,
    entry_date: date | None = None,
    notes: str | None = None,
) -> TimeEntry:
    """
    Create a time entry; the date defaults to today in the local timezone.

    Raises:
        InvalidArgumentError: Missing hours or description
        DuplicateEntryError: An entry already exists for the date
    """
    errors = validate_time_entry_fields(hours, description)
    if errors:
        raise InvalidArgumentError("\n".join(errors))

    entry_date = entry_date or today_local()
    ensure_date_available(entry_date)

    hours = validate_hours(hours)
    description = description.strip()
    page_id = create_record(
        NOTION_TIME_TRACKING_DB_ID,
        build_time_entry_properties(entry_date, hours, description, notes or None),
    )
    return TimeEntry(
        date=entry_date, hours=hours, description=description, notes=notes or None, id=page_id
    )


def update_time_entry(
    page_id: str,
    entry_date: date | None = None,
    hours: float | None = None,
    description: str | None = None,
    notes: str | None = None,
) -> TimeEntry:
    """
    Update the given fields of an entry by id.

    Raises:
        InvalidArgumentError: Nothing to update, or invalid values
        DuplicateEntryError: The new date is taken by another entry
    """
    if hours is not None:
        hours = validate_hours(hours)
    if description is not None and not description.strip():
        raise InvalidArgumentError("description cannot be empty")

    properties = build_time_entry_properties(entry_date, hours, description, notes)
    if not properties:
        raise InvalidArgumentError("No fields to update")

    if entry_date is not None:
        ensure_date_available(entry_date, exclude_id=page_id)

    page = update_record(page_id, properties)
    return time_entry_from_page(page)
