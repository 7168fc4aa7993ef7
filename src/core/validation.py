"""
Input validation and error types shared by services and API routes.
"""

from datetime import date, datetime


class InvalidArgumentError(ValueError):
    """Raised when a caller passes an out-of-range or malformed argument."""


class NoEntriesError(LookupError):
    """Raised when a requested month has no time entries to report on."""


class DuplicateEntryError(ValueError):
    """Raised when a time entry already exists for a calendar date."""

    def __init__(self, entry_date: date, existing_id: str):
        super().__init__(f"A time entry already exists for {entry_date.isoformat()}")
        self.entry_date = entry_date
        self.existing_id = existing_id


def validate_iso_weekday(weekday: int) -> int:
    """Check an ISO weekday number (1=Monday .. 7=Sunday)."""
    if isinstance(weekday, bool) or not isinstance(weekday, int) or not 1 <= weekday <= 7:
        raise InvalidArgumentError(f"Weekday must be between 1 and 7, got {weekday!r}")
    return weekday


def parse_weekdays(value: str) -> list[int]:
    """
    Parse a comma-separated weekday list such as '1,3,5'.

    Duplicates are collapsed; the result is sorted ascending.
    """
    weekdays = set()
    for part in value.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            weekdays.add(validate_iso_weekday(int(part)))
        except ValueError as e:
            raise InvalidArgumentError(f"Invalid weekday '{part}'") from e
    if not weekdays:
        raise InvalidArgumentError("At least one weekday is required")
    return sorted(weekdays)


def parse_entry_date(date_str: str) -> date:
    """Parse a YYYY-MM-DD date string."""
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid date '{date_str}', expected YYYY-MM-DD") from e


def validate_hours(hours) -> float:
    """Hours must be a positive number."""
    if isinstance(hours, bool):
        raise InvalidArgumentError("hours must be a number")
    try:
        value = float(hours)
    except (TypeError, ValueError) as e:
        raise InvalidArgumentError("hours must be a number") from e
    if value <= 0:
        raise InvalidArgumentError("hours must be greater than zero")
    return value


def validate_time_entry_fields(hours, description: str | None) -> list[str]:
    """
    Check the required fields of a new time entry.

    Returns:
        List of error messages (empty if valid)
    """
    errors = []
    if hours is None or hours == 0:
        errors.append("hours is required")
    else:
        try:
            validate_hours(hours)
        except InvalidArgumentError as e:
            errors.append(str(e))
    if not description or not description.strip():
        errors.append("description is required")
    return errors
