"""
Week-of-month bucketing for time entries.

Weeks start on Sunday. Week 1 is the partial week before the month's first
Sunday (or the first full week when the month starts on a Sunday).
"""

from collections import defaultdict
from datetime import date, timedelta

from models.entries import Month, TimeEntry


def first_sunday_of_month(d: date) -> date:
    first_day = d.replace(day=1)
    # date.weekday() is Monday=0; shift so Sunday=0
    sunday_based = (first_day.weekday() + 1) % 7
    return first_day + timedelta(days=(7 - sunday_based) % 7)


def week_number_of_month(d: date) -> int:
    """1-indexed, Sunday-start week number of a date within its month."""
    first_day = d.replace(day=1)
    first_sunday = first_sunday_of_month(d)

    if d < first_sunday:
        return 1

    base = 1 if first_sunday == first_day else 2
    return (d - first_sunday).days // 7 + base


def bucket_entries_by_week(entries: list[TimeEntry], month: Month) -> dict[int, list[TimeEntry]]:
    """
    Group a month's entries by week number.

    Entries outside the month, or without a date, are dropped.

    Returns:
        Dict of week number -> entries, keys ascending
    """
    buckets: dict[int, list[TimeEntry]] = defaultdict(list)

    for entry in entries:
        if not month.contains(entry.date):
            continue
        buckets[week_number_of_month(entry.date)].append(entry)

    return {week: buckets[week] for week in sorted(buckets)}
