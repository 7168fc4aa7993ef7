from datetime import date, timedelta

import pytest

from models.entries import Month
from services.weeks import bucket_entries_by_week, first_sunday_of_month, week_number_of_month


@pytest.mark.parametrize(
    "day, expected",
    [
        # March 2024 starts on a Friday; first Sunday is the 3rd
        (date(2024, 3, 1), 1),
        (date(2024, 3, 2), 1),
        (date(2024, 3, 3), 2),
        (date(2024, 3, 9), 2),
        (date(2024, 3, 10), 3),
        (date(2024, 3, 31), 6),
        # September 2024 starts on a Sunday
        (date(2024, 9, 1), 1),
        (date(2024, 9, 7), 1),
        (date(2024, 9, 8), 2),
        (date(2024, 9, 30), 5),
    ],
)
def test_week_number_of_month(day, expected):
    assert week_number_of_month(day) == expected


def test_first_sunday_of_month():
    assert first_sunday_of_month(date(2024, 3, 20)) == date(2024, 3, 3)
    assert first_sunday_of_month(date(2024, 9, 20)) == date(2024, 9, 1)


def test_week_numbers_are_positive_and_step_by_one_each_sunday():
    day = date(2023, 1, 1)
    while day < date(2025, 1, 1):
        assert week_number_of_month(day) >= 1
        next_sunday = day + timedelta(days=7)
        if day.isoweekday() == 7 and next_sunday.month == day.month:
            assert week_number_of_month(next_sunday) == week_number_of_month(day) + 1
        day += timedelta(days=1)


def test_bucketing_drops_entries_outside_month(march_entries):
    buckets = bucket_entries_by_week(march_entries, Month(2024, 3))

    assert list(buckets) == [1, 2, 3, 6]
    assert [e.date.day for e in buckets[2]] == [4, 6]
    assert all(e.date.month == 3 for entries in buckets.values() for e in entries)


def test_bucketing_partitions_in_month_entries(march_entries):
    month = Month(2024, 3)
    buckets = bucket_entries_by_week(march_entries, month)

    bucketed = [e for entries in buckets.values() for e in entries]
    in_month = [e for e in march_entries if month.contains(e.date)]
    assert len(bucketed) == len(in_month)
    assert sorted(bucketed, key=lambda e: e.date) == sorted(in_month, key=lambda e: e.date)


def test_bucketing_skips_undated_entries(make_entry):
    entries = [make_entry("2024-03-04"), make_entry("2024-03-05")]
    undated = entries[0].__class__(date=None, hours=1.0, description="Broken record")
    buckets = bucket_entries_by_week(entries + [undated], Month(2024, 3))
    assert sum(len(v) for v in buckets.values()) == 2


def test_empty_month_gives_empty_buckets(march_entries):
    assert bucket_entries_by_week(march_entries, Month(2024, 5)) == {}
