from datetime import date

import pytest

from conftest import CALENDAR_DB
from core.validation import InvalidArgumentError
from services.calendar import (
    create_calendar_event,
    events_for_weekday,
    events_for_weekdays,
    fetch_events_for_dates,
)

WEDNESDAY = date(2024, 3, 13)


def event_properties(title, day, notes=None):
    properties = {
        "Name": {"title": [{"plain_text": title}]},
        "Date": {"date": {"start": day}},
    }
    if notes:
        properties["Notes"] = {"rich_text": [{"plain_text": notes}]}
    return properties


@pytest.fixture
def calendar(fake_notion):
    fake_notion.add_page(CALENDAR_DB, event_properties("Piano lesson", "2024-03-11"))
    fake_notion.add_page(CALENDAR_DB, event_properties("Dentist", "2024-03-15", "Bring forms"))
    fake_notion.add_page(CALENDAR_DB, event_properties("Soccer", "2024-03-18"))
    fake_notion.add_page(CALENDAR_DB, event_properties("Swim", "2024-03-19T16:00:00.000-06:00"))
    return fake_notion


def test_events_for_weekday_in_current_week(calendar):
    day, events = events_for_weekday(5, WEDNESDAY)
    assert day == date(2024, 3, 15)
    assert [(e.title, e.notes) for e in events] == [("Dentist", "Bring forms")]


def test_events_for_past_weekday_stay_in_current_week(calendar):
    day, events = events_for_weekday(1, WEDNESDAY)
    assert day == date(2024, 3, 11)
    assert [e.title for e in events] == ["Piano lesson"]


def test_weekday_group_rolls_to_next_week(calendar):
    events = events_for_weekdays([1, 2], WEDNESDAY)
    assert list(events) == [date(2024, 3, 18), date(2024, 3, 19)]
    assert [e.title for e in events[date(2024, 3, 18)]] == ["Soccer"]
    assert [e.title for e in events[date(2024, 3, 19)]] == ["Swim"]


def test_days_without_events_are_present(calendar):
    events = events_for_weekdays([3, 4], WEDNESDAY)
    assert events == {date(2024, 3, 13): [], date(2024, 3, 14): []}


def test_dates_are_fetched_with_one_query(calendar):
    fetch_events_for_dates([date(2024, 3, 11), date(2024, 3, 15)])
    assert len(calendar.queries) == 1
    assert fetch_events_for_dates([]) == {}


def test_invalid_weekday(calendar):
    with pytest.raises(InvalidArgumentError):
        events_for_weekday(8, WEDNESDAY)
    assert calendar.queries == []


def test_create_calendar_event(fake_notion):
    event = create_calendar_event(" Book club ", date(2024, 3, 21), notes="Host: Sam")

    assert event.title == "Book club"
    page = fake_notion.all_pages(CALENDAR_DB)[0]
    assert page["id"] == event.id
    assert page["properties"]["Date"] == {"date": {"start": "2024-03-21"}}


def test_create_calendar_event_requires_title(fake_notion):
    with pytest.raises(InvalidArgumentError):
        create_calendar_event("  ", date(2024, 3, 21))
