"""
Pytest configuration and shared fixtures.
"""

import itertools
import sys
from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core import notion  # noqa: E402
from models.entries import TimeEntry  # noqa: E402

TIME_DB = "time-db"
CALENDAR_DB = "calendar-db"


class FakeNotion:
    """In-memory stand-in for notion_client.Client (pages, databases, data_sources)."""

    def __init__(self, page_size: int = 100):
        self.page_size = page_size
        self.pages_by_source: dict[str, list[dict]] = {}
        self.retrieve_calls = 0
        self.queries: list[dict] = []
        self._ids = itertools.count(1)
        self.databases = SimpleNamespace(retrieve=self._retrieve)
        self.pages = SimpleNamespace(create=self._create, update=self._update)
        self.data_sources = SimpleNamespace(query=self._query)

    # -- seeding ---------------------------------------------------------------

    def add_page(self, database_id: str, properties: dict) -> dict:
        page = {"id": f"page-{next(self._ids)}", "properties": properties}
        self.pages_by_source.setdefault(f"ds-{database_id}", []).append(page)
        return page

    def all_pages(self, database_id: str) -> list[dict]:
        return self.pages_by_source.get(f"ds-{database_id}", [])

    # -- client API ------------------------------------------------------------

    def _retrieve(self, database_id):
        self.retrieve_calls += 1
        return {"id": database_id, "data_sources": [{"id": f"ds-{database_id}"}]}

    def _create(self, parent, properties):
        page = {"id": f"page-{next(self._ids)}", "properties": properties}
        self.pages_by_source.setdefault(parent["data_source_id"], []).append(page)
        return page

    def _update(self, page_id, properties):
        for pages in self.pages_by_source.values():
            for page in pages:
                if page["id"] == page_id:
                    page["properties"] = {**page["properties"], **properties}
                    return page
        raise KeyError(page_id)

    def _query(self, data_source_id, filter=None, sorts=None, start_cursor=None):
        self.queries.append({"data_source_id": data_source_id, "filter": filter, "sorts": sorts})
        pages = [p for p in self.pages_by_source.get(data_source_id, []) if _matches(p, filter)]
        if sorts:
            pages.sort(key=lambda p: _page_date(p) or "")
        start = int(start_cursor or 0)
        end = start + self.page_size
        has_more = end < len(pages)
        return {
            "results": pages[start:end],
            "has_more": has_more,
            "next_cursor": str(end) if has_more else None,
        }


def _page_date(page: dict) -> str | None:
    start = ((page["properties"].get("Date") or {}).get("date") or {}).get("start")
    return start[:10] if isinstance(start, str) else None


def _matches(page: dict, filter: dict | None) -> bool:
    if not filter:
        return True
    if "and" in filter:
        return all(_matches(page, f) for f in filter["and"])
    value = _page_date(page)
    if value is None:
        return False
    condition = filter["date"]
    if "equals" in condition:
        return value == condition["equals"]
    if "on_or_after" in condition:
        return value >= condition["on_or_after"]
    if "on_or_before" in condition:
        return value <= condition["on_or_before"]
    return True


def time_entry_properties(entry_date: str, hours, description: str, notes: str | None = None) -> dict:
    properties = {
        "Date": {"date": {"start": entry_date}},
        "Hours": {"number": hours},
        "Description": {"title": [{"plain_text": description, "text": {"content": description}}]},
    }
    if notes:
        properties["Notes"] = {"rich_text": [{"plain_text": notes}]}
    return properties


@pytest.fixture
def fake_notion(monkeypatch):
    """Patch the Notion client and database ids with an in-memory store."""
    fake = FakeNotion()
    monkeypatch.setattr(notion, "_notion_client", fake)
    monkeypatch.setattr(notion, "_query_targets", {})
    monkeypatch.setattr("services.time_entries.NOTION_TIME_TRACKING_DB_ID", TIME_DB)
    monkeypatch.setattr("services.calendar.NOTION_CALENDAR_DB_ID", CALENDAR_DB)
    return fake


@pytest.fixture
def make_entry():
    """Factory for TimeEntry values from ISO date strings."""

    def _make(day: str, hours: float = 2.0, description: str = "Work", notes: str | None = None):
        return TimeEntry(
            date=date.fromisoformat(day),
            hours=hours,
            description=description,
            notes=notes,
            id=f"page-{day}",
        )

    return _make


@pytest.fixture
def march_entries(make_entry):
    """Entries spread over March 2024 (starts on a Friday) plus strays."""
    return [
        make_entry("2024-03-01", 3.0, "Errands and grocery pickup"),
        make_entry("2024-03-04", 4.5, "Cleaned garage"),
        make_entry("2024-03-06", 2.0, "School pickup"),
        make_entry("2024-03-12", 5.25, "Meal prep for the week"),
        make_entry("2024-03-31", 1.0, "Laundry"),
        make_entry("2024-02-29", 6.0, "Leap day work"),
        make_entry("2024-04-01", 2.0, "Next month"),
    ]
