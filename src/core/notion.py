"""
Notion client setup and record helpers.

The rest of the code talks to Notion through create/query/update calls on
database ids; the database -> data source lookup happens here.
"""

from datetime import date, datetime

from notion_client import Client
from notion_client.helpers import collect_paginated_api

from core.config import NOTION_API_KEY, TIMEZONE

_notion_client: Client | None = None
_query_targets: dict[str, str] = {}


def get_notion_client() -> Client:
    """Get or create the Notion client (lazy initialization)."""
    global _notion_client
    if _notion_client is None:
        _notion_client = Client(auth=NOTION_API_KEY)
    return _notion_client


def resolve_query_target(database_id: str) -> str:
    """
    Resolve the data source id behind a database id.

    Cached per process; a database's primary data source does not change.
    """
    if database_id not in _query_targets:
        database = get_notion_client().databases.retrieve(database_id=database_id)
        data_sources = database.get("data_sources") or []
        if not data_sources:
            raise LookupError(f"Notion database {database_id} has no data sources")
        _query_targets[database_id] = data_sources[0]["id"]
    return _query_targets[database_id]


def create_record(database_id: str, properties: dict) -> str:
    """Create a page in a database and return its id."""
    page = get_notion_client().pages.create(
        parent={"type": "data_source_id", "data_source_id": resolve_query_target(database_id)},
        properties=properties,
    )
    return page["id"]


def query_records(
    database_id: str, filter: dict | None = None, sorts: list[dict] | None = None
) -> list[dict]:
    """Query all pages of a database, following pagination."""
    kwargs: dict = {"data_source_id": resolve_query_target(database_id)}
    if filter:
        kwargs["filter"] = filter
    if sorts:
        kwargs["sorts"] = sorts
    return collect_paginated_api(get_notion_client().data_sources.query, **kwargs)


def update_record(page_id: str, properties: dict) -> dict:
    """Update a page's properties by id."""
    return get_notion_client().pages.update(page_id=page_id, properties=properties)


# =============================================================================
# PROPERTY BUILDERS
# =============================================================================


def date_property(d: date) -> dict:
    return {"date": {"start": d.isoformat()}}


def number_property(value: float) -> dict:
    return {"number": value}


def title_property(text: str) -> dict:
    return {"title": [{"text": {"content": text}}]}


def rich_text_property(text: str) -> dict:
    """An empty string clears the property."""
    if not text:
        return {"rich_text": []}
    return {"rich_text": [{"text": {"content": text}}]}


def date_range_filter(property_name: str, start: date, end: date) -> dict:
    return {
        "and": [
            {"property": property_name, "date": {"on_or_after": start.isoformat()}},
            {"property": property_name, "date": {"on_or_before": end.isoformat()}},
        ]
    }


# =============================================================================
# PROPERTY READERS (lenient: malformed values fall back to empty/zero)
# =============================================================================


def read_date(prop: dict | None) -> date | None:
    """Read a date property as a civil date in the configured timezone."""
    start = ((prop or {}).get("date") or {}).get("start")
    if not start:
        return None
    try:
        parsed = datetime.fromisoformat(start)
    except (TypeError, ValueError):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(TIMEZONE)
    return parsed.date()


def read_number(prop: dict | None) -> float:
    value = (prop or {}).get("number")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0.0
    return max(float(value), 0.0)


def read_plain_text(prop: dict | None) -> str:
    """Join the text of a title or rich_text property."""
    prop = prop or {}
    parts = prop.get("title") or prop.get("rich_text") or []
    text = []
    for part in parts:
        if not isinstance(part, dict):
            continue
        content = part.get("plain_text")
        if content is None:
            content = (part.get("text") or {}).get("content", "")
        text.append(content or "")
    return "".join(text)
