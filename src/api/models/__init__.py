"""API Pydantic models."""

from .requests import CalendarEventCreate, TimeEntryCreate, TimeEntryUpdate
from .responses import (
    BillingSummaryResponse,
    CalendarDayResponse,
    CalendarEventResponse,
    CreatedResponse,
    ErrorCodes,
    ErrorResponse,
    HealthResponse,
    TimeEntryListResponse,
    TimeEntryResponse,
)

__all__ = [
    "HealthResponse",
    "ErrorResponse",
    "ErrorCodes",
    "CreatedResponse",
    "TimeEntryCreate",
    "TimeEntryUpdate",
    "TimeEntryResponse",
    "TimeEntryListResponse",
    "CalendarEventCreate",
    "CalendarEventResponse",
    "CalendarDayResponse",
    "BillingSummaryResponse",
]
