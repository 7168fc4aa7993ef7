"""Pydantic request bodies.

All fields are optional; missing values are reported by the service
validation in the standard error envelope.
"""

from pydantic import BaseModel


class TimeEntryCreate(BaseModel):
    date: str | None = None  # YYYY-MM-DD, defaults to today (America/Denver)
    hours: float | None = None
    description: str | None = None
    notes: str | None = None


class TimeEntryUpdate(BaseModel):
    date: str | None = None
    hours: float | None = None
    description: str | None = None
    notes: str | None = None


class CalendarEventCreate(BaseModel):
    title: str | None = None
    date: str | None = None
    notes: str | None = None
