"""Calendar endpoints for day and multi-day views."""

import asyncio
from datetime import datetime

from fastapi import APIRouter, Depends, Query, Request, status

from api.dependencies import current_time, verify_api_key
from api.logging import logged_request
from api.models import (
    CalendarDayResponse,
    CalendarEventCreate,
    CalendarEventResponse,
    CreatedResponse,
)
from core.validation import InvalidArgumentError, parse_entry_date, parse_weekdays
from services.calendar import create_calendar_event, events_for_weekday, events_for_weekdays

router = APIRouter(prefix="/v1/calendar", dependencies=[Depends(verify_api_key)])


def _day_response(day, events) -> CalendarDayResponse:
    return CalendarDayResponse(
        date=day,
        weekday=day.isoweekday(),
        events=[CalendarEventResponse.from_event(e) for e in events],
    )


@router.get("/days/{weekday}", response_model=CalendarDayResponse)
async def calendar_day_endpoint(
    request: Request, weekday: int, now: datetime = Depends(current_time)
):
    """Events on a weekday (1=Monday .. 7=Sunday) of the current week."""
    async with logged_request(request, "/v1/calendar/days/{weekday}") as request_log:
        day, events = await asyncio.to_thread(events_for_weekday, weekday, now)
        request_log.entry_count = len(events)
        return _day_response(day, events)


@router.get("/days", response_model=list[CalendarDayResponse])
async def calendar_days_endpoint(
    request: Request,
    weekdays: str = Query(..., description="Comma-separated ISO weekdays, e.g. 1,3,5"),
    now: datetime = Depends(current_time),
):
    """
    Events for several weekdays at once.

    If every requested day has already passed this week, next week's dates
    are returned instead.
    """
    async with logged_request(request, "/v1/calendar/days") as request_log:
        events_by_day = await asyncio.to_thread(events_for_weekdays, parse_weekdays(weekdays), now)
        request_log.entry_count = sum(len(events) for events in events_by_day.values())
        return [_day_response(day, events) for day, events in events_by_day.items()]


@router.post("/events", status_code=status.HTTP_201_CREATED, response_model=CreatedResponse)
async def create_calendar_event_endpoint(request: Request, body: CalendarEventCreate):
    """Add a calendar record."""
    async with logged_request(request, "/v1/calendar/events") as request_log:
        if not body.date:
            raise InvalidArgumentError("date is required")
        event = await asyncio.to_thread(
            create_calendar_event, body.title, parse_entry_date(body.date), body.notes
        )
        request_log.status_code = status.HTTP_201_CREATED
        request_log.entry_count = 1
        return CreatedResponse(id=event.id)
