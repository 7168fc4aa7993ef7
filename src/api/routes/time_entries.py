"""Time entry endpoints: create, list, update and export."""

import asyncio
from datetime import datetime

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import Response

from api.dependencies import current_time, resolve_month_param, verify_api_key
from api.logging import logged_request
from api.models import (
    CreatedResponse,
    TimeEntryCreate,
    TimeEntryListResponse,
    TimeEntryResponse,
    TimeEntryUpdate,
)
from core.validation import parse_entry_date
from services.periods import to_civil_date
from services.reports import (
    create_csv_export,
    create_excel_export,
    export_filename,
    month_entries,
)
from services.time_entries import create_time_entry, fetch_month_entries, update_time_entry

router = APIRouter(prefix="/v1", dependencies=[Depends(verify_api_key)])

MONTH_QUERY = Query(None, description="Target month (YYYY-MM). Defaults to the reporting month.")


@router.post(
    "/time-entries", status_code=status.HTTP_201_CREATED, response_model=CreatedResponse
)
async def create_time_entry_endpoint(
    request: Request,
    body: TimeEntryCreate,
    now: datetime = Depends(current_time),
):
    """Add a time entry. The date defaults to today in America/Denver."""
    async with logged_request(request, "/v1/time-entries") as request_log:
        entry_date = parse_entry_date(body.date) if body.date else to_civil_date(now)
        entry = await asyncio.to_thread(
            create_time_entry, body.hours, body.description, entry_date, body.notes
        )

        request_log.status_code = status.HTTP_201_CREATED
        request_log.month = entry_date.strftime("%Y-%m")
        request_log.entry_count = 1
        request_log.total_hours = entry.hours
        return CreatedResponse(id=entry.id)


@router.get("/time-entries", response_model=TimeEntryListResponse)
async def list_time_entries_endpoint(
    request: Request,
    month: str | None = MONTH_QUERY,
    now: datetime = Depends(current_time),
):
    """List a month's entries in date order."""
    async with logged_request(request, "/v1/time-entries") as request_log:
        target = resolve_month_param(month, now)
        request_log.month = str(target)
        entries = month_entries(await asyncio.to_thread(fetch_month_entries, target), target)

        total_hours = round(sum(e.hours for e in entries), 2)
        request_log.entry_count = len(entries)
        request_log.total_hours = total_hours
        return TimeEntryListResponse(
            month=str(target),
            total_hours=total_hours,
            entries=[TimeEntryResponse.from_entry(e) for e in entries],
        )


@router.patch("/time-entries/{page_id}", response_model=TimeEntryResponse)
async def update_time_entry_endpoint(request: Request, page_id: str, body: TimeEntryUpdate):
    """Update fields of an existing entry."""
    async with logged_request(request, "/v1/time-entries/{page_id}") as request_log:
        entry_date = parse_entry_date(body.date) if body.date else None
        entry = await asyncio.to_thread(
            update_time_entry,
            page_id,
            entry_date,
            body.hours,
            body.description,
            body.notes,
        )

        request_log.entry_count = 1
        request_log.total_hours = entry.hours
        return TimeEntryResponse.from_entry(entry)


@router.get("/time-entries/export.csv")
async def export_csv_endpoint(
    request: Request,
    month: str | None = MONTH_QUERY,
    now: datetime = Depends(current_time),
):
    """Download a month's entries as CSV."""
    async with logged_request(request, "/v1/time-entries/export.csv") as request_log:
        target = resolve_month_param(month, now)
        request_log.month = str(target)
        entries = await asyncio.to_thread(fetch_month_entries, target)
        csv_text = create_csv_export(entries, target)

        request_log.entry_count = len(month_entries(entries, target))
        return Response(
            content=csv_text,
            media_type="text/csv",
            headers={
                "Content-Disposition": f'attachment; filename="{export_filename(target, "csv")}"'
            },
        )


@router.get("/time-entries/export.xlsx")
async def export_excel_endpoint(
    request: Request,
    month: str | None = MONTH_QUERY,
    now: datetime = Depends(current_time),
):
    """Download a month's entries as an Excel workbook."""
    async with logged_request(request, "/v1/time-entries/export.xlsx") as request_log:
        target = resolve_month_param(month, now)
        request_log.month = str(target)
        entries = await asyncio.to_thread(fetch_month_entries, target)
        excel_bytes = await asyncio.to_thread(create_excel_export, entries, target)

        request_log.entry_count = len(month_entries(entries, target))
        return Response(
            content=excel_bytes,
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={
                "Content-Disposition": f'attachment; filename="{export_filename(target, "xlsx")}"'
            },
        )
