"""Invoice and hours log endpoints."""

import asyncio
from datetime import datetime

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import Response

from api.dependencies import billing_config, current_time, resolve_month_param, verify_api_key
from api.logging import logged_request
from api.models import BillingSummaryResponse
from core.config import BillingConfig
from services.hours_log import generate_hours_log_pdf, hours_log_filename
from services.invoices import generate_invoice_pdf, invoice_filename, summarize_month
from services.periods import resolve_invoice_date, resolve_payment_due_date
from services.time_entries import fetch_month_entries

router = APIRouter(prefix="/v1/invoices", dependencies=[Depends(verify_api_key)])

MONTH_QUERY = Query(None, description="Target month (YYYY-MM). Defaults to the reporting month.")


def _invoice_date(month: str | None, target, now: datetime):
    """An explicit month is invoiced on its last day; otherwise use the reporting rule."""
    return target.last_day if month else resolve_invoice_date(now)


def _pdf_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/invoice.pdf")
async def invoice_pdf_endpoint(
    request: Request,
    month: str | None = MONTH_QUERY,
    now: datetime = Depends(current_time),
    config: BillingConfig = Depends(billing_config),
):
    """Render the month's invoice as a PDF."""
    async with logged_request(request, "/v1/invoices/invoice.pdf") as request_log:
        target = resolve_month_param(month, now)
        request_log.month = str(target)
        entries = await asyncio.to_thread(fetch_month_entries, target)

        pdf_bytes, summary = await asyncio.to_thread(
            generate_invoice_pdf, entries, target, config, _invoice_date(month, target, now)
        )

        request_log.entry_count = sum(1 for e in entries if target.contains(e.date))
        request_log.total_hours = round(summary.total_hours, 2)
        return _pdf_response(pdf_bytes, invoice_filename(target))


@router.get("/hours-log.pdf")
async def hours_log_pdf_endpoint(
    request: Request,
    month: str | None = MONTH_QUERY,
    now: datetime = Depends(current_time),
):
    """Render the month's hours log as a PDF."""
    async with logged_request(request, "/v1/invoices/hours-log.pdf") as request_log:
        target = resolve_month_param(month, now)
        request_log.month = str(target)
        entries = await asyncio.to_thread(fetch_month_entries, target)

        pdf_bytes, total_hours = await asyncio.to_thread(generate_hours_log_pdf, entries, target)

        request_log.entry_count = sum(1 for e in entries if target.contains(e.date))
        request_log.total_hours = round(total_hours, 2)
        return _pdf_response(pdf_bytes, hours_log_filename(target))


@router.get("/summary", response_model=BillingSummaryResponse)
async def invoice_summary_endpoint(
    request: Request,
    month: str | None = MONTH_QUERY,
    now: datetime = Depends(current_time),
    config: BillingConfig = Depends(billing_config),
):
    """Weekly billing lines, total and due date as JSON."""
    async with logged_request(request, "/v1/invoices/summary") as request_log:
        target = resolve_month_param(month, now)
        request_log.month = str(target)
        entries = await asyncio.to_thread(fetch_month_entries, target)
        summary = summarize_month(entries, target, config)

        invoice_date = _invoice_date(month, target, now)
        request_log.total_hours = round(summary.total_hours, 2)
        return BillingSummaryResponse.from_summary(
            month=str(target),
            summary=summary,
            invoice_date=invoice_date,
            payment_due_date=resolve_payment_due_date(invoice_date),
            hourly_rate=config.hourly_rate,
        )
