"""Pydantic response models for API endpoints."""

from datetime import date

from pydantic import BaseModel

from models.entries import BillingSummary, CalendarEvent, TimeEntry


class HealthResponse(BaseModel):
    """Health check response."""

    status: str  # "healthy" or "unhealthy"
    version: str
    store_configured: bool
    timestamp: str  # ISO 8601 UTC
    error: str | None = None


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    code: str
    details: list[str] = []


class ErrorCodes:
    """Error code constants."""

    INVALID_REQUEST = "INVALID_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    DUPLICATE_ENTRY = "DUPLICATE_ENTRY"
    NO_DATA = "NO_DATA"
    STORE_ERROR = "STORE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class TimeEntryResponse(BaseModel):
    id: str
    date: date | None
    hours: float
    description: str
    notes: str | None = None

    @classmethod
    def from_entry(cls, entry: TimeEntry) -> "TimeEntryResponse":
        return cls(
            id=entry.id,
            date=entry.date,
            hours=entry.hours,
            description=entry.description,
            notes=entry.notes,
        )


class CreatedResponse(BaseModel):
    success: bool = True
    id: str


class TimeEntryListResponse(BaseModel):
    month: str
    total_hours: float
    entries: list[TimeEntryResponse]


class CalendarEventResponse(BaseModel):
    id: str
    title: str
    date: date | None
    notes: str | None = None

    @classmethod
    def from_event(cls, event: CalendarEvent) -> "CalendarEventResponse":
        return cls(id=event.id, title=event.title, date=event.date, notes=event.notes)


class CalendarDayResponse(BaseModel):
    date: date
    weekday: int  # ISO: 1=Monday .. 7=Sunday
    events: list[CalendarEventResponse]


class BillingLineItemResponse(BaseModel):
    week_number: int
    period_label: str
    start_date: date
    end_date: date
    hours: float
    amount: str  # decimal string, e.g. "187.50"


class BillingSummaryResponse(BaseModel):
    month: str
    invoice_date: date
    payment_due_date: date
    hourly_rate: str
    line_items: list[BillingLineItemResponse]
    total: str
    total_hours: float

    @classmethod
    def from_summary(
        cls,
        month: str,
        summary: BillingSummary,
        invoice_date: date,
        payment_due_date: date,
        hourly_rate,
    ) -> "BillingSummaryResponse":
        return cls(
            month=month,
            invoice_date=invoice_date,
            payment_due_date=payment_due_date,
            hourly_rate=f"{hourly_rate:.2f}",
            line_items=[
                BillingLineItemResponse(
                    week_number=item.week_number,
                    period_label=item.period_label,
                    start_date=item.start_date,
                    end_date=item.end_date,
                    hours=item.hours,
                    amount=f"{item.amount:.2f}",
                )
                for item in summary.line_items
            ],
            total=f"{summary.total:.2f}",
            total_hours=round(summary.total_hours, 2),
        )
