"""API route modules."""

from .calendar import router as calendar_router
from .health import router as health_router
from .invoices import router as invoices_router
from .time_entries import router as time_entries_router

__all__ = ["health_router", "time_entries_router", "invoices_router", "calendar_router"]
