"""
Billing period and weekday resolution.

Everything here works on civil dates in the configured timezone
(America/Denver). "now" may be an aware datetime, a naive datetime taken as
local time, or a plain date; it is reduced to a local calendar date before any
arithmetic so DST transitions never shift a result.
"""

from datetime import date, datetime, timedelta

from core.config import PAYMENT_DUE_DAY, PAYMENT_TERMS_DAYS, REPORTING_CUTOFF_DAY, TIMEZONE
from core.validation import InvalidArgumentError, validate_iso_weekday
from models.entries import Month


def now_local() -> datetime:
    """Current time in the configured timezone."""
    return datetime.now(TIMEZONE)


def today_local() -> date:
    return now_local().date()


def to_civil_date(now: datetime | date) -> date:
    """Reduce 'now' to a calendar date in the configured timezone."""
    if isinstance(now, datetime):
        if now.tzinfo is not None:
            now = now.astimezone(TIMEZONE)
        return now.date()
    return now


def resolve_reporting_month(now: datetime | date) -> Month:
    """
    Pick the month a report or invoice covers.

    Up to and including the cutoff day, the previous month is still being
    billed; after it, the current month is.
    """
    today = to_civil_date(now)
    current = Month.of(today)
    if today.day <= REPORTING_CUTOFF_DAY:
        return current.previous()
    return current


def resolve_invoice_date(now: datetime | date) -> date:
    """Invoices are dated the last day of the reporting month."""
    return resolve_reporting_month(now).last_day


def resolve_payment_due_date(invoice_date: date) -> date:
    """Payment is due on the 15th of the month the 45-day term ends in."""
    return (invoice_date + timedelta(days=PAYMENT_TERMS_DAYS)).replace(day=PAYMENT_DUE_DAY)


def resolve_weekday(now: datetime | date, iso_weekday: int) -> date:
    """Date of an ISO weekday (1=Monday .. 7=Sunday) in the current week."""
    validate_iso_weekday(iso_weekday)
    today = to_civil_date(now)
    monday = today - timedelta(days=today.isoweekday() - 1)
    return monday + timedelta(days=iso_weekday - 1)


def resolve_weekday_group(now: datetime | date, iso_weekdays) -> list[date]:
    """
    Dates for a set of ISO weekdays requested together.

    The whole group moves to next week only when every requested day has
    already passed this week; otherwise all dates stay in the current week.
    Dates are returned in weekday order.
    """
    weekdays = sorted({validate_iso_weekday(wd) for wd in iso_weekdays})
    if not weekdays:
        raise InvalidArgumentError("At least one weekday is required")

    today = to_civil_date(now)
    dates = [resolve_weekday(today, wd) for wd in weekdays]
    if all(wd < today.isoweekday() for wd in weekdays):
        dates = [d + timedelta(weeks=1) for d in dates]
    return dates
