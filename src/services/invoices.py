"""
Invoice Generation Service (PDF Version)

Turns a month of time entries into weekly billing line items and lays them out
as an invoice: header, contact line, a bordered Date | Description |
Amount table, a right-aligned total and the payment notes.
"""

from datetime import date
from decimal import Decimal

from core.config import BillingConfig
from core.validation import NoEntriesError
from models.drawing import DrawInstruction, Line, NewPage, PageGeometry, Rect, Text
from models.entries import BillingLineItem, BillingSummary, Month, TimeEntry
from services.pdf import TextMeasurer, measure_text, render_pdf, wrap_text
from services.periods import resolve_payment_due_date
from services.reports import format_date_display, format_date_long
from services.weeks import bucket_entries_by_week


# =============================================================================
# CONSTANTS
# =============================================================================

ROW_HEIGHT = 22
TEXT_BASELINE_OFFSET = 15
CELL_PADDING = 8
DESCRIPTION_COL_OFFSET = 95
AMOUNT_COL_WIDTH = 110
DESCRIPTION_LINE_HEIGHT = 13

TITLE_FONT = ("Helvetica-Bold", 24)
HEADER_FONT = ("Helvetica-Bold", 11)
BODY_FONT = ("Helvetica", 11)
SMALL_FONT = ("Helvetica", 10)
TOTAL_FONT = ("Helvetica-Bold", 12)


# =============================================================================
# BILLING SUMMARY
# =============================================================================


def format_money(amount: Decimal) -> str:
    return f"${amount:,.2f}"


def format_period_label(week_number: int, start: date, end: date) -> str:
    """e.g. 'March Week 2 (3/3/2024 - 3/9/2024)'."""
    return (
        f"{start.strftime('%B')} Week {week_number} "
        f"({format_date_display(start)} - {format_date_display(end)})"
    )


def build_billing_summary(
    buckets: dict[int, list[TimeEntry]], hourly_rate: Decimal
) -> BillingSummary:
    """
    Build one billing line per non-empty week, ordered by week number.

    Amounts use Decimal arithmetic on the hours' string form so the total is
    exactly the sum of the line amounts.
    """
    rate = Decimal(str(hourly_rate))
    line_items = []
    total = Decimal("0")
    total_hours = 0.0

    for week_number in sorted(buckets):
        entries = buckets[week_number]
        if not entries:
            continue

        week_hours = sum(e.hours for e in entries)
        week_amount = sum((Decimal(str(e.hours)) for e in entries), Decimal("0")) * rate
        week_start = min(e.date for e in entries)
        week_end = max(e.date for e in entries)

        line_items.append(
            BillingLineItem(
                week_number=week_number,
                period_label=format_period_label(week_number, week_start, week_end),
                start_date=week_start,
                end_date=week_end,
                hours=week_hours,
                amount=week_amount,
            )
        )
        total += week_amount
        total_hours += week_hours

    return BillingSummary(line_items=line_items, total=total, total_hours=total_hours)


# =============================================================================
# LAYOUT
# =============================================================================


def description_width(geometry: PageGeometry) -> float:
    """Usable text width inside the Description column."""
    return geometry.content_width - DESCRIPTION_COL_OFFSET - AMOUNT_COL_WIDTH - 2 * CELL_PADDING


def row_height(description_lines: list[str]) -> float:
    return ROW_HEIGHT + max(len(description_lines) - 1, 0) * DESCRIPTION_LINE_HEIGHT


def _table_row(
    geometry: PageGeometry,
    y: float,
    date_text: str,
    description_lines: list[str],
    amount_text: str,
    font: tuple[str, float],
) -> list[DrawInstruction]:
    """
    One bordered table row whose top edge sits at y.

    The row grows by a line per wrapped description line; date and amount
    stay on the first baseline.
    """
    left = geometry.margin
    right = geometry.width - geometry.margin
    description_x = left + DESCRIPTION_COL_OFFSET
    amount_x = right - AMOUNT_COL_WIDTH
    height = row_height(description_lines)
    baseline = y - TEXT_BASELINE_OFFSET

    instructions: list[DrawInstruction] = [
        Rect(left, y - height, geometry.content_width, height),
        Line(description_x, y, description_x, y - height),
        Line(amount_x, y, amount_x, y - height),
        Text(left + CELL_PADDING, baseline, date_text, *font),
    ]
    for index, line in enumerate(description_lines):
        instructions.append(
            Text(description_x + CELL_PADDING, baseline - index * DESCRIPTION_LINE_HEIGHT, line, *font)
        )
    instructions.append(Text(right - CELL_PADDING, baseline, amount_text, *font, align="right"))
    return instructions


def build_invoice_instructions(
    summary: BillingSummary,
    invoice_date: date,
    config: BillingConfig,
    geometry: PageGeometry | None = None,
    measure: TextMeasurer = measure_text,
) -> list[DrawInstruction]:
    """
    Lay out the invoice document as drawing instructions.

    Descriptions wider than the Description column wrap inside it, measured
    with `measure`.
    """
    geometry = geometry or PageGeometry()
    max_width = description_width(geometry)
    right = geometry.width - geometry.margin
    due_date = resolve_payment_due_date(invoice_date)
    instructions: list[DrawInstruction] = []

    y = geometry.top
    instructions.append(Text(geometry.margin, y, "INVOICE", *TITLE_FONT))
    y -= 32
    instructions.append(
        Text(geometry.margin, y, f"Invoice Date: {format_date_long(invoice_date)}", *BODY_FONT)
    )
    y -= 16
    instructions.append(Text(geometry.margin, y, f"Bill To: {config.client_name}", *BODY_FONT))
    y -= 16
    instructions.append(Text(geometry.margin, y, config.contact_line, *SMALL_FONT))
    y -= 30

    def table_header(y: float) -> float:
        instructions.extend(_table_row(geometry, y, "Date", ["Description"], "Amount", HEADER_FONT))
        return y - ROW_HEIGHT

    y = table_header(y)

    for item in summary.line_items:
        description_lines = wrap_text(
            f"{config.service_description}: {item.period_label}", max_width, *BODY_FONT, measure
        )
        height = row_height(description_lines)
        if y - height < geometry.margin + geometry.bottom_threshold:
            instructions.append(NewPage())
            y = table_header(geometry.top)

        instructions.extend(
            _table_row(
                geometry,
                y,
                format_date_display(item.end_date),
                description_lines,
                format_money(item.amount),
                BODY_FONT,
            )
        )
        y -= height

    y -= 24
    instructions.append(
        Text(right, y, f"Total: {format_money(summary.total)}", *TOTAL_FONT, align="right")
    )

    y -= 36
    if y < geometry.margin + geometry.bottom_threshold:
        instructions.append(NewPage())
        y = geometry.top
    instructions.append(
        Text(geometry.margin, y, f"Payment due by {format_date_long(due_date)}.", *BODY_FONT)
    )
    y -= 16
    instructions.append(
        Text(
            geometry.margin,
            y,
            f"Please make payment to {config.payee_name}. Thank you!",
            *BODY_FONT,
        )
    )

    return instructions


# =============================================================================
# MAIN ENTRY POINTS
# =============================================================================


def invoice_filename(month: Month) -> str:
    """e.g. invoice_2024_03.pdf"""
    return f"invoice_{month.year}_{month.month:02d}.pdf"


def generate_invoice_pdf(
    entries: list[TimeEntry],
    month: Month,
    config: BillingConfig,
    invoice_date: date | None = None,
) -> tuple[bytes, BillingSummary]:
    """
    Generate the invoice PDF for a month.

    The invoice is dated the last day of the month unless overridden.

    Raises:
        NoEntriesError: No entries fall inside the month
    """
    buckets = bucket_entries_by_week(entries, month)
    if not buckets:
        raise NoEntriesError(f"No time entries found for {month.label}")

    summary = build_billing_summary(buckets, config.hourly_rate)
    instructions = build_invoice_instructions(summary, invoice_date or month.last_day, config)
    pdf_bytes = render_pdf(instructions, title=f"Invoice {month.label}")
    return pdf_bytes, summary


def summarize_month(
    entries: list[TimeEntry], month: Month, config: BillingConfig
) -> BillingSummary:
    """Billing summary without rendering (for JSON responses)."""
    buckets = bucket_entries_by_week(entries, month)
    if not buckets:
        raise NoEntriesError(f"No time entries found for {month.label}")
    return build_billing_summary(buckets, config.hourly_rate)

