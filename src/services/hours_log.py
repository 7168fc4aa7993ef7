"""
Hours log document: every entry of a month, grouped by week, with wrapped
descriptions and a running total.
"""

from core.validation import NoEntriesError
from models.drawing import DrawInstruction, Line, NewPage, PageGeometry, Text
from models.entries import Month, TimeEntry
from services.pdf import TextMeasurer, measure_text, render_pdf, wrap_text
from services.reports import format_hours, format_weekday_date
from services.weeks import bucket_entries_by_week

TITLE_FONT = ("Helvetica-Bold", 18)
WEEK_FONT = ("Helvetica-Bold", 14)
ENTRY_FONT = ("Helvetica-Bold", 11)
LABEL_FONT = ("Helvetica-Bold", 10)
BODY_FONT = ("Helvetica", 10)
TOTAL_FONT = ("Helvetica-Bold", 12)

DESCRIPTION_LABEL = "Description: "
UNDERLINE_OFFSET = 2
ENTRY_SPACING = 8
WEEK_SPACING = 6


def _underlined(
    x: float, y: float, text: str, font: tuple[str, float], measure: TextMeasurer
) -> list[DrawInstruction]:
    width = measure(text, *font)
    return [
        Text(x, y, text, *font),
        Line(x, y - UNDERLINE_OFFSET, x + width, y - UNDERLINE_OFFSET),
    ]


def _ensure_space(
    instructions: list[DrawInstruction], y: float, geometry: PageGeometry
) -> float:
    """Start a new page when the space left is below the threshold."""
    if y - geometry.margin < geometry.bottom_threshold:
        instructions.append(NewPage())
        return geometry.top
    return y


def build_hours_log_instructions(
    buckets: dict[int, list[TimeEntry]],
    geometry: PageGeometry | None = None,
    measure: TextMeasurer = measure_text,
    month: Month | None = None,
) -> list[DrawInstruction]:
    """
    Lay out the hours log as drawing instructions.

    Weeks ascending, entries within a week by date. Each entry gets an
    underlined weekday header, an hours line and the description wrapped to
    the width left of the label. The description's first line continues
    after the label; later lines start at the left margin.
    """
    geometry = geometry or PageGeometry()
    left = geometry.margin
    instructions: list[DrawInstruction] = []
    total_hours = 0.0

    label_width = measure(DESCRIPTION_LABEL, *LABEL_FONT)
    max_width = geometry.content_width - label_width

    y = geometry.top
    if month is not None:
        instructions.append(Text(left, y, f"Hours Log - {month.label}", *TITLE_FONT))
        y -= 30

    for week_number in sorted(buckets):
        entries = sorted(buckets[week_number], key=lambda e: e.date)
        if not entries:
            continue

        y = _ensure_space(instructions, y, geometry)
        instructions.extend(_underlined(left, y, f"Week {week_number}", WEEK_FONT, measure))
        y -= 22

        for entry in entries:
            y = _ensure_space(instructions, y, geometry)
            instructions.extend(
                _underlined(left, y, format_weekday_date(entry.date), ENTRY_FONT, measure)
            )
            y -= 16

            instructions.append(Text(left, y, f"Hours: {format_hours(entry.hours)}", *BODY_FONT))
            y -= geometry.line_height

            instructions.append(Text(left, y, DESCRIPTION_LABEL.strip(), *LABEL_FONT))
            lines = wrap_text(entry.description, max_width, *BODY_FONT, measure)
            for index, line in enumerate(lines):
                # Overflow lines of a long description continue on the next page
                if y - geometry.margin < geometry.line_height:
                    instructions.append(NewPage())
                    y = geometry.top
                x = left + label_width if index == 0 else left
                instructions.append(Text(x, y, line, *BODY_FONT))
                y -= geometry.line_height
            if not lines:
                y -= geometry.line_height

            y -= ENTRY_SPACING
            total_hours += entry.hours

        y -= WEEK_SPACING

    y = _ensure_space(instructions, y, geometry)
    instructions.append(Text(left, y, f"Total Hours: {format_hours(total_hours)}", *TOTAL_FONT))

    return instructions


def hours_log_filename(month: Month) -> str:
    """e.g. hours_log_2024_03.pdf"""
    return f"hours_log_{month.year}_{month.month:02d}.pdf"


def generate_hours_log_pdf(entries: list[TimeEntry], month: Month) -> tuple[bytes, float]:
    """
    Generate the hours log PDF for a month.

    Returns:
        Tuple of (pdf_bytes, total_hours)

    Raises:
        NoEntriesError: No entries fall inside the month
    """
    buckets = bucket_entries_by_week(entries, month)
    if not buckets:
        raise NoEntriesError(f"No time entries found for {month.label}")

    instructions = build_hours_log_instructions(buckets, month=month)
    total_hours = sum(e.hours for week in buckets.values() for e in week)
    return render_pdf(instructions, title=f"Hours Log {month.label}"), total_hours
