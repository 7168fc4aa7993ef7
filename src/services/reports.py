"""
Date formatting and tabular exports (CSV and Excel) for time entries.
"""

import csv
from datetime import date
from io import BytesIO, StringIO

from openpyxl import Workbook
from openpyxl.styles import Font

from core.config import EXPORT_HEADERS
from models.entries import Month, TimeEntry


def format_date_display(d: date) -> str:
    """Format date as M/D/YYYY (platform-safe, no zero-padding)."""
    return f"{d.month}/{d.day}/{d.year}"


def format_date_short(d: date) -> str:
    """Format date as 'Mon D' (platform-safe, e.g., 'Mar 4')."""
    return f"{d.strftime('%b')} {d.day}"


def format_date_long(d: date) -> str:
    """Format date as 'March 31, 2024'."""
    return f"{d.strftime('%B')} {d.day}, {d.year}"


def ordinal_suffix(day: int) -> str:
    """Return ordinal suffix for a day number (1st, 2nd, 3rd, etc.)."""
    if 11 <= day <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def format_weekday_date(d: date) -> str:
    """Format date as 'Monday, March 4th 2024'."""
    return d.strftime(f"%A, %B {d.day}{ordinal_suffix(d.day)} %Y")


def format_hours(hours: float) -> str:
    """Drop trailing zeros: 3.0 -> '3', 2.50 -> '2.5'."""
    return f"{round(hours, 2):g}"


def month_entries(entries: list[TimeEntry], month: Month) -> list[TimeEntry]:
    """Entries inside the month, sorted by date."""
    return sorted((e for e in entries if month.contains(e.date)), key=lambda e: e.date)


def export_rows(entries: list[TimeEntry], month: Month) -> list[list]:
    """Rows for the tabular exports, one per entry in date order."""
    return [
        [e.date.isoformat(), e.hours, e.description, e.notes or ""]
        for e in month_entries(entries, month)
    ]


def export_filename(month: Month, extension: str) -> str:
    """e.g. time_entries_2024_03.csv"""
    return f"time_entries_{month.year}_{month.month:02d}.{extension}"


def create_csv_export(entries: list[TimeEntry], month: Month) -> str:
    """Render a month's entries as CSV text with a header row."""
    buffer = StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    writer.writerows(export_rows(entries, month))
    return buffer.getvalue()


# =============================================================================
# EXCEL EXPORT
# =============================================================================


def write_excel_entries_sheet(ws, entries: list[TimeEntry], month: Month):
    """
    Write entries and a total row to a worksheet.

    Headers: Date, Hours, Description, Notes
    Total row: SUM formula over the Hours column
    """
    for col_idx, header in enumerate(EXPORT_HEADERS, start=1):
        cell = ws.cell(row=1, column=col_idx, value=header)
        cell.font = Font(bold=True)

    rows = export_rows(entries, month)
    for row_idx, row_data in enumerate(rows, start=2):
        for col_idx, value in enumerate(row_data, start=1):
            ws.cell(row=row_idx, column=col_idx, value=value)

    total_row = len(rows) + 2
    total_cell = ws.cell(row=total_row, column=1, value="Total")
    total_cell.font = Font(bold=True)
    if rows:
        hours_cell = ws.cell(row=total_row, column=2, value=f"=SUM(B2:B{total_row - 1})")
    else:
        hours_cell = ws.cell(row=total_row, column=2, value=0)
    hours_cell.font = Font(bold=True)

    column_widths = {"A": 12.0, "B": 8.0, "C": 60.0, "D": 40.0}
    for col_letter, width in column_widths.items():
        ws.column_dimensions[col_letter].width = width


def create_excel_export(entries: list[TimeEntry], month: Month) -> bytes:
    """Render a month's entries as an .xlsx workbook."""
    wb = Workbook()
    ws = wb.active
    ws.title = f"Hours {month}"
    write_excel_entries_sheet(ws, entries, month)

    buffer = BytesIO()
    wb.save(buffer)
    return buffer.getvalue()
