from datetime import date
from io import BytesIO

import pytest
from openpyxl import load_workbook

from models.entries import Month
from services.reports import (
    create_csv_export,
    create_excel_export,
    export_filename,
    format_date_display,
    format_date_long,
    format_date_short,
    format_hours,
    format_weekday_date,
    ordinal_suffix,
)


@pytest.mark.parametrize(
    "day, suffix",
    [(1, "st"), (2, "nd"), (3, "rd"), (4, "th"), (11, "th"), (12, "th"), (13, "th"), (21, "st"), (22, "nd"), (23, "rd"), (31, "st")],
)
def test_ordinal_suffix(day, suffix):
    assert ordinal_suffix(day) == suffix


def test_date_formats():
    d = date(2024, 3, 4)
    assert format_date_display(d) == "3/4/2024"
    assert format_date_short(d) == "Mar 4"
    assert format_date_long(d) == "March 4, 2024"
    assert format_weekday_date(d) == "Monday, March 4th 2024"
    assert format_weekday_date(date(2024, 3, 22)) == "Friday, March 22nd 2024"


@pytest.mark.parametrize("hours, expected", [(3.0, "3"), (2.5, "2.5"), (5.25, "5.25"), (15.75, "15.75"), (1 / 3, "0.33")])
def test_format_hours(hours, expected):
    assert format_hours(hours) == expected


def test_csv_export_contains_month_rows_in_date_order(march_entries, make_entry):
    entries = march_entries + [make_entry("2024-03-02", 1.5, "Yard work", notes="Front, back")]
    lines = create_csv_export(entries, Month(2024, 3)).splitlines()

    assert lines[0] == "Date,Hours,Description,Notes"
    assert lines[1] == "2024-03-01,3.0,Errands and grocery pickup,"
    assert lines[2] == '2024-03-02,1.5,Yard work,"Front, back"'
    assert len(lines) == 7
    assert not any("2024-02-29" in line or "2024-04-01" in line for line in lines)


def test_csv_export_for_empty_month_is_header_only(march_entries):
    assert create_csv_export(march_entries, Month(2024, 7)) == "Date,Hours,Description,Notes\n"


def test_excel_export_rows_and_total_formula(march_entries):
    data = create_excel_export(march_entries, Month(2024, 3))
    ws = load_workbook(BytesIO(data)).active

    assert ws.title == "Hours 2024-03"
    assert [c.value for c in ws[1]] == ["Date", "Hours", "Description", "Notes"]
    assert ws["A2"].value == "2024-03-01"
    assert ws["B5"].value == 5.25
    assert ws["A7"].value == "Total"
    assert ws["B7"].value == "=SUM(B2:B6)"
    assert ws["A7"].font.bold


def test_excel_export_for_empty_month(march_entries):
    ws = load_workbook(BytesIO(create_excel_export(march_entries, Month(2024, 7)))).active
    assert ws["A2"].value == "Total"
    assert ws["B2"].value == 0


def test_export_filename():
    assert export_filename(Month(2024, 3), "csv") == "time_entries_2024_03.csv"
    assert export_filename(Month(2024, 11), "xlsx") == "time_entries_2024_11.xlsx"
