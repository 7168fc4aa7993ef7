import pytest

from core.validation import NoEntriesError
from models.drawing import Line, NewPage, PageGeometry, Text
from models.entries import Month
from services.hours_log import (
    DESCRIPTION_LABEL,
    build_hours_log_instructions,
    generate_hours_log_pdf,
    hours_log_filename,
    wrap_text,
)
from services.weeks import bucket_entries_by_week


def fixed_width(text, font, size):
    """Every character is 5 points wide."""
    return len(text) * 5


SMALL_PAGE = PageGeometry(width=300, height=400, margin=50, bottom_threshold=100)


def texts(instructions):
    return [i for i in instructions if isinstance(i, Text)]


def test_wrap_text_packs_words_greedily():
    lines = wrap_text("alpha beta gamma delta epsilon zeta", 100, "Helvetica", 10, fixed_width)
    assert lines == ["alpha beta gamma", "delta epsilon zeta"]
    assert all(fixed_width(line, None, None) <= 100 for line in lines)


def test_wrap_text_keeps_long_word_on_its_own_line():
    assert wrap_text("a supercalifragilistic b", 40, "Helvetica", 10, fixed_width) == [
        "a",
        "supercalifragilistic",
        "b",
    ]


def test_wrap_text_empty():
    assert wrap_text("   ", 100, "Helvetica", 10, fixed_width) == []


def test_description_lines_start_after_label_then_at_margin(make_entry):
    # content width 200, label 65, so lines hold up to 27 characters
    entry = make_entry("2024-03-04", 2.0, "alpha beta gamma delta epsilon zeta eta theta")
    instructions = build_hours_log_instructions({2: [entry]}, SMALL_PAGE, fixed_width)

    label = next(t for t in texts(instructions) if t.text == DESCRIPTION_LABEL.strip())
    label_width = fixed_width(DESCRIPTION_LABEL, None, None)
    body = [t for t in texts(instructions) if t.text in ("alpha beta gamma delta", "epsilon zeta eta theta")]

    assert [t.text for t in body] == ["alpha beta gamma delta", "epsilon zeta eta theta"]
    assert body[0].x == SMALL_PAGE.margin + label_width
    assert body[0].y == label.y
    assert body[1].x == SMALL_PAGE.margin
    assert body[1].y < body[0].y


def test_week_and_entry_headers_are_underlined(make_entry):
    entry = make_entry("2024-03-04", 4.5, "Cleaned garage")
    instructions = build_hours_log_instructions({2: [entry]}, SMALL_PAGE, fixed_width)

    week_header = instructions[0]
    assert week_header == Text(50, SMALL_PAGE.top, "Week 2", "Helvetica-Bold", 14)
    assert isinstance(instructions[1], Line)
    assert instructions[1].x2 - instructions[1].x1 == fixed_width("Week 2", None, None)

    assert "Monday, March 4th 2024" in [t.text for t in texts(instructions)]
    assert "Hours: 4.5" in [t.text for t in texts(instructions)]


def test_entries_are_sorted_by_week_then_date(make_entry):
    buckets = {
        3: [make_entry("2024-03-12", 1.0, "Third")],
        2: [make_entry("2024-03-06", 1.0, "Second"), make_entry("2024-03-04", 1.0, "First")],
    }
    instructions = build_hours_log_instructions(buckets, measure=fixed_width)
    order = [t.text for t in texts(instructions) if t.text in ("First", "Second", "Third")]
    assert order == ["First", "Second", "Third"]


def test_long_logs_break_onto_new_pages(make_entry):
    entries = [make_entry(f"2024-03-{day:02d}", 1.0, "Short") for day in range(4, 10)]
    instructions = build_hours_log_instructions({2: entries}, SMALL_PAGE, fixed_width)

    assert any(isinstance(i, NewPage) for i in instructions)
    assert all(t.y >= SMALL_PAGE.margin for t in texts(instructions))


def test_total_hours_is_last(march_entries):
    month = Month(2024, 3)
    instructions = build_hours_log_instructions(
        bucket_entries_by_week(march_entries, month), measure=fixed_width, month=month
    )
    assert instructions[0].text == "Hours Log - March 2024"
    assert instructions[-1].text == "Total Hours: 15.75"


def test_generate_hours_log_pdf(march_entries):
    pdf_bytes, total_hours = generate_hours_log_pdf(march_entries, Month(2024, 3))
    assert pdf_bytes.startswith(b"%PDF")
    assert total_hours == pytest.approx(15.75)


def test_generate_hours_log_pdf_without_entries(march_entries):
    with pytest.raises(NoEntriesError):
        generate_hours_log_pdf(march_entries, Month(2023, 3))


def test_hours_log_filename():
    assert hours_log_filename(Month(2024, 3)) == "hours_log_2024_03.pdf"


def test_long_descriptions_continue_on_new_pages(make_entry):
    words = " ".join(f"word{i}" for i in range(600))
    entries = [make_entry("2024-03-04", 2.0, words), make_entry("2024-03-05", 3.0, words)]
    geometry = PageGeometry()
    instructions = build_hours_log_instructions({2: entries}, geometry)

    assert sum(isinstance(i, NewPage) for i in instructions) >= 2
    assert all(geometry.margin <= t.y <= geometry.top for t in texts(instructions))
    written = " ".join(
        t.text for t in texts(instructions) if t.text.startswith("word")
    )
    assert written == f"{words} {words}"


def test_hours_log_layout_is_deterministic(march_entries):
    buckets = bucket_entries_by_week(march_entries, Month(2024, 3))
    first = build_hours_log_instructions(buckets, month=Month(2024, 3))
    second = build_hours_log_instructions(buckets, month=Month(2024, 3))
    assert first == second
