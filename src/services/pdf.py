"""
PDF rendering backend for layout instructions (reportlab).
"""

from collections.abc import Callable
from io import BytesIO

from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from models.drawing import DrawInstruction, Line, NewPage, PageGeometry, Rect, Text


# (text, font, size) -> width in points
TextMeasurer = Callable[[str, str, float], float]


def measure_text(text: str, font: str, size: float) -> float:
    """Width of text in points for a built-in font."""
    return stringWidth(text, font, size)


def wrap_text(
    text: str, max_width: float, font: str, size: float, measure: TextMeasurer = measure_text
) -> list[str]:
    """
    Greedily pack words into lines no wider than max_width.

    A single word wider than max_width gets a line of its own.
    """
    lines = []
    current = ""

    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if current and measure(candidate, font, size) > max_width:
            lines.append(current)
            current = word
        else:
            current = candidate

    if current:
        lines.append(current)
    return lines


def render_pdf(
    instructions: list[DrawInstruction],
    title: str = "",
    geometry: PageGeometry | None = None,
) -> bytes:
    """Draw instructions onto a canvas and return the PDF bytes."""
    geometry = geometry or PageGeometry()
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=(geometry.width, geometry.height))
    if title:
        pdf.setTitle(title)

    for instruction in instructions:
        if isinstance(instruction, Text):
            pdf.setFont(instruction.font, instruction.size)
            if instruction.align == "right":
                pdf.drawRightString(instruction.x, instruction.y, instruction.text)
            else:
                pdf.drawString(instruction.x, instruction.y, instruction.text)
        elif isinstance(instruction, Line):
            pdf.line(instruction.x1, instruction.y1, instruction.x2, instruction.y2)
        elif isinstance(instruction, Rect):
            pdf.rect(instruction.x, instruction.y, instruction.width, instruction.height)
        elif isinstance(instruction, NewPage):
            pdf.showPage()
        else:
            raise TypeError(f"Unknown draw instruction: {instruction!r}")

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()
