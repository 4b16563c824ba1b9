import io
import logging
from pathlib import Path
from typing import BinaryIO, Sequence

from reportlab.lib.colors import Color
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from grid_mapper import DEFAULT_GRID, GridSpec
from page_composer import CellBorder, Page, TextBlock

logger = logging.getLogger(__name__)

FONT_NAME = "Helvetica"
DOCUMENT_TITLE = "Flash Cards"


class DocumentWriteFailed(Exception):
    pass


def _draw_border(c: canvas.Canvas, border: CellBorder):
    (x0, y0), *rest = border.points
    path = c.beginPath()
    path.moveTo(x0 * mm, y0 * mm)
    for x, y in rest:
        path.lineTo(x * mm, y * mm)
    path.close()
    c.drawPath(path, stroke=1, fill=0)


def _draw_text(c: canvas.Canvas, block: TextBlock):
    for line in block.lines:
        if not line.text:
            continue
        c.saveState()
        c.translate(line.x * mm, line.y * mm)
        c.rotate(line.rotation)
        c.setFont(FONT_NAME, line.font_size)
        c.drawString(0, 0, line.text)
        c.restoreState()


def _draw_page(c: canvas.Canvas, page: Page):
    c.setStrokeColor(Color(0, 0, 0))
    c.setFillColor(Color(0, 0, 0))
    c.setLineWidth(0.5)
    for instruction in page.instructions:
        if isinstance(instruction, CellBorder):
            _draw_border(c, instruction)
        elif isinstance(instruction, TextBlock):
            _draw_text(c, instruction)


def build_pdf(
    pages: Sequence[Page],
    output: str | Path | BinaryIO,
    spec: GridSpec = DEFAULT_GRID,
    title: str = DOCUMENT_TITLE,
):
    target = str(output) if isinstance(output, (str, Path)) else output
    pagesize = (spec.page_width * mm, spec.page_height * mm)

    c = canvas.Canvas(target, pagesize=pagesize)
    c.setTitle(title)

    if not pages:
        logger.warning("no pages to write, document will be blank")
    for page in pages:
        _draw_page(c, page)
        c.showPage()

    try:
        c.save()
    except OSError as e:
        raise DocumentWriteFailed(f"failed to save PDF: {e}") from e
    logger.info("wrote %d pages", len(pages))


def render_pdf_bytes(pages: Sequence[Page], spec: GridSpec = DEFAULT_GRID) -> bytes:
    buf = io.BytesIO()
    build_pdf(pages, buf, spec)
    return buf.getvalue()
