import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from grid_mapper import DEFAULT_GRID, GridSpec, cell_for, cell_origin
from text_wrapper import wrap

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Card:
    front: str
    back: str


class Side(str, Enum):
    FRONT = "front"
    BACK = "back"


@dataclass(frozen=True)
class CellBorder:
    points: tuple[tuple[float, float], ...]  # closed polygon, page mm


@dataclass(frozen=True)
class TextLine:
    text: str
    font_size: float
    x: float
    y: float
    rotation: float


@dataclass(frozen=True)
class TextBlock:
    lines: tuple[TextLine, ...]


DrawInstruction = CellBorder | TextBlock


@dataclass(frozen=True)
class Sheet:
    index: int
    start: int  # position of the first card in the full card list
    cards: tuple[Card, ...]


@dataclass(frozen=True)
class Page:
    side: Side
    sheet_index: int
    cards: tuple[Card, ...]
    instructions: tuple[DrawInstruction, ...]


def paginate(cards: Sequence[Card], spec: GridSpec = DEFAULT_GRID) -> list[Sheet]:
    per_sheet = spec.cards_per_sheet
    return [
        Sheet(index=n, start=start, cards=tuple(cards[start:start + per_sheet]))
        for n, start in enumerate(range(0, len(cards), per_sheet))
    ]


def sheet_count(card_count: int, spec: GridSpec = DEFAULT_GRID) -> int:
    return math.ceil(card_count / spec.cards_per_sheet)


def _border(x: float, y: float, spec: GridSpec) -> CellBorder:
    w, h = spec.cell_width, spec.cell_height
    return CellBorder(points=((x, y), (x + w, y), (x + w, y + h), (x, y + h)))


def _text_block(text: str, x: float, y: float, spec: GridSpec) -> TextBlock:
    # Text runs down the cell, so the cell height is the span available to a line.
    lines = wrap(text, spec.font_size, spec.cell_height)
    start_x = x + spec.cell_width - spec.text_inset
    start_y = y + spec.cell_height - spec.text_inset
    dx, dy = spec.line_direction
    return TextBlock(lines=tuple(
        TextLine(
            text=line,
            font_size=spec.font_size,
            x=start_x + k * spec.line_spacing * dx,
            y=start_y + k * spec.line_spacing * dy,
            rotation=spec.text_rotation,
        )
        for k, line in enumerate(lines)
    ))


def compose_page(sheet: Sheet, side: Side, spec: GridSpec = DEFAULT_GRID) -> Page:
    is_front = side is Side.FRONT
    instructions: list[DrawInstruction] = []
    for i, card in enumerate(sheet.cards):
        col, row = cell_for(i, is_front, spec)
        x, y = cell_origin(col, row, spec)
        text = card.front if is_front else card.back
        instructions.append(_border(x, y, spec))
        instructions.append(_text_block(text, x, y, spec))
    return Page(
        side=side,
        sheet_index=sheet.index,
        cards=sheet.cards,
        instructions=tuple(instructions),
    )


def compose(cards: Sequence[Card], spec: GridSpec = DEFAULT_GRID) -> list[Page]:
    """Lay cards out as front/back page pairs, one pair per sheet.

    Sheets are not padded: n cards always give 2 * ceil(n / cells) pages and
    an empty list gives none.
    """
    pages: list[Page] = []
    for sheet in paginate(cards, spec):
        pages.append(compose_page(sheet, Side.FRONT, spec))
        pages.append(compose_page(sheet, Side.BACK, spec))
    logger.debug("composed %d cards into %d pages", len(cards), len(pages))
    return pages
