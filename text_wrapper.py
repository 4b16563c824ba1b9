import logging
import math

logger = logging.getLogger(__name__)

# Helvetica averages roughly half an em per glyph; close enough for card text.
CHAR_WIDTH_FACTOR = 0.5
PT_TO_MM = 0.3528


def char_width(font_size: float) -> float:
    """Approximate footprint of one character, in mm."""
    return font_size * CHAR_WIDTH_FACTOR * PT_TO_MM


def max_chars(font_size: float, available_span: float) -> int | None:
    """How many characters fit along `available_span` mm.

    Returns None when the font size gives no usable width, meaning no limit.
    """
    width = char_width(font_size)
    if width <= 0:
        return None
    return max(0, math.floor(available_span / width))


def wrap(text: str, font_size: float, available_span: float) -> list[str]:
    """Greedily wrap `text` into lines that fit `available_span` mm.

    Words are never split: a single word longer than the limit gets a line
    to itself and overflows.
    """
    limit = max_chars(font_size, available_span)
    if limit is None or len(text) <= limit:
        return [text]

    words = text.split()
    if not words:
        return [""]

    lines: list[str] = []
    current = words[0]
    for word in words[1:]:
        if len(current) + 1 + len(word) <= limit:
            current = f"{current} {word}"
        else:
            lines.append(current)
            current = word
    lines.append(current)

    logger.debug("wrapped %d chars into %d lines (limit %d)", len(text), len(lines), limit)
    return lines
