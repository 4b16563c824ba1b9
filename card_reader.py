import csv
import logging
from pathlib import Path
from typing import Iterable

from page_composer import Card

logger = logging.getLogger(__name__)

DELIMITER = "|"


class CardSourceError(Exception):
    pass


class SourceUnreadable(CardSourceError):
    pass


class MalformedRecord(CardSourceError):
    def __init__(self, line: int, fields: int):
        super().__init__(f"line {line}: record must have at least 2 columns, got {fields}")
        self.line = line
        self.fields = fields


def parse_cards(lines: Iterable[str]) -> list[Card]:
    """Parse pipe-delimited records (no header) into cards.

    Only the first two fields are used; blank records are skipped.
    """
    reader = csv.reader(lines, delimiter=DELIMITER)
    cards: list[Card] = []
    try:
        for record in reader:
            if not record or (len(record) == 1 and not record[0].strip()):
                continue
            if len(record) < 2:
                raise MalformedRecord(reader.line_num, len(record))
            cards.append(Card(front=record[0], back=record[1]))
    except csv.Error as e:
        raise SourceUnreadable(f"line {reader.line_num}: {e}") from e
    return cards


def read_cards(path: str | Path) -> list[Card]:
    path = Path(path)
    try:
        with open(path, newline="", encoding="utf-8") as f:
            cards = parse_cards(f)
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnreadable(f"failed to read {path}: {e}") from e
    logger.info("read %d cards from %s", len(cards), path)
    return cards
