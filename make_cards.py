"""Generate a double-sided flash card PDF from a pipe-delimited file.

Usage:
    python make_cards.py --input cards.csv --output cards.pdf [--font-size 18]
"""
import argparse
import logging
import sys
from pathlib import Path

from card_reader import CardSourceError, read_cards
from grid_mapper import FONT_SIZES, GridSpec
from page_composer import compose
from pdf_builder import DocumentWriteFailed, build_pdf


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="make_cards", description="Generate flash cards PDF from CSV")
    p.add_argument("-i", "--input", required=True, help="Input CSV file (pipe-delimited, no headers)")
    p.add_argument("-o", "--output", required=True, help="Output PDF file")
    p.add_argument("--font-size", type=float, default=FONT_SIZES[0], choices=FONT_SIZES)
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        cards = read_cards(args.input)
    except CardSourceError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(f"Loaded {len(cards)} flash cards from CSV")

    spec = GridSpec(font_size=args.font_size)
    output = Path(args.output)
    try:
        build_pdf(compose(cards, spec), output, spec)
    except DocumentWriteFailed as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(f"Generated PDF: {output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
