import pytest

from text_wrapper import CHAR_WIDTH_FACTOR, PT_TO_MM, char_width, max_chars, wrap


def span_for(limit: int, font_size: float = 12.0) -> float:
    """A span that fits exactly `limit` characters at `font_size`."""
    return limit * char_width(font_size) + 0.1


# ── character metrics ────────────────────────────────────────────────────────

def test_char_width_uses_fixed_factor():
    assert char_width(18) == pytest.approx(18 * CHAR_WIDTH_FACTOR * PT_TO_MM)
    assert char_width(18) == pytest.approx(3.1752)


@pytest.mark.parametrize("font_size,span,expected", [
    (18, 60, 18),
    (12, 71.75, 33),
    (18, 71.75, 22),
    (12, 1, 0),
    (12, -5, 0),
])
def test_max_chars(font_size, span, expected):
    assert max_chars(font_size, span) == expected


def test_max_chars_without_width_is_unlimited():
    assert max_chars(0, 50) is None


# ── wrapping ─────────────────────────────────────────────────────────────────

def test_short_text_is_returned_unchanged():
    assert wrap("two  spaces ", 12, 50) == ["two  spaces "]


def test_text_exactly_at_limit_stays_on_one_line():
    assert wrap("abcde", 12, span_for(5)) == ["abcde"]


def test_empty_text_gives_one_empty_line():
    assert wrap("", 12, 50) == [""]
    assert wrap("", 12, 0) == [""]


def test_whitespace_only_text_over_limit_gives_one_empty_line():
    assert wrap("          ", 12, span_for(3)) == [""]


def test_greedy_packing_fills_up_to_limit():
    assert wrap("a b c d e f g", 12, span_for(5)) == ["a b c", "d e f", "g"]


def test_greedy_packing_closes_line_past_limit():
    assert wrap("a b c d e f g", 12, span_for(4)) == ["a b", "c d", "e f", "g"]


def test_long_word_overflows_unsplit():
    assert wrap("INTERNATIONALIZATION", 18, 60) == ["INTERNATIONALIZATION"]


def test_long_word_gets_its_own_line():
    assert wrap("an INTERNATIONALIZATION test", 18, 60) == ["an", "INTERNATIONALIZATION", "test"]


def test_zero_limit_puts_one_word_per_line():
    assert wrap("ab cd ef", 12, 1) == ["ab", "cd", "ef"]


def test_zero_font_size_does_not_wrap():
    assert wrap("a very long line of text indeed", 0, 10) == ["a very long line of text indeed"]


SAMPLES = [
    "the quick brown fox jumps over the lazy dog",
    "photosynthesis converts light energy into chemical energy stored in glucose",
    "  leading and   irregular    whitespace   everywhere  ",
    "supercalifragilisticexpialidocious is a long word among short ones",
    "x",
    "",
]


@pytest.mark.parametrize("text", SAMPLES)
@pytest.mark.parametrize("limit", [0, 3, 8, 20, 33])
def test_rewrapping_is_a_stable_point(text, limit):
    span = span_for(limit)
    lines = wrap(text, 12, span)
    assert wrap(" ".join(lines), 12, span) == lines


@pytest.mark.parametrize("text", [t for t in SAMPLES if t])
@pytest.mark.parametrize("limit", [0, 3, 8, 20])
def test_never_empty_and_never_splits_words(text, limit):
    lines = wrap(text, 12, span_for(limit))
    assert len(lines) >= 1
    if len(text) > limit:
        assert " ".join(lines).split() == text.split()
        for line in lines:
            assert len(line) <= limit or " " not in line


def test_wrap_is_deterministic():
    text = SAMPLES[1]
    assert wrap(text, 18, 71.75) == wrap(text, 18, 71.75)
