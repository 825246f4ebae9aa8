from __future__ import annotations

import pytest

from core.errors import NoGridRows, NoHeader, ParseError, TooManyGridRows
from core.parser import extract_grid, parse_game_number, parse_result
from core.recognizer import BLUE, DARK, GREEN, LIGHT, YELLOW, extract_row, is_result

G, Y, D = GREEN, YELLOW, DARK

SAMPLE = "\n".join(
    [
        "Wordle 1,234 4/6",
        "",
        D + Y + D + D + D,
        D + D + G + Y + D,
        Y + G + G + D + G,
        G * 5,
    ]
)


def test_parse_sample_result() -> None:
    parsed = parse_result(SAMPLE)
    assert parsed.game_number == 1234
    assert parsed.attempts_label == "4"
    assert parsed.solved is True
    assert parsed.attempts == 4
    assert len(parsed.grid) == 4
    assert parsed.grid[-1] == (G, G, G, G, G)


def test_parse_failed_game_lowercase_x() -> None:
    text = "Wordle 987 x/6\n" + "\n".join([D * 5] * 6)
    parsed = parse_result(text)
    assert parsed.attempts_label == "X"
    assert parsed.solved is False
    assert parsed.attempts == 6


def test_header_is_case_insensitive_and_first_one_wins() -> None:
    text = "wordle 10 2/6\n" + Y + G + D + D + D + "\n" + G * 5 + "\nWordle 11 1/6"
    parsed = parse_result(text)
    assert parsed.game_number == 10
    assert parsed.attempts_label == "2"


def test_grid_row_count_is_not_checked_against_label() -> None:
    parsed = parse_result("Wordle 5 3/6\n" + G * 5)
    assert len(parsed.grid) == 1


def test_no_header_raises() -> None:
    with pytest.raises(NoHeader):
        parse_result(G * 5)
    with pytest.raises(NoHeader):
        parse_result("Wordle 12 7/6\n" + G * 5)


def test_zero_game_number_is_rejected() -> None:
    with pytest.raises(NoHeader):
        parse_result("Wordle 0 3/6\n" + G * 5)


def test_no_grid_rows_raises() -> None:
    with pytest.raises(NoGridRows):
        parse_result("Wordle 1234 4/6\nno grid today")
    # Both are ParseErrors so callers can catch a single type.
    with pytest.raises(ParseError):
        parse_result("Wordle 1234 4/6\n" + G * 4)


def test_rows_with_wrong_width_are_dropped() -> None:
    text = "\n".join([G * 4, G * 5, G * 6, "caption " + Y * 5])
    assert extract_grid(text) == [(G,) * 5, (Y,) * 5]


def test_variation_selector_rejects_row() -> None:
    tainted = D + "\uFE0F" + G * 4
    assert extract_row(tainted) is None
    assert extract_grid(tainted + "\n" + G * 5) == [(G,) * 5]


def test_skin_tone_and_zwj_reject_row() -> None:
    assert extract_row(G + "\U0001F3FB" + G * 4) is None
    assert extract_row(G + "\u200D" + G * 4) is None


def test_all_symbols_are_recognized() -> None:
    assert extract_row(G + Y + BLUE + D + LIGHT) == [G, Y, BLUE, D, LIGHT]


def test_parse_game_number_with_commas() -> None:
    assert parse_game_number("1,234") == 1234
    assert parse_game_number("1,234,567") == 1234567
    assert parse_game_number("42") == 42


def test_is_result() -> None:
    assert is_result(SAMPLE)
    assert not is_result("")
    assert not is_result("just talking about wordle")
    assert not is_result("Wordle 1234 4/6 with no grid")
    assert not is_result(G * 5)


@pytest.mark.parametrize(
    "extender",
    [
        "\u20E3",  # combining keycap
        "\u0301",  # combining acute accent
        "\U000E0067",  # tag character
        "\U000E0100",  # variation selector supplement
        "\uFE0F",
        "\u200D",
        "\U0001F3FD",
    ],
)
def test_any_grapheme_extender_rejects_row(extender: str) -> None:
    assert extract_row(G + extender + G * 4) is None
    assert extract_row(G * 4 + extender) is None
    assert extract_grid(G + extender + G * 4) == []


def test_extenders_on_other_characters_do_not_taint_row() -> None:
    assert extract_row("e\u0301 " + G * 5) == [G] * 5


def test_only_rows_below_the_first_header_count() -> None:
    board = "\n".join([G * 5] * 6)
    text = f"Wordle 10 6/6\n{board}\n\nWordle 11 6/6\n{board}"
    parsed = parse_result(text)
    assert parsed.game_number == 10
    assert len(parsed.grid) == 6


def test_rows_above_the_header_are_ignored() -> None:
    parsed = parse_result(Y * 5 + "\nWordle 10 1/6\n" + G * 5)
    assert parsed.grid == ((G,) * 5,)


def test_more_than_six_rows_is_rejected() -> None:
    text = "Wordle 10 6/6\n" + "\n".join([G * 5] * 7)
    with pytest.raises(TooManyGridRows):
        parse_result(text)


def test_header_does_not_span_lines() -> None:
    assert not is_result("Wordle\n1234\n4/6\n" + G * 5)
    with pytest.raises(NoHeader):
        parse_result("Wordle\n1234 4/6\n" + G * 5)
    assert parse_result("Wordle\t1234\t4/6\n" + G * 5).game_number == 1234


ACCEPTED_SHAPES = [
    SAMPLE,
    "wordle 1 x/6\n" + "\n".join([D * 5] * 6),
    "Wordle 1,234,567 1/6 🔥\n" + G * 5,
    "Look at this!\nWordle 42 3/6*\n\n" + Y + D + D + D + D + "\n" + LIGHT * 5 + "\n" + G * 5,
    "Wordle 7 2/6\n" + BLUE * 5 + "\n" + G * 5 + "\nWordle 8 1/6",
]


@pytest.mark.parametrize("text", ACCEPTED_SHAPES)
def test_recognizer_accepts_everything_the_parser_accepts(text: str) -> None:
    parse_result(text)
    assert is_result(text)


@pytest.mark.parametrize(
    "text",
    [
        "Wordle 5 3/6",
        "Wordle 5 3/6 " + G * 3,
        "Wordle 5 3/6\n" + G + "\uFE0F" + G * 4,
        G * 5,
        "",
    ],
)
def test_parser_rejections_raise_parse_error(text: str) -> None:
    with pytest.raises(ParseError):
        parse_result(text)
