"""Result parsing (core domain)."""

from __future__ import annotations

import re
from typing import List

from core.errors import NoGridRows, NoHeader, TooManyGridRows
from core.models import FAILED_LABEL, GRID_WIDTH, MAX_GRID_ROWS, GridRow, ParsedResult
from core.recognizer import HEADER_RE, extract_row


def parse_game_number(raw: str) -> int:
    """Turn a possibly comma-grouped number such as `1,234` into an int."""

    return int(raw.replace(",", ""))


def extract_grid(text: str) -> List[GridRow]:
    """Return every line that holds exactly one full grid row, in order.

    Headers, captions and blank lines yield fewer (or more) than 5 symbols
    and are dropped.
    """

    rows: List[GridRow] = []
    for line in text.splitlines():
        symbols = extract_row(line)
        if symbols is not None and len(symbols) == GRID_WIDTH:
            rows.append(tuple(symbols))
    return rows


def grid_section(text: str, header: re.Match) -> str:
    """Text belonging to a header: from its end up to the next header."""

    rest = text[header.end():]
    following = HEADER_RE.search(rest)
    return rest[: following.start()] if following else rest


def parse_result(text: str) -> ParsedResult:
    """Parse a shared result message.

    Only the first header counts, and only the rows below it (up to any
    further header) form its grid. The number of grid rows is not checked
    against the attempts label.

    Raises:
        NoHeader: the text does not carry a result header.
        NoGridRows: the header matched but no valid grid row was found.
        TooManyGridRows: more than six rows follow the header.
    """

    text = text or ""
    match = HEADER_RE.search(text)
    if match is None:
        raise NoHeader("no result header found")

    raw_number, raw_attempts = match.groups()
    game_number = parse_game_number(raw_number)
    if game_number <= 0:
        raise NoHeader(f"invalid game number: {raw_number}")

    attempts_label = raw_attempts.upper()
    solved = attempts_label != FAILED_LABEL

    grid = extract_grid(grid_section(text, match))
    if not grid:
        raise NoGridRows(f"no grid rows for game {game_number}")
    if len(grid) > MAX_GRID_ROWS:
        raise TooManyGridRows(f"{len(grid)} grid rows for game {game_number}")

    return ParsedResult(
        game_number=game_number,
        attempts_label=attempts_label,
        solved=solved,
        grid=tuple(grid),
    )
