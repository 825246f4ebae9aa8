"""Result recognition: header pattern and grid symbol extraction (core domain)."""

from __future__ import annotations

import re
from typing import List, Optional

import regex

GREEN = "\U0001F7E9"  # 🟩
YELLOW = "\U0001F7E8"  # 🟨
BLUE = "\U0001F7E6"  # 🟦
DARK = "\u2B1B"  # ⬛
LIGHT = "\u2B1C"  # ⬜

GRID_SYMBOLS = frozenset({GREEN, YELLOW, BLUE, DARK, LIGHT})

# Wordle 1,234 4/6 (number optionally comma-grouped, X for a failed game).
# Only spaces and tabs separate the parts; the header never spans lines.
HEADER_RE = re.compile(r"Wordle[ \t]+(\d{1,3}(?:,\d{3})+|\d+)[ \t]+([1-6X])/6", re.IGNORECASE)

# One extended grapheme cluster.
_GRAPHEME_RE = regex.compile(r"\X")


def is_result(text: str) -> bool:
    """Cheap necessity filter: a result header and at least one grid symbol.

    Anything `parse_result` accepts passes this check; ordinary chat text
    does not.
    """

    if not text:
        return False
    if HEADER_RE.search(text) is None:
        return False
    return any(ch in GRID_SYMBOLS for ch in text)


def extract_row(line: str) -> Optional[List[str]]:
    """Return the grid symbols of a line in order, or None if it is tainted.

    The line is split into graphemes. A grapheme that contains a grid square
    but is not exactly one of the five symbols (a square with a variation
    selector, keycap, accent, tag sequence, skin tone or joiner glued to it)
    rejects the line.
    """

    symbols: List[str] = []
    for grapheme in _GRAPHEME_RE.findall(line):
        if grapheme in GRID_SYMBOLS:
            symbols.append(grapheme)
        elif any(ch in GRID_SYMBOLS for ch in grapheme):
            return None
    return symbols
