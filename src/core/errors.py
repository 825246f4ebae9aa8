"""Parse failures raised by the result parser (core domain).

None of these are fatal: the processor treats every ParseError as
"not a result" and stays silent.
"""

from __future__ import annotations


class ParseError(ValueError):
    """Base class for text that could not be turned into a ParsedResult."""


class NoHeader(ParseError):
    """The text has no `Wordle <N> <A>/6` header."""


class NoGridRows(ParseError):
    """A header matched but no line carried exactly 5 grid symbols."""


class TooManyGridRows(ParseError):
    """The grid after the header holds more rows than a game allows."""
