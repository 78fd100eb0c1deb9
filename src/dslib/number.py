"""SCPI number parsing and formatting utilities.

Handles NR1 (integer), NR2 (fixed-point), and NR3 (scientific notation)
numeric formats as well as the special tokens NAN, INF and NINF.
"""

from __future__ import annotations

import math
from enum import Enum

from dslib.errors import ParseError


_SPECIAL_FLOAT_MAP: dict[str, float] = {
    "NAN": float("nan"),
    "INF": float("inf"),
    "NINF": float("-inf"),
    "-INF": float("-inf"),
}

_TRUE_TOKENS: frozenset[str] = frozenset({"1", "ON"})
_FALSE_TOKENS: frozenset[str] = frozenset({"0", "OFF"})


def parse_number(text: str) -> float:
    """Parse a SCPI numeric response into a float.

    Accepts NR1 (``"42"``), NR2 (``"1.23"``), NR3 (``"1.23E+4"``),
    and the special tokens ``NAN``, ``INF``, ``NINF``, and ``-INF``.

    Args:
        text: The raw response string (leading/trailing whitespace is stripped).

    Returns:
        The parsed float value.

    Raises:
        ParseError: If *text* cannot be parsed as a SCPI number.
    """
    token = text.strip().upper()
    special = _SPECIAL_FLOAT_MAP.get(token)
    if special is not None:
        return special
    try:
        return float(token)
    except ValueError:
        raise ParseError(f"Invalid SCPI number: {text!r}") from None


def parse_int(text: str) -> int:
    """Parse a SCPI NR1 (integer) response.

    Raises:
        ParseError: If *text* is not a valid integer.
    """
    token = text.strip()
    try:
        return int(token)
    except ValueError:
        raise ParseError(f"Invalid SCPI integer: {text!r}") from None


def parse_bool(text: str) -> bool:
    """Parse a SCPI boolean response.

    Accepts ``"1"`` / ``"0"`` and ``"ON"`` / ``"OFF"`` (case-insensitive).

    Raises:
        ParseError: If *text* is not a recognized boolean token.
    """
    token = text.strip().upper()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise ParseError(f"Invalid SCPI boolean: {text!r}")


def format_number(value: float) -> str:
    """Format a float for use in a SCPI command.

    ``nan``, ``inf``, and ``-inf`` are rendered as ``NAN``, ``INF``, and
    ``NINF`` respectively.  Finite values use Python's default ``str()``
    representation.
    """
    if math.isnan(value):
        return "NAN"
    if math.isinf(value):
        return "NINF" if value < 0 else "INF"
    return str(value)


def format_bool(value: bool) -> str:
    """Format a boolean for use in a SCPI command."""
    return "1" if value else "0"


def format_argument(value: object) -> str:
    """Render one operation argument as SCPI program data.

    Booleans become ``1``/``0``, floats go through :func:`format_number`,
    enum members are rendered by value and anything else by ``str()``.
    """
    if isinstance(value, bool):
        return format_bool(value)
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)
