"""Reply parsers for SCPI queries.

A parser is a plain callable taking one demultiplexed reply field (the
line terminator and field separator already stripped) and returning a
typed value. Parsers signal malformed input with :class:`ParseError` and
never keep state between calls. Parsers for block commands receive the raw
payload ``bytes`` instead of text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TypeVar

from dslib.errors import ParseError, ProtocolMismatchError, ScpiInstrumentError
from dslib.model import ScopeModel, to_model
from dslib.number import parse_bool, parse_int, parse_number

__all__ = [
    "Identity",
    "parse_bool",
    "parse_error",
    "parse_idn",
    "parse_int",
    "parse_number",
    "parse_opc",
    "parse_passthrough",
]

AnyStr = TypeVar("AnyStr", str, bytes)

MANUFACTURER = "RIGOL TECHNOLOGIES"


@dataclass(frozen=True)
class Identity:
    """Parsed ``*IDN?`` reply.

    Attributes:
        model: Scope model.
        serial: Serial number (e.g. ``"DS1ZA170XXXXXX"``).
        version: Software version (e.g. ``"00.04.04.SP1"``).
    """

    model: ScopeModel
    serial: str
    version: str


_IDN_RE = re.compile(r"^RIGOL TECHNOLOGIES,([^,]+),([^,]+),([^\n]+)$")

# Matches SCPI error responses: optional +/- code, comma, optional quoted message.
_ERROR_RE = re.compile(r"^\s*([+-]?\d+)\s*,\s*\"?([^\"]*)\"?\s*$")


def parse_passthrough(response: AnyStr) -> AnyStr:
    """Return the reply unchanged."""
    return response


def parse_idn(response: str) -> Identity:
    """Parse ``RIGOL TECHNOLOGIES,<model>,<serial>,<version>``.

    Raises:
        ParseError: If the reply does not match the grammar or names an
            unknown model.
    """
    match = _IDN_RE.match(response.rstrip("\r\n"))
    if match is None:
        raise ParseError(f"Malformed *IDN? response: {response!r}")
    model_name, serial, version = match.groups()
    try:
        model = to_model(model_name)
    except ValueError as exc:
        raise ParseError(str(exc)) from None
    return Identity(model=model, serial=serial, version=version)


def parse_opc(response: str) -> bool:
    """Parse an ``*OPC?`` reply.

    Raises:
        ParseError: If the reply is not an integer.
        ProtocolMismatchError: If the integer is neither 0 nor 1.
    """
    value = parse_int(response)
    if value not in (0, 1):
        raise ProtocolMismatchError(f"Invalid response from *OPC?: {value}")
    return value == 1


def parse_error(response: str) -> ScpiInstrumentError | None:
    """Parse a ``:SYST:ERR?`` reply into an error object.

    Returns ``None`` when the reply indicates no error (code 0).

    Raises:
        ParseError: If the reply is not ``code,"message"``.
    """
    match = _ERROR_RE.match(response)
    if match is None:
        raise ParseError(f"Malformed error queue response: {response!r}")
    code = int(match.group(1))
    if code == 0:
        return None
    return ScpiInstrumentError(code=code, message=match.group(2).strip())
