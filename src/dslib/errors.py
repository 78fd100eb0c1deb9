"""Exception types for dslib.

This module defines the exception hierarchy used throughout dslib. All
exceptions inherit from :class:`DslibError`, allowing consumers to catch all
library-specific errors with a single except clause.

Exception hierarchy:
    DslibError (base)
    +-- DefinitionError: Malformed command or category declarations
    +-- TransportError: I/O failures on an open session
    |   +-- ResolutionError: Host/service name could not be resolved
    |   +-- DeviceConnectionError: Socket could not be connected
    +-- ReadTimeoutError: Read deadline elapsed
    +-- ProtocolMismatchError: Response shape disagrees with the request
    +-- ParseError: A response parser rejected its input
    +-- ScpiCommandError: Instrument reported errors in its error queue
"""

from __future__ import annotations

from dataclasses import dataclass


class DslibError(Exception):
    """Base exception for all dslib errors.

    This is the root of the dslib exception hierarchy. Catch this to handle
    any library-specific error.
    """


class DefinitionError(DslibError):
    """Raised for invalid command or category definitions.

    This includes command names containing separators or control characters,
    descriptors declaring neither a query nor an operation, and operation
    calls whose arguments do not match the declared signature.
    """


class TransportError(DslibError):
    """Raised when the transport fails during I/O.

    The session should be considered unusable after this error.
    """


class ResolutionError(TransportError):
    """Raised when a host/service name cannot be resolved to an endpoint."""


class DeviceConnectionError(TransportError, ConnectionError):
    """Raised when the stream socket cannot be connected."""


class ReadTimeoutError(DslibError, TimeoutError):
    """Raised when a read deadline elapses before the frame is complete.

    The pending read is cancelled before this is raised and the session
    buffer is left empty, so the session remains usable.
    """


class ProtocolMismatchError(DslibError):
    """Raised when a response does not fit the request that produced it.

    Common causes are a demultiplexed field count that differs from the
    number of queries issued, or a reserved command returning a value
    outside its domain (``*OPC?`` answering something other than 0 or 1).
    """


class ParseError(DslibError, ValueError):
    """Raised when a response parser rejects its field."""


@dataclass(frozen=True)
class ScpiInstrumentError:
    """Single error from an instrument's error queue.

    Attributes:
        code: SCPI error code (negative for standard errors, positive for device-specific).
        message: Human-readable error description from the instrument.
    """

    code: int
    message: str

    def __str__(self) -> str:
        return f'{self.code},"{self.message}"'


class ScpiCommandError(DslibError):
    """Raised when the instrument error queue holds errors.

    Attributes:
        errors: One or more errors drained from the instrument's error queue.
    """

    def __init__(self, errors: tuple[ScpiInstrumentError, ...]) -> None:
        self.errors = errors
        messages = "; ".join(str(e) for e in errors)
        super().__init__(f"SCPI instrument error(s): {messages}")
