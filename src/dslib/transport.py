"""Transport protocol definition.

This module defines the :class:`Transport` protocol, which specifies the
interface that all transport implementations must provide. Transports
handle the byte stream between the client and the instrument; framing of
requests and replies is left to :class:`dslib.device.Device`.

Implementations include:
- :class:`dslib.lan.LanTransport`: TCP socket transport (port 5555)
- :class:`dslib.visa.VisaTransport`: PyVISA-backed transport
"""

from __future__ import annotations

from typing import Any, Protocol

#: Read timeout in seconds used when the caller does not pass one.
DEFAULT_TIMEOUT = 1.0

#: Read timeout meaning "wait indefinitely".
NO_TIMEOUT = 0.0


def check_timeout(timeout: float | None) -> float | None:
    """Normalize a read timeout.

    Returns:
        The timeout in seconds, or None to wait indefinitely (for ``None``
        and :data:`NO_TIMEOUT`).

    Raises:
        ValueError: If the timeout is negative.
    """
    if timeout is None or timeout == NO_TIMEOUT:
        return None
    if timeout < 0:
        raise ValueError(f"timeout must be >= 0, got {timeout}")
    return float(timeout)


class Transport(Protocol):
    """Protocol for a timeout-bounded instrument byte stream.

    This is a structural subtyping protocol. Any class that implements
    these methods with the correct signatures is a valid transport.

    Both read methods leave no unconsumed bytes behind in the session when
    they return or fail, so an aborted read never leaks into the next one.
    A session serves one read at a time and is not safe for concurrent use.
    """

    @property
    def endpoint(self) -> Any:
        """Address of the connected instrument."""
        ...

    def write(self, data: bytes) -> None:
        """Send all of *data*.

        Raises:
            TransportError: If the connection fails.
        """
        ...

    def read_until(self, delimiter: bytes, timeout: float | None = DEFAULT_TIMEOUT) -> bytes:
        """Read until *delimiter*; the delimiter is consumed but not returned.

        Raises:
            ReadTimeoutError: If the delimiter is not seen within *timeout*.
            TransportError: If the connection fails.
        """
        ...

    def read_n(self, count: int, timeout: float | None = DEFAULT_TIMEOUT) -> bytes:
        """Read exactly *count* bytes.

        Raises:
            ReadTimeoutError: If fewer bytes arrive within *timeout*.
            TransportError: If the connection fails.
        """
        ...

    def close(self) -> None:
        """Close the transport and release resources."""
        ...
