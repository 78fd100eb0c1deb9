"""PyVISA transport for scopes reachable through a VISA library.

This module provides a VISA-based implementation of
:class:`dslib.transport.Transport`, for instruments attached over USB-TMC
or addressed through a VISA resource string. PyVISA is lazily imported to
allow the rest of dslib to work without VISA installed.

Supported resource string formats include:
- TCPIP: ``TCPIP::192.168.1.100::INSTR``
- USB: ``USB0::0x1AB1::0x04CE::DS1ZA170XXXXXX::INSTR``
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterator

from dslib.errors import DeviceConnectionError, ReadTimeoutError, TransportError
from dslib.transport import DEFAULT_TIMEOUT, check_timeout

logger = logging.getLogger(__name__)


class VisaTransport:
    """Transport backed by PyVISA.

    The ``pyvisa`` library is imported lazily on :meth:`open`.

    Attributes:
        resource_string: The VISA resource address string.
        is_open: Whether the resource is currently open.

    Args:
        resource_string: VISA resource address.

    Example:
        >>> transport = VisaTransport("USB0::0x1AB1::0x04CE::DS1ZA170XXXXXX::INSTR")
        >>> transport.open()
        >>> transport.write(b"*IDN?\\n")
        >>> print(transport.read_until(b"\\n"))
        >>> transport.close()
    """

    def __init__(self, resource_string: str) -> None:
        self._resource_string = resource_string
        self._pyvisa: Any = None
        self._rm: Any = None
        self._resource: Any = None

    # -- Properties ----------------------------------------------------------

    @property
    def resource_string(self) -> str:
        """The VISA resource string."""
        return self._resource_string

    @property
    def endpoint(self) -> str:
        return self._resource_string

    @property
    def is_open(self) -> bool:
        """Return True if the resource is currently open."""
        return self._resource is not None

    # -- Lifecycle -----------------------------------------------------------

    def open(self) -> None:
        """Open the VISA resource.

        Lazily imports ``pyvisa`` and creates a :class:`ResourceManager`.

        Raises:
            DeviceConnectionError: If ``pyvisa`` is not installed or the
                resource cannot be opened.
        """
        if self._resource is not None:
            return

        try:
            import pyvisa  # type: ignore[import-not-found]  # pylint: disable=import-outside-toplevel
        except ImportError as exc:
            raise DeviceConnectionError(
                "pyvisa library is not installed. Install with: pip install dslib[visa]"
            ) from exc

        try:
            self._rm = pyvisa.ResourceManager()
            self._resource = self._rm.open_resource(self._resource_string)
        except Exception as exc:
            self._resource = None
            if self._rm is not None:
                try:
                    self._rm.close()
                except Exception:  # pylint: disable=broad-except
                    pass
            self._rm = None
            raise DeviceConnectionError(
                f"Failed to open VISA resource {self._resource_string!r}: {exc}"
            ) from exc
        self._pyvisa = pyvisa
        logger.info("Opened VISA resource %s", self._resource_string)

    def close(self) -> None:
        """Close the VISA resource and resource manager.

        Safe to call multiple times.
        """
        if self._resource is not None:
            try:
                self._resource.close()
            except Exception:  # pylint: disable=broad-except
                pass
            self._resource = None
            logger.info("Closed VISA resource %s", self._resource_string)
        if self._rm is not None:
            try:
                self._rm.close()
            except Exception:  # pylint: disable=broad-except
                pass
            self._rm = None

    # -- Transport interface -------------------------------------------------

    def write(self, data: bytes) -> None:
        """Send *data* without a termination appended.

        Raises:
            TransportError: If the resource is not open or the write fails.
        """
        resource = self._require_open()
        with self._visa_errors():
            resource.write_raw(data)

    def read_until(self, delimiter: bytes, timeout: float | None = DEFAULT_TIMEOUT) -> bytes:
        """Read until *delimiter*; the delimiter is consumed but not returned.

        The last byte of the delimiter is used as the VISA termination
        character.

        Raises:
            ReadTimeoutError: If the VISA read times out.
            TransportError: If the resource is not open or the read fails.
        """
        if not delimiter:
            raise ValueError("delimiter must be non-empty")
        resource = self._require_open()
        self._set_timeout(resource, timeout)
        resource.read_termination = delimiter[-1:].decode("latin-1")
        data = b""
        with self._visa_errors():
            while not data.endswith(delimiter):
                data += resource.read_raw()
        return data[: -len(delimiter)]

    def read_n(self, count: int, timeout: float | None = DEFAULT_TIMEOUT) -> bytes:
        """Read exactly *count* bytes.

        Raises:
            ReadTimeoutError: If the VISA read times out.
            TransportError: If the resource is not open or the read fails.
        """
        resource = self._require_open()
        self._set_timeout(resource, timeout)
        with self._visa_errors():
            data: bytes = resource.read_bytes(count)
        return data

    # -- Private helpers -----------------------------------------------------

    def _require_open(self) -> Any:
        if self._resource is None:
            raise TransportError("VISA resource is not open")
        return self._resource

    @staticmethod
    def _set_timeout(resource: Any, timeout: float | None) -> None:
        seconds = check_timeout(timeout)
        resource.timeout = None if seconds is None else int(seconds * 1000)

    @contextmanager
    def _visa_errors(self) -> Iterator[None]:
        """Translate PyVISA failures into transport errors."""
        pyvisa = self._pyvisa
        try:
            yield
        except pyvisa.errors.VisaIOError as exc:
            if exc.error_code == pyvisa.constants.StatusCode.error_timeout:
                self._resource.flush(pyvisa.constants.BufferOperation.discard_read_buffer)
                raise ReadTimeoutError(
                    f"Timeout on read from {self._resource_string!r}"
                ) from exc
            raise TransportError(f"VISA I/O error on {self._resource_string!r}: {exc}") from exc
