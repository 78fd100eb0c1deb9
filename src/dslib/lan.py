"""TCP transport for LAN-connected scopes.

The DS1000Z series accepts raw SCPI over TCP on port 5555. The transport is
synchronous from the caller's point of view, but every read runs on a
private asyncio event loop where a read task and a timer task are armed
together: whichever finishes first decides the outcome, and the other one
is cancelled and its cancellation swallowed.

Typical usage::

    from dslib.lan import LanTransport

    transport = LanTransport("192.168.1.100")
    transport.write(b"*IDN?\\n")
    print(transport.read_until(b"\\n", timeout=1.0))
    transport.close()
"""

from __future__ import annotations

import asyncio
import logging
import socket
from typing import Any, Coroutine

from dslib.errors import (
    DeviceConnectionError,
    ReadTimeoutError,
    ResolutionError,
    TransportError,
)
from dslib.transport import DEFAULT_TIMEOUT, check_timeout

logger = logging.getLogger(__name__)

#: Default SCPI-over-TCP port of the DS1000Z series.
DEVICE_PORT = 5555

_CHUNK_SIZE = 4096


class LanTransport:
    """Stream socket transport implementing :class:`dslib.transport.Transport`.

    The host is resolved and the socket connected on construction. The
    session owns the socket and a receive buffer; after every read the
    buffer is empty again, so bytes from an aborted or over-long reply are
    never handed to the next read.

    Args:
        host: Host name or IPv4 address of the instrument.
        port: TCP port or service name. Defaults to 5555.
        connect_timeout: Seconds to wait for the connection, or None to wait
            indefinitely.

    Raises:
        ResolutionError: If *host* cannot be resolved.
        DeviceConnectionError: If the connection cannot be established.
    """

    def __init__(
        self,
        host: str,
        port: int | str = DEVICE_PORT,
        *,
        connect_timeout: float | None = 5.0,
    ) -> None:
        self._loop = asyncio.new_event_loop()
        self._buffer = bytearray()
        self._sock: socket.socket | None = None
        try:
            self._endpoint = self._resolve(host, port)
            self._sock = self._connect(check_timeout(connect_timeout))
        except BaseException:
            self._loop.close()
            raise
        logger.info("Connected to %s:%d", *self._endpoint)

    # -- Properties ----------------------------------------------------------

    @property
    def endpoint(self) -> tuple[str, int]:
        """Resolved ``(address, port)`` of the instrument."""
        return self._endpoint

    @property
    def is_open(self) -> bool:
        return self._sock is not None

    # -- Lifecycle -----------------------------------------------------------

    def _resolve(self, host: str, port: int | str) -> tuple[str, int]:
        try:
            infos = self._loop.run_until_complete(
                self._loop.getaddrinfo(host, port, family=socket.AF_INET, type=socket.SOCK_STREAM)
            )
        except (socket.gaierror, UnicodeError) as exc:
            raise ResolutionError(f"Could not resolve address {host}:{port}: {exc}") from exc
        if not infos:
            raise ResolutionError(f"Could not resolve address {host}:{port}")
        address = infos[0][4]
        return (str(address[0]), int(address[1]))

    def _connect(self, timeout: float | None) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setblocking(False)
        try:
            self._loop.run_until_complete(
                asyncio.wait_for(self._loop.sock_connect(sock, self._endpoint), timeout)
            )
        except (OSError, asyncio.TimeoutError) as exc:
            sock.close()
            raise DeviceConnectionError(
                f"Could not connect to {self._endpoint[0]}:{self._endpoint[1]}: {exc}"
            ) from exc
        return sock

    def close(self) -> None:
        """Close the socket and the event loop.

        Safe to call multiple times.
        """
        if self._sock is not None:
            self._sock.close()
            self._sock = None
            logger.info("Closed connection to %s:%d", *self._endpoint)
        if not self._loop.is_closed():
            self._loop.close()

    # -- Transport interface -------------------------------------------------

    def write(self, data: bytes) -> None:
        """Send all of *data*. Writes are not bounded by a timeout.

        Raises:
            TransportError: If the transport is closed or the send fails.
        """
        sock = self._require_open()
        try:
            self._loop.run_until_complete(self._loop.sock_sendall(sock, data))
        except OSError as exc:
            raise TransportError(f"Write to {self._endpoint[0]} failed: {exc}") from exc

    def read_until(self, delimiter: bytes, timeout: float | None = DEFAULT_TIMEOUT) -> bytes:
        """Read until *delimiter*; the delimiter is consumed but not returned.

        Args:
            delimiter: Non-empty byte sequence terminating the frame.
            timeout: Seconds to wait, or None/0 to wait indefinitely.

        Raises:
            ReadTimeoutError: If the delimiter does not arrive in time.
            TransportError: If the transport is closed or the peer hangs up.
        """
        if not delimiter:
            raise ValueError("delimiter must be non-empty")
        limit = check_timeout(timeout)
        sock = self._require_open()
        return self._read(self._fill_until(sock, delimiter), limit)

    def read_n(self, count: int, timeout: float | None = DEFAULT_TIMEOUT) -> bytes:
        """Read exactly *count* bytes.

        Raises:
            ReadTimeoutError: If fewer bytes arrive in time.
            TransportError: If the transport is closed or the peer hangs up.
        """
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        limit = check_timeout(timeout)
        sock = self._require_open()
        return self._read(self._fill_n(sock, count), limit)

    # -- Private helpers -----------------------------------------------------

    def _require_open(self) -> socket.socket:
        if self._sock is None:
            raise TransportError("LAN transport is closed")
        return self._sock

    def _read(self, reader: Coroutine[Any, Any, bytes], timeout: float | None) -> bytes:
        try:
            return self._loop.run_until_complete(self._race(reader, timeout))
        except OSError as exc:
            raise TransportError(f"Read from {self._endpoint[0]} failed: {exc}") from exc
        finally:
            self._buffer.clear()

    async def _race(self, reader: Coroutine[Any, Any, bytes], timeout: float | None) -> bytes:
        """Run *reader* against a timer; exactly one of them produces the result."""
        read_task = asyncio.create_task(reader)
        if timeout is None:
            return await read_task

        timer = asyncio.create_task(asyncio.sleep(timeout))
        done, _ = await asyncio.wait({read_task, timer}, return_when=asyncio.FIRST_COMPLETED)
        if read_task in done:
            await _cancel(timer)
            return read_task.result()

        await _cancel(read_task)
        self._drain()
        raise ReadTimeoutError(f"Timeout on read from {self._endpoint[0]} after {timeout} s")

    async def _fill_until(self, sock: socket.socket, delimiter: bytes) -> bytes:
        while True:
            index = self._buffer.find(delimiter)
            if index >= 0:
                return self._take(index, len(delimiter))
            await self._receive(sock)

    async def _fill_n(self, sock: socket.socket, count: int) -> bytes:
        # Never receive past the requested count; the caller may read the rest next.
        while len(self._buffer) < count:
            await self._receive(sock, min(_CHUNK_SIZE, count - len(self._buffer)))
        return self._take(count, 0)

    async def _receive(self, sock: socket.socket, size: int = _CHUNK_SIZE) -> None:
        chunk = await self._loop.sock_recv(sock, size)
        if not chunk:
            raise TransportError(f"Connection closed by {self._endpoint[0]}")
        self._buffer += chunk

    def _take(self, size: int, skip: int) -> bytes:
        """Return the frame, consume *skip* delimiter bytes, discard the rest."""
        frame = bytes(self._buffer[:size])
        excess = len(self._buffer) - size - skip
        if excess:
            logger.debug("Discarding %d byte(s) received past the frame", excess)
        self._buffer.clear()
        return frame

    def _drain(self) -> None:
        """Drop buffered bytes and whatever is already pending on the socket."""
        discarded = len(self._buffer)
        self._buffer.clear()
        sock = self._require_open()
        while True:
            try:
                chunk = sock.recv(_CHUNK_SIZE)
            except (BlockingIOError, InterruptedError):
                break
            if not chunk:
                break
            discarded += len(chunk)
        if discarded:
            logger.debug("Discarded %d byte(s) of an aborted read", discarded)


async def _cancel(task: asyncio.Task[Any]) -> None:
    """Cancel the losing side of a race and swallow its cancellation."""
    task.cancel()
    try:
        await task
    except asyncio.CancelledError:
        pass
