"""SCPI request/response engine.

This module provides the :class:`Device` class, which turns command
descriptors into wire requests over a :class:`Transport`, reads the reply,
and hands each field to the descriptor's parser.

Typical usage::

    from dslib.device import Device
    from dslib.lan import LanTransport
    from dslib.scpi.commands import common

    device = Device(LanTransport("192.168.1.100"))

    identity = device.query(common.IDN)
    first, second = device.query_all(common.IDN, common.OPC)
    identity = device.query_when_complete(common.IDN)  # None while busy
    device.submit(common.RST)

    device.close()
"""

from __future__ import annotations

import logging
from typing import Any, Sequence, TypeVar

from dslib.errors import (
    DefinitionError,
    ParseError,
    ProtocolMismatchError,
    ReadTimeoutError,
    ScpiCommandError,
    ScpiInstrumentError,
    TransportError,
)
from dslib.scpi.command import Command
from dslib.scpi.commands import common
from dslib.scpi.commands.ds1000 import system
from dslib.transport import DEFAULT_TIMEOUT, Transport

logger = logging.getLogger(__name__)

T = TypeVar("T")

#: Terminates every request line and every text reply.
LINE_TERMINATOR = "\n"

#: Separates the replies to concatenated queries.
FIELD_SEPARATOR = ";"


def split_response(response: str, count: int) -> list[str]:
    """Split a concatenated reply into one field per query.

    The line terminator and one trailing field separator are stripped
    before splitting.

    Args:
        response: Reply line as read from the transport.
        count: Number of queries the reply answers.

    Returns:
        Exactly *count* fields, in request order.

    Raises:
        ProtocolMismatchError: If the reply holds a different number of fields.
    """
    text = response.rstrip("\r\n")
    if text.endswith(FIELD_SEPARATOR):
        text = text[: -len(FIELD_SEPARATOR)]
    fields = text.split(FIELD_SEPARATOR)
    if len(fields) != count:
        raise ProtocolMismatchError(
            f"Expected {count} field(s) in response, got {len(fields)}: {response!r}"
        )
    return fields


class Device:
    """Half-duplex SCPI client over a transport.

    Every call is one complete exchange: the request is written and, for
    queries, the reply is read before the call returns. Calls on one device
    must not overlap. Failures propagate to the caller and a failed call
    never returns partial results.

    Args:
        transport: An open :class:`Transport`.
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    @property
    def transport(self) -> Transport:
        return self._transport

    # -- Queries -------------------------------------------------------------

    def query(self, command: Command[T], *, timeout: float | None = DEFAULT_TIMEOUT) -> T:
        """Send a single query and return its parsed reply.

        Args:
            command: A command with a query form.
            timeout: Read timeout in seconds; ``NO_TIMEOUT`` waits indefinitely.

        Raises:
            DefinitionError: If the command cannot be queried this way.
            ReadTimeoutError: If the reply does not arrive in time.
            TransportError: If the transport fails.
            ProtocolMismatchError: If the reply is not a single field.
            ParseError: If the parser rejects the reply.
        """
        result: T = self.query_all(command, timeout=timeout)[0]
        return result

    def query_all(
        self, *commands: Command[Any], timeout: float | None = DEFAULT_TIMEOUT
    ) -> tuple[Any, ...]:
        """Send several queries in one request and demultiplex the reply.

        The queries are written newline-joined in one request; the instrument
        answers with one line of ``;``-separated fields.

        Returns:
            One parsed result per command, in the order given.

        Raises:
            DefinitionError: If no command is given or one cannot be queried.
            ProtocolMismatchError: If the field count differs from the
                number of commands.
        """
        request = self._compose_query(commands)
        self._send(request)
        fields = split_response(self._receive(timeout), len(commands))
        return tuple(command.parse(field) for command, field in zip(commands, fields))

    def query_block(self, command: Command[T], *, timeout: float | None = DEFAULT_TIMEOUT) -> T:
        """Send a query whose reply is an IEEE 488.2 definite-length block.

        The block header ``#<n><length>`` is read first, then exactly
        ``length`` payload bytes and the line terminator. The payload bytes
        are handed to the command's parser.

        Raises:
            DefinitionError: If the command is not a block query.
            ProtocolMismatchError: If the reply is not a valid block.
        """
        if not command.block:
            raise DefinitionError(f"Command {command.base!r} does not reply with a block")
        self._send(command.query_string())
        return command.parse(self._read_block(timeout))

    def is_complete(self, *, timeout: float | None = DEFAULT_TIMEOUT) -> bool:
        """Query ``*OPC?`` alone.

        Returns:
            True once all pending operations have finished.

        Raises:
            ProtocolMismatchError: If the instrument replies neither 0 nor 1.
        """
        return self.query(common.OPC, timeout=timeout)

    def query_when_complete(
        self, command: Command[T], *, timeout: float | None = DEFAULT_TIMEOUT
    ) -> T | None:
        """Query once the instrument has finished pending operations.

        ``*OPC?`` is sent first as its own exchange. Only when it reports
        completion is the real query sent, as a second exchange with the
        same timeout.

        Returns:
            The parsed reply, or None if the instrument did not confirm
            completion in time (the real query is then never sent).
        """
        self._compose_query((command,))
        if not self._wait_ready(timeout):
            return None
        return self.query(command, timeout=timeout)

    def query_all_when_complete(
        self, *commands: Command[Any], timeout: float | None = DEFAULT_TIMEOUT
    ) -> tuple[Any, ...] | None:
        """Multi-command variant of :meth:`query_when_complete`."""
        self._compose_query(commands)
        if not self._wait_ready(timeout):
            return None
        return self.query_all(*commands, timeout=timeout)

    # -- Operations ----------------------------------------------------------

    def submit(self, command: Command[Any], *args: Any) -> None:
        """Send an operation. Operations produce no reply, so none is read.

        Raises:
            DefinitionError: If the command has no operation form or the
                arguments do not match its signature.
        """
        self._send(command.command_string(*args))

    # -- Error queue ---------------------------------------------------------

    def get_errors(self, *, timeout: float | None = DEFAULT_TIMEOUT) -> tuple[ScpiInstrumentError, ...]:
        """Drain the instrument error queue.

        Repeatedly queries ``:SYST:ERR?`` until the instrument returns a
        ``0,"No error"`` response.

        Returns:
            Every queued error, oldest first. Empty if there are none.
        """
        errors: list[ScpiInstrumentError] = []
        while True:
            error = self.query(system.ERROR, timeout=timeout)
            if error is None:
                break
            errors.append(error)
        return tuple(errors)

    def check_errors(self, *, timeout: float | None = DEFAULT_TIMEOUT) -> None:
        """Drain the error queue and raise if it held errors.

        Raises:
            ScpiCommandError: If the instrument reported errors.
        """
        errors = self.get_errors(timeout=timeout)
        if errors:
            raise ScpiCommandError(errors)

    # -- Lifecycle -----------------------------------------------------------

    def close(self) -> None:
        """Close the underlying transport."""
        self._transport.close()

    # -- Private helpers -----------------------------------------------------

    @staticmethod
    def _compose_query(commands: Sequence[Command[Any]]) -> str:
        if not commands:
            raise DefinitionError("At least one command is required")
        for command in commands:
            if not command.has_query:
                raise DefinitionError(f"Command {command.base!r} cannot be queried")
            if command.block:
                raise DefinitionError(
                    f"Command {command.base!r} replies with a block; use query_block()"
                )
        return LINE_TERMINATOR.join(command.query_string() for command in commands)

    def _wait_ready(self, timeout: float | None) -> bool:
        try:
            complete = self.is_complete(timeout=timeout)
        except ReadTimeoutError:
            logger.warning("No *OPC? reply within %s s; instrument unavailable", timeout)
            return False
        except TransportError as exc:
            logger.warning("*OPC? failed; instrument unavailable: %s", exc)
            return False
        if not complete:
            logger.info("Instrument reports pending operations")
        return complete

    def _send(self, request: str) -> None:
        try:
            data = (request + LINE_TERMINATOR).encode("ascii")
        except UnicodeEncodeError as exc:
            raise DefinitionError(f"Request is not ASCII: {request!r}") from exc
        logger.debug("-> %r", request)
        self._transport.write(data)

    def _receive(self, timeout: float | None) -> str:
        raw = self._transport.read_until(LINE_TERMINATOR.encode("ascii"), timeout)
        try:
            response = raw.decode("ascii")
        except UnicodeDecodeError as exc:
            raise ParseError(f"Response is not ASCII: {raw[:64]!r}") from exc
        logger.debug("<- %r", response)
        return response

    def _read_block(self, timeout: float | None) -> bytes:
        header = self._transport.read_n(2, timeout)
        if header[:1] != b"#" or not header[1:2].isdigit():
            raise ProtocolMismatchError(f"Invalid block header: {header!r}")
        digits = int(header[1:2])
        if digits == 0:
            # Indefinite-length block, terminated by the line terminator.
            return self._transport.read_until(LINE_TERMINATOR.encode("ascii"), timeout)
        length_field = self._transport.read_n(digits, timeout)
        if not length_field.isdigit():
            raise ProtocolMismatchError(f"Invalid block length: {length_field!r}")
        payload = self._transport.read_n(int(length_field), timeout)
        self._transport.read_until(LINE_TERMINATOR.encode("ascii"), timeout)
        logger.debug("<- block of %d byte(s)", len(payload))
        return payload
