"""Tests for LanTransport against the emulated scope."""

from __future__ import annotations

import socket

import pytest
from scope_emulator import IDN_REPLY, SCREEN, RunningScope

from dslib.errors import (
    DeviceConnectionError,
    ReadTimeoutError,
    ResolutionError,
    TransportError,
)
from dslib.lan import DEVICE_PORT, LanTransport
from dslib.transport import NO_TIMEOUT


def _open(scope: RunningScope) -> LanTransport:
    return LanTransport(scope.host, scope.port, connect_timeout=2.0)


def _unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return int(sock.getsockname()[1])


# ---------------------------------------------------------------------------
# Connection
# ---------------------------------------------------------------------------


class TestConnect:
    """Tests for resolution and connection."""

    def test_default_port(self) -> None:
        assert DEVICE_PORT == 5555

    def test_endpoint(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        try:
            assert transport.endpoint == ("127.0.0.1", scope_server.port)
            assert transport.is_open
        finally:
            transport.close()

    def test_unresolvable_host(self) -> None:
        with pytest.raises(ResolutionError):
            LanTransport("nonexistent.invalid", connect_timeout=1.0)

    def test_connection_refused(self) -> None:
        with pytest.raises(DeviceConnectionError) as exc_info:
            LanTransport("127.0.0.1", _unused_port(), connect_timeout=1.0)
        assert isinstance(exc_info.value, ConnectionError)
        assert isinstance(exc_info.value, TransportError)

    def test_negative_connect_timeout(self, scope_server: RunningScope) -> None:
        with pytest.raises(ValueError):
            LanTransport(scope_server.host, scope_server.port, connect_timeout=-1.0)


# ---------------------------------------------------------------------------
# read_until
# ---------------------------------------------------------------------------


class TestReadUntil:
    """Tests for LanTransport.read_until."""

    def test_reads_reply_without_delimiter(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        try:
            transport.write(b"*IDN?\n")
            assert transport.read_until(b"\n", timeout=2.0) == IDN_REPLY.encode("ascii")
        finally:
            transport.close()
        assert scope_server.emulator.received == ["*IDN?"]

    def test_concatenated_queries_answered_on_one_line(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        try:
            transport.write(b"*IDN?\n*IDN?\n")
            reply = transport.read_until(b"\n", timeout=2.0)
        finally:
            transport.close()
        assert reply == f"{IDN_REPLY};{IDN_REPLY}".encode("ascii")

    def test_no_timeout_waits_for_reply(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        try:
            transport.write(b"*OPC?\n")
            assert transport.read_until(b"\n", timeout=NO_TIMEOUT) == b"1"
            transport.write(b"*OPC?\n")
            assert transport.read_until(b"\n", timeout=None) == b"1"
        finally:
            transport.close()

    def test_timeout_then_session_still_usable(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        try:
            transport.write(b"SILENT?\n")
            with pytest.raises(ReadTimeoutError):
                transport.read_until(b"\n", timeout=0.2)
            transport.write(b"*IDN?\n")
            assert transport.read_until(b"\n", timeout=2.0) == IDN_REPLY.encode("ascii")
        finally:
            transport.close()

    def test_timeout_is_builtin_timeout_error(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        try:
            transport.write(b"SILENT?\n")
            with pytest.raises(TimeoutError):
                transport.read_until(b"\n", timeout=0.1)
        finally:
            transport.close()

    def test_partial_frame_not_leaked_after_timeout(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        try:
            transport.write(b"PARTIAL?\n")
            with pytest.raises(ReadTimeoutError):
                transport.read_until(b"\n", timeout=0.3)
            transport.write(b"*IDN?\n")
            assert transport.read_until(b"\n", timeout=2.0) == IDN_REPLY.encode("ascii")
        finally:
            transport.close()

    def test_excess_after_delimiter_discarded(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        try:
            transport.write(b"TWOLINES?\n")
            assert transport.read_until(b"\n", timeout=2.0) == b"first"
            transport.write(b"*OPC?\n")
            assert transport.read_until(b"\n", timeout=2.0) == b"1"
        finally:
            transport.close()

    def test_multi_byte_delimiter(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        try:
            transport.write(b"*IDN?\n")
            assert transport.read_until(b"04.SP1\n", timeout=2.0) == b"RIGOL TECHNOLOGIES,DS1054Z,DS1ZA170XXXXXX,00.04."
        finally:
            transport.close()

    def test_peer_hangup(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        try:
            transport.write(b"HANGUP\n")
            with pytest.raises(TransportError, match="Connection closed"):
                transport.read_until(b"\n", timeout=2.0)
        finally:
            transport.close()

    def test_empty_delimiter_rejected(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        try:
            with pytest.raises(ValueError, match="delimiter"):
                transport.read_until(b"", timeout=1.0)
        finally:
            transport.close()

    def test_negative_timeout_rejected(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        try:
            with pytest.raises(ValueError, match="timeout"):
                transport.read_until(b"\n", timeout=-0.5)
        finally:
            transport.close()


# ---------------------------------------------------------------------------
# read_n
# ---------------------------------------------------------------------------


class TestReadN:
    """Tests for LanTransport.read_n."""

    def test_block_read_in_steps(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        try:
            transport.write(b":DISP:DATA?\n")
            assert transport.read_n(2, timeout=2.0) == b"#9"
            assert transport.read_n(9, timeout=2.0) == b"%09d" % len(SCREEN)
            assert transport.read_n(len(SCREEN), timeout=2.0) == SCREEN
            assert transport.read_until(b"\n", timeout=2.0) == b""
        finally:
            transport.close()

    def test_zero_count(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        try:
            assert transport.read_n(0, timeout=1.0) == b""
        finally:
            transport.close()

    def test_short_reply_times_out(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        try:
            transport.write(b"PARTIAL?\n")
            with pytest.raises(ReadTimeoutError):
                transport.read_n(10, timeout=0.3)
            transport.write(b"*OPC?\n")
            assert transport.read_until(b"\n", timeout=2.0) == b"1"
        finally:
            transport.close()

    def test_negative_count_rejected(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        try:
            with pytest.raises(ValueError, match="count"):
                transport.read_n(-1)
        finally:
            transport.close()


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestClose:
    """Tests for LanTransport.close."""

    def test_close_is_idempotent(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        transport.close()
        transport.close()
        assert not transport.is_open

    def test_write_after_close(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        transport.close()
        with pytest.raises(TransportError, match="closed"):
            transport.write(b"*IDN?\n")

    def test_read_after_close(self, scope_server: RunningScope) -> None:
        transport = _open(scope_server)
        transport.close()
        with pytest.raises(TransportError, match="closed"):
            transport.read_until(b"\n")
