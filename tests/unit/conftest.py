"""Shared fixtures for dslib unit tests."""

from __future__ import annotations

import threading
from collections.abc import Iterator

import pytest
from scope_emulator import RunningScope, ScopeEmulator, ScopeTcpServer


@pytest.fixture
def scope_server() -> Iterator[RunningScope]:
    """Start an emulated scope on an ephemeral port."""
    emulator = ScopeEmulator()
    server = ScopeTcpServer(emulator)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    try:
        yield RunningScope(emulator=emulator, host=str(host), port=int(port))
    finally:
        server.shutdown()
        thread.join()
        server.server_close()
