"""Root conftest.py for dslib.

Tests are sorted by what stands in for the scope:

- ``uses_mock``: an in-memory transport or a mocked PyVISA module.
- ``uses_emulator``: the threaded TCP emulator (``scope_server`` fixture),
  so real socket I/O through :class:`dslib.lan.LanTransport`.
- ``integration``: a real scope on the bench; never auto-applied.

Both of the first two are detected during collection, so
``pytest -m "not uses_mock"`` keeps only tests that cross a socket.
"""

from __future__ import annotations

import ast
import inspect
import sys
import textwrap
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from _pytest.config import Config
    from _pytest.nodes import Item


# Allow running the suite from a checkout without installing the package
SRC_DIR = Path(__file__).parent / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

#: Fixtures that start the TCP scope emulator.
EMULATOR_FIXTURES = frozenset({"scope_server", "scope"})


def pytest_configure(config: Config) -> None:
    config.addinivalue_line("markers", "uses_mock: Scope replaced by an in-memory double (auto-detected)")
    config.addinivalue_line("markers", "uses_emulator: Scope replaced by the TCP emulator (auto-detected)")
    config.addinivalue_line("markers", "integration: Needs a DS1000Z reachable on the network")


class TransportDoubleFinder(ast.NodeVisitor):
    """Find references to transport doubles or mocked libraries in a test body."""

    DOUBLES = frozenset({"MockTransport", "FailingTransport", "MagicMock", "patch", "_open_transport"})

    def __init__(self) -> None:
        self.found = False

    def visit_Name(self, node: ast.Name) -> None:
        if node.id in self.DOUBLES:
            self.found = True
        self.generic_visit(node)

    def visit_Attribute(self, node: ast.Attribute) -> None:
        if node.attr in self.DOUBLES:
            self.found = True
        self.generic_visit(node)


def _uses_double(item: Item) -> bool:
    obj = getattr(item, "obj", None)
    if obj is None:
        return False
    try:
        tree = ast.parse(textwrap.dedent(inspect.getsource(obj)))
    except (OSError, TypeError, SyntaxError):
        return False
    finder = TransportDoubleFinder()
    finder.visit(tree)
    return finder.found


def pytest_collection_modifyitems(config: Config, items: list[Item]) -> None:
    """Mark each collected test with the kind of scope it runs against."""
    for item in items:
        fixtures = set(getattr(item, "fixturenames", ()))
        if fixtures & EMULATOR_FIXTURES and not item.get_closest_marker("uses_emulator"):
            item.add_marker(pytest.mark.uses_emulator)
        elif not item.get_closest_marker("uses_mock") and _uses_double(item):
            item.add_marker(pytest.mark.uses_mock)


def pytest_report_header(config: Config) -> list[str]:
    lines = ["dslib test suite"]
    if getattr(config.option, "cov_source", None):
        lines.append("Coverage: tests marked uses_mock/uses_emulator never touch a real scope")
    return lines
