"""Hierarchical SCPI command categories.

A category is a namespace node contributing one colon-separated segment to
the path of every command declared under it. Categories are immutable and
are declared once at import time as module constants::

    DISPLAY = GLOBAL.child("DISP")
    DISPLAY.concat("CLE")  # ":DISP:CLE"

:data:`ROOT` concatenates to the bare name (used by the ``*``-prefixed
IEEE 488.2 common commands). :data:`GLOBAL` is the empty-named child of the
root, so its commands carry a leading ``:``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from dslib.errors import DefinitionError

# Separators, query marks, whitespace and control characters cannot appear in a segment.
_INVALID_NAME_RE = re.compile(r"[:?;,\s\x00-\x1f\x7f]")


def validate_name(name: str, *, allow_empty: bool = False) -> str:
    """Check that *name* can be used as a single path segment.

    Args:
        name: The segment to validate.
        allow_empty: Accept the empty string (only meaningful for categories).

    Returns:
        The name unchanged.

    Raises:
        DefinitionError: If the name is empty or contains a forbidden character.
    """
    if not name and not allow_empty:
        raise DefinitionError("Name must be non-empty")
    if _INVALID_NAME_RE.search(name):
        raise DefinitionError(f"Invalid SCPI name: {name!r}")
    return name


@dataclass(frozen=True)
class Category:
    """Immutable SCPI command namespace.

    Attributes:
        path: Composed path of this category (empty for the root and the
            global category).
        is_root: Whether this is the root category, which joins without a
            separator.
    """

    path: str = ""
    is_root: bool = False

    def __post_init__(self) -> None:
        if self.is_root and self.path:
            raise DefinitionError(f"Root category must have an empty path, got {self.path!r}")
        if not self.path:
            return
        # Only the segment below GLOBAL may be empty, giving the leading colon.
        first, *rest = self.path.split(":")
        validate_name(first, allow_empty=True)
        for segment in rest:
            validate_name(segment)

    def concat(self, name: str) -> str:
        """Return the path of *name* nested under this category."""
        if self.is_root:
            return name
        return f"{self.path}:{name}"

    def child(self, name: str) -> Category:
        """Declare a child category.

        Only the root accepts an empty name; that child is :data:`GLOBAL`.

        Raises:
            DefinitionError: If *name* is not a valid path segment.
        """
        return Category(self.concat(validate_name(name, allow_empty=self.is_root)))


ROOT = Category(is_root=True)
GLOBAL = ROOT.child("")
