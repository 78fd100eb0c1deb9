"""SCPI command descriptors.

A :class:`Command` identifies one instrument command: the category it lives
in, its leaf name, and its capabilities. A command with a ``parser`` can be
queried (``PATH:NAME?``) and its reply is handed to that parser. A command
with ``args`` can be submitted as an operation (``PATH:NAME a0,a1``); an
empty ``args`` tuple declares a zero-argument operation.

Descriptors are module constants built once at import::

    IDN = Command(ROOT, "*IDN", parser=parse_idn)
    RST = Command(ROOT, "*RST", args=())

    IDN.query_string()  # "*IDN?"
    RST.command_string()  # "*RST"
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from dslib.errors import DefinitionError
from dslib.number import format_argument
from dslib.scpi.category import Category, validate_name

T = TypeVar("T")


def _accepts(expected: type, value: object) -> bool:
    """Return True if *value* may fill an argument slot declared as *expected*."""
    if isinstance(value, bool) and expected is not bool:
        return False
    if expected is float and isinstance(value, int):
        return True
    return isinstance(value, expected)


@dataclass(frozen=True)
class Command(Generic[T]):
    """Descriptor for a single SCPI command.

    Attributes:
        category: Category the command is declared in.
        name: Leaf name, in the short form accepted by the instrument.
        parser: Reply parser; its presence gives the command a query form.
        args: Argument types of the operation form, or None if the command
            cannot be submitted.
        block: The query reply is an IEEE 488.2 definite-length block and the
            parser receives the raw payload bytes.

    Raises:
        DefinitionError: On an invalid name or when neither a parser nor an
            argument signature is given.
    """

    category: Category
    name: str
    parser: Callable[[Any], T] | None = None
    args: tuple[type, ...] | None = None
    block: bool = False

    def __post_init__(self) -> None:
        validate_name(self.name)
        if self.parser is None and self.args is None:
            raise DefinitionError(f"Command {self.base!r} declares neither a query nor an operation")
        if self.block and self.parser is None:
            raise DefinitionError(f"Block command {self.base!r} needs a parser")

    @property
    def base(self) -> str:
        """Full command path without query mark or arguments."""
        return self.category.concat(self.name)

    @property
    def has_query(self) -> bool:
        return self.parser is not None

    @property
    def has_operation(self) -> bool:
        return self.args is not None

    def query_string(self) -> str:
        """Return the query form ``<base>?``.

        Raises:
            DefinitionError: If the command has no query form.
        """
        if self.parser is None:
            raise DefinitionError(f"Command {self.base!r} cannot be queried")
        return f"{self.base}?"

    def command_string(self, *args: Any) -> str:
        """Render the operation form with positional arguments.

        A single space separates the base from the first argument and the
        remaining arguments are comma-joined without spaces. Zero-argument
        operations render as the bare base.

        Raises:
            DefinitionError: If the command has no operation form or the
                arguments do not match the declared signature.
        """
        if self.args is None:
            raise DefinitionError(f"Command {self.base!r} cannot be submitted")
        if len(args) != len(self.args):
            raise DefinitionError(
                f"Command {self.base!r} takes {len(self.args)} argument(s), got {len(args)}"
            )
        for index, (expected, value) in enumerate(zip(self.args, args)):
            if not _accepts(expected, value):
                raise DefinitionError(
                    f"Argument {index} of {self.base!r} must be {expected.__name__}, "
                    f"got {type(value).__name__}"
                )
        if not args:
            return self.base
        return f"{self.base} " + ",".join(format_argument(arg) for arg in args)

    def parse(self, response: Any) -> T:
        """Hand one demultiplexed reply field to the command's parser."""
        if self.parser is None:
            raise DefinitionError(f"Command {self.base!r} cannot be queried")
        return self.parser(response)
