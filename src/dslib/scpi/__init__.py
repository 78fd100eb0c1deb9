"""SCPI command model.

Categories compose command paths, commands pair a path with a reply parser
and/or an operation signature, and the ``commands`` subpackage holds the
catalogue of declared instrument commands.
"""

from dslib.scpi.category import GLOBAL, ROOT, Category
from dslib.scpi.command import Command

__all__ = [
    "Category",
    "Command",
    "GLOBAL",
    "ROOT",
]
