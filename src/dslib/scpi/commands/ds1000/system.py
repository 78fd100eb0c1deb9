"""``:SYSTem`` subsystem commands for the DS1000Z series."""

from __future__ import annotations

from dslib.errors import ScpiInstrumentError
from dslib.scpi.category import GLOBAL
from dslib.scpi.command import Command
from dslib.scpi.parsers import parse_error

SYSTEM = GLOBAL.child("SYST")

#: ``:SYSTem:ERRor[:NEXT]?``. Pop the oldest entry of the error queue;
#: ``0,"No error"`` once the queue is empty.
ERROR: Command[ScpiInstrumentError | None] = Command(SYSTEM, "ERR", parser=parse_error)
