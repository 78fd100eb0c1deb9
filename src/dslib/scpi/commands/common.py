"""IEEE 488.2 common commands.

These live directly under the root category, so they are sent without a
leading colon.
"""

from __future__ import annotations

from dslib.scpi.category import ROOT
from dslib.scpi.command import Command
from dslib.scpi.parsers import Identity, parse_idn, parse_opc

#: Query the instrument identity.
IDN: Command[Identity] = Command(ROOT, "*IDN", parser=parse_idn)

#: Restore the instrument to its default state.
RST: Command[None] = Command(ROOT, "*RST", args=())

#: Query (or set) the operation complete bit. Replies 1 once all pending
#: operations have finished.
OPC: Command[bool] = Command(ROOT, "*OPC", parser=parse_opc, args=())

#: Clear the event registers and the error queue.
CLS: Command[None] = Command(ROOT, "*CLS", args=())
