"""``:DISPlay`` subsystem commands for the DS1000Z series."""

from __future__ import annotations

from dslib.scpi.category import GLOBAL
from dslib.scpi.command import Command
from dslib.scpi.parsers import parse_passthrough

DISPLAY = GLOBAL.child("DISP")

#: ``:DISPlay:CLEar``. Clear all waveforms on the screen. In the RUN state
#: new waveforms keep being drawn.
CLEAR: Command[None] = Command(DISPLAY, "CLE", args=())

#: ``:DISPlay:DATA?``. Read the image currently displayed on the screen. The
#: reply is a definite-length block holding a BMP24 bitmap by default.
DATA: Command[bytes] = Command(DISPLAY, "DATA", parser=parse_passthrough, block=True)
