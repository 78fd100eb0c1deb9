"""Global category commands for the DS1000Z series. Prefixed with ``:``.

Each command is equivalent to pressing the matching key on the front panel.
When waveform recording is enabled, or while a recorded waveform is played
back, the run-control commands are ignored by the instrument.
"""

from __future__ import annotations

from dslib.scpi.category import GLOBAL
from dslib.scpi.command import Command

#: ``:AUToscale``. Adjust vertical scale, timebase and trigger mode to the
#: input signal. Disables pass/fail first if it is enabled.
AUTOSCALE: Command[None] = Command(GLOBAL, "AUT", args=())

#: ``:CLEar``. Clear all waveforms on the screen.
CLEAR: Command[None] = Command(GLOBAL, "CLE", args=())

#: ``:RUN``. Start acquisition.
RUN: Command[None] = Command(GLOBAL, "RUN", args=())

#: ``:STOP``. Stop acquisition.
STOP: Command[None] = Command(GLOBAL, "STOP", args=())

#: ``:SINGle``. Trigger once when the trigger conditions are met, then stop.
SINGLE: Command[None] = Command(GLOBAL, "SINGL", args=())

#: ``:TFORce``. Generate a trigger signal. Only applies in the normal and
#: single sweep modes.
FORCE_TRIGGER: Command[None] = Command(GLOBAL, "TFOR", args=())
