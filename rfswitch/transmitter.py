"""Pulse-train generation and timer-driven transmission of tri-state codes."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from .protocol import Protocol, Pulse, RFError

log = logging.getLogger("rfswitch")


def translate_tristate(data: str, protocol: Protocol) -> list[Pulse]:
    """Translate a tri-state code of '0', '1' and 'F' into pulses, sync bit last."""
    first = 0 if protocol.inverted else 1
    second = 1 - first
    unit = protocol.pulse_length

    def pair(ticks) -> list[Pulse]:
        return [Pulse(first, ticks.high * unit), Pulse(second, ticks.low * unit)]

    symbols = {
        "0": (protocol.zero, protocol.zero),
        "1": (protocol.one, protocol.one),
        "F": (protocol.zero, protocol.one),
    }
    pulses: list[Pulse] = []
    for char in data:
        try:
            a, b = symbols[char]
        except KeyError:
            raise RFError(f"invalid tri-state symbol: {char!r}") from None
        pulses += pair(a) + pair(b)
    pulses += pair(protocol.sync_factor)
    log.info("Data %s translated to %d pulses", data, len(pulses))
    return pulses


class Transmitter:
    """Drives an output line through a pulse train, repeated a number of times.

    ``set_level`` receives each new output level. Timing is driven by
    ``on_alarm``, which stands for a one-microsecond timer alarm: it takes the
    timer count at which the alarm fired and returns the next alarm count, or
    ``None`` once the transmission is over.
    """

    def __init__(self, set_level: Callable[[int], None], repeat_count: int,
                 protocol: Protocol, on_complete: Optional[Callable[[], None]] = None):
        if protocol is None:
            raise RFError("a protocol is required")
        self.set_level = set_level
        self.repeat_count = repeat_count
        self.protocol = protocol
        self.on_complete = on_complete
        self.pulses: list[Pulse] = []
        self.pulse_index = 0
        self.current_rep = 0
        self.active = False
        self._open = True
        self.set_level(0)

    def __enter__(self) -> "Transmitter":
        return self

    def __exit__(self, *exc) -> None:
        if self._open:
            self.close()

    def _require_open(self) -> None:
        if not self._open:
            raise RFError("RF module is closed")

    def load(self, data: str) -> list[Pulse]:
        """Prepare the pulse train for a tri-state code and return it."""
        self.pulses = []
        self.pulses = translate_tristate(data, self.protocol)
        return self.pulses

    def send(self) -> int:
        """Start a transmission; return the timer count of the first alarm."""
        self._require_open()
        if not self.pulses:
            raise RFError("no RF data loaded")
        if self.active:
            raise RFError("RF transmitter is already active")
        log.info("Starting RF transmission")
        self.active = True
        self.current_rep = 0
        self.pulse_index = 0
        first = self.pulses[0]
        self.set_level(first.level)
        self.pulse_index = 1
        return first.pulse_length

    def on_alarm(self, alarm_value: int) -> Optional[int]:
        """Advance the transmission at a timer alarm; return the next alarm count."""
        if not self.active:
            return None
        if self.pulse_index < len(self.pulses):
            pulse = self.pulses[self.pulse_index]
            self.set_level(pulse.level)
            self.pulse_index += 1
            return alarm_value + pulse.pulse_length
        # End of one repetition: the timer count restarts from zero.
        self.set_level(0)
        self.pulse_index = 0
        self.current_rep += 1
        if self.current_rep < self.repeat_count:
            self.set_level(1)
            next_alarm = self.pulses[0].pulse_length
            self.pulse_index = 1
            return next_alarm
        self.active = False
        self.current_rep = 0
        if self.on_complete is not None:
            self.on_complete()
        return None

    def run(self) -> int:
        """Send the loaded code to completion; return the total time in microseconds."""
        alarm = self.send()
        elapsed = 0
        while True:
            rep = self.current_rep
            next_alarm = self.on_alarm(alarm)
            if next_alarm is None or self.current_rep != rep:
                elapsed += alarm
            if next_alarm is None:
                return elapsed
            alarm = next_alarm

    def reset(self) -> None:
        """Abort any transmission and drive the output low."""
        self.pulse_index = 0
        self.current_rep = 0
        self.active = False
        self.set_level(0)
        log.info("Timer reset")

    def close(self) -> None:
        """Release the module; it cannot send afterwards."""
        self._require_open()
        self.pulses = []
        self.pulse_index = 0
        self.current_rep = 0
        self.repeat_count = 0
        self.active = False
        self.set_level(0)
        self._open = False
        log.info("RF module deinitialized")