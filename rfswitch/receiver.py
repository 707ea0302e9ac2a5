"""Edge-timing decoder for received remote-control codes."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence

from .protocol import (
    MAX_EDGES,
    PROTOCOLS,
    RECV_TOLERANCE,
    SEPARATION_LIMIT,
    Protocol,
)

log = logging.getLogger("rfswitch")

_MASK32 = 0xFFFFFFFF
# Gaps closer than this (in microseconds) are taken as the same inter-frame gap.
_GAP_MATCH_US = 200
# Transmissions with fewer recorded edges than this are treated as noise.
_MIN_EDGES = 8

_TRISTATE_PAIRS = {"00": "0", "11": "1", "01": "F"}


@dataclass(frozen=True)
class Reception:
    """A code recognised from a run of edge timings."""

    value: int
    bit_length: int
    delay: int
    protocol: Optional[Protocol] = None


@dataclass(frozen=True)
class DecodedCode:
    """A received value rendered as binary and, where possible, tri-state text."""

    original_value: int
    binary: str
    tri_state: Optional[str]


def match_protocol(timings: Sequence[int], protocol: Protocol,
                   tolerance: int = RECV_TOLERANCE) -> Optional[Reception]:
    """Decode ``timings`` against ``protocol``; return ``None`` if they do not fit.

    ``timings[0]`` is the gap before the frame, which carries the sync length;
    the data bits follow as high/low pairs.
    """
    edge_count = len(timings)
    if edge_count < _MIN_EDGES:
        return None
    delay = timings[0] // protocol.sync_length_in_pulses()
    slack = delay * tolerance // 100

    def near(measured: int, ticks: int) -> bool:
        return abs(measured - delay * ticks) < slack

    first = 2 if protocol.inverted else 1
    highs = timings[first:edge_count - 1:2]
    lows = timings[first + 1:edge_count:2]
    code = 0
    for high, low in zip(highs, lows):
        code = (code << 1) & _MASK32
        if near(high, protocol.zero.high) and near(low, protocol.zero.low):
            continue
        if near(high, protocol.one.high) and near(low, protocol.one.low):
            code |= 1
            continue
        return None
    return Reception(code, (edge_count - 1) // 2, delay, protocol)


def decode_value(value: int, bit_length: int) -> DecodedCode:
    """Render ``value`` as ``bit_length`` binary digits and as tri-state text.

    The tri-state form is ``None`` when a bit pair is ``10``, which has no
    tri-state symbol. A value wider than ``bit_length`` renders as all zeros.
    """
    value &= _MASK32
    bits = format(value, "b") if value else ""
    if len(bits) > bit_length:
        binary = "0" * bit_length
    else:
        binary = bits.rjust(bit_length, "0")

    symbols = []
    for high, low in zip(binary[0::2], binary[1::2]):
        symbol = _TRISTATE_PAIRS.get(high + low)
        if symbol is None:
            log.error("Invalid data: %s%s", high, low)
            return DecodedCode(value, binary, None)
        symbols.append(symbol)
    log.info("Decode completed")
    return DecodedCode(value, binary, "".join(symbols))


def format_report(decoded: DecodedCode, delay: int) -> str:
    """Return a human-readable report of a received code."""
    tri_state = decoded.tri_state if decoded.tri_state is not None else "(null)"
    return "\n".join([
        "Received data!",
        f"Original value: {decoded.original_value}",
        f"Hexadecimal: 0x{decoded.original_value:x}",
        f"Binary: {decoded.binary}",
        f"Tri-state: {tri_state}",
        f"Pulse length: {delay}",
    ])


class Receiver:
    """Collects edge timings and recognises repeated code frames.

    Feed it the time of every level change on the input line through
    ``handle_edge``. A frame is decoded once two gaps of about the same
    length have framed it.
    """

    def __init__(self, separation_limit: int = SEPARATION_LIMIT,
                 tolerance: int = RECV_TOLERANCE):
        self.separation_limit = separation_limit
        self.tolerance = tolerance
        self.timings = [0] * MAX_EDGES
        self.last = Reception(0, 0, 0)
        self._edge_count = 0
        self._last_time = 0
        self._repeat_count = 0
        log.info("RF receiver initialized")

    def handle_edge(self, timestamp_us: int) -> Optional[Reception]:
        """Record an edge at ``timestamp_us``; return a reception decoded on it."""
        duration = (timestamp_us - self._last_time) & _MASK32
        decoded: Optional[Reception] = None

        if duration > self.separation_limit:
            if self._repeat_count == 0 or abs(duration - self.timings[0]) < _GAP_MATCH_US:
                self._repeat_count += 1
                if self._repeat_count == 2:
                    frame = self.timings[:self._edge_count]
                    for protocol in PROTOCOLS:
                        decoded = match_protocol(frame, protocol, self.tolerance)
                        if decoded is not None:
                            self.last = decoded
                            break
                    self._repeat_count = 0
            self._edge_count = 0

        if self._edge_count >= MAX_EDGES:
            self._edge_count = 0
            self._repeat_count = 0

        self.timings[self._edge_count] = duration
        self._edge_count += 1
        self._last_time = timestamp_us
        return decoded

    def available(self) -> bool:
        """Tell whether a non-zero code is waiting."""
        return self.last.value != 0

    def reset(self) -> None:
        """Discard the waiting code."""
        self.last = replace(self.last, value=0)

    def decode(self) -> DecodedCode:
        """Decode the most recent reception."""
        return decode_value(self.last.value, self.last.bit_length)