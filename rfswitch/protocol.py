"""Timing protocols for fixed-code 315/433 MHz remote-control switches."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_RESOLUTION = 1_000_000
MAX_EDGES = 67
RECV_TOLERANCE = 60
SEPARATION_LIMIT = 4300
PROTO_COUNT = 12

RC_SWITCH_1_PULSE_LEN = 350
COM_PULSE_LEN = 320
FAST_PULSE_LEN = 240
FLASH_PULSE_LEN = 150

RC_SWITCH_REPEAT_COUNT = 10
OPT_REPEAT_COUNT = 5
FAST_REPEAT_COUNT = 4


class RFError(Exception):
    """Raised for invalid arguments or an invalid state of an RF module."""


@dataclass(frozen=True)
class RFTicks:
    """A high/low pair, counted in units of the protocol's pulse length."""

    high: int
    low: int


@dataclass(frozen=True)
class Protocol:
    """Pulse timing of one remote-control protocol."""

    pulse_length: int
    sync_factor: RFTicks
    zero: RFTicks
    one: RFTicks
    inverted: bool = False

    def sync_length_in_pulses(self) -> int:
        """Return the longer half of the sync bit, in pulse-length units."""
        return max(self.sync_factor.high, self.sync_factor.low)


@dataclass(frozen=True)
class Pulse:
    """One output level held for a duration in microseconds."""

    level: int
    pulse_length: int


def _proto(length: int, sync: tuple[int, int], zero: tuple[int, int],
           one: tuple[int, int], inverted: bool) -> Protocol:
    return Protocol(length, RFTicks(*sync), RFTicks(*zero), RFTicks(*one), inverted)


PROTOCOLS: tuple[Protocol, ...] = (
    _proto(FAST_PULSE_LEN, (1, 31), (1, 3), (3, 1), False),  # 1
    _proto(650, (1, 10), (1, 2), (2, 1), False),  # 2
    _proto(100, (30, 71), (4, 11), (9, 6), False),  # 3
    _proto(380, (1, 6), (1, 3), (3, 1), False),  # 4
    _proto(500, (6, 14), (1, 2), (2, 1), False),  # 5
    _proto(450, (23, 1), (1, 2), (2, 1), True),  # 6 (HT6P20B)
    _proto(150, (2, 62), (1, 6), (6, 1), False),  # 7 (HS2303-PT)
    _proto(200, (3, 130), (7, 16), (3, 16), False),  # 8 Conrad RS-200 RX
    _proto(200, (130, 7), (16, 7), (16, 3), True),  # 9 Conrad RS-200 TX
    _proto(365, (18, 1), (3, 1), (1, 3), True),  # 10 (1ByOne Doorbell)
    _proto(270, (36, 1), (1, 2), (2, 1), True),  # 11 (HT12E)
    _proto(320, (36, 1), (1, 2), (2, 1), True),  # 12 (SM5212)
)


def get_protocol(number: int) -> Protocol:
    """Return protocol ``number``, counted from 1."""
    if not 1 <= number <= len(PROTOCOLS):
        raise RFError(f"unknown protocol {number}; expected 1..{len(PROTOCOLS)}")
    return PROTOCOLS[number - 1]