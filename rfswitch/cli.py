"""Command that sends tri-state codes through a simulated loopback link."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from .protocol import RC_SWITCH_REPEAT_COUNT, RFError, get_protocol
from .receiver import Reception, Receiver, decode_value, format_report
from .transmitter import Transmitter

log = logging.getLogger("rfswitch")

DEVICE_CODE = "FFFFFFFF"
CHANNELS = ("0001", "0010", "0100", "1000")
# Quiet time on the line before the first transmission starts.
_IDLE_US = 10_000


def _transmit_edges(code: str, protocol_number: int, repeat_count: int) -> list[int]:
    """Return the times of every level change produced by sending ``code``."""
    now = 0
    changes: dict[int, int] = {}

    def set_level(level: int) -> None:
        changes[now] = level

    with Transmitter(set_level, repeat_count, get_protocol(protocol_number)) as tx:
        tx.load(code)
        now = _IDLE_US
        base = now
        alarm = tx.send()
        while alarm is not None:
            now = base + alarm
            rep = tx.current_rep
            next_alarm = tx.on_alarm(alarm)
            if tx.current_rep != rep:
                base = now  # the timer count restarts with each repetition
            alarm = next_alarm

    edges = []
    level = 0
    for timestamp, new_level in changes.items():
        if new_level != level:
            edges.append(timestamp)
            level = new_level
    return edges


def simulate(code: str, protocol_number: int = 1,
             repeat_count: int = RC_SWITCH_REPEAT_COUNT) -> Optional[Reception]:
    """Send ``code`` into a receiver on the same line; return what it recognised."""
    receiver = Receiver()
    for timestamp in _transmit_edges(code, protocol_number, repeat_count):
        receiver.handle_edge(timestamp)
    return receiver.last if receiver.available() else None


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Transmit each code and print what the receiver decoded."""
    parser = argparse.ArgumentParser(
        prog="rfswitch",
        description="Send tri-state codes over a simulated RF link and decode them.",
    )
    parser.add_argument("codes", nargs="*",
                        default=[DEVICE_CODE + channel for channel in CHANNELS],
                        help="tri-state codes of 0, 1 and F")
    parser.add_argument("-p", "--protocol", type=int, default=1,
                        help="protocol number, 1 to 12 (default: 1)")
    parser.add_argument("-r", "--repeat", type=int, default=RC_SWITCH_REPEAT_COUNT,
                        help="number of repetitions per code")
    args = parser.parse_args(argv)

    status = 0
    for code in args.codes:
        print(f"Transmitting {code}")
        try:
            reception = simulate(code, args.protocol, args.repeat)
        except RFError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 2
        if reception is None:
            print("No code received")
            status = 1
            continue
        decoded = decode_value(reception.value, reception.bit_length)
        print(format_report(decoded, reception.delay))
    return status


if __name__ == "__main__":
    sys.exit(main())