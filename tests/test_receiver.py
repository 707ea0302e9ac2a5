from itertools import accumulate

import pytest

from rfswitch.protocol import MAX_EDGES, get_protocol
from rfswitch.receiver import (
    DecodedCode,
    Receiver,
    decode_value,
    format_report,
    match_protocol,
)
from rfswitch.transmitter import translate_tristate


def frame_timings(code, protocol):
    pulses = translate_tristate(code, protocol)
    durations = [p.pulse_length for p in pulses]
    return [durations[-1]] + durations[:-1]


def edge_times(code, protocol, reps, start=10_000):
    durations = [p.pulse_length for p in translate_tristate(code, protocol)]
    return list(accumulate([start] + durations * reps))


@pytest.mark.parametrize("code", ["FFFFFFFF0001", "0F1F", "1111", "F0F0F0F0"])
def test_match_protocol_round_trip(code):
    protocol = get_protocol(1)
    reception = match_protocol(frame_timings(code, protocol), protocol, 60)
    assert reception is not None
    assert reception.delay == protocol.pulse_length
    assert reception.bit_length == 2 * len(code)
    assert reception.protocol == protocol
    assert decode_value(reception.value, reception.bit_length).tri_state == code


def test_match_protocol_rejects_short_frames():
    protocol = get_protocol(1)
    timings = frame_timings("F", protocol)
    assert len(timings) < 8
    assert match_protocol(timings, protocol, 60) is None


def test_match_protocol_rejects_other_protocol():
    timings = frame_timings("FFFF0001", get_protocol(2))
    assert match_protocol(timings, get_protocol(1), 60) is None
    assert match_protocol(timings, get_protocol(2), 60) is not None


def test_match_protocol_zero_tolerance_fails():
    protocol = get_protocol(1)
    assert match_protocol(frame_timings("FFFF", protocol), protocol, 0) is None


@pytest.mark.parametrize("bits", ["0101", "0011", "11110000", "000001", "1"])
def test_decode_value_binary_round_trip(bits):
    decoded = decode_value(int(bits, 2), len(bits))
    assert decoded.binary == bits
    assert decoded.original_value == int(bits, 2)


def test_decode_value_tristate():
    assert decode_value(0b0101, 4).tri_state == "FF"


def test_decode_value_invalid_pair():
    decoded = decode_value(0b10, 2)
    assert decoded.binary == "10"
    assert decoded.tri_state is None


def test_decode_value_too_wide_renders_zeros():
    assert decode_value(0b111, 2).binary == "00"


def test_format_report_lines():
    report = format_report(DecodedCode(255, "11111111", "1111"), 240)
    lines = report.splitlines()
    assert lines[0] == "Received data!"
    assert "Original value: 255" in lines
    assert "Hexadecimal: 0xff" in lines
    assert "Binary: 11111111" in lines
    assert "Tri-state: 1111" in lines
    assert "Pulse length: 240" in lines


def test_format_report_without_tristate():
    report = format_report(DecodedCode(2, "10", None), 100)
    assert "Tri-state: (null)" in report.splitlines()


def test_receiver_initially_empty():
    receiver = Receiver()
    assert receiver.available() is False
    assert receiver.decode().binary == ""


def test_receiver_decodes_after_three_repetitions():
    protocol = get_protocol(1)
    receiver = Receiver()
    results = [receiver.handle_edge(t) for t in edge_times("FFFFFFFF0001", protocol, 3)]
    hits = [r for r in results if r is not None]
    assert len(hits) == 1
    assert receiver.available()
    assert receiver.last.delay == protocol.pulse_length
    assert receiver.decode().tri_state == "FFFFFFFF0001"


def test_receiver_reset_clears_value():
    receiver = Receiver()
    for t in edge_times("FF00", get_protocol(1), 4):
        receiver.handle_edge(t)
    assert receiver.available()
    receiver.reset()
    assert receiver.available() is False
    assert receiver.last.value == 0


def test_receiver_high_separation_limit_never_sees_gaps():
    receiver = Receiver(separation_limit=1_000_000)
    for t in edge_times("FFFF0001", get_protocol(1), 5):
        receiver.handle_edge(t)
    assert receiver.available() is False


def test_receiver_too_many_edges_restarts():
    receiver = Receiver()
    times = list(accumulate([10_000] + [300] * (MAX_EDGES + 5)))
    for t in times:
        assert receiver.handle_edge(t) is None
    assert receiver.available() is False