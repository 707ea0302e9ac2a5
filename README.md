# rfswitch

`rfswitch` works with the fixed codes that common 315/433 MHz remote-control
sockets and doorbells send. It includes a table of twelve pulse protocols.
Everything works on plain numbers and callbacks, so no hardware is needed.

## Installation

```
pip install .
```

To include the test dependencies:

```
pip install ".[test]"
```

## Modules

- `rfswitch.protocol` holds the protocol table and the shared types.
  `get_protocol(number)` returns protocol 1 to 12. It raises `RFError` for any
  other number. A `Protocol` has a `pulse_length` in microseconds, three
  `RFTicks` pairs (`sync_factor`, `zero` and `one`) and an `inverted` flag.
  `Pulse` is one output level held for a duration.
- `rfswitch.transmitter` holds `translate_tristate(data, protocol)`. It turns
  a code made of `0`, `1` and `F` into a list of `Pulse`s. Each symbol becomes
  four pulses and a sync pair comes last. Any other character raises
  `RFError`. `Transmitter` steps through a loaded pulse train and repeats it
  `repeat_count` times. It calls your `set_level` function for each level
  change:
  - `send()` starts a transmission and returns the first alarm count.
  - `on_alarm(alarm_value)` advances the transmission and returns the next
    alarm count. It returns `None` when the transmission is over and
    `on_complete` has been called.
  - `run()` drives a whole transmission and returns its total time in
    microseconds.
  - `reset()` aborts the transmission.
  - `close()` (or leaving a `with` block) releases the transmitter.
- `rfswitch.receiver` holds `Receiver`. Pass the microsecond timestamp of
  every level change to `handle_edge`. The receiver decodes a frame once two
  gaps of about the same length enclose it, trying each protocol in turn with
  `match_protocol`. Use `available()`, `decode()` and `reset()` to read the
  latest code. `decode_value(value, bit_length)` returns a `DecodedCode` with
  the binary and tri-state text. The tri-state text is `None` when a bit pair
  is `10`. `format_report` turns a `DecodedCode` into a printable report.
- `rfswitch.cli` holds `simulate(code, protocol_number, repeat_count)`. It
  sends a code through a `Transmitter` and feeds the resulting edges into a
  `Receiver` on the same simulated line. It returns the `Reception`, or `None`
  when nothing was recognised.

## Library use

```python
from rfswitch.protocol import get_protocol
from rfswitch.transmitter import translate_tristate, Transmitter
from rfswitch.receiver import decode_value
from rfswitch.cli import simulate

proto = get_protocol(1)
pulses = translate_tristate("FFFFFFFF0001", proto)

levels = []
with Transmitter(levels.append, 10, proto) as tx:
    tx.load("FFFFFFFF0001")
    total_us = tx.run()

reception = simulate("FFFFFFFF0001", protocol_number=1, repeat_count=10)
if reception is not None:
    decoded = decode_value(reception.value, reception.bit_length)
    print(decoded.binary, decoded.tri_state, reception.delay)
```

## Command line

```
rfswitch [-p PROTOCOL] [-r REPEAT] [CODE ...]
```

For each code, the command prints `Transmitting <code>` and then the
receiver's report. The report gives the original value, hexadecimal, binary,
tri-state and pulse length. If you give no codes, it sends `FFFFFFFF0001`,
`FFFFFFFF0010`, `FFFFFFFF0100` and `FFFFFFFF1000`. `-p` selects the protocol
(default 1). `-r` sets the number of repetitions (default 10).

Exit status:

- 0 when every code was received;
- 1 when a code was not recognised;
- 2 when a code or protocol was invalid.

## What it does not do

`rfswitch` does not drive a radio module, GPIO pins or hardware timers. The
command works only on a simulated loopback line. To use real hardware, connect
`set_level` and `on_alarm` to your own output pin and timer. Then call
`Receiver.handle_edge` from your own input-edge handler.

## Tests

```
pytest
```