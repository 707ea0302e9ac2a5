"""Encode, time and decode 315/433 MHz remote-switch codes, with a simulated loopback command."""

__version__ = "0.1.0"
__all__ = ["protocol", "transmitter", "receiver", "cli"]