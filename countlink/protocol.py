"""Application protocol messages and their two-byte length framing.

A framed message is sent as the low byte of its length, the high byte
of its length, then the message itself.
"""

from __future__ import annotations

import enum

COUNTER_MESSAGE_LENGTH = 2


class ProtocolMessageType(enum.IntEnum):
    """Types of protocol message."""

    COUNTER = 1


def make_counter(counter: int, buffer_length: int = COUNTER_MESSAGE_LENGTH) -> bytes:
    """Build a COUNTER message for an 8-bit counter value.

    Raises ValueError when ``buffer_length`` cannot hold the message or
    the counter does not fit in a byte.
    """
    if buffer_length < COUNTER_MESSAGE_LENGTH:
        raise ValueError(
            f"buffer of {buffer_length} bytes cannot hold a COUNTER message"
        )
    if not 0 <= counter <= 0xFF:
        raise ValueError(f"counter out of range 0..255: {counter}")
    return bytes((ProtocolMessageType.COUNTER, counter))


def _check_length(length: int) -> None:
    if not 0 <= length <= 0xFFFF:
        raise ValueError(f"message length out of range 0..65535: {length}")


def frame1(length: int) -> int:
    """Return the first frame byte (length low byte) for a message length."""
    _check_length(length)
    return length & 0xFF


def frame2(length: int) -> int:
    """Return the second frame byte (length high byte) for a message length."""
    _check_length(length)
    return (length >> 8) & 0xFF


def frame(message: bytes) -> bytes:
    """Return the message preceded by its two frame bytes."""
    length = len(message)
    return bytes((frame1(length), frame2(length))) + bytes(message)