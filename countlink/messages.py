"""Messages exchanged between the tasks through their queues."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class MessageId(enum.IntEnum):
    """Identifiers of inter-task messages."""

    GOT_IP = 0  # internal to the Wi-Fi station task
    WIFI_DISCONN = 1  # internal to the Wi-Fi station task
    WIFI_ENDW = 2  # internal to the Wi-Fi station task
    WIFI_OK = 3
    WIFI_KO = 4
    COUNTER = 5
    TCP_ENDW = 6  # internal to the TCP client task


@dataclass(frozen=True)
class Message:
    """A message: an identifier and, for counter messages, an 8-bit value."""

    id: MessageId
    value: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.id, MessageId):
            object.__setattr__(self, "id", MessageId(self.id))
        if self.value is not None and not 0 <= self.value <= 0xFF:
            raise ValueError(f"message value out of range 0..255: {self.value}")