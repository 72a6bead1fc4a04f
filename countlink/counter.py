"""Task that periodically sends a wrapping 8-bit counter to the TCP client."""

from __future__ import annotations

import asyncio
import logging

from countlink.messages import Message, MessageId

logger = logging.getLogger(__name__)

DEFAULT_PERIOD = 30.0


class CounterTask:
    """Sends a COUNTER message with a wrapping counter every ``period`` seconds."""

    def __init__(self, queue: asyncio.Queue, period: float = DEFAULT_PERIOD) -> None:
        self.queue = queue
        self.period = period
        self.value = 0

    def tick(self) -> int:
        """Queue the current counter value, advance the counter and return the sent value.

        A full queue loses the message but the counter still advances.
        """
        sent = self.value
        try:
            self.queue.put_nowait(Message(MessageId.COUNTER, sent))
        except asyncio.QueueFull:
            logger.warning("Can't write message to queue.")
        logger.info("Message sent to TCP client task: %d.", sent)
        self.value = (sent + 1) & 0xFF
        return sent

    async def run(self) -> None:
        """Tick once per period, forever."""
        while True:
            await asyncio.sleep(self.period)
            self.tick()