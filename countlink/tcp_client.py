"""TCP client task: forwards counter values to a remote host over TCP."""

from __future__ import annotations

import asyncio
import enum
import errno
import logging

from countlink.messages import Message, MessageId
from countlink.protocol import frame, make_counter

logger = logging.getLogger(__name__)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 50000
DEFAULT_RECONNECT_WAIT = 10.0
DEFAULT_QUEUE_WAIT = 180.0
_CONNECT_TIMEOUT = 30.0


class TcpClientState(enum.Enum):
    """States of the TCP client automaton."""

    WAIT_WIFI = enum.auto()
    WAIT_COUNTER = enum.auto()
    WAIT_TIMEOUT = enum.auto()


def _describe_connect_error(exc: BaseException) -> str:
    if isinstance(exc, (asyncio.TimeoutError, TimeoutError)):
        return "Time out on connect."
    if isinstance(exc, ConnectionResetError):
        return "Connection reset by peer."
    if isinstance(exc, ConnectionRefusedError):
        return "Connection refused."
    code = getattr(exc, "errno", None)
    if code in (errno.ENETUNREACH, errno.EHOSTUNREACH):
        return "Remote host unreachable."
    if code == errno.EADDRINUSE:
        return "Address already in use."
    return f"Connection failed: {code}."


class TcpClientTask:
    """Waits for Wi-Fi, connects to the remote host and sends framed counters.

    Connection and send failures close the socket and schedule a retry
    after ``reconnect_wait`` seconds by queueing a TCP_ENDW message.
    """

    def __init__(
        self,
        queue: asyncio.Queue,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        reconnect_wait: float = DEFAULT_RECONNECT_WAIT,
        queue_wait: float = DEFAULT_QUEUE_WAIT,
    ) -> None:
        self.queue = queue
        self.host = host
        self.port = port
        self.reconnect_wait = reconnect_wait
        self.queue_wait = queue_wait
        self.state = TcpClientState.WAIT_WIFI
        self._writer: asyncio.StreamWriter | None = None
        self._timer: asyncio.TimerHandle | None = None

    async def handle(self, message: Message) -> TcpClientState:
        """Apply one message to the automaton and return the new state."""
        state = self.state
        if state is TcpClientState.WAIT_WIFI:
            if message.id is MessageId.WIFI_OK:
                await self._try_to_connect()
            else:
                self._ignore(message)
        elif state is TcpClientState.WAIT_COUNTER:
            if message.id is MessageId.COUNTER:
                await self._try_to_send_counter(message)
            elif message.id is MessageId.WIFI_KO:
                await self._close()
                self.state = TcpClientState.WAIT_WIFI
            else:
                self._ignore(message)
        elif state is TcpClientState.WAIT_TIMEOUT:
            if message.id is MessageId.TCP_ENDW:
                await self._try_to_connect()
            elif message.id is MessageId.WIFI_KO:
                self._stop_timer()
                self.state = TcpClientState.WAIT_WIFI
            else:
                self._ignore(message)
        return self.state

    async def run(self) -> None:
        """Process messages from the queue until cancelled."""
        try:
            while True:
                try:
                    message = await asyncio.wait_for(self.queue.get(), self.queue_wait)
                except asyncio.TimeoutError:
                    logger.info("End of wait on task's queue.")
                    continue
                await self.handle(message)
        finally:
            self._stop_timer()
            if self._writer is not None:
                self._writer.close()
                self._writer = None

    def _ignore(self, message: Message) -> None:
        logger.info(
            "Other message for %s: %s.", self.state.name, message.id.name
        )

    async def _try_to_connect(self) -> None:
        try:
            _, writer = await asyncio.wait_for(
                asyncio.open_connection(self.host, self.port), _CONNECT_TIMEOUT
            )
        except (OSError, asyncio.TimeoutError) as exc:
            logger.warning(_describe_connect_error(exc))
            self._retry_later()
            return
        self._writer = writer
        logger.info("Connected.")
        self.state = TcpClientState.WAIT_COUNTER

    async def _try_to_send_counter(self, message: Message) -> None:
        if message.value is None:
            raise ValueError("counter message carries no value")
        payload = frame(make_counter(message.value))
        writer = self._writer
        try:
            if writer is None or writer.is_closing():
                raise ConnectionResetError("socket is closed")
            writer.write(payload)
            await writer.drain()
        except OSError as exc:
            logger.warning("Protocol message not sent: %s", exc)
            await self._close()
            self._retry_later()
            return
        logger.info("Counter sent to remote host.")

    async def _close(self) -> None:
        writer, self._writer = self._writer, None
        if writer is None:
            return
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass

    def _retry_later(self) -> None:
        self._stop_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.reconnect_wait, self._on_timer)
        self.state = TcpClientState.WAIT_TIMEOUT

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self) -> None:
        self._timer = None
        try:
            self.queue.put_nowait(Message(MessageId.TCP_ENDW))
        except asyncio.QueueFull:
            logger.warning("Can't write message to queue for timeout.")