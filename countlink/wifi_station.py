"""Wi-Fi station task: tracks link availability and tells the TCP client."""

from __future__ import annotations

import abc
import asyncio
import enum
import logging
from typing import Callable

from countlink.messages import Message, MessageId

logger = logging.getLogger(__name__)

DEFAULT_RECONNECT_WAIT = 10.0
DEFAULT_QUEUE_WAIT = 180.0
QUEUE_SIZE = 3


class WifiEvent(enum.Enum):
    """Events reported by a station driver."""

    SCAN_DONE = enum.auto()
    CONNECTED = enum.auto()
    DISCONNECTED = enum.auto()
    AUTHMODE_CHANGE = enum.auto()
    GOT_IP = enum.auto()
    DHCP_TIMEOUT = enum.auto()
    SOFTAP_STACONNECTED = enum.auto()
    SOFTAP_STADISCONNECTED = enum.auto()
    SOFTAP_PROBEREQRECVED = enum.auto()


_SOFTAP_EVENTS = frozenset(
    {
        WifiEvent.SOFTAP_STACONNECTED,
        WifiEvent.SOFTAP_STADISCONNECTED,
        WifiEvent.SOFTAP_PROBEREQRECVED,
    }
)

_EVENT_TEXT = {
    WifiEvent.SCAN_DONE: "Scan done.",
    WifiEvent.CONNECTED: "Connected.",
    WifiEvent.DISCONNECTED: "Disconnected.",
    WifiEvent.AUTHMODE_CHANGE: "AuthMode change.",
    WifiEvent.GOT_IP: "Got IP.",
    WifiEvent.DHCP_TIMEOUT: "DHCP timeout.",
}


class StationDriver(abc.ABC):
    """Access to the network link of a station.

    Methods raise an exception when the request cannot be carried out;
    the station task treats that as fatal.
    """

    @abc.abstractmethod
    def connect(self) -> None:
        """Request a connection to the access point."""

    @abc.abstractmethod
    def disconnect(self) -> None:
        """Drop the connection and stop automatic reconnection."""

    @abc.abstractmethod
    def set_event_handler(self, handler: Callable[[WifiEvent], None]) -> None:
        """Install the callable that receives link events."""


class WifiState(enum.Enum):
    """States of the Wi-Fi station automaton."""

    WAIT_CONNECT = enum.auto()
    WAIT_DISCONN = enum.auto()
    WAIT_TIMEOUT = enum.auto()


class WifiStationTask:
    """Connects the station and reports WIFI_OK / WIFI_KO to the TCP client.

    Link events are turned into messages on the task's own queue; after a
    disconnection the task waits ``reconnect_wait`` seconds before asking
    the driver to connect again.
    """

    def __init__(
        self,
        client_queue: asyncio.Queue,
        driver: StationDriver,
        reconnect_wait: float = DEFAULT_RECONNECT_WAIT,
        queue_wait: float = DEFAULT_QUEUE_WAIT,
    ) -> None:
        self.client_queue = client_queue
        self.driver = driver
        self.reconnect_wait = reconnect_wait
        self.queue_wait = queue_wait
        self.queue: asyncio.Queue = asyncio.Queue(maxsize=QUEUE_SIZE)
        self.state = WifiState.WAIT_CONNECT
        self._timer: asyncio.TimerHandle | None = None

    def on_event(self, event: WifiEvent) -> None:
        """Receive a link event from the driver."""
        if event in _SOFTAP_EVENTS:
            logger.warning("Inconsistent event: %s", event.name)
            return
        text = _EVENT_TEXT.get(event)
        if text is None:
            logger.warning("Unknown event: %s", event)
            return
        logger.info(text)
        if event is WifiEvent.DISCONNECTED:
            self._post_own(MessageId.WIFI_DISCONN, "event")
        elif event is WifiEvent.GOT_IP:
            self._post_own(MessageId.GOT_IP, "event")

    def handle(self, message: Message) -> WifiState:
        """Apply one message to the automaton and return the new state."""
        state = self.state
        if state is WifiState.WAIT_CONNECT:
            if message.id is MessageId.GOT_IP:
                self._tell_client(MessageId.WIFI_OK)
                self.state = WifiState.WAIT_DISCONN
            elif message.id is MessageId.WIFI_DISCONN:
                self._back_off()
            else:
                self._ignore(message)
        elif state is WifiState.WAIT_DISCONN:
            if message.id is MessageId.WIFI_DISCONN:
                self._tell_client(MessageId.WIFI_KO)
                self._back_off()
            else:
                self._ignore(message)
        elif state is WifiState.WAIT_TIMEOUT:
            if message.id is MessageId.WIFI_ENDW:
                self.driver.connect()
                self.state = WifiState.WAIT_CONNECT
            else:
                self._ignore(message)
        return self.state

    def start(self) -> None:
        """Install the event handler and request the first connection."""
        self.driver.set_event_handler(self.on_event)
        self.driver.connect()

    async def run(self) -> None:
        """Start the station, then process messages until cancelled."""
        try:
            self.start()
            while True:
                try:
                    message = await asyncio.wait_for(self.queue.get(), self.queue_wait)
                except asyncio.TimeoutError:
                    logger.info("End of wait on task's queue.")
                    continue
                self.handle(message)
        finally:
            self._stop_timer()

    def _ignore(self, message: Message) -> None:
        logger.info("Other message for %s: %s.", self.state.name, message.id.name)

    def _tell_client(self, message_id: MessageId) -> None:
        try:
            self.client_queue.put_nowait(Message(message_id))
        except asyncio.QueueFull:
            logger.warning("Can't write message to queue.")

    def _post_own(self, message_id: MessageId, reason: str) -> None:
        try:
            self.queue.put_nowait(Message(message_id))
        except asyncio.QueueFull:
            logger.warning("Can't write message to queue for %s.", reason)

    def _back_off(self) -> None:
        self.driver.disconnect()
        self._stop_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(self.reconnect_wait, self._on_timer)
        self.state = WifiState.WAIT_TIMEOUT

    def _stop_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self) -> None:
        self._timer = None
        self._post_own(MessageId.WIFI_ENDW, "timeout")