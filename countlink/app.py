"""Wiring of the station, TCP client and counter tasks, and the command line."""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Callable

from countlink.counter import DEFAULT_PERIOD, CounterTask
from countlink.tcp_client import DEFAULT_HOST, DEFAULT_PORT, TcpClientTask
from countlink.wifi_station import StationDriver, WifiEvent, WifiStationTask

logger = logging.getLogger(__name__)

VERSION_BANNER = "TCPClient - V0.5"
CLIENT_QUEUE_SIZE = 3


class HostStation(StationDriver):
    """Station driver for a host whose network link is already up.

    Connecting reports CONNECTED then GOT_IP straight away.
    """

    def __init__(self) -> None:
        self.connected = False
        self._handler: Callable[[WifiEvent], None] | None = None

    def connect(self) -> None:
        if self._handler is None:
            raise RuntimeError("no event handler installed")
        self.connected = True
        self._handler(WifiEvent.CONNECTED)
        self._handler(WifiEvent.GOT_IP)

    def disconnect(self) -> None:
        self.connected = False

    def set_event_handler(self, handler: Callable[[WifiEvent], None]) -> None:
        self._handler = handler


async def run(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    period: float = DEFAULT_PERIOD,
) -> None:
    """Run the three tasks against ``host``:``port`` until cancelled."""
    logger.info(VERSION_BANNER)
    client_queue: asyncio.Queue = asyncio.Queue(maxsize=CLIENT_QUEUE_SIZE)
    station = WifiStationTask(client_queue, HostStation())
    client = TcpClientTask(client_queue, host, port)
    counter = CounterTask(client_queue, period)
    await asyncio.gather(station.run(), client.run(), counter.run())


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="countlink",
        description="Send a periodic wrapping counter to a TCP server.",
    )
    parser.add_argument("--host", default=DEFAULT_HOST, help="remote host")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="remote port")
    parser.add_argument(
        "--period", type=float, default=DEFAULT_PERIOD,
        help="seconds between counter messages",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="log warnings only")
    args = parser.parse_args(argv)
    if not 0 < args.port <= 0xFFFF:
        parser.error(f"port out of range: {args.port}")
    if args.period <= 0:
        parser.error(f"period must be positive: {args.period}")
    return args


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point."""
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(name)s: %(message)s",
    )
    try:
        asyncio.run(run(args.host, args.port, args.period))
    except KeyboardInterrupt:
        return 0
    return 0