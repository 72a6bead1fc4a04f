import asyncio
import contextlib

import pytest

from countlink.app import HostStation, main, run
from countlink.wifi_station import WifiEvent


def test_host_station_reports_connected_then_got_ip():
    station = HostStation()
    events = []
    station.set_event_handler(events.append)
    station.connect()
    assert events == [WifiEvent.CONNECTED, WifiEvent.GOT_IP]
    assert station.connected is True


def test_host_station_disconnect_clears_flag():
    station = HostStation()
    station.set_event_handler(lambda event: None)
    station.connect()
    station.disconnect()
    assert station.connected is False


def test_host_station_connect_without_handler_fails():
    with pytest.raises(RuntimeError):
        HostStation().connect()


@pytest.mark.parametrize(
    "argv",
    [["--port", "abc"], ["--port", "0"], ["--port", "70000"], ["--period", "0"]],
)
def test_main_rejects_bad_arguments(argv):
    with pytest.raises(SystemExit) as info:
        main(argv)
    assert info.value.code == 2


@pytest.mark.asyncio
async def test_run_sends_consecutive_framed_counters():
    frames = asyncio.Queue()

    async def on_client(reader, writer):
        for _ in range(2):
            await frames.put(await reader.readexactly(4))
        writer.close()

    server = await asyncio.start_server(on_client, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    runner = asyncio.create_task(run("127.0.0.1", port, 0.05))
    try:
        first = await asyncio.wait_for(frames.get(), 5)
        second = await asyncio.wait_for(frames.get(), 5)
        still_running = not runner.done()
    finally:
        runner.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await runner
        server.close()
        await server.wait_closed()
    assert still_running is True
    assert first[:3] == b"\x02\x00\x01"
    assert second[:3] == b"\x02\x00\x01"
    assert second[3] == (first[3] + 1) & 0xFF