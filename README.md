# countlink

`countlink` runs three cooperating asyncio tasks that keep a remote TCP
server informed of a wrapping counter:

- a **Wi-Fi station task** (`countlink.wifi_station.WifiStationTask`). It
  installs its event handler on a station driver
  (`countlink.wifi_station.StationDriver`) and asks it to connect. It turns
  `WifiEvent.GOT_IP` and `WifiEvent.DISCONNECTED` events into messages on its
  own queue. It tells the TCP client when the link is up (`MessageId.WIFI_OK`)
  or lost (`MessageId.WIFI_KO`). After a disconnection it calls
  `driver.disconnect()`, waits `reconnect_wait` seconds (10 by default) and
  then calls `driver.connect()` again.
- a **TCP client task** (`countlink.tcp_client.TcpClientTask`). Once it gets
  `WIFI_OK`, it connects to the remote host (127.0.0.1:50000 by default). It
  sends every counter it receives as a framed COUNTER message. When
  connecting or sending fails, it closes the connection and tries again after
  `reconnect_wait` seconds (10 by default). On `WIFI_KO` it closes the
  connection and waits for the link to come back.
- a **counter task** (`countlink.counter.CounterTask`). Every `period`
  seconds (30 by default) it queues a `MessageId.COUNTER` message carrying a
  counter that runs 0, 1, …, 255, 0, … If the queue is full, that message is
  lost, but the counter still advances.

The tasks talk through `asyncio.Queue`s of `countlink.messages.Message`
values. A message holds a `MessageId` and, for counter messages, a value in
the range 0..255.

## Wire format

Each counter goes out as a frame with two parts:

1. the message length, as two bytes, least significant first;
2. the message itself.

A COUNTER message is two bytes: the message type
(`ProtocolMessageType.COUNTER`, value 1), then the counter value. A counter
of 7 is therefore sent as:

```
02 00 01 07
```

The helpers live in `countlink.protocol`:

```python
from countlink.protocol import make_counter, frame, frame1, frame2

message = make_counter(7, 2)      # b"\x01\x07"
frame1(len(message))              # 2
frame2(len(message))              # 0
frame(message)                    # b"\x02\x00\x01\x07"
```

These helpers raise `ValueError` in three cases:

- `make_counter` gets a buffer length too short for a COUNTER message;
- `make_counter` gets a counter outside 0..255;
- `frame1` or `frame2` gets a length outside 0..65535.

## Running it

1. Install the package.
2. Start a server listening on TCP port 50000 of the local host.
3. Run:

```
countlink
```

The command treats the network as always available
(`countlink.app.HostStation`), so the TCP client connects straight away. A
counter is then sent every 30 seconds.

Trace lines are written through `logging` to standard error.

Options:

- `--host`: remote host
- `--port`: remote port, 1..65535
- `--period`: seconds between counter messages, must be positive
- `-q` / `--quiet`: log warnings only

From Python, the same thing is:

```python
import asyncio
from countlink.app import run

asyncio.run(run("127.0.0.1", 50000, 30.0))
```

## What it does not do

- There is no real Wi-Fi driver. `HostStation` reports `CONNECTED` and
  `GOT_IP` as soon as it is asked to connect, and never reports a
  disconnection. To follow a real link, subclass `StationDriver` and give it
  to `WifiStationTask`.
- There is no receiving server. You need to supply something that listens on
  the remote port and reads the frames.

## Tests

```
pip install -e ".[test]"
pytest
```