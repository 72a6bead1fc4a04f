import asyncio

import pytest

from countlink.counter import CounterTask
from countlink.messages import Message, MessageId


def test_first_ticks_send_increasing_values():
    queue = asyncio.Queue()
    task = CounterTask(queue, 1.0)
    assert task.tick() == 0
    assert task.tick() == 1
    assert queue.get_nowait() == Message(MessageId.COUNTER, 0)
    assert queue.get_nowait() == Message(MessageId.COUNTER, 1)


def test_counter_wraps_after_255():
    queue = asyncio.Queue()
    task = CounterTask(queue, 1.0)
    sent = [task.tick() for _ in range(257)]
    assert sent[255] == 255
    assert sent[256] == 0
    assert task.value == 1


def test_full_queue_drops_message_but_counter_advances():
    queue = asyncio.Queue(maxsize=1)
    task = CounterTask(queue, 1.0)
    task.tick()
    task.tick()
    assert queue.qsize() == 1
    assert queue.get_nowait().value == 0
    assert task.tick() == 2
    assert queue.get_nowait().value == 2


@pytest.mark.asyncio
async def test_run_sends_messages_periodically():
    queue = asyncio.Queue()
    task = CounterTask(queue, 0.01)
    runner = asyncio.create_task(task.run())
    try:
        first = await asyncio.wait_for(queue.get(), 2)
        second = await asyncio.wait_for(queue.get(), 2)
    finally:
        runner.cancel()
        with pytest.raises(asyncio.CancelledError):
            await runner
    assert first == Message(MessageId.COUNTER, 0)
    assert second == Message(MessageId.COUNTER, 1)