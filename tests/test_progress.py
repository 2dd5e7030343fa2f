import asyncio

import pytest

from pingherd.models import ProgressEvent
from pingherd.progress import ProgressSink, expected_progress_total


def test_expected_total_includes_overhead():
    assert expected_progress_total(10, 1) == 13
    assert expected_progress_total(3, 4) == 24


def test_rejects_non_positive_total():
    with pytest.raises(ValueError):
        ProgressSink(0, use_progress_bar=False)


def test_stops_at_expected_total_and_is_monotonic():
    seen = []

    async def scenario():
        channel = asyncio.Queue()
        for i in range(6):
            channel.put_nowait(ProgressEvent("h", f"line {i}"))
        sink = ProgressSink(4, use_progress_bar=False, callback=seen.append)
        consumed = await sink.run(channel)
        return sink, consumed, channel.qsize()

    sink, consumed, left = asyncio.run(scenario())

    assert consumed == 4
    assert left == 2
    assert seen == [25.0, 50.0, 75.0, 100.0]
    assert seen == sorted(seen)
    assert sink.percent == 100.0


def test_cancellation_keeps_partial_progress():
    seen = []

    async def scenario():
        channel = asyncio.Queue()
        sink = ProgressSink(10, use_progress_bar=False, callback=seen.append)
        task = asyncio.create_task(sink.run(channel))
        channel.put_nowait(ProgressEvent("h", "a"))
        channel.put_nowait(ProgressEvent("h", "b"))
        await asyncio.sleep(0.05)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        return sink

    sink = asyncio.run(scenario())
    assert sink.consumed == 2
    assert seen == [10.0, 20.0]


def test_renders_with_progress_bar():
    from io import StringIO

    from rich.console import Console

    async def scenario():
        channel = asyncio.Queue()
        for i in range(2):
            channel.put_nowait(ProgressEvent("h", str(i)))
        console = Console(file=StringIO(), force_terminal=False)
        sink = ProgressSink(2, console=console)
        return await sink.run(channel)

    assert asyncio.run(scenario()) == 2
