"""Tests for the latest-wins request processor."""

import asyncio

import pytest

from jqlive.application.queue_processor import LatestRequestProcessor


class Recorder:
    """Async processor that can be held mid-request."""

    def __init__(self, hold: bool = False):
        self.processed: list[int] = []
        self.started = asyncio.Event()
        self.gate = asyncio.Event()
        if not hold:
            self.gate.set()

    async def __call__(self, item: int) -> None:
        self.started.set()
        await self.gate.wait()
        self.processed.append(item)


def test_submit_requires_running_processor():
    processor = LatestRequestProcessor[int](processor=lambda item: None)
    with pytest.raises(RuntimeError):
        processor.submit(1)


@pytest.mark.asyncio
async def test_processes_submitted_item():
    """Test a single submission is processed."""
    recorder = Recorder()
    processor = LatestRequestProcessor[int](processor=recorder)
    await processor.start()
    try:
        processor.submit(1)
        assert await processor.wait_until_idle(timeout=1.0)
        assert recorder.processed == [1]
    finally:
        await processor.stop()


@pytest.mark.asyncio
async def test_latest_submission_replaces_pending():
    """Test requests submitted while one is in flight collapse into the last."""
    recorder = Recorder(hold=True)
    processor = LatestRequestProcessor[int](processor=recorder)
    await processor.start()
    try:
        processor.submit(1)
        await asyncio.wait_for(recorder.started.wait(), timeout=1.0)
        assert processor.is_busy

        processor.submit(2)
        processor.submit(3)
        assert processor.has_pending

        recorder.gate.set()
        assert await processor.wait_until_idle(timeout=1.0)
        assert recorder.processed == [1, 3]
        assert not processor.has_pending
    finally:
        await processor.stop()


@pytest.mark.asyncio
async def test_debounce_collapses_bursts():
    """Test a burst inside the debounce window runs only the last request."""
    recorder = Recorder()
    processor = LatestRequestProcessor[int](processor=recorder, debounce=0.05)
    await processor.start()
    try:
        for item in range(5):
            processor.submit(item)
        assert await processor.wait_until_idle(timeout=1.0)
        assert recorder.processed == [4]
    finally:
        await processor.stop()


@pytest.mark.asyncio
async def test_errors_do_not_stop_worker():
    """Test a failing request does not prevent later ones."""
    processed = []

    async def flaky(item: int) -> None:
        if item == 1:
            raise ValueError("boom")
        processed.append(item)

    processor = LatestRequestProcessor[int](processor=flaky)
    await processor.start()
    try:
        processor.submit(1)
        assert await processor.wait_until_idle(timeout=1.0)
        processor.submit(2)
        assert await processor.wait_until_idle(timeout=1.0)
        assert processed == [2]
    finally:
        await processor.stop()


@pytest.mark.asyncio
async def test_sync_processor():
    processed = []
    processor = LatestRequestProcessor[int](processor=processed.append)
    await processor.start()
    try:
        processor.submit(7)
        assert await processor.wait_until_idle(timeout=1.0)
        assert processed == [7]
    finally:
        await processor.stop()


@pytest.mark.asyncio
async def test_wait_until_idle_times_out():
    recorder = Recorder(hold=True)
    processor = LatestRequestProcessor[int](processor=recorder)
    await processor.start()
    try:
        processor.submit(1)
        assert not await processor.wait_until_idle(timeout=0.05)
    finally:
        await processor.stop()
    assert not processor.is_running
    assert not processor.is_busy


@pytest.mark.asyncio
async def test_restart_after_stop():
    """Test the processor can be started again after stop()."""
    recorder = Recorder()
    processor = LatestRequestProcessor[int](processor=recorder)
    await processor.start()
    await processor.stop()
    with pytest.raises(RuntimeError):
        processor.submit(1)

    await processor.start()
    try:
        processor.submit(2)
        assert await processor.wait_until_idle(timeout=1.0)
        assert recorder.processed == [2]
    finally:
        await processor.stop()
