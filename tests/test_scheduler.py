import asyncio
from unittest.mock import AsyncMock, patch

from nowplaying.services.scheduler import PeriodicTask, PlaybackScheduler


async def test_periodic_task_runs_until_stopped():
    calls = []

    async def tick():
        calls.append(1)

    task = PeriodicTask("tick", 0.01, tick)
    task.start()
    await asyncio.sleep(0.1)
    await task.stop()

    count = len(calls)
    assert count >= 2
    assert not task.running

    await asyncio.sleep(0.05)
    assert len(calls) == count


async def test_periodic_task_survives_errors(caplog):
    calls = []

    async def tick():
        calls.append(1)
        if len(calls) == 1:
            raise RuntimeError("first tick fails")

    task = PeriodicTask("flaky", 0.01, tick)
    task.start()
    await asyncio.sleep(0.1)
    await task.stop()

    assert len(calls) >= 2
    assert "flaky tick failed" in caplog.text


async def test_first_run_waits_one_interval():
    tick = AsyncMock()
    task = PeriodicTask("slow", 10, tick)
    task.start()
    await asyncio.sleep(0.02)
    await task.stop()

    tick.assert_not_awaited()


async def test_scheduler_drives_both_timers(session, settings, token_store):
    scheduler = PlaybackScheduler(session, settings, token_store)

    with patch("nowplaying.services.scheduler.refresh_tokens", new=AsyncMock()) as refresh, \
            patch("nowplaying.services.scheduler.poll", new=AsyncMock()) as poll:
        scheduler.start()
        assert all(t.running for t in scheduler.tasks)
        await asyncio.sleep(0.1)
        await scheduler.stop()

    assert refresh.await_count >= 1
    assert poll.await_count >= 1
    refresh.assert_awaited_with(session, settings, token_store)
    assert not any(t.running for t in scheduler.tasks)


async def test_scheduler_notifies_configured_webhook(session, settings, token_store, track_factory):
    scheduler = PlaybackScheduler(session, settings, token_store)
    track = track_factory("A")

    with patch("nowplaying.services.scheduler.notify", new=AsyncMock()) as notify:
        await scheduler.send_notification(track)

    notify.assert_awaited_once_with(track, settings.webhook_url)
