# nowplaying/services/scheduler.py
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from nowplaying.config.settings import Settings
from nowplaying.models.session_model import PlaybackSession
from nowplaying.services.notifier import notify
from nowplaying.services.playback_poller import poll
from nowplaying.services.token_refresher import refresh_tokens
from nowplaying.services.token_store import TokenStore

logger = logging.getLogger(__name__)


class PeriodicTask:
    """
    Run an async callable every `interval` seconds on the event loop.
    The first run happens one interval after start().
    """

    def __init__(self, name: str, interval: float, func: Callable[[], Awaitable[None]]):
        self.name = name
        self.interval = interval
        self.func = func
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name=self.name)

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                await self.func()
            except Exception as e:
                # A bad tick never ends the loop
                logger.exception(f"{self.name} tick failed: {e}")


class PlaybackScheduler:
    """Owns the two independent timers: token refresh and playback polling."""

    def __init__(self, session: PlaybackSession, settings: Settings, store: TokenStore):
        self.session = session
        self.settings = settings
        self.store = store

        self.refresher = PeriodicTask("token-refresher", settings.refresh_interval, self.refresh_once)
        self.poller = PeriodicTask("playback-poller", settings.poll_interval, self.poll_once)

    @property
    def tasks(self) -> List[PeriodicTask]:
        return [self.refresher, self.poller]

    async def refresh_once(self) -> None:
        await refresh_tokens(self.session, self.settings, self.store)

    async def poll_once(self) -> None:
        await poll(self.session, self.send_notification)

    async def send_notification(self, track) -> None:
        await notify(track, self.settings.webhook_url)

    def start(self) -> None:
        for task in self.tasks:
            task.start()
        logger.info(
            f"Polling every {self.settings.poll_interval}s, "
            f"refreshing token every {self.settings.refresh_interval}s"
        )

    async def stop(self) -> None:
        for task in self.tasks:
            await task.stop()
        logger.info("Scheduler stopped")
