"""Background index rebuilds driven by save notifications.

Handlers call ``notify()`` after a successful save. A single consumer task
drains the pending notifications and runs one rebuild for the batch, so
saves never wait on a directory scan.
"""

import asyncio
import logging

from textwiki.core.storage import PageStore

logger = logging.getLogger(__name__)


class IndexWorker:
    """Consumes save notifications and rebuilds the store's index."""

    def __init__(self, store: PageStore) -> None:
        self.store = store
        self.rebuild_count: int = 0
        self._queue: asyncio.Queue[str] = asyncio.Queue()
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the consumer task."""
        if self._task is not None:
            return
        self._task = asyncio.create_task(self._run())
        logger.info("Index worker started")

    async def stop(self) -> None:
        """Cancel the consumer task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Index worker stopped")

    def notify(self, title: str) -> None:
        """Record that a page was saved."""
        self._queue.put_nowait(title)

    async def join(self) -> None:
        """Wait until every notification so far has been followed by a rebuild."""
        await self._queue.join()

    async def _run(self) -> None:
        while True:
            titles = [await self._queue.get()]
            while not self._queue.empty():
                titles.append(self._queue.get_nowait())
            try:
                await asyncio.to_thread(self.store.rebuild_index)
                self.rebuild_count += 1
                logger.debug(
                    "Rebuilt index after saving %s", ", ".join(repr(t) for t in titles)
                )
            except Exception:
                logger.exception("Error rebuilding index")
            finally:
                for _ in titles:
                    self._queue.task_done()
