"""Single-writer-per-room coordinator."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from ..game import Room
from .synchronizer import Action, RoomSynchronizer

logger = logging.getLogger(__name__)


@dataclass
class _Job:
    action: Action
    description: str
    future: asyncio.Future


class RoomCoordinator:
    """
    Serializes all writes to a room through one worker task.

    Each room gets its own queue; its worker reads the freshest room,
    applies the next action and resolves the submitter's future before
    taking the next one. Rooms never block each other. A worker exits as
    soon as its queue is empty and is started again on the next submit.
    """

    def __init__(self, synchronizer: RoomSynchronizer):
        self.synchronizer = synchronizer
        self._queues: dict[str, asyncio.Queue] = {}
        self._workers: dict[str, asyncio.Task] = {}

    async def submit(self, room_code: str, action: Action, description: str = "update room") -> Room:
        """Queue ``action`` for ``room_code`` and wait for its result."""
        loop = asyncio.get_running_loop()
        job = _Job(action=action, description=description, future=loop.create_future())
        self._queue_for(room_code).put_nowait(job)
        return await job.future

    @property
    def active_rooms(self) -> list[str]:
        """Rooms with a running writer."""
        return list(self._workers)

    def _queue_for(self, room_code: str) -> asyncio.Queue:
        queue = self._queues.get(room_code)
        if queue is None:
            queue = asyncio.Queue()
            self._queues[room_code] = queue
            self._workers[room_code] = asyncio.create_task(self._run(room_code, queue))
            logger.debug("Started writer for room %s", room_code)
        return queue

    async def _run(self, room_code: str, queue: asyncio.Queue) -> None:
        while not queue.empty():
            job: _Job = await queue.get()
            try:
                room = await self.synchronizer.apply(room_code, job.action, description=job.description)
            except Exception as exc:
                if not job.future.done():
                    job.future.set_exception(exc)
            else:
                if not job.future.done():
                    job.future.set_result(room)
            finally:
                queue.task_done()
        # Nothing awaits between the empty check and removal.
        if self._queues.get(room_code) is queue:
            del self._queues[room_code]
            del self._workers[room_code]
            logger.debug("Stopped idle writer for room %s", room_code)

    async def drain(self, room_code: Optional[str] = None) -> None:
        """Wait until queued jobs (for one room, or all rooms) are processed."""
        codes = [room_code] if room_code else list(self._queues)
        for code in codes:
            queue = self._queues.get(code)
            if queue is not None:
                await queue.join()

    async def close(self) -> None:
        """Stop every room worker."""
        workers = list(self._workers.values())
        for task in workers:
            task.cancel()
        await asyncio.gather(*workers, return_exceptions=True)
        self._workers.clear()
        self._queues.clear()
