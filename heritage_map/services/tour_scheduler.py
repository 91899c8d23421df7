"""
Tour scheduler - advances auto-playing tours on a fixed interval
"""
import asyncio
import logging
from typing import Awaitable, Callable, Dict, Optional

from heritage_map.core.tour import TourSession, TourState

logger = logging.getLogger(__name__)

TourStep = Callable[[], TourSession]
Sleep = Callable[[float], Awaitable[None]]


class TourScheduler:
    """
    Runs one repeating task per tour session.

    Each tick sleeps ``interval_seconds`` then calls the session's step
    function; the task ends by itself once the step returns a tour that is no
    longer flying. ``sleep`` is injectable so tests can tick without waiting.
    """

    def __init__(self, interval_seconds: float = 7.0, sleep: Optional[Sleep] = None):
        self.interval_seconds = interval_seconds
        self._sleep = sleep or asyncio.sleep
        self._tasks: Dict[str, asyncio.Task] = {}

    def start(self, session_id: str, step: TourStep) -> asyncio.Task:
        """
        Schedule ticks for a session, replacing any timer it already has.

        Must be called from within a running event loop.
        """
        self.stop(session_id)
        task = asyncio.get_running_loop().create_task(
            self._run(session_id, step), name=f"tour:{session_id}"
        )
        self._tasks[session_id] = task
        task.add_done_callback(lambda t, sid=session_id: self._forget(sid, t))
        logger.info(
            f"Tour timer started for {session_id} every {self.interval_seconds}s",
            extra={"session_id": session_id},
        )
        return task

    def stop(self, session_id: str) -> bool:
        task = self._tasks.pop(session_id, None)
        if task is None:
            return False
        if not task.done():
            task.cancel()
            logger.info(f"Tour timer cancelled for {session_id}", extra={"session_id": session_id})
        return True

    def stop_all(self) -> int:
        session_ids = list(self._tasks)
        for session_id in session_ids:
            self.stop(session_id)
        return len(session_ids)

    def is_running(self, session_id: str) -> bool:
        task = self._tasks.get(session_id)
        return task is not None and not task.done()

    async def _run(self, session_id: str, step: TourStep) -> TourSession:
        while True:
            await self._sleep(self.interval_seconds)
            session = step()
            if session.state != TourState.FLYING:
                logger.info(
                    f"Tour timer for {session_id} finished in state {session.state.value}",
                    extra={"session_id": session_id},
                )
                return session

    def _forget(self, session_id: str, task: asyncio.Task) -> None:
        if self._tasks.get(session_id) is task:
            del self._tasks[session_id]
        if not task.cancelled() and task.exception() is not None:
            logger.error(
                f"Tour timer for {session_id} failed: {task.exception()}",
                exc_info=task.exception(),
                extra={"session_id": session_id},
            )
