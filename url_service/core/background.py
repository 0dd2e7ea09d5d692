"""Detached background work for the URL service.

Work scheduled here runs on the event loop independently of the request
that scheduled it: the caller never awaits it, and cancelling the caller's
task does not cancel it. Every task carries a failure hook so errors are
reported instead of disappearing with the task.
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Set

logger = logging.getLogger(__name__)

FailureHook = Callable[[BaseException], None]


class DetachedTaskRunner:
    """
    Launches fire-and-forget coroutines and keeps them alive until they finish.

    The event loop only holds weak references to tasks, so the runner keeps
    strong ones until completion. ``drain`` lets the application wait for
    outstanding work during shutdown.
    """

    def __init__(self):
        self._tasks: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        """Number of tasks that have not finished yet."""
        return len(self._tasks)

    def spawn(
        self,
        work: Awaitable[None],
        *,
        name: str,
        on_failure: FailureHook,
    ) -> asyncio.Task:
        """
        Schedule ``work`` as a detached task.

        Args:
            work: Coroutine to run
            name: Task name, used in log messages
            on_failure: Called with the exception if ``work`` raises

        Returns:
            The created task
        """
        task = asyncio.create_task(self._run(work, name, on_failure), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def drain(self, timeout: Optional[float] = None) -> int:
        """
        Wait for pending tasks to complete.

        Args:
            timeout: Maximum seconds to wait, or None to wait indefinitely

        Returns:
            Number of tasks still running when the wait ended
        """
        if not self._tasks:
            return 0

        logger.info(f"Waiting for {len(self._tasks)} background task(s) to finish")
        _, still_pending = await asyncio.wait(set(self._tasks), timeout=timeout)
        if still_pending:
            logger.warning(
                f"{len(still_pending)} background task(s) did not finish within {timeout}s"
            )
        return len(still_pending)

    async def cancel_all(self) -> None:
        """Cancel every pending task and wait for the cancellations to land."""
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    @staticmethod
    async def _run(work: Awaitable[None], name: str, on_failure: FailureHook) -> None:
        try:
            await work
        except asyncio.CancelledError:
            logger.warning(f"Background task '{name}' was cancelled")
            raise
        except Exception as e:
            try:
                on_failure(e)
            except Exception:
                logger.exception(f"Failure hook for background task '{name}' raised")
