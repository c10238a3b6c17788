"""Debouncing of coroutine functions on the running event loop."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional, Set

logger = logging.getLogger(__name__)


class Debouncer:
    """Coalesces rapid calls into one delayed call with the latest arguments.

    Every call restarts the quiet window. When the window elapses without a
    newer call, the wrapped coroutine function runs as a task. Tasks already
    running are never cancelled by later calls.
    """

    def __init__(
        self, func: Callable[..., Awaitable[Any]], wait: float = 0.3
    ) -> None:
        """Initialize debouncer.

        Args:
            func: Coroutine function to debounce
            wait: Quiet window in seconds
        """
        self.func = func
        self.wait = wait
        self._sequence = 0
        self._timer: Optional[asyncio.TimerHandle] = None
        self._tasks: Set[asyncio.Task] = set()
        self._idle: Optional[asyncio.Event] = None

    @property
    def sequence(self) -> int:
        """Number of calls scheduled so far."""
        return self._sequence

    @property
    def pending(self) -> bool:
        """Whether a call is waiting for its quiet window or running."""
        return self._timer is not None or bool(self._tasks)

    def __call__(self, *args: Any, **kwargs: Any) -> int:
        """Schedule a call, superseding any call still waiting.

        Must be called from a running event loop.

        Returns:
            Sequence number of this call
        """
        loop = asyncio.get_running_loop()
        self._sequence += 1
        if self._timer is not None:
            self._timer.cancel()
        self._idle_event().clear()
        self._timer = loop.call_later(self.wait, self._fire, self._sequence, args, kwargs)
        return self._sequence

    def cancel(self) -> None:
        """Drop the call waiting for its quiet window, if any."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            self._maybe_idle()

    async def wait_idle(self) -> None:
        """Wait until no call is scheduled or running."""
        await self._idle_event().wait()

    def _fire(self, sequence: int, args: tuple, kwargs: dict) -> None:
        self._timer = None
        if sequence != self._sequence:
            logger.debug(f"Dropping debounced call {sequence} (latest is {self._sequence})")
            self._maybe_idle()
            return

        task = asyncio.ensure_future(self.func(*args, **kwargs))
        self._tasks.add(task)
        task.add_done_callback(self._task_done)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.error(f"Debounced call failed: {task.exception()}")
        self._maybe_idle()

    def _idle_event(self) -> asyncio.Event:
        if self._idle is None:
            self._idle = asyncio.Event()
            self._idle.set()
        return self._idle

    def _maybe_idle(self) -> None:
        if not self.pending:
            self._idle_event().set()


__all__ = ["Debouncer"]
