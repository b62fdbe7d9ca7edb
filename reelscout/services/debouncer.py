"""Cancel-and-reschedule timer for the asyncio event loop"""

import asyncio
from typing import Any, Callable, Optional


class Debouncer:
    """Call callback with the last pushed value once input is quiet for delay seconds"""

    def __init__(self, delay: float, callback: Callable[[Any], None]):
        self.delay = delay
        self.callback = callback
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def push(self, value: Any):
        """Restart the timer with a new value; the previous value is dropped"""
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._fire(value))

    async def _fire(self, value: Any):
        await asyncio.sleep(self.delay)
        self._task = None
        self.callback(value)

    def cancel(self):
        if self.pending:
            self._task.cancel()
        self._task = None

    async def wait(self):
        """Wait for the pending commit, if any"""
        task = self._task
        if task is not None:
            try:
                await task
            except asyncio.CancelledError:
                pass
