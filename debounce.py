import asyncio
from typing import Any, Callable, Optional, Tuple

import config


class Debouncer:
    """
    Delay a callback until its input has been quiet for ``delay`` seconds.

    Every ``push`` cancels the pending call and schedules a new one on the
    running event loop. Outside an event loop there is nothing to wait on, so
    the callback runs at once.
    """

    def __init__(self, callback: Callable[..., Any], delay: float = config.SEARCH_DEBOUNCE_SECONDS):
        self.callback = callback
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None
        self._args: Tuple[Any, ...] = ()

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def push(self, *args: Any) -> None:
        self.cancel()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.callback(*args)
            return
        self._args = args
        self._handle = loop.call_later(self.delay, self._fire)

    def _fire(self) -> None:
        args, self._handle, self._args = self._args, None, ()
        self.callback(*args)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._args = ()

    def flush(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._fire()
