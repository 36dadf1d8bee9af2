# core/common/call_queue.py
"""
Hand-off of callbacks to the GUI thread.

Tk must only be touched from the thread running ``mainloop``. Code that may
run elsewhere (biometric verifiers, gate events raised from their callbacks)
puts calls here; the GUI drains the queue from an ``after`` loop.
"""

from __future__ import annotations

import queue
from typing import Callable

from core.logging.logic.logger import logger


class CallQueue:
    """Thread-safe FIFO of pending ``fn(*args)`` calls."""

    def __init__(self) -> None:
        self._calls: "queue.Queue[tuple[Callable, tuple]]" = queue.Queue()

    def put(self, fn: Callable, *args) -> None:
        self._calls.put((fn, args))

    def drain(self) -> int:
        """Run every pending call on the current thread, in order."""
        ran = 0
        while True:
            try:
                fn, args = self._calls.get_nowait()
            except queue.Empty:
                return ran
            try:
                fn(*args)
            except Exception as exc:  # noqa: BLE001
                logger.log("CallQueue", "CallbackFailed", level="ERROR",
                           message=f"{getattr(fn, '__qualname__', fn)}: {exc!r}")
            ran += 1
