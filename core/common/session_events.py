"""
core/common/session_events.py

Event objects for authentication gate changes.

The gate owns the session state. Other components (the main window, the
lock screen) subscribe to these events to react to lock/unlock without
polling the gate.
"""

from __future__ import annotations

import weakref
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Literal, List

from core.logging.logic.logger import logger


SessionEventType = Literal["unlocked", "locked", "pin_created", "pin_reset"]


@dataclass(frozen=True, slots=True)
class GateEvent:
    """Represents one gate state change."""

    type: SessionEventType
    old_state: str
    new_state: str
    reason: str
    ts_utc: datetime


GateListener = Callable[[GateEvent], None]


class SessionEventHub:
    """
    Observer list for :class:`GateEvent`.

    Bound methods are held weakly so a destroyed view does not keep
    receiving events; plain functions are held strongly.
    """

    def __init__(self) -> None:
        self._listeners: List[object] = []

    @staticmethod
    def _ref(cb: GateListener) -> object:
        if hasattr(cb, "__self__") and hasattr(cb, "__func__"):
            return weakref.WeakMethod(cb)  # type: ignore[arg-type]
        return cb

    @staticmethod
    def _deref(entry: object) -> GateListener | None:
        if isinstance(entry, weakref.WeakMethod):
            return entry()
        return entry  # type: ignore[return-value]

    def subscribe(self, cb: GateListener) -> None:
        if cb not in self._alive():
            self._listeners.append(self._ref(cb))

    def unsubscribe(self, cb: GateListener) -> None:
        self._listeners = [e for e in self._listeners if self._deref(e) not in (None, cb)]

    def _alive(self) -> list[GateListener]:
        out = []
        for e in self._listeners:
            cb = self._deref(e)
            if cb is not None:
                out.append(cb)
        return out

    def emit(self, event: GateEvent) -> None:
        for cb in self._alive():
            try:
                cb(event)
            except Exception as exc:  # noqa: BLE001
                logger.log("SessionEvents", "ListenerFailed", level="ERROR", message=repr(exc))
