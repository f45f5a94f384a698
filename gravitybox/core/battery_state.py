"""Battery state store and listener registry."""

from __future__ import annotations

import threading
from collections import deque
from typing import Callable

from loguru import logger

from gravitybox.models.battery import BatterySnapshot, BatteryStatusListener

BeforeCommitHook = Callable[[BatterySnapshot, BatterySnapshot], None]


class ListenerRegistry:
    """Ordered set of listeners, compared by identity.

    Not thread-safe on its own; ``BatteryStateStore`` guards it.
    """

    def __init__(self) -> None:
        self._listeners: list[BatteryStatusListener] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def __contains__(self, listener: object) -> bool:
        return any(existing is listener for existing in self._listeners)

    def register(self, listener: BatteryStatusListener) -> bool:
        """Add *listener* unless already present. Returns True if it was added."""
        if listener in self:
            return False
        self._listeners.append(listener)
        return True

    def unregister(self, listener: BatteryStatusListener) -> bool:
        for i, existing in enumerate(self._listeners):
            if existing is listener:
                del self._listeners[i]
                return True
        return False

    def snapshot(self) -> list[BatteryStatusListener]:
        """Stable copy for iteration outside any lock."""
        return list(self._listeners)

    def notify_all(
        self,
        snapshot: BatterySnapshot,
        listeners: list[BatteryStatusListener] | None = None,
    ) -> int:
        """Deliver *snapshot* to each listener in registration order.

        A listener that raises is logged and skipped. Returns the number of
        listeners that received the snapshot without error.
        """
        delivered = 0
        for listener in self.snapshot() if listeners is None else listeners:
            try:
                listener.on_battery_status_changed(snapshot)
                delivered += 1
            except Exception:
                logger.exception(f"Battery listener {listener!r} failed")
        return delivered


class BatteryStateStore:
    """Holds the last committed battery snapshot and fans changes out.

    ``_state_lock`` guards the snapshot, the registry and the queue of
    pending deliveries. It is never held while a listener runs. Each commit
    stores its snapshot and queues the delivery under the lock; whichever
    caller finds no delivery in progress drains the queue after releasing
    it. Listeners therefore see commits in commit order, and a listener may
    commit again, from its own thread or another one, without waiting.
    """

    def __init__(self, initial: BatterySnapshot | None = None) -> None:
        self._snapshot = initial or BatterySnapshot()
        self._registry = ListenerRegistry()
        self._state_lock = threading.Lock()
        self._pending: deque[BatterySnapshot] = deque()
        self._delivering = False

    def current_snapshot(self) -> BatterySnapshot:
        with self._state_lock:
            return self._snapshot

    def register_listener(self, listener: BatteryStatusListener) -> None:
        with self._state_lock:
            self._registry.register(listener)

    def unregister_listener(self, listener: BatteryStatusListener) -> None:
        with self._state_lock:
            self._registry.unregister(listener)

    @property
    def listener_count(self) -> int:
        with self._state_lock:
            return len(self._registry)

    def commit(
        self,
        snapshot: BatterySnapshot,
        before_commit: BeforeCommitHook | None = None,
    ) -> bool:
        """Store *snapshot* and notify listeners if it differs from the current one.

        *before_commit* runs with ``(previous, new)`` only when a change is
        about to be stored. It runs under the state lock and must not call
        back into the store; an exception from it is logged and the commit
        goes ahead. Returns True if the snapshot changed.

        When a delivery is already in progress (on this thread or another),
        the change is queued and handed to listeners by that delivery, so
        this call may return before listeners have seen it.
        """
        with self._state_lock:
            previous = self._snapshot
            if snapshot == previous:
                return False

            if before_commit is not None:
                try:
                    before_commit(previous, snapshot)
                except Exception:
                    logger.exception("Battery commit hook failed")

            self._snapshot = snapshot
            self._pending.append(snapshot)
            logger.debug(
                f"Battery {previous.level}%/{previous.charging} -> "
                f"{snapshot.level}%/{snapshot.charging}"
            )
            if self._delivering:
                return True
            self._delivering = True

        self._deliver_pending()
        return True

    def _deliver_pending(self) -> None:
        try:
            while True:
                with self._state_lock:
                    if not self._pending:
                        self._delivering = False
                        return
                    snapshot = self._pending.popleft()
                    listeners = self._registry.snapshot()
                self._registry.notify_all(snapshot, listeners)
        except BaseException:
            with self._state_lock:
                self._delivering = False
            raise
