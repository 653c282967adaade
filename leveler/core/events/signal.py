from __future__ import annotations

from threading import RLock
from typing import Callable, Generic, Tuple, TypeVar

T = TypeVar("T")
Slot = Callable[[T], None]


class Signal(Generic[T]):
    """
    Synchronous publish/subscribe hook for schedule changes.

    Slots run in connection order on the emitting thread. The slot list is
    copy-on-write, so a slot may connect or disconnect while an emit is in
    progress; the change applies from the next emit.
    """

    def __init__(self) -> None:
        self._slots: Tuple[Slot, ...] = ()
        self._guard = RLock()

    def connect(self, slot: Slot) -> None:
        with self._guard:
            if slot not in self._slots:
                self._slots = self._slots + (slot,)

    def disconnect(self, slot: Slot) -> None:
        with self._guard:
            self._slots = tuple(s for s in self._slots if s != slot)

    def emit(self, payload: T) -> None:
        dead: list[Slot] = []
        for slot in self._slots:
            try:
                slot(payload)
            except ReferenceError:
                # slot reached through a weakref proxy whose target is gone
                dead.append(slot)
        for slot in dead:
            self.disconnect(slot)


__all__ = ["Signal"]
