"""Schedule-level change notifications for whatever sits above the engine."""
from __future__ import annotations

from leveler.core.events.signal import Signal


class DomainEvents:
    def __init__(self) -> None:
        self.tasks_changed: Signal[str] = Signal()  # schedule_id


# SINGLE global instance
domain_events = DomainEvents()
