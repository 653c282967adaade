# leveler/core/exceptions.py
from __future__ import annotations

from typing import Iterable


class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when data is invalid or violates constraints."""


class NotFoundError(DomainError):
    """Raised when an entity is not found."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated."""


class CyclicDependencyError(BusinessRuleError):
    """Raised when the dependency graph of a schedule contains a cycle."""
    def __init__(self, task_ids: Iterable[str], message: str | None = None):
        self.task_ids: list[str] = sorted(task_ids)
        super().__init__(
            message or (
                "Cannot schedule: circular dependency detected between tasks "
                + ", ".join(self.task_ids)
            ),
            code="SCHEDULE_CYCLE",
        )
