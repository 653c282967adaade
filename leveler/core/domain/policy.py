from __future__ import annotations

from dataclasses import dataclass

from leveler.core.exceptions import ValidationError

DEFAULT_HOURS_PER_DAY = 8.0
DEFAULT_CAPACITY_HOURS = 8.0


@dataclass(frozen=True)
class LevelingPolicy:
    # hours one open task puts on its resource per calendar day
    hours_per_day: float = DEFAULT_HOURS_PER_DAY
    # daily hours a resource can absorb before it counts as over-allocated
    capacity_hours: float = DEFAULT_CAPACITY_HOURS

    def validate(self) -> "LevelingPolicy":
        if self.hours_per_day <= 0:
            raise ValidationError(
                "hours_per_day must be greater than zero.",
                code="LEVELING_INVALID_HOURS",
            )
        if self.capacity_hours <= 0:
            raise ValidationError(
                "capacity_hours must be greater than zero.",
                code="LEVELING_INVALID_CAPACITY",
            )
        return self


__all__ = ["LevelingPolicy", "DEFAULT_HOURS_PER_DAY", "DEFAULT_CAPACITY_HOURS"]
