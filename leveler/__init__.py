"""Critical-path and resource-leveling engine for project schedules."""

__version__ = "0.1.0"
