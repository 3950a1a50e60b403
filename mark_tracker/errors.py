"""Error kinds raised by the catalog and the quest filters."""

from __future__ import annotations


class MarkTrackerError(Exception):
    """Base class for all mark tracker errors."""


class InvalidCriterion(MarkTrackerError, ValueError):
    """A type or dungeon name outside the valid set reached a filter."""

    def __init__(self, criterion: str, value: str) -> None:
        self.criterion = criterion
        self.value = value
        super().__init__(f"{criterion.capitalize()} {value!r} is not a supported {criterion}")


class DuplicateLoad(MarkTrackerError, RuntimeError):
    """Quest data was loaded from disk more than once."""


class MalformedCatalogData(MarkTrackerError, ValueError):
    """Catalog data is missing fields, has unparseable numbers, or breaks an invariant."""
