"""archive_scout.collector: deduplicated set of names gathered by one crawl session."""

from __future__ import annotations

from typing import List, Set

__all__ = ["ResultCollector"]


class ResultCollector:
    """Unordered set of normalized names; owned by a single crawl session."""

    def __init__(self) -> None:
        self._names: Set[str] = set()

    def insert(self, name: str) -> bool:
        """Add *name*; return True if it was not collected before. Empty names are ignored."""
        if not name or name in self._names:
            return False
        self._names.add(name)
        return True

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def slice(self) -> List[str]:
        """Return the collected names as a new list (sorted for stable output)."""
        return sorted(self._names)
