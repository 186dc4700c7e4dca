"""
Ordered set of free-text tags (skills, affirmative action tags).

Insertion order is kept for display; membership is an exact,
case-sensitive match on the trimmed value.
"""

from typing import Iterable, Iterator, List, Optional


class TagSet:
    def __init__(self, values: Optional[Iterable[str]] = None):
        self._items: List[str] = []
        self._index = set()
        for value in values or []:
            self.add(value)

    def add(self, raw: str) -> bool:
        """Add a trimmed tag. Returns False for blanks and duplicates."""
        value = (raw or "").strip()
        if not value or value in self._index:
            return False
        self._items.append(value)
        self._index.add(value)
        return True

    def remove(self, value: str) -> bool:
        if value not in self._index:
            return False
        self._index.remove(value)
        self._items.remove(value)
        return True

    def to_list(self) -> List[str]:
        return list(self._items)

    def __contains__(self, value: object) -> bool:
        return value in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"TagSet({self._items!r})"
