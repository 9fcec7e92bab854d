"""Client-side quick search over rendered tag rows."""

from typing import Callable, Iterable, List, NamedTuple, Optional, Protocol


class SearchRow(Protocol):
    """A rendered row whose visibility can be toggled."""

    def text(self) -> str:
        ...

    def show(self) -> None:
        ...

    def hide(self) -> None:
        ...


class CacheEntry(NamedTuple):
    """A row and its lower-cased text."""
    row: SearchRow
    normalized_text: str


class QuickSearchCache:
    """Filters rows by substring without re-scanning them on every keystroke.

    Rows are read from ``row_source`` once, on the first call to ``filter``.
    The cache is never refreshed afterwards: rows added or changed later keep
    their first-seen text until the page (and this object) is rebuilt.
    """

    def __init__(self, row_source: Callable[[], Iterable[SearchRow]]):
        self._row_source = row_source
        self._entries: Optional[List[CacheEntry]] = None

    @property
    def entries(self) -> List[CacheEntry]:
        """Cached rows; empty until the first filter call."""
        return list(self._entries or [])

    @property
    def built(self) -> bool:
        return self._entries is not None

    def _build(self) -> List[CacheEntry]:
        return [CacheEntry(row, row.text().lower()) for row in self._row_source()]

    def filter(self, query: str) -> int:
        """Show rows containing ``query`` (case-insensitive), hide the rest.

        Returns:
            Number of visible rows
        """
        if self._entries is None:
            self._entries = self._build()

        needle = (query or "").strip().lower()
        visible = 0
        for entry in self._entries:
            if needle in entry.normalized_text:
                entry.row.show()
                visible += 1
            else:
                entry.row.hide()
        return visible
