"""Tag manager component."""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional

from ..services.api import AJAX_PATH, TagAdminClient, WSSEAuth
from .quicksearch import QuickSearchCache


@dataclass
class TagRow:
    """A rendered tag in the collection."""
    term_id: int
    display_text: str
    count: int
    weight: int = 1
    visible: bool = True

    def text(self) -> str:
        return f"{self.display_text}:{self.count}"

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False


@dataclass
class ManagerOptions:
    """Per-manager configuration.

    ``after_update`` is called with the manager once refreshed rows are in
    place.
    """
    update_url: str = AJAX_PATH
    after_update: Optional[Callable[["TagManager"], None]] = None


def rows_from_payload(payload: Dict) -> List[TagRow]:
    """Build rows from an AJAX response's ``items``."""
    return [
        TagRow(
            term_id=item["id"],
            display_text=item["display_text"],
            count=item["count"],
            weight=item["weight"]
        )
        for item in payload.get("items", [])
    ]


class TagManager:
    """Keeps the rendered tag collection in sync with the backend."""

    def __init__(
        self,
        client: TagAdminClient,
        auth: WSSEAuth,
        options: Optional[ManagerOptions] = None,
        rows: Iterable[TagRow] = ()
    ):
        self.client = client
        self.auth = auth
        self.options = options or ManagerOptions()
        self.rows: List[TagRow] = list(rows)
        self.message: Optional[str] = None
        self.search = QuickSearchCache(lambda: self.rows)

    def _apply(self, payload: Dict) -> List[TagRow]:
        self.rows = rows_from_payload(payload)
        self.message = payload.get("message")
        if self.options.after_update is not None:
            self.options.after_update(self)
        return self.rows

    async def update(self, query: str = "") -> List[TagRow]:
        """Fetch the collection matching ``query`` from the backend."""
        payload = await self.client.fetch_tags(self.auth, query, path=self.options.update_url)
        return self._apply(payload)

    async def delete(self, term_ids: Iterable[int]) -> List[TagRow]:
        """Delete terms and take the refreshed collection."""
        return self._apply(await self.client.delete_tags(self.auth, term_ids))

    async def rename(self, term_ids: Iterable[int], master: str) -> List[TagRow]:
        """Merge terms into ``master`` and take the refreshed collection."""
        return self._apply(await self.client.rename_tags(self.auth, term_ids, master))

    def quicksearch(self, query: str) -> int:
        """Filter the rendered rows locally."""
        return self.search.filter(query)

    @property
    def visible_rows(self) -> List[TagRow]:
        return [row for row in self.rows if row.visible]
