"""Vocabulary query service."""

from typing import List, Sequence, Tuple

from ..models.term import TagListing, Term
from .interfaces import VocabularyStoreInterface
from .weighting import weigh

DEFAULT_ORDER = "display_text asc"


class VocabularyService:
    """Read-side façade over the vocabulary store.

    Bounds are always computed over the term set being returned, so weights
    stay relative to what the administrator currently sees.
    """

    def __init__(self, store: VocabularyStoreInterface):
        """Initialize vocabulary service."""
        self.store = store

    async def tree(self, order: str = DEFAULT_ORDER) -> List[Term]:
        """Get every term in display order."""
        return await self.store.get_tree(order)

    async def search(self, query: str, order: str = DEFAULT_ORDER) -> List[Term]:
        """Get terms matching ``query``; an empty query returns the tree."""
        if not (query or "").strip():
            return await self.tree(order)
        return await self.store.get_search(query, order)

    @staticmethod
    def bounds(terms: Sequence[Term]) -> Tuple[int, int]:
        """Get ``(min, max)`` count over a term set, ``(0, 0)`` when empty."""
        if not terms:
            return 0, 0
        counts = [term.count for term in terms]
        return min(counts), max(counts)

    async def vocabulary_bounds(self) -> Tuple[int, int]:
        """Get ``(min, max)`` count over the whole vocabulary."""
        return await self.store.min_count(), await self.store.max_count()

    async def listing(self, query: str = "", order: str = DEFAULT_ORDER) -> TagListing:
        """Search (or list) terms and weight them against their own bounds."""
        terms = await self.search(query, order)
        minimum, maximum = self.bounds(terms)
        return TagListing(
            terms=weigh(terms, (minimum, maximum)),
            minimum=minimum,
            maximum=maximum,
            query=(query or "").strip()
        )
