"""Bulk taxonomy mutations."""

from typing import Iterable, Optional

from ..models.term import DeleteResult, MergeResult, Term
from ..utils.exceptions import MissingCanonicalNameError, UnknownTermIdError
from ..utils.logging import log_info
from .interfaces import VocabularyStoreInterface


class TaxonomyService:
    """Deletes and merges terms.

    Stale ids are skipped so re-submitting the same request is harmless.
    Batches are not atomic across ids; a store failure propagates after the
    names recorded so far have been processed.
    """

    def __init__(self, store: VocabularyStoreInterface):
        """Initialize taxonomy service."""
        self.store = store

    async def _lookup(self, term_id: int) -> Optional[Term]:
        try:
            return await self.store.get_by_id(term_id)
        except UnknownTermIdError:
            log_info(f"Skipping unknown term {term_id}")
            return None

    async def delete(self, term_ids: Iterable[int]) -> DeleteResult:
        """Delete terms by id, returning the names actually deleted."""
        result = DeleteResult()
        for term_id in sorted(set(term_ids)):
            term = await self._lookup(term_id)
            if term is None:
                continue
            result.deleted_names.append(term.display_text)
            await self.store.delete_term(term)
        log_info("Deleted terms", {"names": result.deleted_names})
        return result

    async def merge(self, canonical_name: str, term_ids: Iterable[int]) -> MergeResult:
        """Merge terms by id into one term named ``canonical_name``.

        An empty id set is a no-op and leaves the store untouched.

        Raises:
            MissingCanonicalNameError: If ``canonical_name`` is empty
        """
        canonical_name = (canonical_name or "").strip()
        if not canonical_name:
            raise MissingCanonicalNameError()

        terms = [
            term for term in [await self._lookup(term_id) for term_id in sorted(set(term_ids))]
            if term is not None
        ]
        result = MergeResult(
            canonical_name=canonical_name,
            merged_names=[term.display_text for term in terms]
        )
        if result.merged_names:
            await self.store.merge(canonical_name, result.merged_names)
            log_info("Merged terms", {"canonical": canonical_name, "names": result.merged_names})
        return result
