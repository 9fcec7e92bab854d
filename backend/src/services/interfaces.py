"""Service interfaces."""

from abc import ABC, abstractmethod
from typing import Iterable, List

from ..models.term import Term


class VocabularyStoreInterface(ABC):
    """Interface for a persistent tag vocabulary.

    Implementations own terms and their content associations. ``order`` is
    always lower-cased searchable text ascending; ties are broken by id.
    """

    async def initialize(self) -> None:
        """Prepare the store for use."""
        pass

    async def cleanup(self) -> None:
        """Release store resources."""
        pass

    @abstractmethod
    async def get_tree(self, order: str = "display_text asc") -> List[Term]:
        """Get every term, ordered."""
        pass

    @abstractmethod
    async def get_search(self, query: str, order: str = "display_text asc") -> List[Term]:
        """Get terms whose searchable text contains ``query`` (case-insensitive)."""
        pass

    @abstractmethod
    async def max_count(self) -> int:
        """Get the highest count in the vocabulary (0 when empty)."""
        pass

    @abstractmethod
    async def min_count(self) -> int:
        """Get the lowest count in the vocabulary (0 when empty)."""
        pass

    @abstractmethod
    async def get_by_id(self, term_id: int) -> Term:
        """Get a term by id.

        Raises:
            UnknownTermIdError: If no term has this id
        """
        pass

    @abstractmethod
    async def delete_term(self, term: Term) -> None:
        """Delete a term and its content associations."""
        pass

    @abstractmethod
    async def merge(self, canonical_name: str, names: List[str]) -> None:
        """Merge the named terms into one term called ``canonical_name``.

        Content associations are re-pointed to the canonical term and
        de-duplicated. The group is applied atomically.
        """
        pass

    @abstractmethod
    async def add_term(self, display_text: str, objects: Iterable[str] = ()) -> Term:
        """Create a term (or return the existing one) and associate objects."""
        pass

    @abstractmethod
    async def tag_object(self, term_id: int, object_id: str) -> None:
        """Associate a content object with a term."""
        pass
