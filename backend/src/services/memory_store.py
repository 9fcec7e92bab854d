"""In-memory vocabulary store."""

import asyncio
from typing import Dict, Iterable, List, Set

from ..models.term import Term, normalize_term
from ..utils.exceptions import UnknownTermIdError
from .interfaces import VocabularyStoreInterface


def sort_key(term: Term):
    """Searchable (lower-cased) text ascending, ties broken by id."""
    return (term.searchable_text, term.id)


class InMemoryVocabularyStore(VocabularyStoreInterface):
    """Vocabulary kept in process memory.

    Suitable for development and tests. A single lock serializes writes so
    a merge group is never observed half-applied.
    """

    def __init__(self):
        self._names: Dict[int, str] = {}
        self._objects: Dict[int, Set[str]] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    def _term(self, term_id: int) -> Term:
        return Term.create(term_id, self._names[term_id], len(self._objects[term_id]))

    def _find_by_name(self, display_text: str):
        normalized = normalize_term(display_text)
        for term_id, name in self._names.items():
            if normalize_term(name) == normalized:
                return term_id
        return None

    def _create(self, display_text: str) -> int:
        term_id = self._next_id
        self._next_id += 1
        self._names[term_id] = display_text
        self._objects[term_id] = set()
        return term_id

    async def get_tree(self, order: str = "display_text asc") -> List[Term]:
        return sorted((self._term(term_id) for term_id in self._names), key=sort_key)

    async def get_search(self, query: str, order: str = "display_text asc") -> List[Term]:
        needle = normalize_term(query)
        terms = await self.get_tree(order)
        return [term for term in terms if needle in term.searchable_text]

    async def max_count(self) -> int:
        return max((len(objects) for objects in self._objects.values()), default=0)

    async def min_count(self) -> int:
        return min((len(objects) for objects in self._objects.values()), default=0)

    async def get_by_id(self, term_id: int) -> Term:
        if term_id not in self._names:
            raise UnknownTermIdError(term_id)
        return self._term(term_id)

    async def delete_term(self, term: Term) -> None:
        async with self._lock:
            self._names.pop(term.id, None)
            self._objects.pop(term.id, None)

    async def merge(self, canonical_name: str, names: List[str]) -> None:
        async with self._lock:
            target = self._find_by_name(canonical_name)
            found = (self._find_by_name(name) for name in names)
            sources = [
                term_id for term_id in dict.fromkeys(found)
                if term_id is not None and term_id != target
            ]
            if target is None:
                target = self._create(canonical_name)
            else:
                self._names[target] = canonical_name

            for term_id in sources:
                self._objects[target] |= self._objects.pop(term_id)
                del self._names[term_id]

    async def add_term(self, display_text: str, objects: Iterable[str] = ()) -> Term:
        async with self._lock:
            term_id = self._find_by_name(display_text)
            if term_id is None:
                term_id = self._create(display_text)
            self._objects[term_id].update(objects)
            return self._term(term_id)

    async def tag_object(self, term_id: int, object_id: str) -> None:
        async with self._lock:
            if term_id not in self._objects:
                raise UnknownTermIdError(term_id)
            self._objects[term_id].add(object_id)
