"""Tests for vocabulary queries."""

import pytest

from backend.src.models.term import Term
from backend.src.services.vocabulary import VocabularyService


@pytest.fixture
def vocabulary(store, term_ids):
    """Create vocabulary service over the seeded store."""
    return VocabularyService(store)


@pytest.mark.asyncio
async def test_tree_order(vocabulary):
    """Test tree is in case-insensitive display order."""
    terms = await vocabulary.tree()
    assert [term.display_text for term in terms] == ["Apple", "Banana", "Grape", "kiwi", "Mango"]


@pytest.mark.asyncio
async def test_search(vocabulary):
    """Test search matches substrings case-insensitively."""
    terms = await vocabulary.search("AN")
    assert [term.display_text for term in terms] == ["Banana", "Mango"]


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["", "   "])
async def test_empty_search_returns_tree(vocabulary, query):
    """Test empty queries list everything."""
    assert await vocabulary.search(query) == await vocabulary.tree()


def test_bounds():
    """Test bounds over a term set."""
    terms = [Term.create(1, "a", 4), Term.create(2, "b", 9), Term.create(3, "c", 2)]
    assert VocabularyService.bounds(terms) == (2, 9)


def test_bounds_empty():
    """Test bounds of an empty set."""
    assert VocabularyService.bounds([]) == (0, 0)


@pytest.mark.asyncio
async def test_vocabulary_bounds(vocabulary):
    """Test bounds over the whole vocabulary."""
    assert await vocabulary.vocabulary_bounds() == (1, 20)


@pytest.mark.asyncio
async def test_listing_weights_whole_tree(vocabulary):
    """Test listing weights terms against the full range."""
    listing = await vocabulary.listing()

    assert (listing.minimum, listing.maximum) == (1, 20)
    weights = {item.term.display_text: item.weight for item in listing.terms}
    assert weights == {"Apple": 2, "Banana": 1, "Grape": 3, "kiwi": 1, "Mango": 6}


@pytest.mark.asyncio
async def test_listing_bounds_follow_search(vocabulary):
    """Test bounds are computed over the returned subset."""
    listing = await vocabulary.listing("  an ")

    assert listing.query == "an"
    assert (listing.minimum, listing.maximum) == (2, 20)
    assert [item.weight for item in listing.terms] == [1, 6]


@pytest.mark.asyncio
async def test_listing_no_matches(vocabulary):
    """Test listing with nothing matching."""
    listing = await vocabulary.listing("durian")

    assert listing.terms == []
    assert (listing.minimum, listing.maximum) == (0, 0)
