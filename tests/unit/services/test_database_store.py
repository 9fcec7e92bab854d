"""Tests for the SQLAlchemy vocabulary store."""

import pytest

from backend.src.services.database import SQLVocabularyStore
from backend.src.services.taxonomy import TaxonomyService
from backend.src.types import ErrorCode
from backend.src.utils.exceptions import StoreError, UnknownTermIdError


@pytest.fixture
def database_url(tmp_path):
    """SQLite database in a temporary directory."""
    return f"sqlite+aiosqlite:///{tmp_path / 'tags.db'}"


@pytest.fixture
async def sql_store(database_url):
    """Create an initialized store."""
    store = SQLVocabularyStore(database_url)
    await store.initialize()
    yield store
    await store.cleanup()


@pytest.fixture
async def sql_term_ids(sql_store, seed_vocabulary):
    """Seed the SQL store and return name -> id."""
    return await seed_vocabulary(sql_store)


@pytest.mark.asyncio
async def test_empty_store(sql_store):
    """Test an empty database."""
    assert await sql_store.get_tree() == []
    assert await sql_store.max_count() == 0
    assert await sql_store.min_count() == 0


@pytest.mark.asyncio
async def test_tree(sql_store, sql_term_ids):
    """Test tree order and counts."""
    tree = await sql_store.get_tree()

    assert [(term.display_text, term.count) for term in tree] == [
        ("Apple", 5),
        ("Banana", 2),
        ("Grape", 9),
        ("kiwi", 1),
        ("Mango", 20),
    ]


@pytest.mark.asyncio
async def test_term_without_objects(sql_store):
    """Test terms without objects have a zero count."""
    await sql_store.add_term("Unused")

    tree = await sql_store.get_tree()
    assert [(term.display_text, term.count) for term in tree] == [("Unused", 0)]
    assert await sql_store.min_count() == 0


@pytest.mark.asyncio
async def test_search(sql_store, sql_term_ids):
    """Test substring search ignores case."""
    terms = await sql_store.get_search("AN")
    assert [term.display_text for term in terms] == ["Banana", "Mango"]


@pytest.mark.asyncio
async def test_empty_search_returns_tree(sql_store, sql_term_ids):
    """Test an empty query lists the whole tree."""
    assert await sql_store.get_search("") == await sql_store.get_tree()


@pytest.mark.asyncio
async def test_tree_order_non_ascii(sql_store):
    """Test accented names sort by their lower-cased text."""
    for name in ["Éclair", "éa", "apple"]:
        await sql_store.add_term(name)

    assert [term.display_text for term in await sql_store.get_tree()] == ["apple", "éa", "Éclair"]


@pytest.mark.asyncio
async def test_search_escapes_wildcards(sql_store):
    """Test LIKE wildcards in the query match literally."""
    await sql_store.add_term("100% cotton")
    await sql_store.add_term("1000 cotton")

    terms = await sql_store.get_search("0%")
    assert [term.display_text for term in terms] == ["100% cotton"]


@pytest.mark.asyncio
async def test_counts(sql_store, sql_term_ids):
    """Test count bounds."""
    assert await sql_store.max_count() == 20
    assert await sql_store.min_count() == 1


@pytest.mark.asyncio
async def test_get_by_id(sql_store, sql_term_ids):
    """Test lookup by id."""
    term = await sql_store.get_by_id(sql_term_ids["Grape"])

    assert term.display_text == "Grape"
    assert term.searchable_text == "grape"
    assert term.count == 9


@pytest.mark.asyncio
async def test_get_by_id_unknown(sql_store):
    """Test lookup of a missing id."""
    with pytest.raises(UnknownTermIdError):
        await sql_store.get_by_id(404)


@pytest.mark.asyncio
@pytest.mark.parametrize("term_id", [0, -1, 2 ** 63, 10 ** 20])
async def test_get_by_id_out_of_range(sql_store, term_id):
    """Test ids outside the key range are unknown."""
    with pytest.raises(UnknownTermIdError):
        await sql_store.get_by_id(term_id)
    with pytest.raises(UnknownTermIdError):
        await sql_store.tag_object(term_id, "post-1")


@pytest.mark.asyncio
async def test_delete_skips_out_of_range_id(sql_store, sql_term_ids):
    """Test oversized ids are skipped like stale ones."""
    result = await TaxonomyService(sql_store).delete({sql_term_ids["Apple"], 10 ** 20})

    assert result.deleted_names == ["Apple"]
    assert "Apple" not in [term.display_text for term in await sql_store.get_tree()]


@pytest.mark.asyncio
async def test_add_existing_term(sql_store):
    """Test adding a known name extends its objects."""
    first = await sql_store.add_term("Python", ["post-1"])
    second = await sql_store.add_term("PYTHON", ["post-1", "post-2"])

    assert second.id == first.id
    assert second.display_text == "Python"
    assert second.count == 2


@pytest.mark.asyncio
async def test_delete_term(sql_store, sql_term_ids):
    """Test deleting a term and its associations."""
    term = await sql_store.get_by_id(sql_term_ids["Mango"])
    await sql_store.delete_term(term)

    assert await sql_store.max_count() == 9
    with pytest.raises(UnknownTermIdError):
        await sql_store.get_by_id(term.id)


@pytest.mark.asyncio
async def test_merge_into_new_term(sql_store, sql_term_ids):
    """Test merged sources disappear into a new target."""
    await sql_store.merge("Fruit", ["Apple", "Banana"])

    tree = {term.display_text: term.count for term in await sql_store.get_tree()}
    assert "Apple" not in tree
    assert "Banana" not in tree
    assert tree["Fruit"] == 7


@pytest.mark.asyncio
async def test_merge_into_existing_term(sql_store, sql_term_ids):
    """Test the target keeps its id and takes the new casing."""
    await sql_store.merge("grape", ["Grape", "kiwi"])

    term = await sql_store.get_by_id(sql_term_ids["Grape"])
    assert term.display_text == "grape"
    assert term.count == 10
    with pytest.raises(UnknownTermIdError):
        await sql_store.get_by_id(sql_term_ids["kiwi"])


@pytest.mark.asyncio
async def test_merge_shared_objects(sql_store):
    """Test objects tagged with several sources are kept once."""
    await sql_store.add_term("js", ["a", "b"])
    await sql_store.add_term("javascript", ["b", "c"])

    await sql_store.merge("JavaScript", ["js", "javascript"])

    tree = await sql_store.get_tree()
    assert [(term.display_text, term.count) for term in tree] == [("JavaScript", 3)]


@pytest.mark.asyncio
async def test_tag_object(sql_store):
    """Test tagging objects."""
    term = await sql_store.add_term("Python")
    await sql_store.tag_object(term.id, "post-1")
    await sql_store.tag_object(term.id, "post-1")

    assert (await sql_store.get_by_id(term.id)).count == 1
    with pytest.raises(UnknownTermIdError):
        await sql_store.tag_object(999, "post-1")


@pytest.mark.asyncio
async def test_missing_tables_raise_store_error(database_url):
    """Test driver errors surface as store errors."""
    store = SQLVocabularyStore(database_url)
    try:
        with pytest.raises(StoreError) as exc_info:
            await store.get_tree()
        assert exc_info.value.code == ErrorCode.STORE_ERROR
        assert exc_info.value.details["operation"] == "get_tree"
    finally:
        await store.cleanup()
