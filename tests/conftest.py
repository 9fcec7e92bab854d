"""
Test configuration and fixtures for the entire test suite.
"""
from typing import Dict

import pytest

from backend.src.config import Settings
from backend.src.services.memory_store import InMemoryVocabularyStore
from backend.src.utils.wsse import WSSECredentials

# Constants for testing
TEST_WSSE_SECRET = "test-wsse-secret"
TEST_SESSION_SECRET = "test-session-secret"

# Display name -> number of distinct content objects
SEED_TERMS = {
    "Apple": 5,
    "Banana": 2,
    "Grape": 9,
    "kiwi": 1,
    "Mango": 20,
}


async def populate(store) -> Dict[str, int]:
    """Populate a store with SEED_TERMS and return name -> id."""
    ids = {}
    for name, count in SEED_TERMS.items():
        term = await store.add_term(name, [f"{name.lower()}-{n}" for n in range(count)])
        ids[name] = term.id
    return ids


@pytest.fixture
def seed_vocabulary():
    """Coroutine function seeding any store."""
    return populate


@pytest.fixture
def settings() -> Settings:
    """Create settings independent of the process environment."""
    return Settings(
        WSSE_SECRET=TEST_WSSE_SECRET,
        SESSION_SECRET=TEST_SESSION_SECRET,
        _env_file=None
    )


@pytest.fixture
def credentials() -> WSSECredentials:
    """Create credentials sharing the test secret."""
    return WSSECredentials(TEST_WSSE_SECRET)


@pytest.fixture
def auth_fields(credentials) -> Dict[str, str]:
    """A valid nonce/timestamp/digest triple."""
    token = credentials.issue()
    return {"nonce": token.nonce, "timestamp": token.timestamp, "digest": token.digest}


@pytest.fixture
def bad_auth_fields(auth_fields) -> Dict[str, str]:
    """A triple whose digest does not match."""
    return {**auth_fields, "digest": "bm90LXRoZS1kaWdlc3Q="}


@pytest.fixture
def store() -> InMemoryVocabularyStore:
    """Create an empty in-memory store."""
    return InMemoryVocabularyStore()


@pytest.fixture
async def term_ids(store) -> Dict[str, int]:
    """Seed the in-memory store and return name -> id."""
    return await populate(store)
