"""Shared fixtures for the Lumina tests."""

import pytest

from lumina.catalog.store import CatalogStore, load_catalog
from lumina.storage import MemoryStore, SavedBooksSlot
from lumina.view_state import ViewStateEngine


@pytest.fixture
def catalog() -> CatalogStore:
    return load_catalog()


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def slot(memory_store: MemoryStore) -> SavedBooksSlot:
    return SavedBooksSlot(memory_store)


@pytest.fixture
def engine(catalog: CatalogStore, slot: SavedBooksSlot) -> ViewStateEngine:
    return ViewStateEngine(catalog, slot, items_per_page=6)
