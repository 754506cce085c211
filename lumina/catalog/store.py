"""
Read-only data store for the book catalog.

The catalog is a fixed, ordered list of ``BookRecord`` entries loaded
once from a JSON file (``lumina/data/books.json`` unless configured
otherwise). Nothing in the application adds, edits or removes books at
runtime; the store only hands out the records in their original order.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Union

from pydantic import ValidationError

from .schemas import BookRecord


logger = logging.getLogger(__name__)

# Bundled sample catalog
DATA_FILE = Path(__file__).resolve().parents[1] / "data" / "books.json"


class CatalogStore:
    """Immutable, ordered collection of book records.

    Parameters
    ----------
    books : Iterable[BookRecord]
        Records in display order. When two records share an id the
        first one wins and the duplicate is dropped with a warning.
    """

    def __init__(self, books: Iterable[BookRecord] = ()) -> None:
        records: List[BookRecord] = []
        index: Dict[int, BookRecord] = {}
        for book in books:
            if book.id in index:
                logger.warning("Duplicate book id %s in catalog; keeping the first entry", book.id)
                continue
            index[book.id] = book
            records.append(book)
        self._books = tuple(records)
        self._index = index

    def all(self) -> List[BookRecord]:
        """Return the full catalog in its stable order."""
        return list(self._books)

    def get(self, book_id: int) -> Optional[BookRecord]:
        return self._index.get(book_id)

    def categories(self) -> List[str]:
        """Distinct categories in first-seen catalog order."""
        seen: List[str] = []
        for book in self._books:
            if book.category not in seen:
                seen.append(book.category)
        return seen

    def __contains__(self, book_id: object) -> bool:
        return book_id in self._index

    def __iter__(self) -> Iterator[BookRecord]:
        return iter(self._books)

    def __len__(self) -> int:
        return len(self._books)


def _parse_entries(raw: object) -> List[BookRecord]:
    if not isinstance(raw, list):
        raise ValueError(f"expected a list of books, got {type(raw).__name__}")
    books: List[BookRecord] = []
    for position, entry in enumerate(raw):
        try:
            books.append(BookRecord.model_validate(entry))
        except ValidationError as exc:
            # One bad row should not hide the rest of the catalog
            logger.warning("Skipping catalog entry #%d: %s", position, exc)
    return books


def load_catalog(path: Union[str, Path, None] = None) -> CatalogStore:
    """Load the catalog from a JSON file.

    Parameters
    ----------
    path : str | Path | None
        Location of the data file. Defaults to the bundled
        ``DATA_FILE``.

    Returns
    -------
    CatalogStore
        The loaded catalog. A missing or malformed file is logged and
        produces an empty store rather than an exception.
    """
    data_file = Path(path) if path is not None else DATA_FILE
    try:
        with data_file.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        books = _parse_entries(raw)
    except (OSError, ValueError) as exc:
        logger.error("Could not load catalog from %s: %s", data_file, exc)
        return CatalogStore()
    store = CatalogStore(books)
    logger.info("Loaded %d books from %s", len(store), data_file)
    return store
