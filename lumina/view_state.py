"""
View-state engine for the catalog browser.

``ViewStateEngine`` owns the session's ``ViewState`` (search text,
category filter, current page and saved ids) and is the only place it
changes. Callers go through the mutation methods below and read the
outcome with ``derive()``, which recomputes the visible page from
scratch on every call. The catalog is small, so a linear scan per
derivation is all the filtering needed.

Search text and category filter are mutually exclusive through the
mutation methods: setting one clears the other. A state that has both
(only possible when constructed directly) matches books satisfying
both.

Every public method holds the engine's re-entrant lock, and the HTTP
routes take ``engine.lock`` around a mutation and the ``derive()`` that
follows it, so each mutate-then-derive cycle runs as one unit even when
requests arrive on different worker threads.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional

from typing_extensions import Literal

from .catalog.schemas import BookRecord
from .catalog.store import CatalogStore
from .models import DEFAULT_TITLE, SEARCH_TITLE, PageItem, ViewResult, ViewState
from .storage import SavedBooksSlot


logger = logging.getLogger(__name__)

ToggleOutcome = Literal["added", "removed"]
Listener = Callable[[], None]


def _matches(book: BookRecord, query: str, category: Optional[str]) -> bool:
    if query and query not in book.title.lower() and query not in book.author.lower():
        return False
    if category and book.category != category:
        return False
    return True


def count_pages(total_items: int, items_per_page: int) -> int:
    """Ceiling division; zero items means zero pages."""
    return (total_items + items_per_page - 1) // items_per_page


class ViewStateEngine:
    """Mutation and derivation entry point for the browser state.

    Parameters
    ----------
    catalog : CatalogStore
        The fixed catalog to browse.
    slot : SavedBooksSlot
        Where saved ids are read from at startup and committed to on
        every toggle.
    items_per_page : int
        Page size for the whole session.
    """

    def __init__(
        self,
        catalog: CatalogStore,
        slot: SavedBooksSlot,
        items_per_page: int = 6,
    ) -> None:
        if items_per_page < 1:
            raise ValueError("items_per_page must be positive")
        self._catalog = catalog
        self._slot = slot
        self._listeners: List[Listener] = []
        self._lock = threading.RLock()
        self._state = ViewState(
            items_per_page=items_per_page,
            saved_ids=self._known_ids(slot.load()),
        )

    def _known_ids(self, ids: List[int]) -> List[int]:
        # Drop duplicates and ids the catalog no longer has
        kept: List[int] = []
        for book_id in ids:
            if book_id in self._catalog and book_id not in kept:
                kept.append(book_id)
        if len(kept) != len(ids):
            logger.info("Ignored %d stale or duplicate saved ids", len(ids) - len(kept))
        return kept

    @property
    def lock(self) -> threading.RLock:
        """Re-entrant lock serialising access to the state.

        Hold it to make a mutation and the ``derive()`` after it atomic.
        """
        return self._lock

    @property
    def state(self) -> ViewState:
        """A copy of the current state; editing it has no effect."""
        with self._lock:
            return self._state.model_copy(deep=True)

    @property
    def catalog(self) -> CatalogStore:
        return self._catalog

    def subscribe(self, listener: Listener) -> None:
        """Register a callback invoked after every state change."""
        with self._lock:
            self._listeners.append(listener)

    def _changed(self) -> None:
        for listener in self._listeners:
            listener()

    # -- mutations ---------------------------------------------------------

    def set_search(self, text: str) -> None:
        with self._lock:
            self._state.search_query = text.lower()
            self._state.filter_category = None
            self._state.current_page = 1
            logger.debug("Search set to %r", self._state.search_query)
            self._changed()

    def set_category_filter(self, category: str) -> None:
        with self._lock:
            self._state.filter_category = category
            self._state.search_query = ""
            self._state.current_page = 1
            logger.debug("Category filter set to %r", category)
            self._changed()

    def clear_filters(self) -> None:
        with self._lock:
            self._state.search_query = ""
            self._state.filter_category = None
            self._state.current_page = 1
            logger.debug("Filters cleared")
            self._changed()

    def go_to_page(self, page: int) -> None:
        """Store ``page`` as the current page, exactly as requested.

        Pages past the end are pulled back by the next ``derive()``.
        Pages are 1-based and callers must not ask for less than 1 (the
        HTTP layer rejects such requests); a page below 1 is stored
        unchanged and derives to an empty page.
        """
        with self._lock:
            self._state.current_page = page
            self._changed()

    def toggle_saved(self, book_id: int) -> Optional[ToggleOutcome]:
        """Add or remove a book from the saved list and persist the list.

        Returns ``"added"`` or ``"removed"``, or ``None`` when the id is
        not in the catalog (nothing changes in that case). The check,
        the change and the commit happen under the engine lock.
        """
        with self._lock:
            if book_id not in self._catalog:
                logger.debug("Ignoring toggle of unknown book id %r", book_id)
                return None
            saved = self._state.saved_ids
            outcome: ToggleOutcome
            if book_id in saved:
                saved.remove(book_id)
                outcome = "removed"
            else:
                saved.append(book_id)
                outcome = "added"
            self._slot.commit(saved)
            logger.debug("Book %d %s; %d saved", book_id, outcome, len(saved))
            self._changed()
            return outcome

    # -- derivation --------------------------------------------------------

    def derive(self) -> ViewResult:
        """Recompute the visible page from the state and the catalog.

        The current page is corrected in place: reset to 1 when nothing
        matches, otherwise capped at the last page.
        """
        with self._lock:
            state = self._state
            filtered = [
                book
                for book in self._catalog.all()
                if _matches(book, state.search_query, state.filter_category)
            ]

            total_items = len(filtered)
            total_pages = count_pages(total_items, state.items_per_page)
            if total_pages == 0:
                state.current_page = 1
            elif state.current_page > total_pages:
                state.current_page = total_pages

            page_items: List[PageItem] = []
            if state.current_page >= 1:
                start = (state.current_page - 1) * state.items_per_page
                end = start + state.items_per_page
                saved = set(state.saved_ids)
                page_items = [
                    PageItem(book=book, is_saved=book.id in saved)
                    for book in filtered[start:end]
                ]

            if state.filter_category:
                title = f"{state.filter_category} Collection"
            elif state.search_query:
                title = SEARCH_TITLE
            else:
                title = DEFAULT_TITLE

            return ViewResult(
                page_items=page_items,
                total_items=total_items,
                total_pages=total_pages,
                current_page=state.current_page,
                title_label=title,
            )

    def saved_books(self) -> List[BookRecord]:
        """Saved records in catalog order."""
        with self._lock:
            saved = set(self._state.saved_ids)
        return [book for book in self._catalog.all() if book.id in saved]
