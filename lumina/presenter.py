"""
Rendering of engine results into front‑end view models.

Every function here is a pure mapping from data to a schema instance.
None of them read or modify the view state, so they can be used on any
``ViewResult`` snapshot.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .catalog.schemas import (
    BookCard,
    BookRecord,
    CollectionsView,
    EmptyState,
    GalleryView,
    LibraryItem,
    LibraryView,
    PageButton,
    PaginationControls,
)
from .models import PageItem, ViewResult


PLACEHOLDER_IMAGE = "https://via.placeholder.com/300x450/f0f4f9/999999?text=Book+Cover"

TOAST_MESSAGES = {
    "added": "Added to My Library",
    "removed": "Removed from Library",
}


def render_card(item: PageItem, placeholder_image: str = PLACEHOLDER_IMAGE) -> BookCard:
    book = item.book
    return BookCard(
        id=book.id,
        title=book.title,
        author=book.author,
        category=book.category,
        image=book.image or placeholder_image,
        is_saved=item.is_saved,
        save_label="Remove" if item.is_saved else "Save",
        save_icon="bookmark" if item.is_saved else "bookmark_border",
        download_url=book.pdf_url,
        download_name=f"{book.title}.pdf",
    )


def render_pagination(current_page: int, total_pages: int) -> Optional[PaginationControls]:
    """Build the pager, or ``None`` when everything fits on one page."""
    if total_pages <= 1:
        return None
    pages = [
        PageButton(label=str(number), page=number, active=number == current_page)
        for number in range(1, total_pages + 1)
    ]
    return PaginationControls(
        previous=PageButton(
            label="chevron_left",
            page=current_page - 1,
            disabled=current_page == 1,
        ),
        pages=pages,
        next=PageButton(
            label="chevron_right",
            page=current_page + 1,
            disabled=current_page == total_pages,
        ),
    )


def render_gallery(result: ViewResult, placeholder_image: str = PLACEHOLDER_IMAGE) -> GalleryView:
    """Turn a derived result into the grid the page displays.

    Parameters
    ----------
    result : ViewResult
        Output of ``ViewStateEngine.derive()``.
    placeholder_image : str
        Cover used for books that have no image.

    Returns
    -------
    GalleryView
        Header, cards and pager. When nothing matched, ``cards`` is
        empty, ``empty_state`` is set and no pager is built.
    """
    view = GalleryView(
        title=result.title_label,
        result_count=f"{result.total_items} books found",
        total_items=result.total_items,
        total_pages=result.total_pages,
        current_page=result.current_page,
    )
    if result.total_items == 0:
        view.empty_state = EmptyState()
        return view
    view.cards = [render_card(item, placeholder_image) for item in result.page_items]
    view.pagination = render_pagination(result.current_page, result.total_pages)
    return view


def render_library(
    books: Sequence[BookRecord], placeholder_image: str = PLACEHOLDER_IMAGE
) -> LibraryView:
    if not books:
        return LibraryView(
            empty_message="Your library is empty. Tap the bookmark icon to save books."
        )
    items = [
        LibraryItem(
            id=b.id,
            title=b.title,
            image=b.image or placeholder_image,
            remove_path=f"/api/library/saved/{b.id}",
        )
        for b in books
    ]
    return LibraryView(caption=f"{len(items)} items saved locally", items=items)


def render_collections(categories: Iterable[str]) -> CollectionsView:
    return CollectionsView(categories=list(categories))


def toast_for(outcome: Optional[str]) -> Optional[str]:
    if outcome is None:
        return None
    return TOAST_MESSAGES[outcome]
