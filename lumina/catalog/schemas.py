"""
Pydantic schema definitions for the catalog module.

The ``BookRecord`` model captures one entry of the fixed book catalog.
The remaining models are the display-oriented shapes handed to the
front‑end: a gallery page with its cards and pagination controls, the
"My Library" drawer and the "Collections" drawer. They carry
everything needed to draw the page so that the client never has to
re-derive counts, labels or disabled states on its own.
"""

from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class BookRecord(BaseModel):
    """A single catalog entry.

    Records are immutable: the catalog is fixed data loaded once at
    startup. ``image`` and ``pdf_url`` are plain strings (relative
    paths or URLs). The data file may spell the document reference as
    ``pdfUrl``; both spellings are accepted on load.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(gt=0)
    title: str
    author: str
    category: str
    image: str = ""
    pdf_url: str = Field(
        default="", validation_alias=AliasChoices("pdf_url", "pdfUrl")
    )


class BookCard(BaseModel):
    """A book as drawn in the gallery grid."""

    id: int
    title: str
    author: str
    category: str
    image: str
    is_saved: bool = False
    # Label and icon of the bookmark button flip with ``is_saved``.
    save_label: str = "Save"
    save_icon: str = "bookmark_border"
    download_url: str = ""
    download_name: str = ""


class PageButton(BaseModel):
    label: str
    page: int
    active: bool = False
    disabled: bool = False


class PaginationControls(BaseModel):
    """Previous button, one button per page, next button."""

    previous: PageButton
    pages: List[PageButton]
    next: PageButton


class EmptyState(BaseModel):
    message: str = "No books found. Try a different search."
    action_label: str = "Clear Filters"


class GalleryView(BaseModel):
    """The rendered grid for the current view state.

    ``empty_state`` is only set when nothing matched; ``pagination`` is
    only set when there is more than one page.
    """

    title: str
    result_count: str
    total_items: int
    total_pages: int
    current_page: int
    cards: List[BookCard] = Field(default_factory=list)
    empty_state: Optional[EmptyState] = None
    pagination: Optional[PaginationControls] = None


class LibraryItem(BaseModel):
    """A saved book in the drawer, with its remove action."""

    id: int
    title: str
    image: str
    remove_label: str = "Remove"
    # Route that toggles the book off the saved list
    remove_path: str = ""


class LibraryView(BaseModel):
    """Contents of the "My Library" drawer."""

    title: str = "My Library"
    caption: Optional[str] = None
    items: List[LibraryItem] = Field(default_factory=list)
    # Shown instead of ``items`` when nothing is saved.
    empty_message: Optional[str] = None


class CollectionsView(BaseModel):
    """Contents of the "Collections" drawer."""

    title: str = "Collections"
    caption: str = "Filter by category"
    categories: List[str] = Field(default_factory=list)
    reset_label: str = "Show All Books"


class SearchRequest(BaseModel):
    text: str = ""


class CategoryRequest(BaseModel):
    category: str


class PageRequest(BaseModel):
    page: int = Field(ge=1, description="Requested page (1-indexed)")


class ToggleResponse(BaseModel):
    """Result of a bookmark click: the re-rendered grid plus toast text."""

    view: GalleryView
    toast: Optional[str] = None
