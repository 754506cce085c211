# lumina/models.py
from typing import List, Optional

from pydantic import BaseModel, Field

from .catalog.schemas import BookRecord

DEFAULT_TITLE = "Trending Now"
SEARCH_TITLE = "Search Results"


class ViewState(BaseModel):
    """Session state of the browser. Only ``ViewStateEngine`` mutates it."""

    search_query: str = ""
    filter_category: Optional[str] = None
    current_page: int = 1
    items_per_page: int = Field(default=6, gt=0)
    saved_ids: List[int] = Field(
        default_factory=list,
        description="Saved book ids, unique, in the order they were saved.",
    )


class PageItem(BaseModel):
    book: BookRecord
    is_saved: bool = False


class ViewResult(BaseModel):
    """Snapshot produced by ``ViewStateEngine.derive()``."""

    page_items: List[PageItem] = Field(default_factory=list)
    total_items: int = 0
    total_pages: int = 0
    current_page: int = 1
    title_label: str = DEFAULT_TITLE
