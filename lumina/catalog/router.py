"""
Route definitions for the library browser.

Endpoints under /api/library:
- GET  /view              : current gallery page
- POST /search            : set the search text
- POST /category          : filter by one category
- POST /reset             : clear search and category
- POST /page              : move to another page
- POST /saved/{book_id}   : save or unsave a book
- GET  /saved             : the "My Library" drawer
- GET  /collections       : the "Collections" drawer
- GET  /books/{book_id}   : one catalog record

Every mutating endpoint answers with the re-rendered gallery, so the
front‑end can redraw straight from the response.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from ..presenter import render_collections, render_gallery, render_library, toast_for
from ..view_state import ViewStateEngine
from .schemas import (
    BookRecord,
    CategoryRequest,
    CollectionsView,
    GalleryView,
    LibraryView,
    PageRequest,
    SearchRequest,
    ToggleResponse,
)


router = APIRouter(prefix="/api/library", tags=["library"])


def get_engine(request: Request) -> ViewStateEngine:
    return request.app.state.engine


def get_placeholder(request: Request) -> str:
    return request.app.state.config.presentation.placeholder_image


def _gallery(engine: ViewStateEngine, placeholder: str) -> GalleryView:
    return render_gallery(engine.derive(), placeholder)


# Routes run on worker threads and share one engine. Each one holds
# ``engine.lock`` across its mutation and the derive that follows.


@router.get("/view", response_model=GalleryView)
def current_view(
    engine: ViewStateEngine = Depends(get_engine),
    placeholder: str = Depends(get_placeholder),
) -> GalleryView:
    return _gallery(engine, placeholder)


@router.post("/search", response_model=GalleryView)
def search(
    req: SearchRequest,
    engine: ViewStateEngine = Depends(get_engine),
    placeholder: str = Depends(get_placeholder),
) -> GalleryView:
    with engine.lock:
        engine.set_search(req.text)
        return _gallery(engine, placeholder)


@router.post("/category", response_model=GalleryView)
def filter_by_category(
    req: CategoryRequest,
    engine: ViewStateEngine = Depends(get_engine),
    placeholder: str = Depends(get_placeholder),
) -> GalleryView:
    with engine.lock:
        engine.set_category_filter(req.category)
        return _gallery(engine, placeholder)


@router.post("/reset", response_model=GalleryView)
def reset_view(
    engine: ViewStateEngine = Depends(get_engine),
    placeholder: str = Depends(get_placeholder),
) -> GalleryView:
    with engine.lock:
        engine.clear_filters()
        return _gallery(engine, placeholder)


@router.post("/page", response_model=GalleryView)
def change_page(
    req: PageRequest,
    engine: ViewStateEngine = Depends(get_engine),
    placeholder: str = Depends(get_placeholder),
) -> GalleryView:
    with engine.lock:
        engine.go_to_page(req.page)
        return _gallery(engine, placeholder)


@router.post("/saved/{book_id}", response_model=ToggleResponse)
def toggle_saved(
    book_id: int,
    engine: ViewStateEngine = Depends(get_engine),
    placeholder: str = Depends(get_placeholder),
) -> ToggleResponse:
    """Save or unsave a book.

    Unknown ids leave everything unchanged and come back with no toast.
    """
    with engine.lock:
        outcome = engine.toggle_saved(book_id)
        view = _gallery(engine, placeholder)
    return ToggleResponse(view=view, toast=toast_for(outcome))


@router.get("/saved", response_model=LibraryView)
def saved_books(
    engine: ViewStateEngine = Depends(get_engine),
    placeholder: str = Depends(get_placeholder),
) -> LibraryView:
    return render_library(engine.saved_books(), placeholder)


@router.get("/collections", response_model=CollectionsView)
def collections(engine: ViewStateEngine = Depends(get_engine)) -> CollectionsView:
    return render_collections(engine.catalog.categories())


@router.get("/books/{book_id}", response_model=BookRecord)
def get_book(book_id: int, engine: ViewStateEngine = Depends(get_engine)) -> BookRecord:
    book = engine.catalog.get(book_id)
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return book
