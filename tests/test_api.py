"""Tests for the HTTP surface of the browser."""

import json
import threading
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from lumina.config import LuminaConfig, StorageConfig
from lumina.catalog.router import toggle_saved as toggle_saved_route
from lumina.main import create_app
from lumina.storage import JsonFileStore, SavedBooksSlot


@pytest.fixture
def storage_path(tmp_path: Path) -> Path:
    return tmp_path / "local_storage.json"


@pytest.fixture
def client(storage_path: Path) -> TestClient:
    config = LuminaConfig(storage=StorageConfig(path=str(storage_path)))
    return TestClient(create_app(config))


class TestHealth:
    def test_health_check(self, client: TestClient) -> None:
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "books": 12}


class TestGallery:
    def test_initial_view(self, client: TestClient) -> None:
        data = client.get("/api/library/view").json()
        assert data["title"] == "Trending Now"
        assert data["result_count"] == "12 books found"
        assert [c["id"] for c in data["cards"]] == [1, 2, 3, 4, 5, 6]
        assert data["pagination"]["previous"]["disabled"] is True

    def test_page_then_search(self, client: TestClient) -> None:
        data = client.post("/api/library/page", json={"page": 2}).json()
        assert [c["id"] for c in data["cards"]] == [7, 8, 9, 10, 11, 12]
        assert data["pagination"]["next"]["disabled"] is True

        data = client.post("/api/library/search", json={"text": "Zero"}).json()
        assert data["total_items"] == 1
        assert data["current_page"] == 1
        assert data["cards"][0]["title"] == "Zero to One"
        assert data["title"] == "Search Results"

    def test_page_past_end_is_clamped(self, client: TestClient) -> None:
        data = client.post("/api/library/page", json={"page": 99}).json()
        assert data["current_page"] == 2

    def test_page_below_one_rejected(self, client: TestClient) -> None:
        response = client.post("/api/library/page", json={"page": 0})
        assert response.status_code == 422

    def test_category_and_reset(self, client: TestClient) -> None:
        data = client.post("/api/library/category", json={"category": "Sci-Fi"}).json()
        assert data["title"] == "Sci-Fi Collection"
        assert [c["id"] for c in data["cards"]] == [12]

        data = client.post("/api/library/reset").json()
        assert data["total_items"] == 12

    def test_no_results(self, client: TestClient) -> None:
        data = client.post("/api/library/search", json={"text": "zzz"}).json()
        assert data["cards"] == []
        assert data["pagination"] is None
        assert data["empty_state"]["action_label"] == "Clear Filters"


class TestSaved:
    def test_toggle_persists(self, client: TestClient, storage_path: Path) -> None:
        data = client.post("/api/library/saved/5").json()
        assert data["toast"] == "Added to My Library"
        card = next(c for c in data["view"]["cards"] if c["id"] == 5)
        assert card["is_saved"] is True
        assert card["save_label"] == "Remove"

        stored = json.loads(storage_path.read_text())
        assert json.loads(stored["lumina_saved_books"]) == [5]

        data = client.post("/api/library/saved/5").json()
        assert data["toast"] == "Removed from Library"
        stored = json.loads(storage_path.read_text())
        assert json.loads(stored["lumina_saved_books"]) == []

    def test_unknown_book_is_ignored(self, client: TestClient, storage_path: Path) -> None:
        response = client.post("/api/library/saved/999")
        assert response.status_code == 200
        assert response.json()["toast"] is None
        assert not storage_path.exists()

    def test_library_drawer(self, client: TestClient) -> None:
        assert client.get("/api/library/saved").json()["items"] == []
        client.post("/api/library/saved/9")
        client.post("/api/library/saved/2")
        data = client.get("/api/library/saved").json()
        assert [i["id"] for i in data["items"]] == [2, 9]
        assert data["caption"] == "2 items saved locally"

    def test_saved_books_survive_restart(self, storage_path: Path) -> None:
        config = LuminaConfig(storage=StorageConfig(path=str(storage_path)))
        TestClient(create_app(config)).post("/api/library/saved/3")

        restarted = TestClient(create_app(config))
        data = restarted.get("/api/library/saved").json()
        assert [i["id"] for i in data["items"]] == [3]


class TestCatalogEndpoints:
    def test_collections(self, client: TestClient) -> None:
        data = client.get("/api/library/collections").json()
        assert "Sci-Fi" in data["categories"]
        assert data["title"] == "Collections"

    def test_get_book(self, client: TestClient) -> None:
        data = client.get("/api/library/books/12").json()
        assert data["title"] == "Project Hail Mary"
        assert data["pdf_url"] == "library_files/hail_mary.pdf"

    def test_get_missing_book(self, client: TestClient) -> None:
        response = client.get("/api/library/books/404")
        assert response.status_code == 404

    def test_drawer_remove_path_unsaves(self, client: TestClient) -> None:
        client.post("/api/library/saved/4")
        item = client.get("/api/library/saved").json()["items"][0]
        assert item["remove_label"] == "Remove"

        data = client.post(item["remove_path"]).json()
        assert data["toast"] == "Removed from Library"
        assert client.get("/api/library/saved").json()["items"] == []


class TestConcurrentRequests:
    def test_parallel_toggles_match_storage(self, storage_path: Path) -> None:
        config = LuminaConfig(storage=StorageConfig(path=str(storage_path)))
        engine = create_app(config).state.engine
        placeholder = config.presentation.placeholder_image
        toasts = []

        def worker() -> None:
            for _ in range(5):
                response = toggle_saved_route(5, engine=engine, placeholder=placeholder)
                card = next(c for c in response.view.cards if c.id == 5)
                # The view is derived under the same lock as the toggle
                expected = "Added to My Library" if card.is_saved else "Removed from Library"
                toasts.append(response.toast == expected)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert all(toasts)
        assert engine.state.saved_ids == []
        assert SavedBooksSlot(JsonFileStore(storage_path)).load() == []
