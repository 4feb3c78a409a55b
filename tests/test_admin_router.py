"""
Tests for the /tmp-task maintenance endpoints.
"""

from pathlib import Path

from fastapi.testclient import TestClient

from pagen.core.config import Settings
from pagen.models.page import HtmlPage
from pagen.services.demo_pages import SAMPLE_PAGES
from pagen.services.page_store import PageStore


PAGE_HTML = """<!DOCTYPE html>
<html>
<head>
    <title>Knight's Diary</title>
    <meta name="description" content="A day in the life of Alice">
</head>
<body><p>Hello</p></body>
</html>"""


class TestAdminHelp:

    def test_help_lists_endpoints(self, client: TestClient):
        """Should describe the maintenance endpoints."""
        response = client.get("/tmp-task/")

        assert response.status_code == 200
        assert len(response.json()["available_endpoints"]) == 5


class TestListAndClear:
    """Tests for GET /tmp-task/list and DELETE /tmp-task/clear."""

    def test_list_empty(self, client: TestClient):
        response = client.get("/tmp-task/list")

        assert response.status_code == 200
        assert response.json() == {"count": 0, "pages": []}

    def test_list_pages(
        self, client: TestClient, pending_page: HtmlPage, generated_page: HtmlPage
    ):
        """Should list every page with a shortened description."""
        data = client.get("/tmp-task/list").json()

        assert data["count"] == 2
        assert [p["slug"] for p in data["pages"]] == ["alice----a1b2c3", "bob----d4e5f6"]
        assert data["pages"][0]["description"] == "关于角色 Alice 的页面..."
        assert data["pages"][1]["model"] == "seed1.6"

    def test_list_truncates_long_description(self, client: TestClient, store: PageStore):
        """Should cut descriptions to 100 characters plus an ellipsis."""
        store.create_page(
            slug="long", prompt="p", model="deepseek-v3", title="Long", description="x" * 300
        )

        page = client.get("/tmp-task/list").json()["pages"][0]

        assert page["description"] == "x" * 100 + "..."

    def test_clear(self, client: TestClient, store: PageStore, pending_page: HtmlPage):
        """Should delete every page."""
        response = client.delete("/tmp-task/clear")

        assert response.status_code == 200
        assert response.json() == {"message": "All pages cleared from database"}
        assert store.list_pages() == []
        assert client.get(f"/gen/{pending_page.id}").status_code == 404


class TestAddHtml:
    """Tests for POST /tmp-task/add-html."""

    def test_create(self, client: TestClient, store: PageStore):
        """Should insert a page with title and description read from the HTML."""
        response = client.post(
            "/tmp-task/add-html", json={"slug": "diary", "html": PAGE_HTML, "model": "gpt-4"}
        )

        assert response.status_code == 200
        assert response.json() == {
            "message": "HTML page created successfully",
            "slug": "diary",
            "title": "Knight's Diary",
            "action": "created",
            "model": "gpt-4",
        }
        page = store.get_page_by_slug("diary")
        assert page.description == "A day in the life of Alice"
        assert page.prompt == "Manually uploaded HTML content"

    def test_update_existing_slug(self, client: TestClient, store: PageStore):
        """Should replace the page with the same slug."""
        client.post("/tmp-task/add-html", json={"slug": "diary", "html": PAGE_HTML})

        response = client.post(
            "/tmp-task/add-html", json={"slug": "diary", "html": "<h1>v2</h1>"}
        )

        assert response.json()["action"] == "updated"
        assert response.json()["model"] == "unknown"
        assert len(store.list_pages()) == 1
        page = store.get_page_by_slug("diary")
        assert page.html == "<h1>v2</h1>"
        assert page.title == "Untitled"

    def test_imported_page_served_without_model(self, client: TestClient, provider):
        """Should serve an imported page from /gen without generating."""
        client.post("/tmp-task/add-html", json={"slug": "diary", "html": PAGE_HTML})
        page_id = client.get("/tmp-task/list").json()["pages"][0]["id"]

        response = client.get(f"/gen/{page_id}")

        assert response.text == PAGE_HTML
        assert provider.calls == []

    def test_missing_html(self, client: TestClient):
        """Should return 422 without html."""
        response = client.post("/tmp-task/add-html", json={"slug": "diary"})

        assert response.status_code == 422


class TestAddTestFiles:
    """Tests for POST /tmp-task/add-test-files."""

    def test_falls_back_to_samples(self, client: TestClient, store: PageStore):
        """Should import the built-in samples when the directory is missing."""
        response = client.post("/tmp-task/add-test-files")

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == f"Successfully processed {len(SAMPLE_PAGES)} sample test files"
        assert all(r["action"] == "created (sample)" for r in data["results"])
        assert {p.slug for p in store.list_pages()} == set(SAMPLE_PAGES)

    def test_samples_reimport_updates(self, client: TestClient, store: PageStore):
        """Should update rather than duplicate on a second import."""
        client.post("/tmp-task/add-test-files")
        data = client.post("/tmp-task/add-test-files").json()

        assert all(r["action"] == "updated (sample)" for r in data["results"])
        assert len(store.list_pages()) == len(SAMPLE_PAGES)

    def test_imports_directory(
        self, client: TestClient, store: PageStore, test_settings: Settings
    ):
        """Should import each .html file, deriving slug and model from its name."""
        directory = Path(test_settings.TEST_PAGES_DIR)
        directory.mkdir()
        (directory / "Sonnet 4.html").write_text(PAGE_HTML, encoding="utf-8")
        (directory / "notes.txt").write_text("ignored", encoding="utf-8")

        data = client.post("/tmp-task/add-test-files").json()

        assert data["message"] == "Successfully processed 1 HTML files"
        assert data["results"] == [{
            "filename": "Sonnet 4.html",
            "slug": "sonnet-4",
            "title": "Knight's Diary",
            "action": "created",
            "model": "Sonnet 4",
        }]
        assert store.get_page_by_slug("sonnet-4").html == PAGE_HTML
