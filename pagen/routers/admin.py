"""
Admin Router - maintenance endpoints operating directly on the page table.

Mounted under /tmp-task. No generation happens here; these endpoints list,
clear and import finished pages (e.g. to compare the output of several
models side by side through /gen/{id}).
"""

import logging

from fastapi import APIRouter, Depends

from pagen.core.config import Settings
from pagen.deps import get_page_store, get_settings
from pagen.schemas.page import (
    AddHtmlRequest,
    AddHtmlResponse,
    ImportResponse,
    MessageResponse,
    PageListResponse,
    PageSummary,
)
from pagen.services.demo_pages import import_test_pages
from pagen.services.html_metadata import extract_description, extract_title
from pagen.services.page_store import PageStore

logger = logging.getLogger("pagen.routers.admin")


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(prefix="/tmp-task", tags=["admin"])


@router.get("/")
def admin_help():
    """Describe the available maintenance endpoints."""
    return {
        "message": "Temporary task endpoint - Import HTML files to database",
        "available_endpoints": [
            "GET / - This help message",
            "POST /add-html - Add single HTML page (requires: {slug, html, model?, prompt?})",
            "POST /add-test-files - Import HTML files from the test results directory",
            "GET /list - List all pages in database",
            "DELETE /clear - Clear all pages from database",
        ],
        "usage_examples": {
            "add_single_html": {
                "method": "POST",
                "url": "/tmp-task/add-html",
                "body": {
                    "slug": "my-page",
                    "html": "<html>...</html>",
                    "model": "gpt-4",
                    "prompt": "Generate a test page",
                },
            },
        },
    }


@router.get("/list", response_model=PageListResponse)
def list_pages(store: PageStore = Depends(get_page_store)):
    """List every page with a shortened description."""
    pages = store.list_pages()
    return PageListResponse(
        count=len(pages),
        pages=[
            PageSummary(
                id=page.id,
                slug=page.slug,
                title=page.title,
                model=page.model,
                created_at=page.created_at,
                description=(page.description or "")[:100] + "...",
            )
            for page in pages
        ],
    )


@router.delete("/clear", response_model=MessageResponse)
def clear_pages(store: PageStore = Depends(get_page_store)):
    """Delete every page."""
    store.clear()
    return MessageResponse(message="All pages cleared from database")


@router.post("/add-html", response_model=AddHtmlResponse)
def add_html_page(
    payload: AddHtmlRequest,
    store: PageStore = Depends(get_page_store),
):
    """
    Import one finished page, replacing any page with the same slug.

    Title and description are read from the HTML itself.
    """
    title = extract_title(payload.html)
    model = payload.model or "unknown"

    action = store.upsert_page(
        slug=payload.slug,
        html=payload.html,
        model=model,
        prompt=payload.prompt or "Manually uploaded HTML content",
        title=title,
        description=extract_description(payload.html),
    )

    return AddHtmlResponse(
        message=f"HTML page {action} successfully",
        slug=payload.slug,
        title=title,
        action=action,
        model=model,
    )


@router.post("/add-test-files", response_model=ImportResponse)
def add_test_files(
    store: PageStore = Depends(get_page_store),
    settings: Settings = Depends(get_settings),
):
    """Import the HTML files of TEST_PAGES_DIR (or the built-in samples)."""
    outcome = import_test_pages(store, settings.TEST_PAGES_DIR)
    return ImportResponse(
        message=outcome.message,
        results=outcome.results,
        note=outcome.note,
    )
