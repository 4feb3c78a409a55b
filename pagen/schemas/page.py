"""
Page schemas - Pydantic models for page submission and admin endpoints.
These define the request/response formats; FastAPI rejects malformed input
with 422 and field-level detail before any handler code runs.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# REQUEST SCHEMAS (what the client sends)
# ---------------------------------------------------------------------------

class PageSubmission(BaseModel):
    """
    Schema for submitting a page generation request.

    Example request body:
    {
        "character_name": "Alice",
        "character_setting": "A brave knight",
        "webpage_title": "Alice's Tale",
        "character_comment": "Great read!",
        "model": "deepseek-v3"
    }
    """
    character_name: str = Field(..., min_length=1, description="Character name")
    character_setting: str = Field(..., min_length=1, description="Background, personality, abilities")
    webpage_title: str = Field(..., min_length=1, description="Title of the page to generate")
    character_comment: str = Field(
        ..., min_length=1, description="What the character says when reposting the page"
    )

    # model: Omitted -> the configured default model
    # - Checked against the configured model endpoints by the handler
    model: Optional[str] = Field(None, min_length=1, description="Language model to generate with")


class AddHtmlRequest(BaseModel):
    """
    Schema for importing a finished page.

    Example request body:
    {
        "slug": "my-page",
        "html": "<html>...</html>",
        "model": "gpt-4",
        "prompt": "Generate a test page"
    }
    """
    slug: str = Field(..., min_length=1)
    html: str = Field(..., min_length=1)
    model: Optional[str] = None
    prompt: Optional[str] = None


# ---------------------------------------------------------------------------
# RESPONSE SCHEMAS (what the server returns)
# ---------------------------------------------------------------------------

class PageSubmitResponse(BaseModel):
    """
    Example response:
    {
        "message": "Page submission successful",
        "id": 1,
        "url": "/gen/1"
    }
    """
    message: str
    id: int
    url: str


class PageSummary(BaseModel):
    """One row of GET /tmp-task/list."""
    id: int
    slug: str
    title: str
    model: str
    created_at: datetime
    description: str


class PageListResponse(BaseModel):
    count: int
    pages: List[PageSummary]


class AddHtmlResponse(BaseModel):
    message: str
    slug: str
    title: str
    action: str
    model: str


class ImportedPage(BaseModel):
    """One imported file (or built-in sample) of POST /tmp-task/add-test-files."""
    filename: Optional[str] = None
    slug: str
    title: str
    action: str
    model: str


class ImportResponse(BaseModel):
    message: str
    results: List[ImportedPage]
    note: str


class MessageResponse(BaseModel):
    message: str
