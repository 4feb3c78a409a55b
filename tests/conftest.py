"""
Test configuration and fixtures for pytest.

This module provides shared fixtures used across all tests:
- Test database (SQLite in-memory for speed)
- Scripted model provider (no network, deterministic chunks)
- Application context and test client
- Sample pages
"""

import asyncio

import pytest
from typing import AsyncIterator, Generator, List, Optional

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pagen.ai.gateway import ModelGateway
from pagen.ai.providers.base import AIProvider, ProviderError, ProviderType
from pagen.core.config import Settings
from pagen.db.base import Base
from pagen.deps import AppContext
from pagen.main import create_app
from pagen.models.page import HtmlPage
from pagen.services.page_store import PageStore


# ---------------------------------------------------------------------------
# TEST DATABASE SETUP
# ---------------------------------------------------------------------------
# StaticPool keeps the same in-memory connection across sessions and threads

SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, expire_on_commit=False, bind=engine
)

TEST_ENDPOINTS = {
    "deepseek-v3": "ep-test-deepseek",
    "seed1.6": "ep-test-seed",
}

ALICE_CHUNKS = ["```html\n<h1>", "Alice", "</h1>\n```"]


# ---------------------------------------------------------------------------
# SCRIPTED PROVIDER
# ---------------------------------------------------------------------------

class ScriptedProvider(AIProvider):
    """
    Provider that replays a fixed list of chunks.

    Attributes:
        calls: One entry per stream that actually started
        closed: Whether the last stream was closed before finishing
        fail_after: Raise ProviderError after this many chunks
        hang_after: Block forever after this many chunks
        hanging: Set once the stream is blocked
    """

    provider_type = ProviderType.OPENAI

    def __init__(
        self,
        chunks: Optional[List[str]] = None,
        fail_after: Optional[int] = None,
        hang_after: Optional[int] = None,
    ):
        self.chunks = list(chunks if chunks is not None else ALICE_CHUNKS)
        self.fail_after = fail_after
        self.hang_after = hang_after
        self.hanging = asyncio.Event()
        self.calls: List[dict] = []
        self.closed = False

    async def stream(
        self,
        prompt: str,
        model: str,
        system_prompt: Optional[str] = None,
        temperature: float = 0.7,
    ) -> AsyncIterator[str]:
        self.calls.append({
            "prompt": prompt,
            "model": model,
            "system_prompt": system_prompt,
            "temperature": temperature,
        })
        finished = False
        try:
            for index, chunk in enumerate(self.chunks):
                if self.fail_after is not None and index >= self.fail_after:
                    raise ProviderError("connection reset by peer")
                if self.hang_after is not None and index >= self.hang_after:
                    self.hanging.set()
                    await asyncio.Event().wait()
                yield chunk
            finished = True
        finally:
            self.closed = not finished


# ---------------------------------------------------------------------------
# DATABASE FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture(scope="function")
def store() -> Generator[PageStore, None, None]:
    """
    Page store over a fresh database for each test function.
    """
    Base.metadata.create_all(bind=engine)
    try:
        yield PageStore(TestingSessionLocal)
    finally:
        Base.metadata.drop_all(bind=engine)


# ---------------------------------------------------------------------------
# MODEL FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def provider() -> ScriptedProvider:
    return ScriptedProvider()


@pytest.fixture
def gateway(provider: ScriptedProvider) -> ModelGateway:
    return ModelGateway(
        provider=provider,
        endpoints=TEST_ENDPOINTS,
        default_model="deepseek-v3",
    )


# ---------------------------------------------------------------------------
# APPLICATION FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=SQLALCHEMY_DATABASE_URL,
        LLM_API_KEY="",
        MODEL_ENDPOINTS=TEST_ENDPOINTS,
        DEFAULT_MODEL="deepseek-v3",
        TEST_PAGES_DIR=str(tmp_path / "model-page-gen-test-results"),
    )


@pytest.fixture
def context(test_settings: Settings, store: PageStore, gateway: ModelGateway) -> AppContext:
    return AppContext(settings=test_settings, store=store, gateway=gateway)


@pytest.fixture
def client(context: AppContext) -> Generator[TestClient, None, None]:
    """
    Test client for an app built around the test context.
    """
    with TestClient(create_app(context)) as test_client:
        yield test_client


# ---------------------------------------------------------------------------
# PAGE FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture
def pending_page(store: PageStore) -> HtmlPage:
    """
    A submitted page that has not been generated yet.
    """
    return store.create_page(
        slug="alice----a1b2c3",
        prompt="角色名字：Alice",
        model="deepseek-v3",
        title="Alice's Tale",
        description="关于角色 Alice 的页面",
    )


@pytest.fixture
def generated_page(store: PageStore) -> HtmlPage:
    """
    A page whose HTML is already stored.
    """
    return store.create_page(
        slug="bob----d4e5f6",
        prompt="角色名字：Bob",
        model="seed1.6",
        title="Bob's Page",
        description="关于角色 Bob 的页面",
        html="<h1>Bob</h1>\n",
    )
