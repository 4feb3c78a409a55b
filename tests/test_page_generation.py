"""
Tests for the generate-once, serve-many page service.

These tests verify:
- Lookup outcomes (not found, cached, generating)
- Streaming output and the single write at the end
- Provider failures and client disconnects leave html NULL
- Unknown models fail before anything is streamed
"""

import asyncio

import pytest

from pagen.ai.gateway import ModelGateway
from pagen.models.page import HtmlPage
from pagen.services.page_errors import PageErrorKind, PageServiceError
from pagen.services.page_generation import PageGenerationService, PageState
from pagen.services.page_store import PageStore

from conftest import TEST_ENDPOINTS, ScriptedProvider


async def collect(stream) -> list:
    return [delta async for delta in stream]


class TestLookup:
    """Tests for PageGenerationService.lookup()."""

    def test_unknown_page(self, store: PageStore, gateway: ModelGateway):
        """Should report NOT_FOUND without touching the model."""
        service = PageGenerationService(store, gateway)

        lookup = service.lookup(999)

        assert lookup.state == PageState.NOT_FOUND
        assert lookup.stream is None

    def test_cached_page(
        self, store: PageStore, gateway: ModelGateway,
        provider: ScriptedProvider, generated_page: HtmlPage,
    ):
        """Should return stored HTML verbatim and never call the model."""
        service = PageGenerationService(store, gateway)

        lookup = service.lookup(generated_page.id)

        assert lookup.state == PageState.CACHED
        assert lookup.html == "<h1>Bob</h1>\n"
        assert provider.calls == []

    def test_pending_page(self, store: PageStore, gateway: ModelGateway, pending_page: HtmlPage):
        """Should hand back a stream for a page without HTML."""
        service = PageGenerationService(store, gateway)

        lookup = service.lookup(pending_page.id)

        assert lookup.state == PageState.GENERATING
        assert lookup.stream is not None

    def test_unknown_model_fails_before_streaming(self, store: PageStore, gateway: ModelGateway):
        """Should raise GENERATION_FAILURE at lookup for an unconfigured model."""
        page = store.create_page(
            slug="x----000000", prompt="p", model="not-a-real-model", title="X",
        )
        service = PageGenerationService(store, gateway)

        with pytest.raises(PageServiceError) as exc_info:
            service.lookup(page.id)

        assert exc_info.value.kind == PageErrorKind.GENERATION_FAILURE
        assert "not-a-real-model" in exc_info.value.message
        assert store.get_page(page.id).html is None


class TestStreaming:
    """Tests for the GENERATING stream."""

    @pytest.mark.asyncio
    async def test_alice_scenario(
        self, store: PageStore, gateway: ModelGateway,
        provider: ScriptedProvider, pending_page: HtmlPage,
    ):
        """Should stream three deltas and store the de-fenced page."""
        service = PageGenerationService(store, gateway)

        deltas = await collect(service.lookup(pending_page.id).stream)

        assert deltas == ["<h1>", "Alice", "</h1>\n"]
        assert store.get_page(pending_page.id).html == "<h1>Alice</h1>\n"

    @pytest.mark.asyncio
    async def test_stream_uses_page_prompt_and_endpoint(
        self, store: PageStore, gateway: ModelGateway,
        provider: ScriptedProvider, pending_page: HtmlPage,
    ):
        """Should send the stored prompt to the page model's endpoint."""
        service = PageGenerationService(store, gateway)

        await collect(service.lookup(pending_page.id).stream)

        assert len(provider.calls) == 1
        assert provider.calls[0]["prompt"] == pending_page.prompt
        assert provider.calls[0]["model"] == TEST_ENDPOINTS["deepseek-v3"]

    @pytest.mark.asyncio
    async def test_generated_once_then_cached(
        self, store: PageStore, gateway: ModelGateway,
        provider: ScriptedProvider, pending_page: HtmlPage,
    ):
        """Should serve the streamed bytes from the store afterwards."""
        service = PageGenerationService(store, gateway)

        streamed = "".join(await collect(service.lookup(pending_page.id).stream))
        second = service.lookup(pending_page.id)

        assert second.state == PageState.CACHED
        assert second.html == streamed
        assert len(provider.calls) == 1

    @pytest.mark.asyncio
    async def test_provider_failure_mid_stream(self, store: PageStore, pending_page: HtmlPage):
        """Should abort with GENERATION_FAILURE and store nothing."""
        provider = ScriptedProvider(fail_after=1)
        gateway = ModelGateway(provider, TEST_ENDPOINTS, default_model="deepseek-v3")
        service = PageGenerationService(store, gateway)

        received = []
        with pytest.raises(PageServiceError) as exc_info:
            async for delta in service.lookup(pending_page.id).stream:
                received.append(delta)

        assert exc_info.value.kind == PageErrorKind.GENERATION_FAILURE
        assert received == ["<h1>"]
        assert store.get_page(pending_page.id).html is None

    @pytest.mark.asyncio
    async def test_retry_after_failure(self, store: PageStore, pending_page: HtmlPage):
        """Should generate from scratch on the next request after a failure."""
        failing = ModelGateway(
            ScriptedProvider(fail_after=2), TEST_ENDPOINTS, default_model="deepseek-v3"
        )
        with pytest.raises(PageServiceError):
            await collect(PageGenerationService(store, failing).lookup(pending_page.id).stream)

        working = ModelGateway(ScriptedProvider(), TEST_ENDPOINTS, default_model="deepseek-v3")
        deltas = await collect(PageGenerationService(store, working).lookup(pending_page.id).stream)

        assert "".join(deltas) == "<h1>Alice</h1>\n"
        assert store.get_page(pending_page.id).html == "<h1>Alice</h1>\n"

    @pytest.mark.asyncio
    async def test_client_disconnect_skips_write(
        self, store: PageStore, gateway: ModelGateway,
        provider: ScriptedProvider, pending_page: HtmlPage,
    ):
        """Should close the model stream and store nothing when abandoned."""
        service = PageGenerationService(store, gateway)
        stream = service.lookup(pending_page.id).stream

        first = await stream.__anext__()
        await stream.aclose()

        assert first == "<h1>"
        assert provider.closed is True
        assert store.get_page(pending_page.id).html is None

    @pytest.mark.asyncio
    async def test_cancelled_while_waiting_for_model(self, store: PageStore, pending_page: HtmlPage):
        """Should close the model stream and store nothing when the consumer is cancelled."""
        provider = ScriptedProvider(hang_after=1)
        gateway = ModelGateway(provider, TEST_ENDPOINTS, default_model="deepseek-v3")
        stream = PageGenerationService(store, gateway).lookup(pending_page.id).stream
        received = []

        async def consume():
            async for delta in stream:
                received.append(delta)

        task = asyncio.create_task(consume())
        await asyncio.wait_for(provider.hanging.wait(), timeout=5)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert received == ["<h1>"]
        assert provider.closed is True
        assert store.get_page(pending_page.id).html is None

    @pytest.mark.asyncio
    async def test_page_cleared_mid_stream(
        self, store: PageStore, gateway: ModelGateway, pending_page: HtmlPage,
    ):
        """Should finish the stream even if the row was deleted meanwhile."""
        service = PageGenerationService(store, gateway)
        stream = service.lookup(pending_page.id).stream

        first = await stream.__anext__()
        store.clear()
        rest = await collect(stream)

        assert first + "".join(rest) == "<h1>Alice</h1>\n"
        assert store.get_page(pending_page.id) is None
