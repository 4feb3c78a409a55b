"""
Page Generation Service - generate once, serve many.

For a page id the service decides between three outcomes:

    NOT_FOUND   no such page                      -> 404
    CACHED      html already stored               -> return it verbatim
    GENERATING  html is NULL                      -> stream from the model,
                                                     store the result at the end

The GENERATING stream (stream_html) is consumed by the HTTP response. It
forwards only newly revealed, fence-free HTML and writes the final HTML to
the store after the last byte was handed out. When the provider fails or the
client goes away the write never happens, html stays NULL and the next
request starts over.
"""

import asyncio
import logging
import time
from contextlib import aclosing
from dataclasses import dataclass
from enum import Enum
from typing import AsyncIterator, Optional

from starlette.concurrency import run_in_threadpool

from pagen.ai.gateway import ModelGateway
from pagen.ai.monitoring import GenerationLogger, generation_logger
from pagen.ai.providers.base import ProviderError
from pagen.services.code_fence import CodeFenceStream
from pagen.services.page_errors import PageServiceError
from pagen.services.page_store import PageStore

logger = logging.getLogger("pagen.services.page_generation")


class PageState(str, Enum):
    """Outcome of looking up a page for /gen/{id}."""
    NOT_FOUND = "not_found"
    CACHED = "cached"
    GENERATING = "generating"


@dataclass
class PageLookup:
    """
    Result of PageGenerationService.lookup().

    Attributes:
        state: Which branch the request takes
        page_id: The requested id
        html: Stored HTML (CACHED only)
        stream: Async iterator of HTML deltas (GENERATING only)
    """
    state: PageState
    page_id: int
    html: Optional[str] = None
    stream: Optional[AsyncIterator[str]] = None


class PageGenerationService:
    """
    Lazily generates pages and serves them from the store afterwards.

    Built per request from the application context:
        service = PageGenerationService(store, gateway)
        lookup = service.lookup(page_id)
    """

    def __init__(
        self,
        store: PageStore,
        gateway: ModelGateway,
        gen_logger: GenerationLogger = generation_logger,
    ):
        self.store = store
        self.gateway = gateway
        self.gen_logger = gen_logger

    def lookup(self, page_id: int) -> PageLookup:
        """
        Load a page and pick its branch.

        Raises:
            PageServiceError: GENERATION_FAILURE if the page's model can't be
                resolved (raised before anything is streamed)
        """
        page = self.store.get_page(page_id)

        if page is None:
            return PageLookup(state=PageState.NOT_FOUND, page_id=page_id)

        if page.html is not None:
            return PageLookup(state=PageState.CACHED, page_id=page_id, html=page.html)

        model = page.model or self.gateway.default_model
        try:
            chunks = self.gateway.generate(model, page.prompt)
        except ProviderError as e:
            self.gen_logger.log_error(page_id=page_id, model=model, error=str(e))
            raise PageServiceError.generation_failure(str(e)) from e

        self.gen_logger.log_request(page_id=page_id, model=model, prompt=page.prompt)
        return PageLookup(
            state=PageState.GENERATING,
            page_id=page_id,
            stream=self.stream_html(page_id, model, chunks),
        )

    async def stream_html(
        self,
        page_id: int,
        model: str,
        chunks: AsyncIterator[str],
    ) -> AsyncIterator[str]:
        """
        Forward de-fenced HTML deltas and persist the final page.

        Yields:
            Non-empty strings; their concatenation equals the stored HTML
        """
        fence = CodeFenceStream()
        start_time = time.time()

        try:
            async with aclosing(chunks):
                async for chunk in chunks:
                    delta = fence.feed(chunk)
                    if delta:
                        yield delta

            tail = fence.finish()
            if tail:
                yield tail

        except ProviderError as e:
            self.gen_logger.log_error(
                page_id=page_id,
                model=model,
                error=str(e),
                chunks=fence.chunks,
                latency_ms=(time.time() - start_time) * 1000,
            )
            raise PageServiceError.generation_failure(str(e)) from e

        except (GeneratorExit, asyncio.CancelledError):
            # Client went away; a truncated page must not be stored
            self.gen_logger.log_aborted(
                page_id=page_id,
                model=model,
                chunks=fence.chunks,
                latency_ms=(time.time() - start_time) * 1000,
            )
            raise

        html = fence.visible
        await run_in_threadpool(self.store.save_html, page_id, html)

        self.gen_logger.log_complete(
            page_id=page_id,
            model=model,
            chunks=fence.chunks,
            html_length=len(html),
            latency_ms=(time.time() - start_time) * 1000,
        )
