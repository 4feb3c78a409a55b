"""
Dependencies module - the application context and the FastAPI dependencies
that hand its parts to route handlers.

Everything a handler needs (settings, page store, model gateway) lives in
one AppContext built at startup and attached to the application. Handlers
receive it through Depends() instead of importing module-level globals,
so tests build an app around an in-memory store and a scripted gateway.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request

from pagen.ai.gateway import ModelGateway
from pagen.ai.providers import OpenAIProvider
from pagen.core.config import Settings
from pagen.db.session import create_db_engine, create_session_factory
from pagen.services.page_errors import PageServiceError
from pagen.services.page_generation import PageGenerationService
from pagen.services.page_store import PageStore

logger = logging.getLogger("pagen.deps")


@dataclass
class AppContext:
    """
    Process-wide collaborators, created once at startup.

    Attributes:
        settings: Loaded configuration
        store: Page store, None when no database is configured
        gateway: Model gateway used for generation
    """
    settings: Settings
    store: Optional[PageStore]
    gateway: ModelGateway


def build_context(settings: Settings) -> AppContext:
    """Create the store and gateway described by the settings."""
    store = None
    if settings.DATABASE_URL:
        engine = create_db_engine(settings.DATABASE_URL)
        store = PageStore(create_session_factory(engine))
    else:
        logger.error("DATABASE_URL is empty - page storage unavailable")

    provider = OpenAIProvider(
        api_key=settings.LLM_API_KEY,
        base_url=settings.LLM_BASE_URL,
        timeout=settings.AI_REQUEST_TIMEOUT,
    )
    gateway = ModelGateway(
        provider=provider,
        endpoints=settings.MODEL_ENDPOINTS,
        default_model=settings.DEFAULT_MODEL,
        temperature=settings.LLM_TEMPERATURE,
    )

    return AppContext(settings=settings, store=store, gateway=gateway)


# ---------------------------------------------------------------------------
# FASTAPI DEPENDENCIES
# ---------------------------------------------------------------------------


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_settings(context: AppContext = Depends(get_context)) -> Settings:
    return context.settings


def get_page_store(context: AppContext = Depends(get_context)) -> PageStore:
    """
    The page store, or BackendUnavailable (500) when none is configured.
    """
    if context.store is None:
        raise PageServiceError.backend_unavailable()
    return context.store


def get_model_gateway(context: AppContext = Depends(get_context)) -> ModelGateway:
    return context.gateway


def get_generation_service(
    store: PageStore = Depends(get_page_store),
    gateway: ModelGateway = Depends(get_model_gateway),
) -> PageGenerationService:
    return PageGenerationService(store=store, gateway=gateway)
