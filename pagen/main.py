"""
Main application entry point - FastAPI app instance and configuration.
This is where the ASGI application is created and configured.
Run with: uvicorn pagen.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from pagen.core.config import settings as default_settings
from pagen.deps import AppContext, build_context
from pagen.routers import admin, pages
from pagen.services.page_errors import PageServiceError

logger = logging.getLogger("pagen")


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Build the FastAPI application around an application context.

    Args:
        context: Store, gateway and settings to serve with. Built from the
                 environment when omitted.
    """
    context = context or build_context(default_settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Create the table on first start (SQLite deployments skip Alembic)
        if context.store is not None:
            context.store.ensure_schema()
        yield

    app = FastAPI(
        title=context.settings.APP_NAME,
        debug=context.settings.DEBUG,
        description="Generate character web pages with a language model, lazily and once.",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.context = context

    # ---------------------------------------------------------------------------
    # CORS MIDDLEWARE
    # ---------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=context.settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------------------------------------------------------------------------
    # ERROR HANDLING
    # ---------------------------------------------------------------------------
    @app.exception_handler(PageServiceError)
    async def page_service_error_handler(request: Request, exc: PageServiceError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    # ---------------------------------------------------------------------------
    # REGISTER ROUTERS
    # ---------------------------------------------------------------------------
    # pages.router: /, /submit-demo, /submit-page, /submit-page-form, /gen/{id}
    # admin.router: /tmp-task/* maintenance endpoints
    app.include_router(pages.router)
    app.include_router(admin.router)

    # ---------------------------------------------------------------------------
    # HEALTH CHECK ENDPOINT
    # ---------------------------------------------------------------------------
    @app.get("/health", tags=["health"], response_class=PlainTextResponse)
    def health_check():
        """
        Liveness probe. Does NOT check the database or the model provider.
        """
        return "OK"

    return app


app = create_app()
