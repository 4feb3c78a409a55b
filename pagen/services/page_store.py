"""
Page Store - all reads and writes of the html_pages table.

Every method opens its own short-lived session from the factory it was
built with and commits before returning. That keeps the store usable both
from request handlers (threadpool) and from the streaming generator, which
outlives the request that created it.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import sessionmaker

from pagen.db.base import Base
from pagen.models.page import HtmlPage


logger = logging.getLogger("pagen.services.page_store")


class PageStore:
    """
    CRUD access to HtmlPage rows.

    Usage:
        store = PageStore(session_factory)
        page = store.create_page(slug=..., prompt=..., model=..., title=...)
        store.save_html(page.id, "<html>...</html>")
    """

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def ensure_schema(self) -> None:
        """Create the html_pages table if it doesn't exist yet."""
        engine = self._session_factory.kw["bind"]
        Base.metadata.create_all(bind=engine)

    # ---------------------------------------------------------------------------
    # READS
    # ---------------------------------------------------------------------------

    def get_page(self, page_id: int) -> Optional[HtmlPage]:
        with self._session_factory() as session:
            return session.get(HtmlPage, page_id)

    def get_page_by_slug(self, slug: str) -> Optional[HtmlPage]:
        with self._session_factory() as session:
            return session.scalars(
                select(HtmlPage).where(HtmlPage.slug == slug)
            ).first()

    def list_pages(self) -> List[HtmlPage]:
        with self._session_factory() as session:
            return list(session.scalars(select(HtmlPage).order_by(HtmlPage.id)))

    # ---------------------------------------------------------------------------
    # WRITES
    # ---------------------------------------------------------------------------

    def create_page(
        self,
        slug: str,
        prompt: str,
        model: str,
        title: str,
        description: Optional[str] = None,
        html: Optional[str] = None,
    ) -> HtmlPage:
        """Insert one page row and return it with its new id."""
        now = datetime.now(timezone.utc)
        page = HtmlPage(
            slug=slug,
            prompt=prompt,
            model=model,
            title=title,
            description=description,
            html=html,
            created_at=now,
            updated_at=now,
        )
        with self._session_factory() as session:
            session.add(page)
            session.commit()
            session.refresh(page)

        logger.info(f"Created page {page.id} ({page.slug})")
        return page

    def save_html(self, page_id: int, html: str) -> bool:
        """
        Store the generated HTML of a page and refresh updated_at.

        Returns:
            False if the page no longer exists (e.g. cleared mid-stream)
        """
        with self._session_factory() as session:
            page = session.get(HtmlPage, page_id)
            if page is None:
                logger.warning(f"Page {page_id} disappeared before its HTML was saved")
                return False

            page.html = html
            page.updated_at = datetime.now(timezone.utc)
            session.commit()

        logger.info(f"Saved {len(html)} chars of HTML for page {page_id}")
        return True

    def upsert_page(
        self,
        slug: str,
        html: str,
        model: str,
        prompt: str,
        title: str,
        description: Optional[str],
    ) -> str:
        """
        Insert a finished page, or overwrite the page with the same slug.

        Returns:
            "created" or "updated"
        """
        now = datetime.now(timezone.utc)
        with self._session_factory() as session:
            page = session.scalars(
                select(HtmlPage).where(HtmlPage.slug == slug)
            ).first()

            if page is None:
                session.add(HtmlPage(
                    slug=slug,
                    prompt=prompt,
                    model=model,
                    title=title,
                    description=description,
                    html=html,
                    created_at=now,
                    updated_at=now,
                ))
                action = "created"
            else:
                page.prompt = prompt
                page.model = model
                page.title = title
                page.description = description
                page.html = html
                page.updated_at = now
                action = "updated"

            session.commit()

        logger.info(f"Page {slug!r} {action}")
        return action

    def clear(self) -> int:
        """Delete every page. Returns the number of rows removed."""
        with self._session_factory() as session:
            result = session.execute(delete(HtmlPage))
            session.commit()

        logger.warning(f"Cleared {result.rowcount} pages")
        return result.rowcount
