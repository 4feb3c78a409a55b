"""
Page model - one generated (or still to be generated) HTML page.

A row is created by the submission endpoints with html = NULL. The first
request to /gen/{id} streams the page from the model and writes html once.
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from pagen.db.base import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HtmlPage(Base):
    """
    SQLAlchemy ORM model for the 'html_pages' table.

    Invariant: html is NULL if and only if the page has not been generated
    yet. Once set it is only replaced by the admin import endpoints.
    """

    __tablename__ = "html_pages"

    # ---------------------------------------------------------------------------
    # IDENTIFIERS
    # ---------------------------------------------------------------------------
    # id: Numeric key used in /gen/{id}
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # slug: "<slugified character name>----<6 hex chars>", never reused
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)

    # ---------------------------------------------------------------------------
    # TIMESTAMPS
    # ---------------------------------------------------------------------------
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )

    # updated_at: Refreshed whenever html is written
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    # ---------------------------------------------------------------------------
    # SUBMISSION INPUTS (fixed at creation)
    # ---------------------------------------------------------------------------
    # prompt: The fully composed instruction sent to the model
    prompt: Mapped[str] = mapped_column(Text, nullable=False)

    # model: Short model name, resolved to an endpoint by ModelGateway
    model: Mapped[str] = mapped_column(String(100), nullable=False)

    # ---------------------------------------------------------------------------
    # METADATA
    # ---------------------------------------------------------------------------
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # ---------------------------------------------------------------------------
    # GENERATED ARTIFACT
    # ---------------------------------------------------------------------------
    html: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    @property
    def is_generated(self) -> bool:
        return self.html is not None

    def __repr__(self) -> str:
        return f"<HtmlPage {self.id} {self.slug!r} generated={self.is_generated}>"
