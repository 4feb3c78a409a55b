"""
Declarative base - every ORM model inherits from Base so that
Base.metadata knows about all tables (used by create_all and Alembic).
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy ORM models."""
    pass
