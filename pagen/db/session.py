"""
Database session management - SQLAlchemy engine and session factory.

Nothing here runs at import time: build_context() creates the engine from
Settings.DATABASE_URL and hands the session factory to PageStore.
"""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker


def create_db_engine(database_url: str) -> Engine:
    """
    Create the SQLAlchemy engine for a database URL.

    - pool_pre_ping=True: Check a pooled connection with a cheap query
      before handing it out, so a restarted database doesn't break requests.
    - SQLite connections are shared between the request threadpool and the
      event loop (the streaming writer), so the same-thread check is off.
    """
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    return create_engine(
        database_url,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """
    Build the session factory used by PageStore.

    - autocommit=False: PageStore commits explicitly
    - autoflush=False: No implicit flushes before queries
    - expire_on_commit=False: Rows returned from the store stay readable
      after their session is closed
    """
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )
