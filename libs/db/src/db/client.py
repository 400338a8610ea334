"""Database engine and session helpers shared by ``spend_analytics``.

One engine is created per process from ``DATABASE_URL`` (or an explicit
``database_url=``) and every session is bound to it. Plain ``postgres://``
and ``postgresql://`` URLs are pointed at the psycopg 3 driver.

Usage
-----
from db.client import session_scope

with session_scope(read_only=True) as s:
    s.execute(select(Transaction))
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker

DATABASE_URL_ENV = "DATABASE_URL"

_PG_SCHEMES = ("postgres://", "postgresql://")
_PG_DRIVER_SCHEME = "postgresql+psycopg://"

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None
_bound_url: str | None = None


def resolve_database_url(override: str | None = None) -> str:
    """Return the URL to connect to: ``override``, else ``$DATABASE_URL``."""

    url = override or os.getenv(DATABASE_URL_ENV)
    if not url:
        raise RuntimeError(
            f"{DATABASE_URL_ENV} is not set; export it or pass database_url= explicitly"
        )
    for scheme in _PG_SCHEMES:
        if url.startswith(scheme):
            return _PG_DRIVER_SCHEME + url[len(scheme) :]
    return url


def get_engine(*, database_url: str | None = None) -> Engine:
    """Return the process-wide engine, creating it on first use.

    Once bound, asking for a different URL is an error until
    :func:`dispose_engine` is called.
    """

    global _engine, _session_factory, _bound_url
    url = resolve_database_url(database_url)
    if _engine is not None:
        if url != _bound_url:
            raise RuntimeError(
                "database engine is already bound to a different URL; "
                "call dispose_engine() before switching databases"
            )
        return _engine

    logger.debug(
        "creating database engine for %s",
        make_url(url).render_as_string(hide_password=True),
    )
    _engine = create_engine(url, pool_pre_ping=True)
    _session_factory = sessionmaker(bind=_engine, expire_on_commit=False, class_=Session)
    _bound_url = url
    return _engine


def dispose_engine() -> None:
    """Close pooled connections and forget the bound URL."""

    global _engine, _session_factory, _bound_url
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
    _bound_url = None


def get_session(*, database_url: str | None = None) -> Session:
    """Open a new session on the shared engine; the caller closes it."""

    get_engine(database_url=database_url)
    assert _session_factory is not None  # set by get_engine
    return _session_factory()


@contextmanager
def session_scope(
    *,
    database_url: str | None = None,
    read_only: bool = False,
) -> Iterator[Session]:
    """Run a block in one transaction.

    The transaction commits when the block exits normally (or rolls back when
    ``read_only``), rolls back when it raises, and the session is always
    closed. Exceptions are re-raised unchanged.
    """

    session = get_session(database_url=database_url)
    try:
        yield session
        if read_only:
            session.rollback()
        else:
            session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


__all__ = [
    "DATABASE_URL_ENV",
    "dispose_engine",
    "get_engine",
    "get_session",
    "resolve_database_url",
    "session_scope",
]
