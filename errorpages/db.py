"""Database engine + session management.

The per-request unit of work built on top of these sessions lives in
``transaction.py``.
"""

from __future__ import annotations

from contextlib import suppress

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, scoped_session, sessionmaker

from .models import Base

_engine: Engine | None = None
_SessionFactory: scoped_session[Session] | None = None
_detached_factory: sessionmaker[Session] | None = None


def _normalize_url(url: str) -> str:
    # postgres:// and driverless postgresql:// both go through psycopg v3
    if url.startswith("postgres://"):
        return "postgresql+psycopg://" + url[len("postgres://") :]
    if url.startswith("postgresql://") and "+" not in url.split("://", 1)[1].split("@", 1)[0]:
        return "postgresql+psycopg://" + url[len("postgresql://") :]
    return url


def _bind(database_url: str) -> Engine:
    global _engine, _SessionFactory, _detached_factory
    _engine = create_engine(_normalize_url(database_url), future=True, echo=False)
    _detached_factory = sessionmaker(bind=_engine, autoflush=False, autocommit=False)
    _SessionFactory = scoped_session(_detached_factory)
    return _engine


def init_engine(database_url: str, force: bool = False) -> Engine:
    """Create the engine once; ``force`` swaps it (tests point each app at its own DB)."""
    if _engine is None:
        return _bind(database_url)
    if not force:
        return _engine
    _engine.dispose()
    if _SessionFactory is not None:
        with suppress(Exception):  # pragma: no cover
            _SessionFactory.remove()
    return _bind(database_url)


def get_session() -> Session:
    if _SessionFactory is None:
        raise RuntimeError("DB not initialized; call init_engine first")
    return _SessionFactory()


def get_new_session() -> Session:
    """Return a brand-new Session not bound to the thread-scoped registry.

    Read-only lookups (tenant store) use these so they never observe or disturb
    the request's unit of work, which may already be marked rollback-only.
    """
    if _detached_factory is None:
        raise RuntimeError("DB not initialized; call init_engine first")
    return _detached_factory()


def remove_session() -> None:
    if _SessionFactory is not None:
        _SessionFactory.remove()


def create_all() -> None:
    """Create the tenants schema directly. Tests and DEV_CREATE_ALL only; deployments run ``alembic upgrade head``."""
    if _engine is None:
        raise RuntimeError("Engine not initialized")
    Base.metadata.create_all(_engine)
