"""Tenant (realm) lookup for error pages.

Path -> realm name parsing is a pure function so it can be tested without a
request. Lookups go through the ``TenantStore`` protocol and hand back frozen
``TenantRecord`` values, never live ORM rows.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from .db import get_new_session
from .errors import TenantNotFoundError
from .models import Tenant

logger = logging.getLogger(__name__)

_REALM_PATH = re.compile(r".*/realms/([^/]+).*")


@dataclass(frozen=True)
class TenantRecord:
    name: str
    display_name: str | None = None
    login_theme: str | None = None
    internationalization_enabled: bool = False
    supported_locales: tuple[str, ...] = field(default_factory=tuple)
    default_locale: str | None = None

    @property
    def label(self) -> str:
        return self.display_name or self.name


class TenantStore(Protocol):
    def find_by_name(self, name: str) -> TenantRecord | None: ...  # pragma: no cover - interface only


def _to_record(row: Tenant) -> TenantRecord:
    return TenantRecord(
        name=row.name,
        display_name=row.display_name,
        login_theme=row.login_theme,
        internationalization_enabled=bool(row.internationalization_enabled),
        supported_locales=tuple(row.supported_locales or ()),
        default_locale=row.default_locale,
    )


class SqlTenantStore:
    def find_by_name(self, name: str) -> TenantRecord | None:
        db = get_new_session()
        try:
            row = db.query(Tenant).filter_by(name=name).first()
            if not row or not row.enabled:
                return None
            return _to_record(row)
        finally:
            db.close()


class InMemoryTenantStore:
    def __init__(self, tenants: Iterable[TenantRecord] = ()) -> None:
        self._tenants = {t.name: t for t in tenants}

    def find_by_name(self, name: str) -> TenantRecord | None:
        return self._tenants.get(name)


def extract_tenant_name(path: str) -> str | None:
    """Return ``<name>`` from ``.../realms/<name>...`` or None."""
    m = _REALM_PATH.fullmatch(path or "")
    return m.group(1) if m else None


def resolve_tenant(path: str, store: TenantStore, default_name: str) -> TenantRecord:
    name = extract_tenant_name(path) or default_name
    tenant = store.find_by_name(name)
    if tenant is None and name != default_name:
        logger.debug("Realm %s not found, using %s", name, default_name)
        tenant = store.find_by_name(default_name)
    if tenant is None:
        raise TenantNotFoundError(default_name)
    return tenant


def ensure_admin_tenant(name: str) -> bool:
    """Seed the administrative realm when missing. Returns True if created."""
    db = get_new_session()
    try:
        if db.query(Tenant).filter_by(name=name).first():
            return False
        db.add(Tenant(name=name, display_name=name, enabled=True, supported_locales=[]))
        db.commit()
        logger.info("Created administrative realm %s", name)
        return True
    finally:
        db.close()


__all__ = [
    "TenantRecord",
    "TenantStore",
    "SqlTenantStore",
    "InMemoryTenantStore",
    "extract_tenant_name",
    "resolve_tenant",
    "ensure_admin_tenant",
]
