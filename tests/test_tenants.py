from __future__ import annotations

import pytest

from errorpages.errors import TenantNotFoundError
from errorpages.tenants import (
    InMemoryTenantStore,
    SqlTenantStore,
    TenantRecord,
    ensure_admin_tenant,
    extract_tenant_name,
    resolve_tenant,
)
from helpers import FOO, MASTER, SpyTenantStore


@pytest.mark.parametrize(
    "path,expected",
    [
        ("/auth/realms/foo/bars/baz", "foo"),
        ("/realms/foo", "foo"),
        ("/realms/foo/", "foo"),
        ("/auth/realms/my-realm/protocol/openid-connect/auth", "my-realm"),
        ("/auth/admin/console", None),
        ("/realms/", None),
        ("/", None),
        ("", None),
    ],
)
def test_extract_tenant_name(path, expected):
    assert extract_tenant_name(path) == expected


def test_resolve_tenant_from_path():
    store = InMemoryTenantStore([MASTER, FOO])
    assert resolve_tenant("/auth/realms/foo/bars/baz", store, "master") is FOO


def test_resolve_tenant_without_realm_segment_uses_default():
    store = SpyTenantStore([MASTER, FOO])
    assert resolve_tenant("/auth/admin/console", store, "master") is MASTER
    assert store.lookups == ["master"]


def test_unknown_tenant_falls_back_to_default():
    store = SpyTenantStore([MASTER, FOO])
    tenant = resolve_tenant("/auth/realms/ghost/login", store, "master")
    assert tenant is MASTER
    assert store.lookups == ["ghost", "master"]


def test_missing_default_tenant_raises():
    store = InMemoryTenantStore([FOO])
    with pytest.raises(TenantNotFoundError) as ei:
        resolve_tenant("/auth/realms/ghost/login", store, "master")
    assert ei.value.name == "master"


def test_tenant_label_prefers_display_name():
    assert FOO.label == "Foo Corp"
    assert TenantRecord(name="bare").label == "bare"


def test_sql_store_reads_tenants(app):
    with app.app_context():
        store = SqlTenantStore()
        acme = store.find_by_name("acme")
        assert acme is not None
        assert acme.login_theme == "light"
        assert acme.supported_locales == ("en", "sv")
        assert acme.default_locale == "sv"
        assert acme.internationalization_enabled is True
        # bootstrap realm created by the app factory
        assert store.find_by_name("master") is not None
        assert store.find_by_name("nope") is None


def test_sql_store_treats_disabled_tenant_as_absent(app):
    with app.app_context():
        assert SqlTenantStore().find_by_name("retired") is None


def test_ensure_admin_tenant_is_idempotent(app):
    with app.app_context():
        assert ensure_admin_tenant("master") is False
        assert ensure_admin_tenant("ops") is True
        assert ensure_admin_tenant("ops") is False
