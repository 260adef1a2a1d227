import os
import sys

import pytest

# Path setup before any project imports to satisfy E402
ROOT = os.path.dirname(__file__)
PARENT = os.path.abspath(os.path.join(ROOT, ".."))
if PARENT not in sys.path:  # pragma: no cover - environment dependent
    sys.path.insert(0, PARENT)
if ROOT not in sys.path:  # pragma: no cover - environment dependent
    sys.path.insert(0, ROOT)


def _lazy_imports():  # isolate heavy imports & satisfy lint ordering
    from errorpages.app_factory import create_app  # noqa: E402
    from errorpages.db import get_new_session  # noqa: E402
    from errorpages.models import Tenant  # noqa: E402

    return create_app, get_new_session, Tenant


@pytest.fixture
def tenant_store():
    from helpers import FOO, MASTER, SpyTenantStore

    return SpyTenantStore([MASTER, FOO])


@pytest.fixture
def theme_provider():
    from errorpages.builtin_themes import builtin_themes
    from errorpages.themes import ExtendingThemeProvider

    return ExtendingThemeProvider(builtin_themes(), default_theme="base")


@pytest.fixture
def make_handler(tenant_store, theme_provider):
    from errorpages.error_pages import ErrorPageHandler
    from errorpages.locales import DefaultLocaleResolver
    from errorpages.rendering import JinjaTemplateEngine

    def _make(**overrides):
        parts = {
            "tenant_store": tenant_store,
            "theme_provider": theme_provider,
            "locale_resolver": DefaultLocaleResolver(),
            "template_engine": JinjaTemplateEngine(),
            "default_tenant": "master",
        }
        parts.update(overrides)
        return ErrorPageHandler(**parts)

    return _make


@pytest.fixture
def handler(make_handler):
    return make_handler()


@pytest.fixture
def recorded_metrics():
    from errorpages.metrics import reset_metrics, set_metrics
    from helpers import RecordingMetrics

    m = RecordingMetrics()
    set_metrics(m)
    yield m
    reset_metrics()


@pytest.fixture
def app(tmp_path):
    create_app, get_new_session, Tenant = _lazy_imports()
    url = f"sqlite:///{tmp_path / 'test_app.db'}"
    app = create_app({"TESTING": True, "SECRET_KEY": "test", "database_url": url, "FORCE_DB_REINIT": True})

    db = get_new_session()
    try:
        db.add(
            Tenant(
                name="acme",
                display_name="Acme Inc",
                login_theme="light",
                internationalization_enabled=True,
                supported_locales=["en", "sv"],
                default_locale="sv",
                enabled=True,
            )
        )
        db.add(Tenant(name="retired", display_name="Retired", enabled=False, supported_locales=[]))
        db.commit()
    finally:
        db.close()
    return app


@pytest.fixture
def client(app):
    return app.test_client()
