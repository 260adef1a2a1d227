from __future__ import annotations

from werkzeug.datastructures import Headers

from errorpages.context import ErrorRequest
from errorpages.tenants import InMemoryTenantStore, TenantRecord
from errorpages.themes import Theme

BROWSER_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
API_ACCEPT = "application/json"

MASTER = TenantRecord(name="master", display_name="Administration")
FOO = TenantRecord(
    name="foo",
    display_name="Foo Corp",
    login_theme="light",
    internationalization_enabled=True,
    supported_locales=("en", "sv"),
    default_locale="en",
)


def make_request(path="/auth/realms/foo/bars/baz", accept=BROWSER_ACCEPT, base_uri="http://localhost/auth/", headers=None, **kw):
    h = Headers()
    if accept is not None:
        h["Accept"] = accept
    for name, value in (headers or {}).items():
        h[name] = value
    return ErrorRequest(path=path, base_uri=base_uri, headers=h, **kw)


class RecordingMetrics:
    def __init__(self):
        self.calls = []

    def increment(self, name, tags=None):
        self.calls.append((name, dict(tags or {})))


class FailingMetrics:
    def increment(self, name, tags=None):
        raise ConnectionError("statsd down")


class SpyTenantStore(InMemoryTenantStore):
    def __init__(self, tenants=()):
        super().__init__(tenants)
        self.lookups = []

    def find_by_name(self, name):
        self.lookups.append(name)
        return super().find_by_name(name)


class StaticThemeProvider:
    def __init__(self, theme):
        self.theme = theme
        self.requests = []

    def get_theme(self, name, category):
        self.requests.append((name, category))
        return self.theme


class FailingThemeProvider:
    def get_theme(self, name, category):
        raise RuntimeError("theme store unavailable")


class FlakyMessagesTheme(Theme):
    """First catalog load works, later ones fail (formatter construction)."""

    def __init__(self, chain):
        super().__init__(chain)
        self.loads = 0

    def get_messages(self, locale):
        self.loads += 1
        if self.loads > 1:
            raise OSError("catalog file vanished")
        return super().get_messages(locale)


class BrokenPropertiesTheme(Theme):
    def get_properties(self):
        raise OSError("theme.properties unreadable")


class FailingTemplateEngine:
    def render(self, template_name, attributes, theme):
        raise RuntimeError("template blew up")


class FakeUnitOfWork:
    def __init__(self):
        self.marks = 0

    def set_rollback_only(self):
        self.marks += 1


__all__ = [
    "BROWSER_ACCEPT",
    "API_ACCEPT",
    "MASTER",
    "FOO",
    "make_request",
    "RecordingMetrics",
    "FailingMetrics",
    "SpyTenantStore",
    "StaticThemeProvider",
    "FailingThemeProvider",
    "FlakyMessagesTheme",
    "BrokenPropertiesTheme",
    "FailingTemplateEngine",
    "FakeUnitOfWork",
]
