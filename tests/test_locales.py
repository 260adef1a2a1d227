from __future__ import annotations

from errorpages.locales import DefaultLocaleResolver
from errorpages.tenants import TenantRecord
from helpers import FOO, MASTER, make_request

resolver = DefaultLocaleResolver(cookie_name="REALM_LOCALE")

MULTI = TenantRecord(
    name="multi",
    internationalization_enabled=True,
    supported_locales=("en", "sv", "de"),
    default_locale="de",
)


def test_internationalization_disabled_is_english():
    req = make_request(headers={"Accept-Language": "sv"}, args={"locale": "sv"})
    assert resolver.resolve(req, MASTER) == "en"


def test_explicit_override_wins():
    req = make_request(args={"locale": "sv"})
    assert resolver.resolve(req, MULTI, "de") == "de"


def test_query_parameter_before_cookie():
    req = make_request(args={"locale": "sv"}, cookies={"REALM_LOCALE": "de"})
    assert resolver.resolve(req, MULTI) == "sv"


def test_cookie_before_accept_language():
    req = make_request(cookies={"REALM_LOCALE": "de"}, headers={"Accept-Language": "sv"})
    assert resolver.resolve(req, MULTI) == "de"


def test_unsupported_hint_is_ignored():
    req = make_request(args={"locale": "fr"}, headers={"Accept-Language": "sv;q=0.8, fr"})
    assert resolver.resolve(req, MULTI) == "sv"


def test_accept_language_region_matches_language():
    req = make_request(headers={"Accept-Language": "sv-SE,sv;q=0.9"})
    assert resolver.resolve(req, MULTI) == "sv"


def test_tenant_default_when_no_preference():
    assert resolver.resolve(make_request(), MULTI) == "de"


def test_english_when_tenant_has_no_default():
    tenant = TenantRecord(name="x", internationalization_enabled=True, supported_locales=("en", "sv"))
    assert resolver.resolve(make_request(), tenant) == "en"


def test_region_query_parameter_maps_to_supported_language():
    req = make_request(args={"locale": "sv_SE"})
    assert resolver.resolve(req, FOO) == "sv"
