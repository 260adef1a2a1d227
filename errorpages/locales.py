"""Locale resolution for themed pages.

``DefaultLocaleResolver`` picks one of the tenant's supported locales, in order:
explicit override, ``locale`` query parameter, locale cookie, Accept-Language,
tenant default, English. Tenants with internationalization disabled always get
English.
"""
from __future__ import annotations

from typing import Protocol

from .context import ErrorRequest
from .tenants import TenantRecord
from .themes import normalize_locale

FALLBACK_LOCALE = "en"
LOCALE_QUERY_PARAM = "locale"


class LocaleResolver(Protocol):
    def resolve(
        self, request: ErrorRequest, tenant: TenantRecord, explicit: str | None = None
    ) -> str: ...  # pragma: no cover - interface only


def _match_supported(tag: str | None, supported: tuple[str, ...]) -> str | None:
    if not tag:
        return None
    wanted = normalize_locale(tag).lower()
    for candidate in supported:
        if candidate.lower() == wanted:
            return candidate
    language = wanted.split("-", 1)[0]
    for candidate in supported:
        if candidate.lower() == language:
            return candidate
    return None


class DefaultLocaleResolver:
    def __init__(self, cookie_name: str = "REALM_LOCALE", fallback: str = FALLBACK_LOCALE) -> None:
        self.cookie_name = cookie_name
        self.fallback = fallback

    def resolve(self, request: ErrorRequest, tenant: TenantRecord, explicit: str | None = None) -> str:
        if not tenant.internationalization_enabled:
            return self.fallback
        supported = tuple(normalize_locale(t) for t in tenant.supported_locales if t)
        for hint in (explicit, request.args.get(LOCALE_QUERY_PARAM), request.cookies.get(self.cookie_name)):
            match = _match_supported(hint, supported)
            if match:
                return match
        if supported:
            best = request.accept_languages.best_match(supported)
            if best:
                return best
        return normalize_locale(tenant.default_locale or "") or self.fallback


__all__ = ["LocaleResolver", "DefaultLocaleResolver", "FALLBACK_LOCALE", "LOCALE_QUERY_PARAM"]
