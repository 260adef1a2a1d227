"""Helper objects exposed to error templates as ``url``, ``locale``, ``message`` and ``msg``."""
from __future__ import annotations

import enum
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from urllib.parse import quote, urlencode

from .locales import LOCALE_QUERY_PARAM
from .tenants import TenantRecord
from .themes import Theme

logger = logging.getLogger(__name__)


class MessageType(str, enum.Enum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class MessageBean:
    summary: str
    type: MessageType = MessageType.ERROR


def _join(base_uri: str, *parts: str) -> str:
    base = base_uri.rstrip("/")
    return "/".join([base, *(quote(p, safe="") for p in parts)])


class UrlHelper:
    def __init__(self, tenant: TenantRecord, theme: Theme, base_uri: str) -> None:
        self._realm = tenant.name
        self._theme = theme.name
        self._category = theme.category.value
        self._base_uri = base_uri

    @property
    def login_url(self) -> str:
        return _join(self._base_uri, "realms", self._realm, "protocol", "openid-connect", "auth")

    @property
    def registration_url(self) -> str:
        return _join(self._base_uri, "realms", self._realm, "protocol", "openid-connect", "registrations")

    @property
    def login_restart_flow_url(self) -> str:
        return _join(self._base_uri, "realms", self._realm, "login-actions", "restart")

    @property
    def resources_path(self) -> str:
        return _join(self._base_uri, "resources", self._category, self._theme)

    @property
    def resources_common_path(self) -> str:
        return _join(self._base_uri, "resources", "common")


@dataclass(frozen=True)
class LocaleOption:
    label: str
    url: str


class LocaleHelper:
    """Current language label + language switcher links."""

    def __init__(self, tenant: TenantRecord, locale: str, base_uri: str, messages: Mapping[str, str]) -> None:
        self.language = locale
        self.current = messages.get(f"locale_{locale}", locale)
        self.supported = [
            LocaleOption(
                label=messages.get(f"locale_{tag}", tag),
                url=f"{base_uri}?{urlencode({LOCALE_QUERY_PARAM: tag})}",
            )
            for tag in tenant.supported_locales
        ]


class MessageFormatter:
    """Callable ``msg(key, *args)``; ``{0}``-style placeholders, unknown keys echo back."""

    def __init__(self, locale: str, messages: Mapping[str, str]) -> None:
        self.locale = locale
        self._messages = dict(messages)

    def __call__(self, key: str, *args: object) -> str:
        pattern = self._messages.get(key, key)
        if not args:
            return pattern
        try:
            return pattern.format(*args)
        except (IndexError, KeyError, ValueError):
            logger.debug("Unformattable message %s for locale %s", key, self.locale)
            return pattern


__all__ = [
    "MessageType",
    "MessageBean",
    "UrlHelper",
    "LocaleOption",
    "LocaleHelper",
    "MessageFormatter",
]
