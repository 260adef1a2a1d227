"""Error template attributes + Jinja2 rendering.

The attribute keys built here (statusCode, realm, url, locale, message, msg,
properties) are what theme authors write ``error.ftl`` against.
"""
from __future__ import annotations

import logging
from typing import Any, Protocol

from jinja2 import ChoiceLoader, DictLoader, Environment, TemplateError, select_autoescape

from .errors import MessageCatalogError, TemplateRenderError
from .tenants import TenantRecord
from .template_model import LocaleHelper, MessageBean, MessageFormatter, MessageType, UrlHelper
from .themes import Theme, ThemeDefinition

logger = logging.getLogger(__name__)

ERROR_TEMPLATE = "error.ftl"

# Catalog keys
PAGE_NOT_FOUND = "pageNotFound"
INTERNAL_SERVER_ERROR = "internalServerError"


class TemplateEngine(Protocol):
    def render(self, template_name: str, attributes: dict[str, Any], theme: Theme) -> str: ...  # pragma: no cover


class JinjaTemplateEngine:
    """Renders theme templates; one cached environment per theme."""

    def __init__(self) -> None:
        self._environments: dict[tuple[str, str], tuple[tuple[ThemeDefinition, ...], Environment]] = {}

    def _environment(self, theme: Theme) -> Environment:
        key = (theme.name, theme.category.value)
        cached = self._environments.get(key)
        if cached is not None and cached[0] == theme.chain:
            return cached[1]
        loader = ChoiceLoader([DictLoader(dict(src)) for src in theme.template_sources()])
        env = Environment(
            loader=loader,
            autoescape=select_autoescape(default=True, default_for_string=True),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # A redefined theme under the same name replaces the stale entry
        self._environments[key] = (theme.chain, env)
        return env

    def render(self, template_name: str, attributes: dict[str, Any], theme: Theme) -> str:
        try:
            template = self._environment(theme).get_template(template_name)
            return template.render(**attributes)
        except TemplateError as e:
            raise TemplateRenderError(template_name, str(e)) from e


def error_message_key(status_code: int) -> str:
    return PAGE_NOT_FOUND if status_code == 404 else INTERNAL_SERVER_ERROR


def build_attributes(
    tenant: TenantRecord,
    theme: Theme,
    locale: str,
    messages: dict[str, str],
    status_code: int,
    base_uri: str,
) -> dict[str, Any]:
    attributes: dict[str, Any] = {
        "statusCode": status_code,
        "realm": tenant,
        "url": UrlHelper(tenant, theme, base_uri),
        "locale": LocaleHelper(tenant, locale, base_uri, messages),
    }

    key = error_message_key(status_code)
    summary = messages.get(key)
    if summary is None:
        raise MessageCatalogError(f"message {key} missing for locale {locale} in theme {theme.name}")
    attributes["message"] = MessageBean(summary, MessageType.ERROR)

    try:
        attributes["msg"] = MessageFormatter(locale, theme.get_messages(locale))
    except Exception:
        logger.warning("Failed to build message formatter for theme %s", theme.name, exc_info=True)

    try:
        attributes["properties"] = theme.get_properties()
    except Exception:
        logger.warning("Failed to load properties for theme %s", theme.name, exc_info=True)

    return attributes


__all__ = [
    "ERROR_TEMPLATE",
    "PAGE_NOT_FOUND",
    "INTERNAL_SERVER_ERROR",
    "TemplateEngine",
    "JinjaTemplateEngine",
    "error_message_key",
    "build_attributes",
]
