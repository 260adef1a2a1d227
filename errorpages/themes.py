"""Theme resolution + message catalogs.

A theme is a named bundle of templates, per-locale message catalogs and static
properties. Definitions may name a ``parent``; ``ExtendingThemeProvider``
resolves the chain and ``Theme`` merges along it (child overrides parent).
Loading definitions from disk is not handled here; callers register
``ThemeDefinition`` values.
"""
from __future__ import annotations

import enum
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from .errors import MessageCatalogError, ThemeError

logger = logging.getLogger(__name__)

BASE_CATALOG_LOCALE = "en"


class ThemeCategory(str, enum.Enum):
    LOGIN = "login"
    ACCOUNT = "account"
    ADMIN = "admin"
    EMAIL = "email"


@dataclass(frozen=True)
class ThemeDefinition:
    name: str
    category: ThemeCategory
    parent: str | None = None
    templates: Mapping[str, str] = field(default_factory=dict)
    messages: Mapping[str, Mapping[str, str]] = field(default_factory=dict)  # locale tag -> catalog
    properties: Mapping[str, str] = field(default_factory=dict)


def normalize_locale(tag: str) -> str:
    return (tag or "").strip().replace("_", "-")


def _catalog_candidates(locale: str) -> list[str]:
    # English base, then bare language, then full tag (most specific wins)
    tag = normalize_locale(locale)
    out: list[str] = []
    for candidate in (BASE_CATALOG_LOCALE, tag.split("-", 1)[0], tag):
        if candidate and candidate not in out:
            out.append(candidate)
    return out


class Theme:
    def __init__(self, chain: list[ThemeDefinition]):
        if not chain:
            raise ThemeError("empty theme chain")
        self._chain = tuple(chain)

    @property
    def name(self) -> str:
        return self._chain[0].name

    @property
    def category(self) -> ThemeCategory:
        return self._chain[0].category

    @property
    def chain(self) -> tuple[ThemeDefinition, ...]:
        return self._chain

    def template_sources(self) -> list[Mapping[str, str]]:
        """Template mappings in lookup order (child first)."""
        return [d.templates for d in self._chain]

    def get_messages(self, locale: str) -> dict[str, str]:
        if not any(d.messages for d in self._chain):
            raise MessageCatalogError(f"theme {self.name} has no message catalogs")
        candidates = _catalog_candidates(locale)
        merged: dict[str, str] = {}
        for definition in reversed(self._chain):
            for tag in candidates:
                merged.update(definition.messages.get(tag, {}))
        return merged

    def get_properties(self) -> dict[str, str]:
        merged: dict[str, str] = {}
        for definition in reversed(self._chain):
            merged.update(definition.properties)
        return merged

    def __repr__(self) -> str:  # pragma: no cover - debug helper
        return f"Theme({' -> '.join(d.name for d in self._chain)}, {self.category.value})"


class ThemeProvider(Protocol):
    def get_theme(self, name: str | None, category: ThemeCategory) -> Theme: ...  # pragma: no cover


class ExtendingThemeProvider:
    """Resolves themes with parent inheritance; unknown names use the default theme."""

    def __init__(self, definitions: Iterable[ThemeDefinition], default_theme: str = "base") -> None:
        self._definitions: dict[tuple[ThemeCategory, str], ThemeDefinition] = {
            (d.category, d.name): d for d in definitions
        }
        self.default_theme = default_theme

    def names(self, category: ThemeCategory) -> list[str]:
        return sorted(name for (cat, name) in self._definitions if cat == category)

    def get_theme(self, name: str | None, category: ThemeCategory) -> Theme:
        wanted = name or self.default_theme
        if (category, wanted) not in self._definitions:
            if name:
                logger.warning(
                    "Failed to find %s theme %s, using default theme %s",
                    category.value,
                    name,
                    self.default_theme,
                )
            wanted = self.default_theme
            if (category, wanted) not in self._definitions:
                raise ThemeError(f"default {category.value} theme {wanted} is not registered")
        return Theme(self._chain(wanted, category))

    def _chain(self, name: str, category: ThemeCategory) -> list[ThemeDefinition]:
        chain: list[ThemeDefinition] = []
        seen: set[str] = set()
        current: str | None = name
        while current is not None:
            if current in seen:
                raise ThemeError(f"theme inheritance cycle at {current}")
            definition = self._definitions.get((category, current))
            if definition is None:
                raise ThemeError(f"parent theme {current} of {chain[-1].name} not found")
            seen.add(current)
            chain.append(definition)
            current = definition.parent
        return chain


def resolve_theme(provider: ThemeProvider, tenant) -> Theme:
    return provider.get_theme(tenant.login_theme, ThemeCategory.LOGIN)


def load_messages(theme: Theme, locale: str) -> dict[str, str]:
    return theme.get_messages(locale)


__all__ = [
    "ThemeCategory",
    "ThemeDefinition",
    "Theme",
    "ThemeProvider",
    "ExtendingThemeProvider",
    "normalize_locale",
    "resolve_theme",
    "load_messages",
]
