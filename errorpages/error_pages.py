"""Uncaught exception -> HTTP response.

Flow for one failure:

1. mark the request's unit of work rollback-only
2. classify the failure into a status code
3. clients that do not accept HTML get the bare status (no realm/theme lookups)
4. otherwise resolve realm -> login theme -> locale -> message catalog and
   render ``error.ftl``
5. anything failing in step 3/4 yields a bare 500

The handler never raises; every call returns exactly one response.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any

from flask import Flask, request
from werkzeug.wrappers.response import Response

from . import metrics
from .context import ErrorRequest
from .errors import ClassifiedFailure, FailureClass, classify_failure
from .locales import LocaleResolver
from .negotiation import accepts_html
from .rendering import ERROR_TEMPLATE, TemplateEngine, build_attributes
from .responses import degraded, html_page, short_circuit
from .tenants import TenantRecord, TenantStore, resolve_tenant
from .themes import Theme, ThemeProvider, load_messages, resolve_theme
from .transaction import UnitOfWork, current_unit_of_work, mark_rollback_only

logger = logging.getLogger(__name__)


class ErrorOutcome(str, enum.Enum):
    DONE = "done"
    SHORT_CIRCUIT_DONE = "short_circuit"
    DEGRADED_DONE = "degraded"


@dataclass
class ErrorContext:
    failure: FailureClass
    tenant: TenantRecord | None = None
    theme: Theme | None = None
    locale: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    outcome: ErrorOutcome | None = None

    @property
    def status_code(self) -> int:
        return self.failure.status

    @property
    def classified(self) -> bool:
        return isinstance(self.failure, ClassifiedFailure)


class ErrorPageHandler:
    def __init__(
        self,
        tenant_store: TenantStore,
        theme_provider: ThemeProvider,
        locale_resolver: LocaleResolver,
        template_engine: TemplateEngine,
        default_tenant: str,
    ) -> None:
        self.tenant_store = tenant_store
        self.theme_provider = theme_provider
        self.locale_resolver = locale_resolver
        self.template_engine = template_engine
        self.default_tenant = default_tenant

    def to_response(
        self, exc: BaseException, req: ErrorRequest, unit_of_work: UnitOfWork | None = None
    ) -> Response:
        mark_rollback_only(unit_of_work)
        ctx = ErrorContext(failure=classify_failure(exc))
        try:
            if not accepts_html(req.accept):
                ctx.outcome = ErrorOutcome.SHORT_CIRCUIT_DONE
                resp = short_circuit(ctx.status_code)
            else:
                resp = html_page(ctx.status_code, self.render_page(ctx, req))
                ctx.outcome = ErrorOutcome.DONE
        except Exception:
            logger.error("Failed to create error page", exc_info=True)
            ctx.outcome = ErrorOutcome.DEGRADED_DONE
            resp = degraded()

        if 500 <= resp.status_code <= 599:
            logger.error("Uncaught server error", exc_info=exc)
        try:
            metrics.increment(
                f"error_page.{ctx.outcome.value}",
                {
                    "status": str(resp.status_code),
                    "realm": ctx.tenant.name if ctx.tenant else "-",
                    "classified": str(ctx.classified).lower(),
                },
            )
        except Exception:
            logger.warning("Failed to record error page metric", exc_info=True)
        return resp

    def render_page(self, ctx: ErrorContext, req: ErrorRequest) -> str:
        ctx.tenant = resolve_tenant(req.path, self.tenant_store, self.default_tenant)
        ctx.theme = resolve_theme(self.theme_provider, ctx.tenant)
        ctx.locale = self.locale_resolver.resolve(req, ctx.tenant, None)
        messages = load_messages(ctx.theme, ctx.locale)
        ctx.attributes = build_attributes(
            ctx.tenant, ctx.theme, ctx.locale, messages, ctx.status_code, req.base_uri
        )
        return self.template_engine.render(ERROR_TEMPLATE, ctx.attributes, ctx.theme)


def register_error_pages(app: Flask, handler: ErrorPageHandler) -> None:
    app.extensions["error_pages"] = handler

    @app.errorhandler(Exception)
    def _error_page(ex: Exception) -> Response:
        return handler.to_response(ex, ErrorRequest.from_flask(request), current_unit_of_work())


__all__ = ["ErrorOutcome", "ErrorContext", "ErrorPageHandler", "register_error_pages"]
