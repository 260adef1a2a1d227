"""Flask application factory.

Provides:
 - App factory with configuration override
 - DB engine initialization + administrative realm bootstrap
 - Per-request unit of work and request ids
 - Themed, localized error pages for every uncaught exception
"""

from __future__ import annotations

import os
import uuid
from typing import Any

from dotenv import load_dotenv
from flask import Flask, g, request
from werkzeug.wrappers.response import Response

from .builtin_themes import builtin_themes
from .config import Config
from .db import create_all, init_engine
from .error_pages import ErrorPageHandler, register_error_pages
from .health_api import bp as health_bp
from .locales import DefaultLocaleResolver
from .logging_setup import configure_logging
from .metrics import reset_metrics, set_metrics
from .metrics_logging import LoggingMetrics
from .rendering import JinjaTemplateEngine
from .tenants import SqlTenantStore, ensure_admin_tenant
from .themes import ExtendingThemeProvider
from .transaction import init_unit_of_work


def build_error_page_handler(cfg: Config, extra_themes: list | None = None) -> ErrorPageHandler:
    return ErrorPageHandler(
        tenant_store=SqlTenantStore(),
        theme_provider=ExtendingThemeProvider(
            builtin_themes() + list(extra_themes or []), default_theme=cfg.default_login_theme
        ),
        locale_resolver=DefaultLocaleResolver(cookie_name=cfg.locale_cookie_name, fallback=cfg.default_locale),
        template_engine=JinjaTemplateEngine(),
        default_tenant=cfg.admin_realm,
    )


def create_app(config_override: dict[str, Any] | None = None) -> Flask:
    try:  # pragma: no cover
        load_dotenv()
    except Exception:
        pass
    app = Flask(__name__)
    # --- Configuration ---
    cfg = Config.from_env()
    if config_override:
        known = {k: v for k, v in config_override.items() if hasattr(cfg, k)}
        if known:
            cfg.override(known)
        for k, v in config_override.items():  # also allow direct Flask config keys
            if k.isupper():
                app.config[k] = v
    # Resolve stable absolute dev DB path when DATABASE_URL not provided
    if not os.getenv("DATABASE_URL") and cfg.database_url == "sqlite:///dev.db":
        os.makedirs(app.instance_path, exist_ok=True)
        cfg.database_url = f"sqlite:///{os.path.join(app.instance_path, 'dev.db')}"
    app.config.update(cfg.to_flask_dict())

    log = configure_logging(cfg.log_level)

    # --- DB setup ---
    init_engine(cfg.database_url, force=bool(app.config.get("FORCE_DB_REINIT")))
    if app.config.get("TESTING") or os.getenv("DEV_CREATE_ALL", "0") == "1":
        create_all()
    if cfg.bootstrap_admin_realm:
        try:
            ensure_admin_tenant(cfg.admin_realm)
        except Exception:
            # Tables may not exist yet on a fresh database (run alembic upgrade head)
            log.warning("Could not bootstrap administrative realm %s", cfg.admin_realm, exc_info=True)

    # --- Metrics ---
    if cfg.metrics_backend == "log":
        set_metrics(LoggingMetrics())
        log.info("Metrics backend initialized: log")
    else:
        reset_metrics()

    # --- Request id ---
    @app.before_request
    def _assign_request_id() -> None:
        g.request_id = request.headers.get("X-Request-Id") or str(uuid.uuid4())

    @app.after_request
    def _echo_request_id(resp: Response) -> Response:
        rid = getattr(g, "request_id", None)
        if rid and "X-Request-Id" not in resp.headers:
            resp.headers["X-Request-Id"] = rid
        return resp

    init_unit_of_work(app)

    app.register_blueprint(health_bp)

    # --- Error handling ---
    register_error_pages(app, build_error_page_handler(cfg, app.config.get("EXTRA_THEMES")))
    return app


__all__ = ["create_app", "build_error_page_handler"]
