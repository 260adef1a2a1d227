from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass
class Config:
    secret_key: str = "change-me"
    database_url: str = "sqlite:///dev.db"
    admin_realm: str = "master"  # fallback tenant for paths without /realms/<name>/
    default_login_theme: str = "base"
    default_locale: str = "en"
    locale_cookie_name: str = "REALM_LOCALE"
    log_level: str = "INFO"
    metrics_backend: str = "noop"  # noop | log
    bootstrap_admin_realm: bool = True

    @classmethod
    def from_env(cls) -> Config:
        return cls(
            secret_key=os.getenv("SECRET_KEY", "change-me"),
            database_url=os.getenv("DATABASE_URL", "sqlite:///dev.db"),
            admin_realm=os.getenv("ADMIN_REALM", "master").strip() or "master",
            default_login_theme=os.getenv("DEFAULT_LOGIN_THEME", "base").strip() or "base",
            default_locale=os.getenv("DEFAULT_LOCALE", "en").strip() or "en",
            locale_cookie_name=os.getenv("LOCALE_COOKIE_NAME", "REALM_LOCALE"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            metrics_backend=os.getenv("METRICS_BACKEND", "noop").strip().lower() or "noop",
            bootstrap_admin_realm=bool(int(os.getenv("BOOTSTRAP_ADMIN_REALM", "1"))),
        )

    def override(self, d: dict):
        for k, v in d.items():
            if hasattr(self, k):
                setattr(self, k, v)

    def to_flask_dict(self):
        return {
            "SECRET_KEY": self.secret_key,
            "SQLALCHEMY_DATABASE_URI": self.database_url,
            "ADMIN_REALM": self.admin_realm,
            "DEFAULT_LOGIN_THEME": self.default_login_theme,
            "DEFAULT_LOCALE": self.default_locale,
            "LOCALE_COOKIE_NAME": self.locale_cookie_name,
            "LOG_LEVEL": self.log_level,
            "METRICS_BACKEND": self.metrics_backend,
            "SESSION_COOKIE_HTTPONLY": True,
            "SESSION_COOKIE_SAMESITE": "Lax",
        }
