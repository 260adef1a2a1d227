from __future__ import annotations

from errorpages.config import Config


def test_defaults(monkeypatch):
    for var in ("ADMIN_REALM", "DEFAULT_LOGIN_THEME", "DEFAULT_LOCALE", "METRICS_BACKEND", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    cfg = Config.from_env()
    assert cfg.admin_realm == "master"
    assert cfg.default_login_theme == "base"
    assert cfg.default_locale == "en"
    assert cfg.metrics_backend == "noop"
    assert cfg.log_level == "INFO"


def test_from_env(monkeypatch):
    monkeypatch.setenv("ADMIN_REALM", "ops")
    monkeypatch.setenv("DEFAULT_LOGIN_THEME", "light")
    monkeypatch.setenv("METRICS_BACKEND", "LOG")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("BOOTSTRAP_ADMIN_REALM", "0")
    cfg = Config.from_env()
    assert cfg.admin_realm == "ops"
    assert cfg.default_login_theme == "light"
    assert cfg.metrics_backend == "log"
    assert cfg.log_level == "DEBUG"
    assert cfg.bootstrap_admin_realm is False


def test_blank_admin_realm_keeps_default(monkeypatch):
    monkeypatch.setenv("ADMIN_REALM", "  ")
    assert Config.from_env().admin_realm == "master"


def test_override_ignores_unknown_keys():
    cfg = Config()
    cfg.override({"admin_realm": "root", "nope": 1})
    assert cfg.admin_realm == "root"
    assert not hasattr(cfg, "nope")


def test_flask_dict():
    d = Config(admin_realm="root").to_flask_dict()
    assert d["ADMIN_REALM"] == "root"
    assert d["SQLALCHEMY_DATABASE_URI"] == "sqlite:///dev.db"


def test_create_app_applies_overrides(tmp_path):
    from errorpages.app_factory import create_app

    app = create_app(
        {
            "TESTING": True,
            "database_url": f"sqlite:///{tmp_path / 'cfg.db'}",
            "FORCE_DB_REINIT": True,
            "admin_realm": "ops",
            "default_login_theme": "light",
        }
    )
    assert app.config["ADMIN_REALM"] == "ops"
    handler = app.extensions["error_pages"]
    assert handler.default_tenant == "ops"
    assert handler.theme_provider.default_theme == "light"
