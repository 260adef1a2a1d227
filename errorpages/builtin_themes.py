"""Login themes shipped with the server.

``base`` carries the error template and the full catalogs; ``light`` extends it
and only overrides styling.
"""
from __future__ import annotations

from .themes import ThemeCategory, ThemeDefinition

ERROR_FTL = """<!DOCTYPE html>
<html lang="{{ locale.language }}">
<head>
  <meta charset="utf-8">
  <title>{{ msg("errorTitle") if msg is defined else "Error" }} - {{ realm.label }}</title>
{% if properties is defined and properties.get("styles") %}
{% for style in properties["styles"].split() %}
  <link rel="stylesheet" href="{{ url.resources_path }}/{{ style }}">
{% endfor %}
{% endif %}
</head>
<body class="status-{{ statusCode }}">
  <header>{{ realm.label }}</header>
{% if locale.supported|length > 1 %}
  <nav class="locales">
    <span class="current">{{ locale.current }}</span>
    <ul>
{% for option in locale.supported %}
      <li><a href="{{ option.url }}">{{ option.label }}</a></li>
{% endfor %}
    </ul>
  </nav>
{% endif %}
  <main>
    <h1>{{ msg("errorTitle") if msg is defined else "Error" }}</h1>
    <p class="alert alert-{{ message.type.value }}">{{ message.summary }}</p>
    <a href="{{ url.login_url }}">{{ msg("backToLogin") if msg is defined else "Back to login" }}</a>
  </main>
</body>
</html>
"""

BASE_MESSAGES = {
    "en": {
        "errorTitle": "We are sorry...",
        "pageNotFound": "Page not found",
        "internalServerError": "An internal server error has occurred",
        "backToLogin": "Back to login",
        "locale_en": "English",
        "locale_sv": "Svenska",
        "locale_de": "Deutsch",
    },
    "sv": {
        "errorTitle": "Vi beklagar...",
        "pageNotFound": "Sidan hittades inte",
        "internalServerError": "Ett internt serverfel har inträffat",
        "backToLogin": "Tillbaka till inloggningen",
    },
    "de": {
        "errorTitle": "Es tut uns leid...",
        "pageNotFound": "Seite nicht gefunden",
        "internalServerError": "Es ist ein interner Serverfehler aufgetreten",
        "backToLogin": "Zurück zur Anmeldung",
    },
}

BASE_THEME = ThemeDefinition(
    name="base",
    category=ThemeCategory.LOGIN,
    templates={"error.ftl": ERROR_FTL},
    messages=BASE_MESSAGES,
    properties={"styles": "css/login.css", "locales": "en,sv,de"},
)

LIGHT_THEME = ThemeDefinition(
    name="light",
    category=ThemeCategory.LOGIN,
    parent="base",
    properties={"styles": "css/login.css css/light.css"},
)


def builtin_themes() -> list[ThemeDefinition]:
    return [BASE_THEME, LIGHT_THEME]


__all__ = ["ERROR_FTL", "BASE_THEME", "LIGHT_THEME", "builtin_themes"]
