from __future__ import annotations

from werkzeug.datastructures import MIMEAccept
from werkzeug.http import parse_accept_header

HTML_MEDIA_TYPE = "text/html"
TEXT_WILDCARD = "text/*"


def _compatible_with_html(media_type: str) -> bool:
    media = media_type.partition(";")[0].strip().lower()
    # */* is what API clients send by default; it does not ask for a page
    return media in (HTML_MEDIA_TYPE, TEXT_WILDCARD)


def accepts_html(accept: MIMEAccept | str | None) -> bool:
    """True when the requester lists an HTML-compatible media type with q > 0."""
    if accept is None or isinstance(accept, str):
        accept = parse_accept_header(accept, MIMEAccept)
    return any(q > 0 and _compatible_with_html(value) for value, q in accept)


__all__ = ["HTML_MEDIA_TYPE", "TEXT_WILDCARD", "accepts_html"]
