"""Response builders for the three ways an error page invocation can end."""
from __future__ import annotations

from werkzeug.wrappers.response import Response

from .errors import INTERNAL_SERVER_ERROR


def _bare(status: int) -> Response:
    resp = Response(status=status)
    # No body, so no content type either
    del resp.headers["Content-Type"]
    return resp


def short_circuit(status: int) -> Response:
    return _bare(status)


def html_page(status: int, body: str) -> Response:
    return Response(body, status=status, mimetype="text/html")


def degraded() -> Response:
    return _bare(INTERNAL_SERVER_ERROR)


__all__ = ["short_circuit", "html_page", "degraded"]
