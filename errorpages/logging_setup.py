"""Logging wiring for the ``errorpages`` logger tree.

Records get ``request_id`` and ``path`` attributes ("-" outside a request) so
error page failures can be correlated with the request that triggered them.
"""

from __future__ import annotations

import logging

from flask import g, has_request_context, request

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(request_id)s %(path)s] %(message)s"
ROOT_LOGGER = "errorpages"


class RequestContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        rid = "-"
        path = "-"
        if has_request_context():
            rid = getattr(g, "request_id", "-")
            path = request.path
        record.request_id = rid
        record.path = path
        return True


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    log = logging.getLogger(ROOT_LOGGER)
    log.setLevel(level)
    # Avoid duplicate attachment if create_app runs more than once (tests)
    if not any(isinstance(f, RequestContextFilter) for h in log.handlers for f in h.filters):
        h = logging.StreamHandler()
        h.addFilter(RequestContextFilter())
        h.setFormatter(logging.Formatter(LOG_FORMAT))
        log.addHandler(h)
    return log


__all__ = ["LOG_FORMAT", "RequestContextFilter", "configure_logging"]
