"""Failure taxonomy + status classification.

``classify_failure`` turns any exception into a closed union evaluated once per
handled error:

- ``ClassifiedFailure``: the failure carries an explicit HTTP status
  (``DomainError`` subclasses, Werkzeug ``HTTPException``).
- ``UnclassifiedFailure``: anything else; always 500.

The remaining classes are raised by the error page pipeline itself and all end
in the degraded response.
"""
from __future__ import annotations

from dataclasses import dataclass

from werkzeug.exceptions import HTTPException

INTERNAL_SERVER_ERROR = 500
_MIN_STATUS = 100
_MAX_STATUS = 599


# ---- Classified (HTTP-aware) failures ----
class DomainError(Exception):
    def __init__(self, status: int, code: str, detail: str | None = None):
        self.status = status
        self.code = code
        self.detail = detail or code
        super().__init__(self.detail)


class BadRequestError(DomainError):
    def __init__(self, detail: str | None = None):
        super().__init__(400, "bad_request", detail)


class UnauthorizedError(DomainError):
    def __init__(self, detail: str | None = None):
        super().__init__(401, "unauthorized", detail)


class ForbiddenError(DomainError):
    def __init__(self, detail: str | None = None):
        super().__init__(403, "forbidden", detail)


class NotFoundError(DomainError):
    def __init__(self, detail: str | None = None):
        super().__init__(404, "not_found", detail)


class ConflictError(DomainError):
    def __init__(self, detail: str | None = None):
        super().__init__(409, "conflict", detail)


# ---- Pipeline failures (degraded path) ----
class ErrorPagesError(Exception):
    """Base for failures raised while building an error page."""


class TenantNotFoundError(ErrorPagesError):
    """Neither the requested realm nor the administrative realm exists."""

    def __init__(self, name: str):
        super().__init__(f"tenant not found: {name}")
        self.name = name


class ThemeError(ErrorPagesError):
    pass


class MessageCatalogError(ErrorPagesError):
    pass


class TemplateRenderError(ErrorPagesError):
    def __init__(self, template_name: str, message: str):
        super().__init__(f"{template_name}: {message}")
        self.template_name = template_name


# ---- Classification ----
@dataclass(frozen=True)
class ClassifiedFailure:
    status: int
    cause: BaseException


@dataclass(frozen=True)
class UnclassifiedFailure:
    cause: BaseException

    @property
    def status(self) -> int:
        return INTERNAL_SERVER_ERROR


FailureClass = ClassifiedFailure | UnclassifiedFailure


def _explicit_status(exc: BaseException) -> int | None:
    if isinstance(exc, DomainError):
        return exc.status
    if isinstance(exc, HTTPException):
        # An attached response wins over the class default, e.g. abort(Response(..., 418))
        if exc.response is not None:
            return exc.response.status_code
        return exc.code
    return None


def classify_failure(exc: BaseException) -> FailureClass:
    status = _explicit_status(exc)
    if isinstance(status, int) and _MIN_STATUS <= status <= _MAX_STATUS:
        return ClassifiedFailure(status=status, cause=exc)
    return UnclassifiedFailure(cause=exc)


def status_code_for(exc: BaseException) -> int:
    return classify_failure(exc).status


__all__ = [
    "DomainError",
    "BadRequestError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "ErrorPagesError",
    "TenantNotFoundError",
    "ThemeError",
    "MessageCatalogError",
    "TemplateRenderError",
    "ClassifiedFailure",
    "UnclassifiedFailure",
    "FailureClass",
    "classify_failure",
    "status_code_for",
]
