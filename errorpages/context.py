from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from werkzeug.datastructures import Headers, LanguageAccept, MIMEAccept
from werkzeug.http import parse_accept_header
from werkzeug.wrappers import Request


@dataclass(frozen=True)
class ErrorRequest:
    """Request facts the error page pipeline reads, passed explicitly.

    Built from the live Flask request via ``from_flask``; tests build it directly.
    """

    path: str
    base_uri: str
    headers: Headers = field(default_factory=Headers)
    args: Mapping[str, str] = field(default_factory=dict)
    cookies: Mapping[str, str] = field(default_factory=dict)

    @property
    def accept(self) -> MIMEAccept:
        return parse_accept_header(self.headers.get("Accept"), MIMEAccept)

    @property
    def accept_languages(self) -> LanguageAccept:
        return parse_accept_header(self.headers.get("Accept-Language"), LanguageAccept)

    @classmethod
    def from_flask(cls, req: Request) -> ErrorRequest:
        return cls(
            path=req.path,
            base_uri=req.url_root,
            headers=Headers(req.headers),
            args=req.args.to_dict(),
            cookies=dict(req.cookies),
        )


__all__ = ["ErrorRequest"]
