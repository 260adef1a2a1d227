"""Per-request unit of work.

Every request gets one ``UnitOfWork`` (``g.unit_of_work``) wrapping a SQLAlchemy
session. At teardown it commits, unless it was marked rollback-only or the
request failed, in which case it rolls back.
"""
from __future__ import annotations

import logging
from collections.abc import Callable

from flask import Flask, g
from sqlalchemy.orm import Session

from .db import get_session, remove_session

logger = logging.getLogger(__name__)


class UnitOfWork:
    def __init__(self, session_factory: Callable[[], Session] = get_session) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None
        self._rollback_only = False
        self.active = False

    def begin(self) -> None:
        self.active = True

    @property
    def session(self) -> Session:
        if self._session is None:
            self._session = self._session_factory()
        return self._session

    @property
    def rollback_only(self) -> bool:
        return self._rollback_only

    def set_rollback_only(self) -> None:
        self._rollback_only = True

    def end(self, failed: bool = False) -> None:
        if not self.active:
            return
        self.active = False
        if self._session is None:
            return
        try:
            if self._rollback_only or failed:
                self._session.rollback()
            else:
                self._session.commit()
        finally:
            self._session.close()
            self._session = None


def mark_rollback_only(unit_of_work: UnitOfWork | None) -> None:
    if unit_of_work is None:
        logger.debug("No active unit of work to mark rollback-only")
        return
    unit_of_work.set_rollback_only()


def current_unit_of_work() -> UnitOfWork | None:
    return g.get("unit_of_work")


def init_unit_of_work(app: Flask) -> None:
    @app.before_request
    def _begin_unit_of_work() -> None:
        uow = UnitOfWork()
        uow.begin()
        g.unit_of_work = uow

    @app.teardown_request
    def _end_unit_of_work(exc: BaseException | None) -> None:
        uow = g.pop("unit_of_work", None)
        try:
            if uow is not None:
                uow.end(failed=exc is not None)
        finally:
            remove_session()


__all__ = ["UnitOfWork", "mark_rollback_only", "current_unit_of_work", "init_unit_of_work"]
