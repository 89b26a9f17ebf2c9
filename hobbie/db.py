"""Database setup utilities.

This module centralises the configuration of the SQLAlchemy
engine and session. It exposes the ``db`` object used by
models throughout the application, and the ``transaction``
scope that every public service operation runs inside.

Import ``db`` from ``hobbie`` rather than from this module
directly. The application factory initialises ``db`` with the
Flask app.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.orm import Session

db = SQLAlchemy()

logger = logging.getLogger(__name__)


@contextmanager
def transaction() -> Iterator[Session]:
    """Run a unit of work against the current session.

    Services and repositories only flush; the scope commits when the
    block exits normally and rolls back when an exception escapes it.
    Nested scopes join the outermost one, so only the outermost exit
    commits.

    Yields
    ------
    Session
        The Flask-SQLAlchemy scoped session.
    """
    session = db.session
    depth = session.info.get("transaction_depth", 0)
    session.info["transaction_depth"] = depth + 1
    try:
        yield session
        if depth == 0:
            session.commit()
    except Exception:
        if depth == 0:
            logger.debug("Rolling back transaction after uncaught error")
            session.rollback()
        raise
    finally:
        session.info["transaction_depth"] = depth
