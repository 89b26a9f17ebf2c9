"""Repository for ``Hobby`` rows."""
from __future__ import annotations

import logging
from typing import List, Optional, Set

from sqlalchemy import select

from ..db import db
from ..models import Hobby, Location, media_resource_ids

logger = logging.getLogger(__name__)


class HobbyRepository:
    """Queries and writes ``Hobby`` rows through the shared session.

    Writes are flushed, never committed: the enclosing
    :func:`hobbie.db.transaction` scope decides when to commit.
    """

    def __init__(self, session=None) -> None:
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def find_by_id(self, hobby_id: int, lock: bool = False) -> Optional[Hobby]:
        """Return the hobby with *hobby_id*, or ``None``.

        With ``lock=True`` the row is read with ``SELECT ... FOR UPDATE``
        so concurrent deletes of the same id serialize.
        """
        if hobby_id is None:
            return None
        if lock:
            stmt = select(Hobby).where(Hobby.id == hobby_id).with_for_update()
            return self.session.execute(stmt).unique().scalar_one_or_none()
        return self.session.get(Hobby, hobby_id)

    def find_stored_media_ids(self, hobby_id: int) -> List[str]:
        """Return the media ids held by the stored row for *hobby_id*.

        The columns are selected directly without autoflush, so edits
        pending on an instance already in the session are not seen.
        """
        if hobby_id is None:
            return []
        columns = [getattr(Hobby, field) for field in Hobby.MEDIA_FIELDS]
        stmt = select(*columns).where(Hobby.id == hobby_id)
        with self.session.no_autoflush:
            row = self.session.execute(stmt).one_or_none()
        if row is None:
            return []
        return media_resource_ids(row)

    def save(self, hobby: Hobby) -> Hobby:
        """Insert a new hobby or update the stored one with the same id."""
        if hobby.id is None:
            self.session.add(hobby)
            persisted = hobby
        else:
            persisted = self.session.merge(hobby)
        self.session.flush()
        return persisted

    def delete_by_id(self, hobby_id: int) -> None:
        hobby = self.session.get(Hobby, hobby_id)
        if hobby is None:
            logger.debug("Hobby %s already gone", hobby_id)
            return
        self.session.delete(hobby)
        self.session.flush()

    def find_all_by_location(self, location: Location) -> List[Hobby]:
        stmt = select(Hobby).where(Hobby.location_id == location.id).order_by(Hobby.id)
        return list(self.session.execute(stmt).unique().scalars())

    def find_all_by_creator(self, username: str) -> Set[Hobby]:
        stmt = select(Hobby).where(Hobby.creator == username)
        return set(self.session.execute(stmt).unique().scalars())
