"""Category and location catalogs.

Both catalogs hold exactly one row per value of their closed enum
(``CategoryNameEnum`` and ``LocationEnum``). The ``init_*`` helpers are
idempotent and are run by the seed script and the test fixtures.
"""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select

from ..db import db
from ..models import Category, CategoryNameEnum, Location, LocationEnum

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, session=None) -> None:
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def get_category_by_name(self, name: CategoryNameEnum) -> Optional[Category]:
        stmt = select(Category).where(Category.name == name)
        return self.session.execute(stmt).scalar_one_or_none()

    def init_categories(self) -> int:
        """Insert a row for every category not yet in the catalog."""
        existing = set(self.session.execute(select(Category.name)).scalars())
        missing = [name for name in CategoryNameEnum if name not in existing]
        for name in missing:
            self.session.add(Category(name=name, description=name.value.capitalize()))
        self.session.flush()
        if missing:
            logger.info("Added %d categories", len(missing))
        return len(missing)


class LocationService:
    def __init__(self, session=None) -> None:
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def get_location_by_name(self, name: LocationEnum) -> Optional[Location]:
        stmt = select(Location).where(Location.name == name)
        return self.session.execute(stmt).scalar_one_or_none()

    def init_locations(self) -> int:
        """Insert a row for every location not yet in the catalog."""
        existing = set(self.session.execute(select(Location.name)).scalars())
        missing = [name for name in LocationEnum if name not in existing]
        for name in missing:
            self.session.add(Location(name=name))
        self.session.flush()
        if missing:
            logger.info("Added %d locations", len(missing))
        return len(missing)
