"""Shared fixtures: a Flask app on an in-memory SQLite database.

The Cloudinary purger is replaced by a ``RecordingPurger`` and the
match sampler gets a seeded random source, so tests never reach the
network and matching is reproducible.
"""
from __future__ import annotations

import random

import pytest

from hobbie import create_app, db, transaction
from hobbie.models import CategoryNameEnum, Hobby, LocationEnum
from hobbie.services import CategoryService, LocationService, UserService

from fakes import RecordingPurger


@pytest.fixture()
def purger() -> RecordingPurger:
    return RecordingPurger()


@pytest.fixture()
def app(purger):
    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": "sqlite://",
        "JWT_SECRET_KEY": "test-secret-key-that-is-long-enough-for-hs256",
        "MEDIA_PURGER": purger,
        "MATCH_RNG": random.Random(1234),
    })
    with app.app_context():
        db.create_all()
        with transaction():
            CategoryService().init_categories()
            LocationService().init_locations()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def hobby_service(app):
    return app.extensions["hobby_service"]


@pytest.fixture()
def users(app) -> UserService:
    return UserService()


@pytest.fixture()
def make_hobby(app):
    """Insert a hobby and return it; keyword arguments become columns."""
    categories = CategoryService()
    locations = LocationService()

    def _make_hobby(
        name: str = "Hobby",
        creator: str = "biz1",
        category: CategoryNameEnum | None = CategoryNameEnum.OUTDOOR,
        location: LocationEnum = LocationEnum.SOFIA,
        **columns,
    ) -> Hobby:
        with transaction():
            hobby = Hobby(
                name=name,
                creator=creator,
                category=categories.get_category_by_name(category) if category else None,
                location=locations.get_location_by_name(location),
                **columns,
            )
            db.session.add(hobby)
            db.session.flush()
        return hobby

    return _make_hobby
