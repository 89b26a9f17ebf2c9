"""Seed data tests."""
from __future__ import annotations

from sqlalchemy import func, select

from hobbie import db
from hobbie.models import Hobby, User
from seed.seed import DEMO_BUSINESS, DEMO_CLIENT, DEMO_OFFERS, seed_demo_data


def count(model) -> int:
    return db.session.execute(select(func.count()).select_from(model)).scalar_one()


def test_seed_can_run_twice(app, users, hobby_service) -> None:
    assert seed_demo_data() is True
    assert seed_demo_data() is False

    assert count(User) == 2
    assert count(Hobby) == len(DEMO_OFFERS)
    assert len(users.find_business_by_username(DEMO_BUSINESS).hobby_offers) == len(DEMO_OFFERS)
    assert len(hobby_service.find_hobby_matches(DEMO_CLIENT)) == 3
