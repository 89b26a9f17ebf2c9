"""Seed script for initial data.

Running this script fills the category and location catalogs and adds
a demo business with a handful of offers in Sofia, plus a demo client
whose test results match some of them. It can be executed with
``python -m seed.seed`` from the repository root, and running it again
leaves existing rows alone.
"""
from __future__ import annotations

from decimal import Decimal

from hobbie import create_app, db, transaction
from hobbie.errors import NotFoundError
from hobbie.models import CategoryNameEnum, Hobby, LocationEnum, TestResults
from hobbie.services import CategoryService, LocationService, UserService

DEMO_BUSINESS = "demo_business"
DEMO_CLIENT = "demo_client"

DEMO_OFFERS = [
    ("Climbing Wall", CategoryNameEnum.SPORT, "Reach new heights"),
    ("Vitosha Hiking Club", CategoryNameEnum.OUTDOOR, "Weekend hikes for every level"),
    ("Guitar for Beginners", CategoryNameEnum.MUSIC, "Three chords and the truth"),
    ("Pottery Studio", CategoryNameEnum.CREATIVE, "Get your hands dirty"),
    ("Board Game Nights", CategoryNameEnum.SOCIAL, "Meet people over a game"),
]


def seed_demo_data() -> bool:
    """Insert catalogs and demo accounts inside the current app context.

    Returns ``True`` if the demo accounts were created, ``False`` if
    they were already present.
    """
    categories = CategoryService()
    locations = LocationService()
    users = UserService()
    with transaction():
        categories.init_categories()
        locations.init_locations()

        try:
            users.find_business_by_username(DEMO_BUSINESS)
            return False
        except NotFoundError:
            pass

        sofia = locations.get_location_by_name(LocationEnum.SOFIA)
        business = users.register_business(
            DEMO_BUSINESS, "business@example.com", "password",
            business_name="Demo Hobbies Ltd.", address="1 Vitosha Blvd, Sofia",
        )
        for name, category_name, slogan in DEMO_OFFERS:
            hobby = Hobby(
                name=name,
                slogan=slogan,
                price=Decimal("20.00"),
                creator=business.username,
                category=categories.get_category_by_name(category_name),
                location=sofia,
            )
            db.session.add(hobby)
            business.hobby_offers.add(hobby)

        if users.find_app_client_by_username(DEMO_CLIENT) is None:
            users.register_client(
                DEMO_CLIENT, "client@example.com", "password",
                full_name="Demo Client",
                test_results=TestResults(
                    category_one=CategoryNameEnum.OUTDOOR,
                    category_two=CategoryNameEnum.MUSIC,
                    category_three=CategoryNameEnum.SPORT,
                    location=LocationEnum.SOFIA,
                ),
            )
    return True


def run_seeds() -> None:
    """Create the tables if needed and insert the seed data."""
    app = create_app()
    with app.app_context():
        db.create_all()
        if seed_demo_data():
            print("Seed data inserted successfully.")
        else:
            print("Seed data already present.")


if __name__ == "__main__":
    run_seeds()
