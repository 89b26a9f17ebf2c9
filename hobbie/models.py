"""
Database models for the Hobbie backend.

Business owners publish ``Hobby`` offers; app clients take a short
test whose answers (up to six categories and a single location) drive
the hobby matches they receive, and keep a personal list of saved
hobbies. Both account types share the ``users`` table through
single-table inheritance keyed on ``role``.

``Category`` and ``Location`` are catalog rows, one per value of the
closed ``CategoryNameEnum`` and ``LocationEnum`` sets.
"""

from __future__ import annotations

import enum
from typing import List, Optional, Set

from werkzeug.security import generate_password_hash, check_password_hash

from .db import db


class Role(enum.Enum):
    """Enumeration of user roles."""
    CLIENT = "client"
    BUSINESS = "business"


class CategoryNameEnum(enum.Enum):
    ACTIVE = "ACTIVE"
    OUTDOOR = "OUTDOOR"
    SPORT = "SPORT"
    MUSIC = "MUSIC"
    CREATIVE = "CREATIVE"
    SOCIAL = "SOCIAL"
    RELAX = "RELAX"
    FOOD = "FOOD"
    OTHER = "OTHER"


class LocationEnum(enum.Enum):
    SOFIA = "SOFIA"
    PLOVDIV = "PLOVDIV"
    VARNA = "VARNA"
    BURGAS = "BURGAS"
    RUSE = "RUSE"


# Composite primary keys: a hobby is linked to a given user at most once.
saved_hobbies_table = db.Table(
    "app_client_saved_hobbies",
    db.Column("client_id", db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    db.Column("hobby_id", db.Integer, db.ForeignKey("hobbies.id", ondelete="CASCADE"), primary_key=True),
)

hobby_matches_table = db.Table(
    "app_client_hobby_matches",
    db.Column("client_id", db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    db.Column("hobby_id", db.Integer, db.ForeignKey("hobbies.id", ondelete="CASCADE"), primary_key=True),
)

hobby_offers_table = db.Table(
    "business_owner_hobby_offers",
    db.Column("business_id", db.Integer, db.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    db.Column("hobby_id", db.Integer, db.ForeignKey("hobbies.id", ondelete="CASCADE"), primary_key=True),
)


class Category(db.Model):
    __allow_unmapped__ = True
    """Catalog row for a hobby category."""
    __tablename__ = "categories"

    id: int = db.Column(db.Integer, primary_key=True)
    name: CategoryNameEnum = db.Column(db.Enum(CategoryNameEnum), unique=True, nullable=False)
    description: Optional[str] = db.Column(db.String(255))

    def __repr__(self) -> str:
        return f"<Category {self.name.value}>"


class Location(db.Model):
    __allow_unmapped__ = True
    """Catalog row for a city a hobby can take place in."""
    __tablename__ = "locations"

    id: int = db.Column(db.Integer, primary_key=True)
    name: LocationEnum = db.Column(db.Enum(LocationEnum), unique=True, nullable=False)

    def __repr__(self) -> str:
        return f"<Location {self.name.value}>"


class Hobby(db.Model):
    __allow_unmapped__ = True
    """A hobby offer published by a business owner.

    Up to four images are hosted on Cloudinary. For each image the
    public URL is kept for display and the Cloudinary public id is kept
    so the resource can be deleted when the offer changes or goes away.
    """
    __tablename__ = "hobbies"

    MEDIA_FIELDS = ("profile_img_id", "gallery_img1_id", "gallery_img2_id", "gallery_img3_id")

    id: int = db.Column(db.Integer, primary_key=True)
    name: str = db.Column(db.String(100), nullable=False)
    slogan: Optional[str] = db.Column(db.String(255))
    intro: Optional[str] = db.Column(db.String(255))
    description: Optional[str] = db.Column(db.Text)
    price = db.Column(db.Numeric(8, 2))
    contact_info: Optional[str] = db.Column(db.String(255))
    creator: str = db.Column(db.String(50), nullable=False, index=True)

    category_id: Optional[int] = db.Column(db.Integer, db.ForeignKey("categories.id"))
    location_id: Optional[int] = db.Column(db.Integer, db.ForeignKey("locations.id"), index=True)

    profile_img_url: Optional[str] = db.Column(db.String(512))
    profile_img_id: Optional[str] = db.Column(db.String(255))
    gallery_img1_url: Optional[str] = db.Column(db.String(512))
    gallery_img1_id: Optional[str] = db.Column(db.String(255))
    gallery_img2_url: Optional[str] = db.Column(db.String(512))
    gallery_img2_id: Optional[str] = db.Column(db.String(255))
    gallery_img3_url: Optional[str] = db.Column(db.String(512))
    gallery_img3_id: Optional[str] = db.Column(db.String(255))

    category: Optional[Category] = db.relationship("Category", lazy="joined")
    location: Optional[Location] = db.relationship("Location", lazy="joined")

    # Reverse sides of the association tables; they let the ORM drop
    # link rows when a hobby row is deleted.
    saved_by: List[AppClient] = db.relationship(
        "AppClient", secondary=saved_hobbies_table, back_populates="saved_hobbies"
    )
    matched_to: List[AppClient] = db.relationship(
        "AppClient", secondary=hobby_matches_table, back_populates="hobby_matches"
    )
    offered_by: List[BusinessOwner] = db.relationship(
        "BusinessOwner", secondary=hobby_offers_table, back_populates="hobby_offers"
    )

    def media_resource_ids(self) -> list[str]:
        """Return the Cloudinary public ids that are set, in field order."""
        return media_resource_ids(self)

    def __repr__(self) -> str:
        return f"<Hobby {self.id} {self.name!r} by {self.creator}>"


def media_resource_ids(hobby) -> list[str]:
    """Collect the non-blank media ids of any hobby-like object."""
    resource_ids = []
    for field in Hobby.MEDIA_FIELDS:
        value = getattr(hobby, field, None)
        if value is not None and value.strip():
            resource_ids.append(value)
    return resource_ids


class TestResults(db.Model):
    __allow_unmapped__ = True
    __test__ = False  # not a pytest class
    """An app client's answers to the hobby test."""
    __tablename__ = "test_results"

    id: int = db.Column(db.Integer, primary_key=True)
    category_one: Optional[CategoryNameEnum] = db.Column(db.Enum(CategoryNameEnum))
    category_two: Optional[CategoryNameEnum] = db.Column(db.Enum(CategoryNameEnum))
    category_three: Optional[CategoryNameEnum] = db.Column(db.Enum(CategoryNameEnum))
    category_four: Optional[CategoryNameEnum] = db.Column(db.Enum(CategoryNameEnum))
    category_five: Optional[CategoryNameEnum] = db.Column(db.Enum(CategoryNameEnum))
    category_six: Optional[CategoryNameEnum] = db.Column(db.Enum(CategoryNameEnum))
    location: LocationEnum = db.Column(db.Enum(LocationEnum), nullable=False)

    def categories(self) -> list[Optional[CategoryNameEnum]]:
        return [
            self.category_one,
            self.category_two,
            self.category_three,
            self.category_four,
            self.category_five,
            self.category_six,
        ]

    def __repr__(self) -> str:
        return f"<TestResults {self.id} {self.location.value}>"


class User(db.Model):
    __allow_unmapped__ = True  # allow unmapped type annotations for SQLAlchemy 2.0
    """An account of the system.

    Users are either app clients or business owners. Passwords are
    stored as salted hashes.
    """
    __tablename__ = "users"

    id: int = db.Column(db.Integer, primary_key=True)
    username: str = db.Column(db.String(50), unique=True, nullable=False)
    email: str = db.Column(db.String(120), unique=True, nullable=False)
    password_hash: str = db.Column(db.String(256), nullable=False)
    role: Role = db.Column(db.Enum(Role), nullable=False)

    __mapper_args__ = {"polymorphic_on": role}

    def set_password(self, password: str) -> None:
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    def __repr__(self) -> str:
        return f"<User {self.username} ({self.role.value})>"


class AppClient(User):
    """End-user account that receives hobby suggestions."""

    full_name: Optional[str] = db.Column(db.String(100))
    gender: Optional[str] = db.Column(db.String(20))
    test_results_id: Optional[int] = db.Column(db.Integer, db.ForeignKey("test_results.id"))

    test_results: Optional[TestResults] = db.relationship("TestResults")
    saved_hobbies: List[Hobby] = db.relationship(
        "Hobby", secondary=saved_hobbies_table, back_populates="saved_by"
    )
    hobby_matches: Set[Hobby] = db.relationship(
        "Hobby", secondary=hobby_matches_table, back_populates="matched_to", collection_class=set
    )

    __mapper_args__ = {"polymorphic_identity": Role.CLIENT}


class BusinessOwner(User):
    """Account that publishes hobby offers."""

    business_name: Optional[str] = db.Column(db.String(100))
    address: Optional[str] = db.Column(db.String(255))

    hobby_offers: Set[Hobby] = db.relationship(
        "Hobby", secondary=hobby_offers_table, back_populates="offered_by", collection_class=set
    )

    __mapper_args__ = {"polymorphic_identity": Role.BUSINESS}
