"""Service layer for the Hobbie backend.

This package contains business logic that sits between the
Flask route handlers and the database models. Services return
model instances or plain Python values, and raise exceptions
defined in ``hobbie.errors`` when something goes wrong. Nothing
in this package performs any HTTP handling or commits a
transaction.
"""

from .catalog_service import CategoryService, LocationService
from .hobby_service import HobbyService
from .media_service import CloudinaryMediaPurger
from .user_service import UserService

__all__ = [
    "CategoryService",
    "CloudinaryMediaPurger",
    "HobbyService",
    "LocationService",
    "UserService",
]
