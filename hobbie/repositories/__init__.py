"""Repository package: persistence adapters over the SQLAlchemy session."""
from .hobby_repository import HobbyRepository

__all__ = [
    "HobbyRepository",
]
