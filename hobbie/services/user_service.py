"""Lookup and maintenance of app client and business owner accounts."""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import select

from ..db import db
from ..errors import NotFoundError
from ..models import AppClient, BusinessOwner, Hobby, TestResults

logger = logging.getLogger(__name__)


class UserService:
    """User directory used by the hobby service.

    Accounts are looked up by username. Mutations are applied to the
    loaded entities and flushed; the caller's transaction scope commits
    them.
    """

    def __init__(self, session=None) -> None:
        self._session = session

    @property
    def session(self):
        return self._session if self._session is not None else db.session

    def find_app_client_by_username(self, username: str) -> Optional[AppClient]:
        stmt = select(AppClient).where(AppClient.username == username)
        return self.session.execute(stmt).scalar_one_or_none()

    def find_business_by_username(self, username: str) -> BusinessOwner:
        """Return the business owner called *username*.

        Raises
        ------
        NotFoundError
            If no business account has that username.
        """
        stmt = select(BusinessOwner).where(BusinessOwner.username == username)
        business = self.session.execute(stmt).scalar_one_or_none()
        if business is None:
            raise NotFoundError(f"Business {username} does not exist")
        return business

    def find_and_remove_hobby_from_clients_records(self, hobby: Hobby) -> int:
        """Remove *hobby* from every client's saved hobbies.

        Returns the number of clients that had it saved.
        """
        stmt = select(AppClient).where(AppClient.saved_hobbies.any(Hobby.id == hobby.id))
        clients = self.session.execute(stmt).scalars().all()
        for client in clients:
            while hobby in client.saved_hobbies:
                client.saved_hobbies.remove(hobby)
        self.session.flush()
        logger.debug("Removed hobby %s from %d saved lists", hobby.id, len(clients))
        return len(clients)

    def register_client(
        self,
        username: str,
        email: str,
        password: str,
        full_name: str | None = None,
        gender: str | None = None,
        test_results: TestResults | None = None,
    ) -> AppClient:
        client = AppClient(
            username=username.strip(),
            email=email.strip().lower(),
            full_name=full_name,
            gender=gender,
            test_results=test_results,
        )
        client.set_password(password)
        self.session.add(client)
        self.session.flush()
        return client

    def register_business(
        self,
        username: str,
        email: str,
        password: str,
        business_name: str | None = None,
        address: str | None = None,
    ) -> BusinessOwner:
        business = BusinessOwner(
            username=username.strip(),
            email=email.strip().lower(),
            business_name=business_name,
            address=address,
        )
        business.set_password(password)
        self.session.add(business)
        self.session.flush()
        return business
