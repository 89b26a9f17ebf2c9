"""Hobby offers: lifecycle, matching and saved lists.

``HobbyService`` is the single entry point for everything a route
handler does with hobbies. It owns three flows:

* the offer lifecycle (create, update, delete), where updates and
  deletes also invalidate the offer's images on Cloudinary and deletes
  scrub the offer from business and client collections;
* hobby matching, a random sample of the offers at the client's
  location whose category appears in the client's test results;
* the client's saved list (save, remove, membership).

Collaborators are injected so the service can be exercised without a
database or a Cloudinary account. Nothing here commits: callers wrap
each operation in :func:`hobbie.db.transaction`.

Calls to Cloudinary and to the user directory during a delete are
best effort. Their failures are logged and swallowed and the database
change still goes through.
"""
from __future__ import annotations

import logging
import random
from typing import List, Optional, Set

from ..errors import NotFoundError
from ..models import media_resource_ids

logger = logging.getLogger(__name__)

DEFAULT_MATCH_LIMIT = 10


class HobbyService:
    def __init__(
        self,
        hobby_repository,
        user_service,
        location_service,
        media_purger,
        rng: Optional[random.Random] = None,
        match_limit: int = DEFAULT_MATCH_LIMIT,
    ) -> None:
        self._hobbies = hobby_repository
        self._users = user_service
        self._locations = location_service
        self._media = media_purger
        self._rng = rng or random.Random()
        self._match_limit = match_limit

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def find_hobby_by_id(self, hobby_id: int):
        """Return the hobby with *hobby_id*.

        Raises
        ------
        NotFoundError
            If there is no such hobby.
        """
        hobby = self._hobbies.find_by_id(hobby_id)
        if hobby is None:
            raise NotFoundError("This hobby does not exist")
        return hobby

    def create_hobby(self, offer):
        """Persist a new offer. Its images must already be uploaded."""
        return self._hobbies.save(offer)

    def save_updated_hobby(self, hobby):
        """Persist *hobby* over the stored record with the same id.

        The stored record's images are deleted from Cloudinary first,
        since the update brings its own image set. *hobby* may be the
        loaded instance itself with its fields already edited.
        """
        self._delete_resources(self._hobbies.find_stored_media_ids(hobby.id))
        return self._hobbies.save(hobby)

    def delete_hobby(self, hobby_id: int) -> bool:
        """Delete a hobby together with its images and references.

        Returns
        -------
        bool
            ``False`` if the hobby does not exist, ``True`` once it has
            been deleted.
        """
        hobby = self._hobbies.find_by_id(hobby_id, lock=True)
        if hobby is None:
            return False

        self._delete_resources(media_resource_ids(hobby))

        business = None
        try:
            business = self._users.find_business_by_username(hobby.creator)
        except Exception as exc:
            logger.warning("Failed to find business by username %s: %s", hobby.creator, exc)

        offers = getattr(business, "hobby_offers", None)
        if offers is not None:
            offers.discard(hobby)
        else:
            logger.debug("Business is missing or has no hobby offers for creator=%s", hobby.creator)

        try:
            self._users.find_and_remove_hobby_from_clients_records(hobby)
        except Exception as exc:
            logger.warning("Failed to remove hobby %s from clients' records: %s", hobby_id, exc)

        self._hobbies.delete_by_id(hobby_id)
        logger.info("Deleted hobby %s created by %s", hobby_id, hobby.creator)
        return True

    def _delete_resources(self, resource_ids: List[str]) -> None:
        if not resource_ids:
            return
        try:
            self._media.delete_resources(resource_ids, {"invalidate": True})
        except Exception as exc:
            logger.warning("Error when deleting cloud resources %s: %s", resource_ids, exc)

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def find_hobby_matches(self, username: str) -> Set:
        """Pick up to ``match_limit`` hobbies for the client *username*.

        Candidates are the hobbies at the client's test location whose
        category is one of the (up to six) categories the test chose.
        The sample is uniform: candidates are shuffled and the first
        ``match_limit`` kept. Unknown clients, clients without test
        results and empty candidate pools give an empty set.
        """
        client = self._users.find_app_client_by_username(username)
        if client is None or client.test_results is None:
            return set()

        test_results = client.test_results
        location = self._locations.get_location_by_name(test_results.location)
        if location is None:
            logger.warning("Location %s is missing from the catalog", test_results.location)
            return set()

        hobbies = self._hobbies.find_all_by_location(location)
        categories = {category for category in test_results.categories() if category is not None}
        if not hobbies or not categories:
            return set()

        candidates = [
            hobby for hobby in hobbies
            if hobby is not None
            and hobby.category is not None
            and hobby.category.name in categories
        ]
        self._rng.shuffle(candidates)
        return set(candidates[:self._match_limit])

    def get_all_hobby_matches_for_client(self, username: str) -> Set:
        client = self._users.find_app_client_by_username(username)
        if client is None:
            return set()
        return set(client.hobby_matches or ())

    def get_all_hobbies_for_business(self, username: str) -> Set:
        return self._hobbies.find_all_by_creator(username)

    # ------------------------------------------------------------------
    # Saved hobbies
    # ------------------------------------------------------------------

    def save_hobby_for_client(self, hobby, username: str) -> bool:
        """Add *hobby* to the client's saved list.

        Returns ``True`` if it was added; ``False`` if the client or the
        hobby does not exist or the hobby was already saved.
        """
        client = self._users.find_app_client_by_username(username)
        if client is None:
            return False
        stored = self._hobbies.find_by_id(hobby.id)
        if client.saved_hobbies is None:
            client.saved_hobbies = []
        if stored is not None and stored not in client.saved_hobbies:
            client.saved_hobbies.append(stored)
            return True
        return False

    def remove_hobby_for_client(self, hobby, username: str) -> bool:
        """Remove *hobby* from the client's saved list.

        Returns ``True`` whenever the client has a saved list, whether
        or not the hobby was in it.
        """
        client = self._users.find_app_client_by_username(username)
        if client is None:
            return False
        saved = client.saved_hobbies
        if saved is None:
            return False
        stored = self._hobbies.find_by_id(hobby.id)
        if stored is not None and stored in saved:
            saved.remove(stored)
        return True

    def is_hobby_saved(self, hobby_id: int, username: str) -> bool:
        stored = self._hobbies.find_by_id(hobby_id)
        if stored is None:
            return False
        client = self._users.find_app_client_by_username(username)
        if client is None or client.saved_hobbies is None:
            return False
        return stored in client.saved_hobbies

    def find_saved_hobbies(self, client) -> Optional[List]:
        return client.saved_hobbies
