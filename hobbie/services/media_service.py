"""Deletion of hobby images hosted on Cloudinary."""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import cloudinary.api

logger = logging.getLogger(__name__)


class CloudinaryMediaPurger:
    """Deletes uploaded images by their Cloudinary public id.

    Any object with the same ``delete_resources`` method can stand in
    for this class; the hobby service only relies on that method.
    """

    def __init__(self, cloud_name: str = "", api_key: str = "", api_secret: str = "") -> None:
        self._config = {
            "cloud_name": cloud_name,
            "api_key": api_key,
            "api_secret": api_secret,
        }

    @classmethod
    def from_config(cls, config) -> "CloudinaryMediaPurger":
        return cls(
            cloud_name=config.get("CLOUDINARY_CLOUD_NAME", ""),
            api_key=config.get("CLOUDINARY_API_KEY", ""),
            api_secret=config.get("CLOUDINARY_API_SECRET", ""),
        )

    def delete_resources(self, resource_ids: Sequence[str], options: Optional[dict] = None) -> Optional[dict]:
        """Delete *resource_ids* in a single Admin API call.

        ``options`` is forwarded to Cloudinary; ``{"invalidate": True}``
        also purges the CDN cache. An empty list makes no remote call.
        Errors from the Cloudinary client propagate to the caller.
        """
        if not resource_ids:
            return None
        # unset credentials fall back to CLOUDINARY_URL
        params = {key: value for key, value in self._config.items() if value}
        params.update(options or {})
        result = cloudinary.api.delete_resources(list(resource_ids), **params)
        logger.info("Deleted %d Cloudinary resources", len(resource_ids))
        return result
