"""
Routes for hobby offers, matches and saved hobbies.

The handlers are thin: they validate input, resolve the caller from
the JWT identity (the username) and delegate to the ``HobbyService``
stored on the application. Every handler runs its service calls inside
a single ``transaction()`` scope.
"""

from __future__ import annotations

from flask import Blueprint, current_app, request
from flask_jwt_extended import jwt_required, get_jwt_identity
from marshmallow import ValidationError as SchemaValidationError

from .. import transaction
from ..errors import ForbiddenError, NotFoundError, ValidationError
from ..models import Hobby
from ..schemas import HobbySchema, HobbyPayloadSchema
from ..services import CategoryService, LocationService, UserService


hobbies_bp = Blueprint("hobbies", __name__)

_categories = CategoryService()
_locations = LocationService()
_users = UserService()


def _service():
    return current_app.extensions["hobby_service"]


def _load_payload() -> dict:
    try:
        return HobbyPayloadSchema().load(request.get_json() or {})
    except SchemaValidationError as err:
        raise ValidationError("Invalid hobby payload.", err.messages)


def _current_business():
    """Return the calling business owner, or raise 403."""
    try:
        return _users.find_business_by_username(get_jwt_identity())
    except NotFoundError:
        raise ForbiddenError("Only business accounts can manage hobby offers.")


def _current_client():
    client = _users.find_app_client_by_username(get_jwt_identity())
    if client is None:
        raise NotFoundError("Client does not exist.")
    return client


def _build_hobby(data: dict, creator: str, hobby_id: int | None = None) -> Hobby:
    category = _categories.get_category_by_name(data["category"])
    location = _locations.get_location_by_name(data["location"])
    if category is None or location is None:
        raise ValidationError("Unknown category or location.")
    fields = {key: value for key, value in data.items() if key not in ("category", "location")}
    return Hobby(id=hobby_id, creator=creator, category=category, location=location, **fields)


def _dump_sorted(hobbies) -> list[dict]:
    return HobbySchema(many=True).dump(sorted(hobbies or (), key=lambda hobby: hobby.id))


@hobbies_bp.route("/hobbies/<int:hobby_id>", methods=["GET"])
@jwt_required()
def get_hobby(hobby_id: int) -> tuple[dict, int]:
    """Retrieve a single hobby offer."""
    with transaction():
        hobby = _service().find_hobby_by_id(hobby_id)
        return HobbySchema().dump(hobby), 200


@hobbies_bp.route("/hobbies", methods=["POST"])
@jwt_required()
def create_hobby() -> tuple[dict, int]:
    """Publish a new hobby offer.

    Only business accounts may publish offers. The images must already
    be uploaded to Cloudinary; the body carries their URLs and public
    ids. The new offer is added to the business's offers.
    """
    data = _load_payload()
    with transaction():
        business = _current_business()
        hobby = _service().create_hobby(_build_hobby(data, creator=business.username))
        business.hobby_offers.add(hobby)
        body = HobbySchema().dump(hobby)
    return body, 201


@hobbies_bp.route("/hobbies/<int:hobby_id>", methods=["PUT"])
@jwt_required()
def update_hobby(hobby_id: int) -> tuple[dict, int]:
    """Replace a hobby offer.

    The request body describes the full offer, images included. The
    previous images are deleted from Cloudinary.
    """
    data = _load_payload()
    with transaction():
        business = _current_business()
        existing = _service().find_hobby_by_id(hobby_id)
        if existing.creator != business.username:
            raise ForbiddenError()
        hobby = _service().save_updated_hobby(_build_hobby(data, creator=business.username, hobby_id=hobby_id))
        body = HobbySchema().dump(hobby)
    return body, 200


@hobbies_bp.route("/hobbies/<int:hobby_id>", methods=["DELETE"])
@jwt_required()
def delete_hobby(hobby_id: int) -> tuple[dict, int]:
    """Delete a hobby offer, its images and every reference to it."""
    with transaction():
        business = _current_business()
        existing = _service().find_hobby_by_id(hobby_id)
        if existing.creator != business.username:
            raise ForbiddenError()
        if not _service().delete_hobby(hobby_id):
            raise NotFoundError("This hobby does not exist")
    return {"message": "Hobby deleted."}, 200


@hobbies_bp.route("/hobbies/matches", methods=["GET"])
@jwt_required()
def list_matches() -> tuple[list[dict], int]:
    """Return a fresh random sample of hobbies matching the caller's test."""
    with transaction():
        matches = _service().find_hobby_matches(get_jwt_identity())
        return _dump_sorted(matches), 200


@hobbies_bp.route("/hobbies/saved", methods=["GET"])
@jwt_required()
def list_saved() -> tuple[list[dict], int]:
    """Return the caller's saved hobbies in the order they were saved."""
    with transaction():
        saved = _service().find_saved_hobbies(_current_client())
        return HobbySchema(many=True).dump(saved or []), 200


@hobbies_bp.route("/hobbies/<int:hobby_id>/save", methods=["POST"])
@jwt_required()
def save_hobby(hobby_id: int) -> tuple[dict, int]:
    with transaction():
        hobby = _service().find_hobby_by_id(hobby_id)
        saved = _service().save_hobby_for_client(hobby, get_jwt_identity())
    return {"saved": saved}, 201 if saved else 200


@hobbies_bp.route("/hobbies/<int:hobby_id>/save", methods=["DELETE"])
@jwt_required()
def remove_saved_hobby(hobby_id: int) -> tuple[dict, int]:
    with transaction():
        hobby = _service().find_hobby_by_id(hobby_id)
        removed = _service().remove_hobby_for_client(hobby, get_jwt_identity())
    if not removed:
        raise NotFoundError("Client has no saved hobbies.")
    return {"message": "Hobby removed from saved hobbies."}, 200


@hobbies_bp.route("/hobbies/<int:hobby_id>/saved", methods=["GET"])
@jwt_required()
def is_saved(hobby_id: int) -> tuple[dict, int]:
    with transaction():
        saved = _service().is_hobby_saved(hobby_id, get_jwt_identity())
    return {"saved": saved}, 200


@hobbies_bp.route("/business/hobbies", methods=["GET"])
@jwt_required()
def list_business_hobbies() -> tuple[list[dict], int]:
    """List the offers published by the calling business."""
    with transaction():
        business = _current_business()
        hobbies = _service().get_all_hobbies_for_business(business.username)
        return _dump_sorted(hobbies), 200
