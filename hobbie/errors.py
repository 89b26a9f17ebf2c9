"""Errors raised by the Hobbie services and their JSON rendering.

Services raise these without knowing about HTTP: a missing hobby or
business account is a ``NotFoundError``, a malformed offer payload a
``ValidationError``, and a client (or another business) touching an
offer it does not own a ``ForbiddenError``. ``register_error_handlers``
turns each into ``{"error": {"code": ..., "message": ...}}`` with the
matching status.
"""
from __future__ import annotations

from flask import jsonify


class HobbieError(Exception):
    code = "ERROR"
    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def payload(self) -> dict:
        return {"code": self.code, "message": self.message}

    def to_response(self, status_code: int | None = None):
        return jsonify({"error": self.payload()}), status_code or self.status_code


class ValidationError(HobbieError):
    """An offer payload failed schema validation.

    ``fields`` maps each offending field to marshmallow's messages.
    """

    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, message: str, fields: dict | None = None) -> None:
        super().__init__(message)
        self.fields = fields or {}

    def payload(self) -> dict:
        return dict(super().payload(), fields=self.fields)


class NotFoundError(HobbieError):
    """No hobby, client or business with the requested key."""

    code = "NOT_FOUND"
    status_code = 404


class ForbiddenError(HobbieError):
    code = "FORBIDDEN"
    status_code = 403

    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message)


def register_error_handlers(app) -> None:
    """Render every ``HobbieError`` raised in a request as JSON."""
    @app.errorhandler(HobbieError)
    def handle_hobbie_error(err: HobbieError):
        return err.to_response()
