"""
Application factory for the Hobbie backend.

This module provides a function to create and configure the Flask
application. All extensions (SQLAlchemy, Migrate, JWT) are initialised
here, and the hobby service is assembled from its collaborators and
stored in ``app.extensions["hobby_service"]``.

Environment variables control the database connection, the secret key
and the Cloudinary account. In production, set ``DATABASE_URL``,
``JWT_SECRET_KEY`` and the ``CLOUDINARY_*`` variables. A default
configuration is provided for development, using SQLite when no
database URL is available.
"""

from __future__ import annotations

import os
import random
from datetime import timedelta

from flask import Flask
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager

# instantiate extensions without binding them to an app yet.  They will
# be bound in create_app().
from .db import db, transaction  # use shared db object from db.py
migrate = Migrate()
jwt = JWTManager()

__all__ = ["create_app", "db", "transaction", "migrate", "jwt"]


def create_app(test_config: dict | None = None) -> Flask:
    """Create and configure a Flask application.

    Parameters
    ----------
    test_config: dict | None, optional
        Optional configuration overrides used when running tests. A
        ``MEDIA_PURGER`` entry replaces the Cloudinary purger and a
        ``MATCH_RNG`` entry replaces the random source used for
        matching.

    Returns
    -------
    Flask
        A configured Flask application instance.
    """
    app = Flask(__name__)

    # Default configuration. Override using environment variables or
    # by passing a ``test_config`` mapping.
    app.config.update(
        SQLALCHEMY_DATABASE_URI=os.environ.get("DATABASE_URL", "sqlite:///hobbie.db"),
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        JWT_SECRET_KEY=os.environ.get("JWT_SECRET_KEY", "please-change-this-secret-key"),
        JWT_ACCESS_TOKEN_EXPIRES=timedelta(days=1),
        CLOUDINARY_CLOUD_NAME=os.environ.get("CLOUDINARY_CLOUD_NAME", ""),
        CLOUDINARY_API_KEY=os.environ.get("CLOUDINARY_API_KEY", ""),
        CLOUDINARY_API_SECRET=os.environ.get("CLOUDINARY_API_SECRET", ""),
        HOBBY_MATCH_LIMIT=int(os.environ.get("HOBBY_MATCH_LIMIT", "10")),
        LOG_LEVEL=os.environ.get("LOG_LEVEL", "INFO"),
        LOG_FILE=os.environ.get("LOG_FILE"),
    )

    if test_config:
        app.config.update(test_config)

    from .logging_config import setup_logging
    setup_logging(app.config["LOG_LEVEL"], app.config.get("LOG_FILE"))

    # Initialise extensions with the app
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)

    # Register custom error handlers
    from .errors import register_error_handlers
    register_error_handlers(app)

    app.extensions["hobby_service"] = _build_hobby_service(app)

    # Register blueprints. Importing here avoids circular imports.
    from .routes.hobbies import hobbies_bp
    app.register_blueprint(hobbies_bp, url_prefix="/api")

    @app.route("/api/health")
    def health_check() -> dict[str, str]:
        """Return a simple health check response."""
        return {"status": "ok"}

    return app


def _build_hobby_service(app: Flask):
    from .repositories import HobbyRepository
    from .services import CloudinaryMediaPurger, HobbyService, LocationService, UserService

    media_purger = app.config.get("MEDIA_PURGER") or CloudinaryMediaPurger.from_config(app.config)
    rng = app.config.get("MATCH_RNG") or random.Random()
    return HobbyService(
        hobby_repository=HobbyRepository(),
        user_service=UserService(),
        location_service=LocationService(),
        media_purger=media_purger,
        rng=rng,
        match_limit=app.config["HOBBY_MATCH_LIMIT"],
    )
