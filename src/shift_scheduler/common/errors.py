from __future__ import annotations

import logging

from flask import Flask
from werkzeug.exceptions import HTTPException, NotFound

from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

PLAIN_TEXT = {"Content-Type": "text/plain; charset=utf-8"}


def register_error_handlers(app: Flask) -> None:
    """Map domain errors to plain-text responses with a status code."""

    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return str(e), 400, PLAIN_TEXT

    @app.errorhandler(ConflictError)
    def _conflict(e: ConflictError):
        return str(e), 400, PLAIN_TEXT

    @app.errorhandler(AuthorizationError)
    def _forbidden(e: AuthorizationError):
        return str(e), 403, PLAIN_TEXT

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return str(e), 404, PLAIN_TEXT

    @app.errorhandler(NotFound)
    def _no_route(e: NotFound):
        return "Page not found", 404, PLAIN_TEXT

    @app.errorhandler(Exception)
    def _unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return e
        logger.exception("unhandled error")
        return "Something went wrong!", 500, PLAIN_TEXT
