"""Error taxonomy and the JSON error handlers."""
import logging

from flask import jsonify
from flask_babel import lazy_gettext as _l
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class JellyError(Exception):
    """Base class for errors that end a request with a client-facing message."""
    status_code = 500
    default_message = _l('Internal server error')

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class ValidationError(JellyError):
    status_code = 400
    default_message = _l('Invalid request data')


class Conflict(JellyError):
    # Duplicate email at signup is reported as a bad request.
    status_code = 400
    default_message = _l('User already exists')


class Unauthenticated(JellyError):
    status_code = 401
    default_message = _l('Authentication required')


class InvalidCredentials(Unauthenticated):
    default_message = _l('Invalid credentials')


class Forbidden(JellyError):
    status_code = 403
    default_message = _l('Permission denied')


class NotFound(JellyError):
    status_code = 404
    default_message = _l('Not found')


def _error_response(message, status_code):
    response = jsonify({'message': str(message)})
    response.status_code = status_code
    return response


def register_error_handlers(app):
    """Render every error as ``{"message": ...}`` with its status code."""

    @app.errorhandler(JellyError)
    def handle_jelly_error(error):
        return _error_response(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error):
        return _error_response(error.description or error.name, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected(error):
        logger.exception("Unhandled error: %s", error)
        return _error_response(_l('Internal server error'), 500)
