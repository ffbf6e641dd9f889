"""Error handling shared by the service applications."""

from flask import Flask, Response, make_response
from werkzeug.exceptions import HTTPException, Forbidden, BadRequest, \
    MethodNotAllowed, InternalServerError, NotFound, NotImplemented, \
    ServiceUnavailable

from . import logging

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Register error handlers for the Flask app."""
    app.errorhandler(BadRequest)(empty_exception)
    app.errorhandler(Forbidden)(empty_exception)
    app.errorhandler(NotFound)(empty_exception)
    app.errorhandler(MethodNotAllowed)(empty_exception)
    app.errorhandler(InternalServerError)(empty_exception)
    app.errorhandler(NotImplemented)(empty_exception)
    app.errorhandler(ServiceUnavailable)(empty_exception)


def empty_exception(error: HTTPException) -> Response:
    """Log the reason for an error, and respond with only its status."""
    logger.info('%i %s: %s', error.code, error.name, error.description)
    response: Response = make_response('', error.code)
    return response
