"""
Error taxonomy shared by both services.
Every error the client can see is a ServiceError: a fixed message and status.
The detail passed to the constructor is for logs and spans only.
"""
import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException, MethodNotAllowed

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base error mapped to a JSON {message} response."""

    status_code = 500
    message = "internal server error"

    def __init__(self, detail=None):
        super().__init__(detail or self.message)


class MalformedRequest(ServiceError):
    """Request body is not a JSON object with a string cep."""

    status_code = 400
    message = "invalid request body"


class InvalidZipcode(ServiceError):
    """CEP is not exactly eight digits."""

    status_code = 422
    message = "invalid zipcode"


class ZipcodeNotFound(ServiceError):
    """Location provider explicitly reported no match."""

    status_code = 404
    message = "can not find zipcode"


class UpstreamFailure(ServiceError):
    """Any other failure talking to a collaborator."""


def error_response(message, status_code):
    return jsonify({"message": message}), status_code


def register_error_handlers(app):
    """Installs JSON error handlers on a Flask app."""

    @app.errorhandler(ServiceError)
    def handle_service_error(err):
        if err.status_code >= 500:
            logger.error("%s: %s", type(err).__name__, err)
        else:
            logger.info("%s: %s", type(err).__name__, err)
        return error_response(err.message, err.status_code)

    @app.errorhandler(MethodNotAllowed)
    def handle_method_not_allowed(err):
        return error_response("method not allowed", 405)

    @app.errorhandler(Exception)
    def handle_unexpected(err):
        if isinstance(err, HTTPException):
            return err
        logger.exception("Unhandled error")
        return error_response(UpstreamFailure.message, 500)
