# payroll_api/common/errors.py
from flask import current_app
from werkzeug.exceptions import HTTPException

from payroll_api.common.http import fail, text


class StorageError(Exception):
    """The store could not complete an operation (connectivity, constraints)."""


class ValidationError(ValueError):
    """Request input rejected at the adapter boundary."""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.message = message
        self.field = field


def register_error_handlers(app):
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return fail(e.message, status=400, field=e.field)

    @app.errorhandler(HTTPException)
    def _http(e: HTTPException):
        resp = text(e.name, e.code or 500)
        if getattr(e, "valid_methods", None):
            resp.headers["Allow"] = ", ".join(e.valid_methods)
        return resp

    @app.errorhandler(StorageError)
    def _storage(e: StorageError):
        current_app.logger.error("storage error: %s", e)
        return fail(f"Database error: {e}", status=500)

    @app.errorhandler(Exception)
    def _unhandled(e: Exception):
        current_app.logger.exception(e)
        return fail(str(e) or e.__class__.__name__, status=500)
