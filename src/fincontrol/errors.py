"""Error taxonomy shared by services, repositories and the HTTP layer."""

from __future__ import annotations

from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from .logging_config import get_logger

logger = get_logger("errors")

_HTTP_MESSAGES = {
    404: "Recurso no encontrado.",
    405: "Método no permitido.",
}


class FinControlError(Exception):
    """Base error carrying the HTTP status it maps to."""

    status_code = 500
    default_message = "Error en el servidor."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(FinControlError):
    status_code = 400
    default_message = "Datos inválidos."


class AuthError(FinControlError):
    status_code = 401
    default_message = "No autenticado."


class ForbiddenError(FinControlError):
    status_code = 403
    default_message = "Token inválido o expirado."


class NotFoundError(FinControlError):
    status_code = 404
    default_message = "Recurso no encontrado."


class ConflictError(FinControlError):
    status_code = 409
    default_message = "El recurso ya existe."


class InternalError(FinControlError):
    status_code = 500


def register_error_handlers(app: Flask) -> None:
    """Translate domain and driver errors into JSON responses."""

    @app.errorhandler(FinControlError)
    def _handle_domain_error(exc: FinControlError):
        return jsonify({"message": exc.message}), exc.status_code

    @app.errorhandler(SQLAlchemyError)
    def _handle_store_error(exc: SQLAlchemyError):
        logger.exception("Unhandled store failure")
        error = InternalError(f"Error en el servidor: {getattr(exc, 'orig', None) or exc}")
        return jsonify({"message": error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def _handle_http_error(exc: HTTPException):
        message = _HTTP_MESSAGES.get(exc.code or 500, exc.description or exc.name)
        return jsonify({"message": message}), exc.code or 500

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        logger.exception("Unhandled error")
        return jsonify({"message": InternalError.default_message}), InternalError.status_code
