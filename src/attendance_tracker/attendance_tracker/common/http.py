from __future__ import annotations

import logging
from functools import wraps
from typing import Callable, Optional

from flask import Flask, g, jsonify, request

from ..core.exceptions import AuthenticationError, NotFoundError, StorageError, ValidationError

logger = logging.getLogger(__name__)


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if not header:
        return None
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def make_token_required(resolve_owner: Callable[[Optional[str]], int]):
    """Build a decorator that resolves the bearer token into ``g.owner_id``."""

    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.owner_id = resolve_owner(bearer_token())
            return view(*args, **kwargs)

        return wrapper

    return token_required


def json_body() -> dict:
    payload = request.get_json(silent=True)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


def register_error_handlers(app: Flask) -> None:
    """Map the domain exceptions onto JSON error responses."""

    @app.errorhandler(ValidationError)
    def _validation(exc: ValidationError):
        return jsonify({"error": str(exc)}), 400

    @app.errorhandler(AuthenticationError)
    def _authentication(exc: AuthenticationError):
        return jsonify({"error": str(exc)}), 401

    @app.errorhandler(NotFoundError)
    def _not_found(exc: NotFoundError):
        return jsonify({"error": str(exc)}), 404

    @app.errorhandler(StorageError)
    def _storage(exc: StorageError):
        logger.error("storage failure on %s %s: %s", request.method, request.path, exc)
        return jsonify({"error": str(exc)}), 500

    @app.errorhandler(404)
    def _no_route(_exc):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def _bad_method(_exc):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(500)
    def _internal(exc):
        logger.exception("unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500
