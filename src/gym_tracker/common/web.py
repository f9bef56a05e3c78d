from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, jsonify, session

from ..core.exceptions import NotFound, StoreUnavailable, ValidationError

logger = logging.getLogger(__name__)


def login_required(view):
    @wraps(view)
    async def wrapper(*args, **kwargs):
        if not session.get("user_id"):
            return jsonify({"success": False, "message": "Authentication required"}), 401
        return await view(*args, **kwargs)

    return wrapper


def current_user_id() -> str:
    return str(session["user_id"])


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation(e: ValidationError):
        return jsonify({"success": False, "message": str(e)}), 400

    @app.errorhandler(NotFound)
    def _not_found(e: NotFound):
        return jsonify({"success": False, "message": str(e)}), 404

    @app.errorhandler(StoreUnavailable)
    def _unavailable(e: StoreUnavailable):
        logger.warning("Store unavailable: %s", e)
        return jsonify({"success": False, "message": "Storage temporarily unavailable", "retryable": True}), 503
