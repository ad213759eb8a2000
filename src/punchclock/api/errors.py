from __future__ import annotations

import logging

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask) -> None:
    """Map every failure to ``{"error": message}`` with a matching status."""

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        if e.http_status >= 500:
            logger.error("Request failed: %s", e)
        return jsonify({"error": str(e) or e.__class__.__name__}), e.http_status

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500
