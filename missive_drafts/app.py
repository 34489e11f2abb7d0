"""
Flask Application
=================

HTTP front for the Missive client with error handling,
request validation, and structured logging.
"""

from __future__ import annotations

import json
import os
from typing import Any, Optional

from flask import Flask, Response, jsonify, request
from pydantic import ValidationError as PydanticValidationError

from missive_drafts import __version__
from missive_drafts.config import get_settings
from missive_drafts.exceptions import (
    MissiveDraftsError,
    MissiveError,
    ValidationError,
)
from missive_drafts.logging_config import get_logger, get_request_id, set_request_id
from missive_drafts.models import CreateDraftRequest
from missive_drafts.services import get_missive_service

logger = get_logger(__name__)


def create_app() -> Flask:
    """
    Application factory for Flask app.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)
    settings = get_settings()

    app.config["DEBUG"] = settings.debug

    register_error_handlers(app)
    register_middleware(app)
    register_routes(app)

    logger.info(
        "Application initialized",
        environment=settings.environment.value,
        debug=settings.debug
    )

    return app


def _bearer_token(header: Optional[str]) -> str:
    """Extract the token from an ``Authorization: Bearer`` header."""
    if not header:
        return ""
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def register_error_handlers(app: Flask) -> None:
    """Register error handlers for the application."""

    @app.errorhandler(MissiveDraftsError)
    def handle_missive_drafts_error(error: MissiveDraftsError) -> tuple[Response, int]:
        """Handle custom application errors."""
        logger.error(
            f"Application error: {error.message}",
            error_code=error.code.value,
            context=error.context.to_dict() if error.context else None
        )

        status_code = 500
        if isinstance(error, ValidationError):
            status_code = 400
        elif isinstance(error, MissiveError):
            status_code = 502

        return jsonify(error.to_dict()), status_code

    @app.errorhandler(PydanticValidationError)
    def handle_pydantic_validation_error(error: PydanticValidationError) -> tuple[Response, int]:
        """Handle Pydantic validation errors."""
        details = json.loads(error.json(include_url=False))
        logger.warning("Validation error", errors=details)
        return jsonify({
            "error": True,
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": details
        }), 400

    @app.errorhandler(400)
    def handle_bad_request(error: Any) -> tuple[Response, int]:
        """Handle bad request errors."""
        return jsonify({
            "error": True,
            "code": "BAD_REQUEST",
            "message": str(error.description) if hasattr(error, "description") else "Bad request"
        }), 400

    @app.errorhandler(404)
    def handle_not_found(error: Any) -> tuple[Response, int]:
        """Handle not found errors."""
        return jsonify({
            "error": True,
            "code": "NOT_FOUND",
            "message": "Resource not found"
        }), 404

    @app.errorhandler(500)
    def handle_internal_error(error: Any) -> tuple[Response, int]:
        """Handle internal server errors."""
        logger.error("Internal server error", error=str(error), exc_info=True)
        return jsonify({
            "error": True,
            "code": "INTERNAL_ERROR",
            "message": "An internal error occurred"
        }), 500


def register_middleware(app: Flask) -> None:
    """Register middleware for the application."""

    @app.before_request
    def before_request() -> None:
        """Set up request context."""
        set_request_id(request.headers.get("X-Request-ID"))

        logger.debug(
            "Request started",
            method=request.method,
            path=request.path,
            content_type=request.content_type
        )

    @app.after_request
    def after_request(response: Response) -> Response:
        """Log request completion and echo the request ID."""
        response.headers["X-Request-ID"] = get_request_id()
        logger.debug(
            "Request completed",
            method=request.method,
            path=request.path,
            status_code=response.status_code
        )
        return response


def register_routes(app: Flask) -> None:
    """Register application routes."""

    @app.route("/health", methods=["GET"])
    def health_check() -> tuple[Response, int]:
        """Health check endpoint."""
        return jsonify({
            "status": "healthy",
            "service": "missive-drafts",
            "version": __version__
        }), 200

    @app.route("/drafts", methods=["POST"])
    def create_draft() -> tuple[Response, int]:
        """
        Create a draft on Missive, or send it directly.

        Request body:
            - subject, body: Email content
            - to, from: Objects with name and address
            - reference: (optional) Address that started the conversation
            - labels: (optional) Shared labels to add
            - send: (optional) Send immediately, default false
            - attachments: (optional) List of {base64_data, filename}

        The Missive token comes from the Authorization header, falling
        back to MISSIVE_API_TOKEN.

        Returns:
            The Missive response body, whatever its status.
        """
        data = request.get_json(force=True)
        req = CreateDraftRequest.model_validate(data)

        token = _bearer_token(request.headers.get("Authorization"))
        if not token:
            token = get_settings().missive.api_token
        if not token:
            raise ValidationError(
                message="A Missive API token is required",
                field="Authorization"
            )

        result = get_missive_service().create_draft(
            token=token,
            body=req.body,
            subject=req.subject,
            to=req.to,
            from_=req.from_,
            reference=req.reference,
            labels=req.labels,
            send=req.send,
            attachments=req.attachments,
            logger=logger
        )

        return jsonify(result), 200


# Create application instance
app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    port = int(os.environ.get("PORT", settings.port))

    logger.info(f"Starting server on port {port}")
    app.run(host="0.0.0.0", port=port, debug=settings.debug)
