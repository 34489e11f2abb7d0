"""
Missive Drafts
==============

Client and small HTTP service for creating (and optionally sending)
email drafts through the Missive public API.

Architecture:
    - config: Application configuration with Pydantic Settings
    - models: Wire payload models with Pydantic
    - services: Missive API client
    - exceptions: Custom exception hierarchy
    - logging_config: Structured logging
    - app: Flask application exposing the client over HTTP
"""

__version__ = "1.0.0"
