"""Services package."""

from missive_drafts.services.missive_service import (
    MissiveService,
    build_draft_payload,
    create_email,
    get_missive_service,
)

__all__ = [
    "MissiveService",
    "build_draft_payload",
    "create_email",
    "get_missive_service",
]
