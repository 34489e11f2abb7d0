"""
Data Models
===========

Pydantic models for the Missive draft payload and for requests
received by the HTTP service.

Addresses are forwarded as given: Missive is the only judge of
whether a recipient or sender address is usable.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# ============================================================================
# Wire Models
# ============================================================================

class Contact(BaseModel):
    """A named mailbox, used for both the recipient and the sender."""
    
    model_config = ConfigDict(extra="ignore")
    
    name: str = Field(
        ...,
        description="Readable display name"
    )
    address: str = Field(
        ...,
        description="Email address, not validated locally"
    )


class Attachment(BaseModel):
    """A base64 encoded file attached to the draft."""
    
    model_config = ConfigDict(extra="ignore")
    
    base64_data: str = Field(
        ...,
        description="File content, base64 encoded"
    )
    filename: str = Field(
        ...,
        description="File name shown to the recipient"
    )


class DraftPayload(BaseModel):
    """
    The ``drafts`` object posted to Missive.
    
    ``send`` set to True asks Missive to send the draft immediately.
    Missive caps the whole payload at 10MB; the cap is not checked here.
    """
    
    send: bool = False
    subject: str
    body: str
    to_fields: list[Contact]
    from_field: Contact
    references: list[Optional[str]] = Field(default_factory=lambda: [None])
    attachments: list[Attachment] = Field(default_factory=list)
    add_shared_labels: Optional[list[str]] = None
    
    def to_wire(self) -> dict[str, Any]:
        """
        Build the JSON request body.
        
        A missing reference stays as a single ``null`` slot in
        ``references``. Labels that were never supplied are left out of
        the body entirely, while an empty list is sent as is.
        """
        drafts = self.model_dump(mode="json")
        if self.add_shared_labels is None:
            drafts.pop("add_shared_labels")
        return {"drafts": drafts}


# ============================================================================
# Request Models
# ============================================================================

class CreateDraftRequest(BaseModel):
    """Request model for the draft creation endpoint."""
    
    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore"
    )
    
    subject: str
    body: str
    to: Contact
    from_: Contact = Field(
        ...,
        alias="from",
        description="Sender of the email"
    )
    reference: Optional[str] = Field(
        default=None,
        description="Address that started the conversation to thread into"
    )
    labels: Optional[list[str]] = Field(
        default=None,
        description="Shared labels to add to the conversation"
    )
    send: bool = Field(
        default=False,
        description="Send immediately instead of creating a draft"
    )
    attachments: list[Attachment] = Field(default_factory=list)
