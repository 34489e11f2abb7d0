"""
Missive Service
===============

Client for the Missive public API draft endpoint.

One call posts one draft. There is no retry: a transport failure is
raised as ``TransportError`` and anything Missive answers with is
returned as parsed JSON, including 4xx and 5xx bodies.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

import requests

from missive_drafts.config import MissiveSettings, get_settings
from missive_drafts.exceptions import (
    ErrorContext,
    MalformedResponseError,
    TransportError,
)
from missive_drafts.logging_config import InfoLogger, NullLogger, get_logger
from missive_drafts.models import Attachment, Contact, DraftPayload

logger = get_logger(__name__)

ContactLike = Union[Contact, Mapping[str, Any]]
AttachmentLike = Union[Attachment, Mapping[str, Any]]


def _as_contact(value: ContactLike) -> Contact:
    if isinstance(value, Contact):
        return value
    return Contact.model_validate(value)


def _as_attachment(value: AttachmentLike) -> Attachment:
    if isinstance(value, Attachment):
        return value
    return Attachment.model_validate(value)


def _as_labels(labels: Optional[Iterable[str]]) -> Optional[list[str]]:
    if labels is None:
        return None
    if isinstance(labels, str):
        return [labels]
    return list(labels)


def build_draft_payload(
    body: str,
    subject: str,
    to: ContactLike,
    from_: ContactLike,
    reference: Optional[str] = None,
    labels: Optional[Iterable[str]] = None,
    send: bool = False,
    attachments: Optional[Iterable[AttachmentLike]] = None
) -> DraftPayload:
    """
    Assemble the ``drafts`` object for a single recipient.

    Args:
        body: HTML or plain text body.
        subject: Email subject.
        to: Recipient name and address.
        from_: Sender name and address.
        reference: Address that started the conversation, if any.
        labels: Shared labels to add to the conversation.
        send: Send immediately instead of leaving a draft.
        attachments: Base64 encoded files.

    Returns:
        DraftPayload ready for ``to_wire()``.
    """
    return DraftPayload(
        send=send,
        subject=subject,
        body=body,
        to_fields=[_as_contact(to)],
        from_field=_as_contact(from_),
        references=[reference],
        attachments=[_as_attachment(a) for a in attachments or []],
        add_shared_labels=_as_labels(labels),
    )


class MissiveService:
    """
    Service for Missive draft operations.

    Example:
        >>> service = MissiveService()
        >>> response = service.create_draft(
        ...     token="missive_pat-...",
        ...     body="<p>Hello</p>",
        ...     subject="Hello",
        ...     to={"name": "Jane", "address": "jane@example.com"},
        ...     from_={"name": "Support", "address": "support@company.com"},
        ... )
    """

    def __init__(self, settings: Optional[MissiveSettings] = None) -> None:
        """
        Initialize Missive service.

        Args:
            settings: Optional Missive settings. Uses application settings if not provided.
        """
        self._settings = settings or get_settings().missive

    @property
    def drafts_url(self) -> str:
        return self._settings.drafts_url

    def create_draft(
        self,
        token: str,
        body: str,
        subject: str,
        to: ContactLike,
        from_: ContactLike,
        reference: Optional[str] = None,
        labels: Optional[Iterable[str]] = None,
        send: bool = False,
        attachments: Optional[Iterable[AttachmentLike]] = None,
        logger: Optional[InfoLogger] = None
    ) -> Any:
        """
        Create a draft on Missive, or send it when ``send`` is True.

        Args:
            token: Missive API token, sent as a Bearer token.
            body: HTML or plain text body.
            subject: Email subject.
            to: Recipient name and address.
            from_: Sender name and address.
            reference: Address that started the conversation, if any.
            labels: Shared labels to add to the conversation.
            send: Send immediately instead of leaving a draft.
            attachments: Base64 encoded files. Missive rejects payloads
                above 10MB.
            logger: Object with an ``info`` method that receives one
                summary line per successful call.

        Returns:
            The parsed JSON response, whatever the HTTP status.

        Raises:
            TransportError: If no response was received.
            MalformedResponseError: If the response body is not JSON.
        """
        summary_logger = logger or NullLogger()
        payload = build_draft_payload(
            body=body,
            subject=subject,
            to=to,
            from_=from_,
            reference=reference,
            labels=labels,
            send=send,
            attachments=attachments,
        )
        recipient = payload.to_fields[0].address

        http_response = self._post(token, payload.to_wire(), recipient)
        response = self._parse(http_response)

        status = response.get("status") if isinstance(response, dict) else None
        summary_logger.info(
            f"Email sent via Missive to {recipient} with response status: {status}"
        )
        return response

    def _post(
        self,
        token: str,
        wire_body: dict[str, Any],
        recipient: str
    ) -> requests.Response:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {token}",
        }
        logger.debug("Posting draft to Missive", url=self.drafts_url, to_email=recipient)
        try:
            return requests.post(
                self.drafts_url,
                json=wire_body,
                headers=headers,
                timeout=self._settings.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(
                "Missive request failed",
                error=str(e),
                to_email=recipient
            )
            raise TransportError(
                message=f"Failed to reach Missive: {e}",
                recipient=recipient,
                context=ErrorContext(operation="create_draft"),
                cause=e
            ) from e

    def _parse(self, http_response: requests.Response) -> Any:
        # Non-2xx responses are parsed and returned like any other
        logger.debug(
            "Missive responded",
            status_code=http_response.status_code,
            content_length=len(http_response.content)
        )
        try:
            return http_response.json()
        except ValueError as e:
            logger.error(
                "Missive returned a non-JSON body",
                status_code=http_response.status_code,
                error=str(e)
            )
            raise MalformedResponseError(
                status_code=http_response.status_code,
                body=http_response.text,
                context=ErrorContext(operation="create_draft"),
                cause=e
            ) from e


# Singleton instance
_missive_service: Optional[MissiveService] = None


def get_missive_service() -> MissiveService:
    """
    Get the global MissiveService instance.

    Returns:
        MissiveService singleton.
    """
    global _missive_service
    if _missive_service is None:
        _missive_service = MissiveService()
    return _missive_service


def create_email(
    token: str,
    body: str,
    subject: str,
    to: ContactLike,
    from_: ContactLike,
    reference: Optional[str] = None,
    labels: Optional[Iterable[str]] = None,
    send: bool = False,
    attachments: Optional[Iterable[AttachmentLike]] = None,
    logger: Optional[InfoLogger] = None
) -> Any:
    """Create (or send) an email through Missive with the default service."""
    return get_missive_service().create_draft(
        token=token,
        body=body,
        subject=subject,
        to=to,
        from_=from_,
        reference=reference,
        labels=labels,
        send=send,
        attachments=attachments,
        logger=logger,
    )
