"""
Custom Exception Hierarchy
==========================

Structured exceptions for the Missive client with error codes,
messages, and preservation of the underlying cause.

Non-2xx responses from Missive are deliberately absent from this
hierarchy: the client returns whatever JSON body the API sent.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    """Standardized error codes for the application."""
    
    # Generic errors (1xxx)
    INTERNAL_ERROR = "ERR_1000"
    VALIDATION_ERROR = "ERR_1001"
    
    # Missive errors (2xxx)
    MISSIVE_TRANSPORT_ERROR = "ERR_2000"
    MISSIVE_MALFORMED_RESPONSE = "ERR_2001"


@dataclass
class ErrorContext:
    """Context information for error tracking and debugging."""
    
    operation: str = ""
    additional_info: dict[str, Any] = field(default_factory=dict)
    
    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for logging/serialization."""
        result = {"operation": self.operation}
        if self.additional_info:
            result.update(self.additional_info)
        return result


class MissiveDraftsError(Exception):
    """
    Base exception for all missive-drafts errors.
    
    Carries an error code for programmatic handling, a human-readable
    message, debugging context and the original exception.
    
    Example:
        >>> raise MissiveDraftsError(
        ...     message="Failed to create draft",
        ...     code=ErrorCode.INTERNAL_ERROR,
        ...     context=ErrorContext(operation="create_draft")
        ... )
    """
    
    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        context: Optional[ErrorContext] = None,
        cause: Optional[BaseException] = None
    ) -> None:
        """
        Initialize the exception.
        
        Args:
            message: Human-readable error description.
            code: Standardized error code.
            context: Additional context for debugging.
            cause: Original exception that caused this error.
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.context = context or ErrorContext()
        self.cause = cause
    
    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        result = {
            "error": True,
            "code": self.code.value,
            "message": self.message,
        }
        if self.context.operation:
            result["context"] = self.context.to_dict()
        return result
    
    def __str__(self) -> str:
        """Format exception as string with context."""
        parts = [f"[{self.code.value}] {self.message}"]
        if self.context.operation:
            parts.append(f"(operation: {self.context.operation})")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " ".join(parts)


# Missive-specific exceptions
class MissiveError(MissiveDraftsError):
    """Base exception for Missive API errors."""
    
    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.MISSIVE_TRANSPORT_ERROR,
        **kwargs: Any
    ) -> None:
        super().__init__(message=message, code=code, **kwargs)


class TransportError(MissiveError):
    """Raised when the request never produced a response (DNS, TLS, socket)."""
    
    def __init__(
        self,
        message: str = "Failed to reach Missive",
        recipient: Optional[str] = None,
        **kwargs: Any
    ) -> None:
        context = kwargs.pop("context", ErrorContext())
        if recipient:
            context.additional_info["recipient"] = recipient
        super().__init__(
            message=message,
            code=ErrorCode.MISSIVE_TRANSPORT_ERROR,
            context=context,
            **kwargs
        )


class MalformedResponseError(MissiveError):
    """Raised when Missive answers with a body that is not valid JSON."""
    
    # Longest body excerpt kept in the error context
    EXCERPT_LENGTH = 200
    
    def __init__(
        self,
        message: str = "Missive returned a non-JSON response",
        status_code: Optional[int] = None,
        body: str = "",
        **kwargs: Any
    ) -> None:
        context = kwargs.pop("context", ErrorContext())
        if status_code is not None:
            context.additional_info["status_code"] = status_code
        if body:
            context.additional_info["body_excerpt"] = body[:self.EXCERPT_LENGTH]
        self.status_code = status_code
        self.body = body
        super().__init__(
            message=message,
            code=ErrorCode.MISSIVE_MALFORMED_RESPONSE,
            context=context,
            **kwargs
        )


# Validation exceptions
class ValidationError(MissiveDraftsError):
    """Raised when request validation fails."""
    
    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        **kwargs: Any
    ) -> None:
        context = kwargs.pop("context", ErrorContext())
        if field:
            context.additional_info["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            context=context,
            **kwargs
        )
