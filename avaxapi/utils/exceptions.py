"""
Exception hierarchy and error handling utilities for avaxapi.

Provides:
- Custom exception classes with error codes
- Error categorization (retryable, timeout, validation, fatal)
- Safe error message formatting (no keystore secrets in output)
"""

from __future__ import annotations

import json
import re
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Error categories for classification."""
    RETRYABLE = "retryable"
    FATAL = "fatal"
    VALIDATION = "validation"
    TIMEOUT = "timeout"


class AvaxApiError(Exception):
    """Base exception for all avaxapi errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        category: ErrorCategory = ErrorCategory.FATAL,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.details = details or {}

    @property
    def retryable(self) -> bool:
        return self.category in (ErrorCategory.RETRYABLE, ErrorCategory.TIMEOUT)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.code,
            "message": self.message,
            "category": self.category.value,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class RPCError(AvaxApiError):
    """Base class for everything EndpointRequester.send_request can raise."""


class EncodingError(RPCError):
    """Request parameters could not be serialized; nothing was sent."""

    def __init__(self, method: str, message: str):
        super().__init__(
            f"cannot encode params for {method}: {message}",
            code="ENCODING_ERROR",
            category=ErrorCategory.VALIDATION,
            details={"method": method},
        )


class TransportError(RPCError):
    """Network-level failure: connection refused, DNS, broken stream, bad HTTP status."""

    def __init__(self, method: str, message: str, status_code: int | None = None):
        super().__init__(
            f"transport error calling {method}: {message}",
            code="TRANSPORT_ERROR",
            category=ErrorCategory.RETRYABLE,
            details={"method": method, "status_code": status_code},
        )
        self.status_code = status_code


class TimeoutError(RPCError):
    """Call exceeded the requester's timeout budget."""

    def __init__(self, method: str, timeout_seconds: float):
        super().__init__(
            f"{method} timed out after {timeout_seconds}s",
            code="TIMEOUT",
            category=ErrorCategory.TIMEOUT,
            details={"method": method, "timeout_seconds": timeout_seconds},
        )
        self.timeout_seconds = timeout_seconds


class RemoteError(RPCError):
    """The node processed the call and answered with a JSON-RPC error object."""

    def __init__(self, code: int, message: str, data: Any = None, method: str | None = None):
        prefix = f"{method}: " if method else ""
        super().__init__(
            f"{prefix}remote error {code}: {message}",
            code="REMOTE_ERROR",
            category=ErrorCategory.FATAL,
            details={"method": method, "rpc_code": code, "rpc_message": message, "data": data},
        )
        self.rpc_code = code
        self.rpc_message = message
        self.data = data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RemoteError):
            return NotImplemented
        return (self.rpc_code, self.rpc_message) == (other.rpc_code, other.rpc_message)

    __hash__ = None  # type: ignore[assignment]


class DecodingError(RPCError):
    """Response did not match the expected shape (client/node version mismatch)."""

    def __init__(self, method: str, message: str):
        super().__init__(
            f"cannot decode response of {method}: {message}",
            code="DECODING_ERROR",
            category=ErrorCategory.VALIDATION,
            details={"method": method},
        )


class FormattingError(AvaxApiError):
    """Malformed encoded bytes (bad prefix, bad hex, checksum mismatch)."""

    def __init__(self, message: str):
        super().__init__(message, code="FORMATTING_ERROR", category=ErrorCategory.VALIDATION)


_SENSITIVE_PATTERNS = [
    re.compile(r"(password|private[_-]?key|privateKey|token|secret)[=:]\s*['\"]?([^\s'\",}]+)['\"]?", re.IGNORECASE),
    re.compile(r"PrivateKey-[1-9A-HJ-NP-Za-km-z]+"),
    re.compile(r"bearer\s+[a-zA-Z0-9\-._~+/]+=*", re.IGNORECASE),
]


def sanitize_error_message(message: str, replacement: str = "[REDACTED]") -> str:
    """Remove sensitive information from error messages."""
    sanitized = message
    for pattern in _SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def classify_exception(exc: Exception) -> tuple[str, ErrorCategory, bool]:
    """
    Classify an exception and return (error_code, category, should_retry).
    """
    if isinstance(exc, AvaxApiError):
        return exc.code, exc.category, exc.retryable

    if isinstance(exc, ConnectionError):
        return "CONNECTION_ERROR", ErrorCategory.RETRYABLE, True

    if isinstance(exc, json.JSONDecodeError):
        return "JSON_PARSE_ERROR", ErrorCategory.VALIDATION, False

    if isinstance(exc, (ValueError, TypeError, KeyError)):
        return "INVALID_VALUE", ErrorCategory.VALIDATION, False

    exc_str = str(exc).lower()
    if "timeout" in exc_str or "timed out" in exc_str:
        return "TIMEOUT", ErrorCategory.TIMEOUT, True

    if "connection" in exc_str or "network" in exc_str:
        return "CONNECTION_ERROR", ErrorCategory.RETRYABLE, True

    return "INTERNAL_ERROR", ErrorCategory.FATAL, False
