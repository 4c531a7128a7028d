"""Structured error codes and the fixed set of user-facing Indy messages.

Every failure that reaches the Indy error boundary ends up as one of the
messages below, never as a raised exception.  API error bodies and
``HTTPException`` details carry an :class:`ErrorCode` through
:func:`error_body` and :func:`format_error`.
"""

from __future__ import annotations

import re
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes shared by the HTTP API and the Indy dispatcher."""

    INVALID_REQUEST = "INVALID_REQUEST"
    BLOCK_NOT_FOUND = "BLOCK_NOT_FOUND"
    INVALID_BLOCK_INDEX = "INVALID_BLOCK_INDEX"
    RATE_LIMITED = "RATE_LIMITED"
    QUOTA_EXCEEDED = "QUOTA_EXCEEDED"
    INVALID_API_KEY = "INVALID_API_KEY"
    LLM_PROVIDER_ERROR = "LLM_PROVIDER_ERROR"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# ── User-facing messages (fixed set) ────────────────────────────────

RATE_LIMIT_MESSAGE = "⚠️ Rate limit exceeded. Please try again in a moment."
QUOTA_EXCEEDED_MESSAGE = "⚠️ API quota exceeded. Please check your OpenAI billing."
INVALID_API_KEY_MESSAGE = "⚠️ Invalid API key. Please check your OpenAI configuration."
GENERIC_FAILURE_MESSAGE = (
    "❌ Sorry, I encountered an error processing your request. Please try again."
)
NO_REPLY_MESSAGE = "I'm not sure how to help with that."

_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.RATE_LIMITED: RATE_LIMIT_MESSAGE,
    ErrorCode.QUOTA_EXCEEDED: QUOTA_EXCEEDED_MESSAGE,
    ErrorCode.INVALID_API_KEY: INVALID_API_KEY_MESSAGE,
}

# Provider errors are matched on their text, first match wins.
_RATE_LIMIT_RE = re.compile(r"rate.?limit", re.IGNORECASE)
_QUOTA_RE = re.compile(r"insufficient_quota", re.IGNORECASE)
_API_KEY_RE = re.compile(r"invalid_api_key|incorrect api key", re.IGNORECASE)


def classify_upstream_error(exc: BaseException) -> ErrorCode:
    """Map an exception raised around a model call to an :class:`ErrorCode`."""
    text = f"{type(exc).__name__}: {exc}"
    if _RATE_LIMIT_RE.search(text):
        return ErrorCode.RATE_LIMITED
    if _QUOTA_RE.search(text):
        return ErrorCode.QUOTA_EXCEEDED
    if _API_KEY_RE.search(text):
        return ErrorCode.INVALID_API_KEY
    return ErrorCode.INTERNAL_ERROR


def friendly_error_message(exc: BaseException) -> str:
    """Return the user-facing chat message for *exc*."""
    return _MESSAGES.get(classify_upstream_error(exc), GENERIC_FAILURE_MESSAGE)


def format_error(code: ErrorCode, detail: str) -> str:
    """Format an error as ``{ERROR_CODE}: {detail}``."""
    return f"{code.value}: {detail}"


def error_body(code: ErrorCode, error: str, details: str | None = None) -> dict[str, str]:
    """JSON error body: ``{"error", "code"}`` plus optional ``details``."""
    body = {"error": error, "code": code.value}
    if details is not None:
        body["details"] = details
    return body
