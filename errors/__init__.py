"""Custom exception hierarchy for the Indy block service."""

from errors.exceptions import (
    BlockNotFoundError,
    CircuitOpenError,
    CMSClientError,
    FunctionCallParseError,
    IndyAPIError,
    IndyError,
    InvalidBlockIndexError,
    UpstreamError,
)

__all__ = [
    "BlockNotFoundError",
    "CircuitOpenError",
    "CMSClientError",
    "FunctionCallParseError",
    "IndyAPIError",
    "IndyError",
    "InvalidBlockIndexError",
    "UpstreamError",
]
