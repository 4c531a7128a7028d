"""Domain-specific exceptions for the Indy block service.

These exceptions let the context builders, the function dispatcher and the
API layer distinguish between failure modes:

- :class:`BlockNotFoundError` — unknown block/element type (NotFound)
- :class:`InvalidBlockIndexError` — out-of-range index in a block operation
- :class:`UpstreamError` — LLM or persistence call failed
- :class:`FunctionCallParseError` — malformed function-call arguments
- :class:`IndyAPIError` — the block-generation HTTP API failed
"""

from __future__ import annotations


class IndyError(Exception):
    """Base class for all Indy service errors."""


class BlockNotFoundError(IndyError):
    """A block or element type is not present in its registry."""

    def __init__(self, block_type: str, kind: str = "Block") -> None:
        self.block_type = block_type
        self.kind = kind
        super().__init__(f'{kind} type "{block_type}" not found in registry')


class InvalidBlockIndexError(IndyError):
    """A block operation referenced an index outside the current block list."""

    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(
            f"Invalid block index {index}. Available blocks: 0-{length - 1}"
        )


class UpstreamError(IndyError):
    """An external collaborator (LLM provider, CMS backend) failed."""

    def __init__(self, service: str, message: str) -> None:
        self.service = service
        super().__init__(f"{service}: {message}")


class CMSClientError(UpstreamError):
    """The CMS backend returned a non-2xx response.

    ``detail`` carries the ``error`` field of the response body when the
    backend provided one, otherwise a generic status message.
    """

    def __init__(self, status_code: int, detail: str, url: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        self.url = url
        super().__init__("CMS", detail)


class CircuitOpenError(UpstreamError):
    """Raised when the CMS circuit breaker is open."""

    def __init__(self) -> None:
        super().__init__("CMS", "circuit breaker open — backend unavailable")


class FunctionCallParseError(IndyError):
    """The model returned a function call whose arguments could not be parsed."""

    def __init__(self, function_name: str, message: str) -> None:
        self.function_name = function_name
        super().__init__(f"Could not parse arguments for '{function_name}': {message}")


class IndyAPIError(UpstreamError):
    """``/api/indy/generate`` failed or reported ``success: false``."""

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        self.detail = detail
        self.status_code = status_code
        super().__init__("Indy API", detail)
