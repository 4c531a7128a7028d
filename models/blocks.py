"""Block models — block instances on a page and the design-token catalogue."""

from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field

from models.base import CamelModel


class BlockInstance(CamelModel):
    """A block placed on the page being edited.

    ``position`` is 1-based and kept contiguous by the block store.
    """

    id: str
    block_type: str
    block_data: dict[str, Any] = Field(default_factory=dict)
    position: int = 0


class DesignTokens(CamelModel):
    """Catalogue of style values the AI may choose from.

    Unknown categories (e.g. ``radius``) are kept as extra fields and are
    summarised generically.
    """

    model_config = ConfigDict(extra="allow")

    colors: list[str] = Field(default_factory=list)
    spacing: list[str] = Field(default_factory=list)
    gradient_directions: list[str] | None = None
    typography: list[str] | None = None


def tokens_to_dict(tokens: DesignTokens | dict[str, Any] | None) -> dict[str, Any]:
    """Normalize tokens to the camelCase dict the LLM sees."""
    if tokens is None:
        return {}
    if isinstance(tokens, DesignTokens):
        return tokens.model_dump(by_alias=True, exclude_none=True)
    return dict(tokens)
