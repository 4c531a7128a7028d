"""Property intent models — direct property changes inferred from user text."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from models.base import CamelModel

PropertyIntentType = Literal["layout", "background", "content", "spacing", "alignment"]
PropertyAction = Literal["set", "increase", "decrease", "toggle", "reset"]
PropertyModifier = Literal["slight", "moderate", "significant"]


class PropertyIntent(CamelModel):
    type: PropertyIntentType
    action: PropertyAction
    property: str  # dot path, e.g. "layout.blockSettings.blockWidth"
    value: Any = None
    modifier: PropertyModifier | None = None
    confidence: float = 0.0


class PropertyChange(CamelModel):
    property: str
    old_value: Any = None
    new_value: Any = None
    intent: PropertyIntent


class PropertyAgentResult(CamelModel):
    success: bool
    changes: list[PropertyChange] = Field(default_factory=list)
    message: str
    confidence: float = 0.0
    updated_block_data: dict[str, Any] | None = None
