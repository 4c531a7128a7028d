"""Default design-token catalogue used when a caller supplies none."""

from __future__ import annotations

from blocks.schema_builders import BACKGROUND_COLORS, SPACING_SCALE
from models.blocks import DesignTokens

GRADIENT_DIRECTIONS = [
    "to-r", "to-l", "to-t", "to-b", "to-tr", "to-tl", "to-br", "to-bl",
]

TYPOGRAPHY_SCALE = ["xs", "sm", "base", "lg", "xl", "2xl", "3xl", "4xl", "5xl", "6xl"]


def default_design_tokens() -> DesignTokens:
    return DesignTokens(
        colors=list(BACKGROUND_COLORS),
        spacing=list(SPACING_SCALE),
        gradient_directions=list(GRADIENT_DIRECTIONS),
        typography=list(TYPOGRAPHY_SCALE),
    )
