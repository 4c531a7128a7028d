"""JSON-Schema-like builders shared by every block and element definition.

Each builder returns a plain dict node (``type`` plus optional ``title``,
``description``, ``enum``, ``default``, ``properties`` or ``items``).
:class:`BlockSchema` wraps the top-level node and exposes ``to_json()`` so
context builders can normalize it.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

SPACING_SCALE = ["none", "xs", "sm", "md", "lg", "xl", "2xl"]
BACKGROUND_COLORS = ["blue", "red", "green", "yellow", "purple", "pink", "gray", "black", "white"]
GRADIENT_PRESETS = ["sunset", "ocean", "purple", "forest", "fire", "sky", "rose", "mint"]


def _node(type_: str, **config: Any) -> dict[str, Any]:
    node: dict[str, Any] = {"type": type_}
    node.update({k: v for k, v in config.items() if v is not None})
    return node


def string(**config: Any) -> dict[str, Any]:
    return _node("string", **config)


def number(**config: Any) -> dict[str, Any]:
    return _node("number", **config)


def boolean(**config: Any) -> dict[str, Any]:
    return _node("boolean", **config)


def obj(properties: dict[str, Any], **config: Any) -> dict[str, Any]:
    return _node("object", properties=properties, **config)


def array(items: dict[str, Any], **config: Any) -> dict[str, Any]:
    return _node("array", items=items, **config)


def _spacing(title: str, default: str) -> dict[str, Any]:
    return string(title=title, enum=list(SPACING_SCALE), default=default)


def layout() -> dict[str, Any]:
    """Block-level and content-level layout settings."""
    return obj(
        {
            "blockSettings": obj(
                {
                    "blockWidth": boolean(title="Apply Full Width", default=False),
                    "height": string(
                        title="Block Height",
                        enum=["auto", "screen", "half", "third", "quarter"],
                        default="auto",
                    ),
                    "margin": obj(
                        {
                            "top": _spacing("Top Margin", "lg"),
                            "bottom": _spacing("Bottom Margin", "lg"),
                        },
                        title="Block Margin",
                    ),
                },
                title="Block Settings",
            ),
            "contentSettings": obj(
                {
                    "contentAlignment": obj(
                        {
                            "horizontal": string(
                                title="Horizontal Alignment",
                                enum=["left", "center", "right"],
                                default="center",
                            ),
                            "vertical": string(
                                title="Vertical Alignment",
                                enum=["top", "center", "bottom"],
                                default="center",
                            ),
                        },
                        title="Content Alignment",
                    ),
                    "textAlignment": string(
                        title="Text Alignment",
                        enum=["left", "center", "right", "justify"],
                        default="center",
                    ),
                    "contentWidth": string(
                        title="Content Width",
                        enum=["narrow", "wide", "full"],
                        default="wide",
                    ),
                    "padding": obj(
                        {
                            "top": _spacing("Top Padding", "lg"),
                            "bottom": _spacing("Bottom Padding", "lg"),
                            "left": _spacing("Left Padding", "md"),
                            "right": _spacing("Right Padding", "md"),
                        },
                        title="Content Padding",
                    ),
                },
                title="Content Settings",
            ),
        },
        title="Layout Settings",
        description="Layout and spacing configuration",
    )


def background() -> dict[str, Any]:
    """Solid color, gradient, image or video background with overlay."""
    return obj(
        {
            "type": string(
                title="Background Type",
                enum=["color", "gradient", "image", "video"],
                default="color",
            ),
            "color": string(title="Background Color", enum=list(BACKGROUND_COLORS), default="blue"),
            "colorIntensity": string(
                title="Color Intensity", enum=["light", "medium", "dark"], default="medium"
            ),
            "gradient": string(title="Gradient Preset", enum=list(GRADIENT_PRESETS), default="sunset"),
            "image": obj(
                {
                    "url": string(title="Image URL"),
                    "mobileUrl": string(title="Mobile Image URL"),
                    "position": string(
                        title="Image Position",
                        enum=["center", "top", "bottom", "left", "right"],
                        default="center",
                    ),
                    "size": string(title="Image Size", enum=["cover", "contain", "auto"], default="cover"),
                },
                title="Image Settings",
            ),
            "video": obj(
                {
                    "url": string(title="Video URL"),
                    "poster": string(title="Poster Image URL"),
                },
                title="Video Settings",
            ),
            "overlay": obj(
                {
                    "enabled": boolean(title="Enable Overlay", default=False),
                    "color": string(title="Overlay Color", default="#000000"),
                    "opacity": number(title="Overlay Opacity", minimum=0, maximum=1, default=0.5),
                    "blur": boolean(title="Enable Blur", default=False),
                },
                title="Overlay Settings",
            ),
        },
        title="Background Settings",
        description="Background styling options",
    )


@dataclass(frozen=True)
class BlockSchema:
    """Top-level schema of a block or element."""

    id: str
    title: str
    description: str = ""
    properties: dict[str, Any] = field(default_factory=dict)
    required: list[str] = field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        """Plain-dict form handed to the LLM (a deep copy, safe to mutate)."""
        data: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "type": "object",
            "properties": copy.deepcopy(self.properties),
        }
        if self.description:
            data["description"] = self.description
        if self.required:
            data["required"] = list(self.required)
        return data
