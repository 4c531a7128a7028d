"""Element definitions — small UI primitives composed inside blocks."""

from __future__ import annotations

from typing import Any

from blocks import schema_builders as s

_SIZES = ["sm", "md", "lg"]

BUTTON_SCHEMA = s.BlockSchema(
    id="button-element",
    title="Button",
    properties={
        "text": s.string(title="Button Text", default="Click me"),
        "href": s.string(title="Link URL", default="#"),
        "variant": s.string(
            title="Variant", enum=["primary", "secondary", "outline", "ghost"], default="primary"
        ),
        "size": s.string(title="Size", enum=list(_SIZES), default="md"),
        "disabled": s.boolean(title="Disabled", default=False),
    },
)

TEXT_SCHEMA = s.BlockSchema(
    id="text-element",
    title="Text",
    properties={
        "content": s.string(title="Content", default="Text content"),
        "size": s.string(title="Size", enum=["xs", "sm", "base", "lg", "xl"], default="base"),
        "weight": s.string(title="Weight", enum=["normal", "medium", "semibold", "bold"], default="normal"),
    },
)

TITLE_SCHEMA = s.BlockSchema(
    id="title-element",
    title="Title",
    properties={
        "content": s.string(title="Content", default="Heading"),
        "level": s.number(title="Heading Level", enum=[1, 2, 3, 4, 5, 6], default=2),
    },
)

IMAGE_SCHEMA = s.BlockSchema(
    id="image-element",
    title="Image",
    properties={
        "src": s.string(title="Image URL", default="https://via.placeholder.com/300x200"),
        "alt": s.string(title="Alt Text", default="Image"),
        "rounded": s.string(title="Rounded", enum=["none", "sm", "md", "lg", "full"], default="md"),
    },
    required=["src"],
)

ICON_SCHEMA = s.BlockSchema(
    id="icon-element",
    title="Icon",
    properties={
        "name": s.string(title="Icon Name", default="star"),
        "size": s.string(title="Size", enum=["sm", "md", "lg", "xl"], default="md"),
        "color": s.string(title="Color", default="currentColor"),
    },
    required=["name"],
)

TEXTAREA_SCHEMA = s.BlockSchema(
    id="textarea-element",
    title="Textarea",
    properties={
        "label": s.string(title="Label", default=""),
        "placeholder": s.string(title="Placeholder", default="Enter text..."),
        "helperText": s.string(title="Helper Text", default=""),
        "rows": s.number(title="Rows", default=4),
        "resize": s.string(
            title="Resize", enum=["none", "vertical", "horizontal", "both"], default="vertical"
        ),
        "size": s.string(title="Size", enum=list(_SIZES), default="md"),
        "variant": s.string(title="Variant", enum=["default", "filled", "outlined"], default="default"),
        "required": s.boolean(title="Required", default=False),
        "disabled": s.boolean(title="Disabled", default=False),
    },
)

CARD_SCHEMA = s.BlockSchema(
    id="card-element",
    title="Card",
    properties={
        "variant": s.string(
            title="Variant", enum=["default", "outlined", "elevated", "filled"], default="default"
        ),
        "padding": s.string(title="Padding", enum=["none", "sm", "md", "lg", "xl"], default="md"),
        "rounded": s.string(
            title="Rounded", enum=["none", "sm", "md", "lg", "xl", "full"], default="lg"
        ),
        "shadow": s.string(title="Shadow", enum=["none", "sm", "md", "lg", "xl"], default="sm"),
        "border": s.boolean(title="Border", default=True),
        "hoverable": s.boolean(title="Hover Effect", default=False),
    },
)

VIDEO_SCHEMA = s.BlockSchema(
    id="video-element",
    title="Video",
    properties={
        "src": s.string(title="Video URL", default=""),
        "poster": s.string(title="Poster Image URL", default=""),
        "controls": s.boolean(title="Show Controls", default=True),
        "autoplay": s.boolean(title="Autoplay", default=False),
        "loop": s.boolean(title="Loop", default=False),
        "muted": s.boolean(title="Muted", default=False),
        "preload": s.string(title="Preload", enum=["none", "metadata", "auto"], default="metadata"),
        "aspectRatio": s.string(
            title="Aspect Ratio", enum=["1:1", "4:3", "16:9", "3:2", "2:3", "auto"], default="16:9"
        ),
        "rounded": s.string(title="Rounded", enum=["none", "sm", "md", "lg", "xl"], default="lg"),
        "shadow": s.string(title="Shadow", enum=["none", "sm", "md", "lg", "xl"], default="md"),
        "placeholder": s.string(title="Placeholder", enum=["skeleton", "icon"], default="skeleton"),
    },
    required=["src"],
)

LINK_SCHEMA = s.BlockSchema(
    id="link-element",
    title="Link",
    properties={
        "text": s.string(title="Link Text", default="Learn more"),
        "href": s.string(title="URL", default="#"),
        "external": s.boolean(title="Open in new tab", default=False),
    },
)

AVATAR_SCHEMA = s.BlockSchema(
    id="avatar-element",
    title="Avatar",
    properties={
        "src": s.string(title="Avatar Image URL", default="https://via.placeholder.com/150"),
        "alt": s.string(title="Alt Text", default="Avatar"),
        "size": s.string(title="Size", enum=["sm", "md", "lg", "xl"], default="md"),
    },
)

BADGE_SCHEMA = s.BlockSchema(
    id="badge-element",
    title="Badge",
    properties={
        "text": s.string(title="Badge Text", default="New"),
        "variant": s.string(
            title="Variant", enum=["default", "success", "warning", "error", "info"], default="default"
        ),
    },
)


def default_props_from_schema(schema: s.BlockSchema) -> dict[str, Any]:
    """Top-level ``default`` values of a schema's properties."""
    return {
        key: prop["default"]
        for key, prop in schema.properties.items()
        if isinstance(prop, dict) and "default" in prop
    }


ELEMENT_DEFINITIONS: dict[str, tuple[s.BlockSchema, dict[str, Any]]] = {
    "button": (
        BUTTON_SCHEMA,
        {
            "name": "Button",
            "description": "Interactive button or link element",
            "category": "form",
            "icon": "mouse-pointer",
            "tags": ["button", "link", "interactive"],
        },
    ),
    "text": (
        TEXT_SCHEMA,
        {
            "name": "Text",
            "description": "Paragraph or inline text",
            "category": "content",
            "icon": "type",
            "tags": ["text", "paragraph", "typography"],
        },
    ),
    "title": (
        TITLE_SCHEMA,
        {
            "name": "Title",
            "description": "Heading element with configurable level",
            "category": "content",
            "icon": "heading",
            "tags": ["title", "heading", "typography"],
        },
    ),
    "image": (
        IMAGE_SCHEMA,
        {
            "name": "Image",
            "description": "Image element with configurable properties",
            "category": "content",
            "icon": "image",
            "tags": ["image", "media", "visual"],
        },
    ),
    "link": (
        LINK_SCHEMA,
        {
            "name": "Link",
            "description": "Link element for navigation",
            "category": "content",
            "icon": "link",
            "tags": ["link", "navigation", "anchor"],
        },
    ),
    "avatar": (
        AVATAR_SCHEMA,
        {
            "name": "Avatar",
            "description": "Round profile picture",
            "category": "content",
            "icon": "user",
            "tags": ["avatar", "profile", "image"],
        },
    ),
    "badge": (
        BADGE_SCHEMA,
        {
            "name": "Badge",
            "description": "Badge element for status indicators",
            "category": "content",
            "icon": "tag",
            "tags": ["badge", "status", "indicator"],
        },
    ),
    "icon": (
        ICON_SCHEMA,
        {
            "name": "Icon",
            "description": "SVG icon element with predefined icons",
            "category": "content",
            "icon": "star",
            "tags": ["icon", "svg", "visual"],
        },
    ),
    "textarea": (
        TEXTAREA_SCHEMA,
        {
            "name": "Textarea",
            "description": "Multi-line text input field with validation",
            "category": "form",
            "tags": ["textarea", "form", "field", "multiline"],
        },
    ),
    "card": (
        CARD_SCHEMA,
        {
            "name": "Card",
            "description": "Container element with various styling options",
            "category": "layout",
            "tags": ["card", "container", "wrapper"],
        },
    ),
    "video": (
        VIDEO_SCHEMA,
        {
            "name": "Video",
            "description": "Video player with modern features and beautiful placeholders",
            "category": "media",
            "tags": ["video", "media", "player", "streaming"],
        },
    ),
}
