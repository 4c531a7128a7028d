"""Schema summarizer — renders block schemas and design tokens as LLM-readable text.

The summary lists every configurable field as a ``- path: type`` line with
its enum values, default and description, optionally followed by an
``AI Hints`` section, and always ends with an example of the expected JSON
structure the model should return.
"""

from __future__ import annotations

import json
import math
from typing import Any

from models.blocks import DesignTokens, tokens_to_dict
from services.deep_equal import is_present

INVALID_SCHEMA = "Invalid schema provided"
NO_TOKENS = "No tokens available"

_MAX_ENUM_VALUES = 6
_MAX_EXAMPLE_DEPTH = 3


def _js_str(value: Any) -> str:
    """Render a scalar the way it reads inside a JSON document."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(_js_str(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value)
    return str(value)


def normalize_schema(schema: Any) -> Any:
    """Plain-dict form of a schema that exposes ``to_json()`` or ``model_dump()``."""
    if hasattr(schema, "to_json"):
        return schema.to_json()
    if hasattr(schema, "model_dump"):
        return schema.model_dump(by_alias=True, exclude_none=True)
    return schema


# ── Field lines ──────────────────────────────────────────────


def _format_leaf(path: str, info: dict, include_defaults: bool, include_enums: bool) -> str:
    line = f"- {path}: {info['type']}"

    enum = info.get("enum")
    if include_enums and isinstance(enum, list):
        shown = ", ".join(_js_str(v) for v in enum[:_MAX_ENUM_VALUES])
        suffix = ", ..." if len(enum) > _MAX_ENUM_VALUES else ""
        line += f" (enum: {shown}{suffix})"

    if include_defaults and "default" in info:
        default = info["default"]
        rendered = f'"{default}"' if isinstance(default, str) else _js_str(default)
        line += f" (default: {rendered})"

    if info.get("description"):
        line += f" - {info['description']}"
    return line


def _titled(line: str, info: dict) -> str:
    if info.get("title"):
        line += f" ({info['title']})"
    if info.get("description"):
        line += f" - {info['description']}"
    return line


def _process_properties(
    properties: Any,
    path: str,
    depth: int,
    max_depth: int,
    include_defaults: bool,
    include_enums: bool,
) -> list[str]:
    if not isinstance(properties, dict) or depth >= max_depth:
        return []

    fields: list[str] = []
    for key, info in properties.items():
        if not isinstance(info, dict) or not info:
            continue

        current_path = f"{path}.{key}" if path else key
        field_type = info.get("type")

        if field_type == "object" and isinstance(info.get("properties"), dict):
            fields.append(_titled(f"- {current_path}: object", info))
            fields.extend(
                _process_properties(
                    info["properties"], current_path, depth + 1,
                    max_depth, include_defaults, include_enums,
                )
            )
        elif field_type == "array":
            fields.append(_titled(f"- {current_path}: array", info))
            items = info.get("items")
            is_object_items = isinstance(items, dict) and items.get("type") == "object"
            if is_object_items and isinstance(items.get("properties"), dict):
                fields.append(f"  Each {key} item has:")
                item_fields = _process_properties(
                    items["properties"], f"{current_path}[]", depth + 1,
                    max_depth, include_defaults, include_enums,
                )
                fields.extend(f"  {line}" for line in item_fields)
            elif isinstance(items, dict) and items.get("type"):
                fields.append(f"  - Each item is: {items['type']}")
        elif field_type:
            fields.append(_format_leaf(current_path, info, include_defaults, include_enums))

    return fields


# ── AI hints ─────────────────────────────────────────────────


def _extract_hints(schema: dict) -> list[str]:
    hints: list[str] = []

    guidance = schema.get("layoutGuidance")
    if isinstance(guidance, dict):
        structure = guidance.get("structure") or {}
        if isinstance(structure, dict) and structure.get("recommended"):
            hints.append(f"- Recommended layout: {structure['recommended']}")

        typography = guidance.get("typography") or {}
        hierarchy = typography.get("hierarchy") if isinstance(typography, dict) else None
        if isinstance(hierarchy, dict) and hierarchy:
            pairs = ", ".join(f"{key} ({value})" for key, value in hierarchy.items())
            hints.append(f"- Typography hierarchy: {pairs}")

    content_hints = schema.get("contentHints")
    if isinstance(content_hints, dict):
        for element, data in content_hints.items():
            if not isinstance(data, dict):
                continue
            if data.get("lengthGuideline"):
                hints.append(f"- {element} length: {data['lengthGuideline']}")
            if isinstance(data.get("characteristics"), list):
                hints.append(f"- {element} style: {', '.join(map(str, data['characteristics']))}")

    return hints


# ── Example JSON ─────────────────────────────────────────────


def generate_example_structure(properties: Any, depth: int = 0) -> str:
    """Example JSON object for *properties*, nested at most three levels."""
    if not isinstance(properties, dict) or depth > _MAX_EXAMPLE_DEPTH:
        return "{}"

    indent = "  " * depth
    lines = ["{"]
    entries = list(properties.items())
    for index, (key, info) in enumerate(entries):
        comma = "" if index == len(entries) - 1 else ","
        info = info if isinstance(info, dict) else {}
        field_type = info.get("type")
        enum = info.get("enum")

        if field_type == "object" and isinstance(info.get("properties"), dict):
            nested = generate_example_structure(info["properties"], depth + 1)
            lines.append(f'{indent}  "{key}": {nested}{comma}')
        elif field_type == "array":
            items = info.get("items")
            if isinstance(items, dict) and isinstance(items.get("properties"), dict):
                lines.append(f'{indent}  "{key}": [')
                lines.append(f"{indent}    {generate_example_structure(items['properties'], depth + 2)}")
                lines.append(f"{indent}  ]{comma}")
            else:
                lines.append(f'{indent}  "{key}": []{comma}')
        elif field_type == "string":
            example = info.get("default") or (enum[0] if isinstance(enum, list) and enum else "...")
            lines.append(f'{indent}  "{key}": "{_js_str(example)}"{comma}')
        elif field_type == "number":
            example = info.get("default") or (enum[0] if isinstance(enum, list) and enum else 0)
            lines.append(f'{indent}  "{key}": {_js_str(example)}{comma}')
        elif field_type == "boolean":
            lines.append(f'{indent}  "{key}": {_js_str(info.get("default") or False)}{comma}')
        else:
            lines.append(f'{indent}  "{key}": null{comma}')

    lines.append(f"{indent}}}")
    return "\n".join(lines)


# ── Public API ───────────────────────────────────────────────


def summarise_block_schema_for_ai(
    schema: Any,
    *,
    include_hints: bool = False,
    max_depth: int = 10,
    include_defaults: bool = True,
    include_enums: bool = True,
) -> str:
    schema = normalize_schema(schema)
    if not isinstance(schema, dict):
        return INVALID_SCHEMA

    lines: list[str] = []
    if schema.get("title"):
        lines.append(f"**{schema['title']}**")
    elif schema.get("id"):
        lines.append(f"**{schema['id']}**")
    else:
        lines.append("**Block Schema**")

    if schema.get("description"):
        lines.append(str(schema["description"]))
        lines.append("")

    properties = schema.get("properties")
    if is_present(properties):
        fields = _process_properties(properties, "", 0, max_depth, include_defaults, include_enums)
        lines.extend(fields or ["- No configurable properties"])
    else:
        lines.append("- No properties defined")

    if include_hints:
        hints = _extract_hints(schema)
        if hints:
            lines.extend(["", "**AI Hints:**", *hints])

    lines.extend(["", "**Expected JSON Structure:**", generate_example_structure(properties)])
    return "\n".join(lines)


def _truncated(values: list, limit: int) -> str:
    shown = ", ".join(_js_str(v) for v in values[:limit])
    if len(values) <= limit:
        return shown
    return f"{shown}, ... ({len(values)} total)"


def summarise_tokens_for_ai(tokens: DesignTokens | dict[str, Any] | None) -> str:
    if isinstance(tokens, DesignTokens):
        tokens = tokens_to_dict(tokens)
    if not isinstance(tokens, dict):
        return NO_TOKENS

    lines = ["**Available Tokens:**"]

    if isinstance(tokens.get("colors"), list):
        lines.append(f"- Colors: {_truncated(tokens['colors'], 10)}")
    if isinstance(tokens.get("spacing"), list):
        lines.append(f"- Spacing: {_truncated(tokens['spacing'], 10)}")
    if isinstance(tokens.get("gradientDirections"), list):
        lines.append(f"- Gradient Directions: {', '.join(map(_js_str, tokens['gradientDirections']))}")

    for key, value in tokens.items():
        if key in ("colors", "spacing", "gradientDirections"):
            continue
        if isinstance(value, list):
            lines.append(f"- {key}: {_truncated(value, 8)}")
        elif isinstance(value, dict):
            lines.append(f"- {key}: {_truncated(list(value.keys()), 5)}")

    if len(lines) == 1:
        lines.append("- No tokens available")
    return "\n".join(lines)
