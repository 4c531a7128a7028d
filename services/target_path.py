"""Dot-path helpers and targeted update-context compression.

A targeted update ("change the background") only needs the ``background``
subtree of the block data and schema.  These helpers cut a full
:class:`BlockUpdateContext` down to that subtree before it is sent to the
model.
"""

from __future__ import annotations

import logging
from typing import Any

from models.context import BlockUpdateContext, CompressedUpdateContext
from services.deep_equal import is_present

logger = logging.getLogger(__name__)

_MISSING = object()


def _step(node: Any, key: str) -> Any:
    if isinstance(node, dict):
        return node.get(key, _MISSING)
    if isinstance(node, list) and key.isdigit() and int(key) < len(node):
        return node[int(key)]
    return _MISSING


def get_nested_value(obj: Any, path: str, default: Any = None) -> Any:
    """Value at dot *path* inside *obj*, or *default* when any segment is missing."""
    if not isinstance(obj, (dict, list)):
        return default
    current = obj
    for key in path.split("."):
        current = _step(current, key)
        if current is _MISSING:
            return default
    return current


def set_nested_value(obj: Any, path: str, value: Any) -> Any:
    """Return a copy of *obj* with *value* at dot *path*.

    Every dict along the path is shallow-copied; *obj* itself is never
    mutated.  Missing or non-dict intermediate segments become ``{}``.
    """
    if not isinstance(obj, dict):
        return obj

    keys = path.split(".")
    result = dict(obj)
    current = result
    for key in keys[:-1]:
        child = current.get(key)
        current[key] = dict(child) if isinstance(child, dict) else {}
        current = current[key]
    current[keys[-1]] = value
    return result


def extract_target_path(obj: Any, path: str) -> dict[str, Any]:
    """Minimal object holding only *path*; ``{}`` when the path does not resolve."""
    value = get_nested_value(obj, path, _MISSING)
    if value is _MISSING:
        return {}
    return set_nested_value({}, path, value)


def _context_fields(ctx: Any) -> dict[str, Any] | None:
    if isinstance(ctx, BlockUpdateContext):
        return ctx.model_dump(by_alias=True)
    if isinstance(ctx, dict):
        return {
            "blockType": ctx.get("blockType", ctx.get("block_type")),
            "current": ctx.get("current"),
            "schema": ctx.get("schema", ctx.get("block_schema")),
            "tokens": ctx.get("tokens"),
        }
    return None


def compress_block_update_context_for_target(ctx: Any, target: str) -> CompressedUpdateContext:
    """Narrow an update context to a single dot-path *target*.

    Falls back to the full current data when the target is absent from it,
    and to the full schema when the target has no schema node.
    """
    fields = _context_fields(ctx)
    if fields is None:
        logger.warning("Cannot compress update context of type %s", type(ctx).__name__)
        return CompressedUpdateContext(target=target)

    current = fields.get("current")
    target_current: Any = {}
    if is_present(current):
        target_current = extract_target_path(current, target) or current

    schema = fields.get("schema")
    target_schema: Any = {}
    properties = schema.get("properties") if isinstance(schema, dict) else None
    if is_present(properties):
        node = get_nested_value(properties, target)
        if is_present(node):
            target_schema = set_nested_value({"properties": {}}, f"properties.{target}", node)
        else:
            target_schema = schema

    return CompressedUpdateContext(
        block_type=fields.get("blockType") or "unknown",
        target=target,
        current=target_current,
        block_schema=target_schema,
        tokens=fields.get("tokens") or {},
    )
