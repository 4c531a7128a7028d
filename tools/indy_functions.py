"""Indy function catalogue — the only operations the model may call.

The definitions are sent to the model in OpenAI function-calling format.
Arguments coming back are validated into :data:`models.indy.IndyFunctionCall`
before anything touches the block store.
"""

from __future__ import annotations

from typing import Any

from models.indy import IndyFunctionName

FUNCTION_DEFINITIONS: list[dict[str, Any]] = [
    {
        "name": IndyFunctionName.UPDATE_BLOCK.value,
        "description": "Update a specific block with new content or layout values.",
        "parameters": {
            "type": "object",
            "properties": {
                "index": {"type": "integer", "description": "Index of the block to update."},
                "updates": {"type": "object", "description": "Updated blockData values."},
            },
            "required": ["index", "updates"],
        },
    },
    {
        "name": IndyFunctionName.ADD_BLOCK.value,
        "description": "Add a new block to the page.",
        "parameters": {
            "type": "object",
            "properties": {
                "type": {"type": "string", "description": "Block type (e.g. 'hero')"},
                "props": {"type": "object", "description": "Block props"},
                "position": {"type": "integer", "description": "Optional index to insert at"},
            },
            "required": ["type", "props"],
        },
    },
    {
        "name": IndyFunctionName.DELETE_BLOCK.value,
        "description": "Delete a block by index.",
        "parameters": {
            "type": "object",
            "properties": {
                "index": {"type": "integer", "description": "Index of the block to delete."},
            },
            "required": ["index"],
        },
    },
    {
        "name": IndyFunctionName.SAVE_PAGE.value,
        "description": "Save all blocks to the database.",
        "parameters": {"type": "object", "properties": {}},
    },
]


def get_function_names() -> list[str]:
    return [fn["name"] for fn in FUNCTION_DEFINITIONS]


def to_tool_definitions() -> list[dict[str, Any]]:
    """The catalogue wrapped as OpenAI ``tools`` entries."""
    return [{"type": "function", "function": fn} for fn in FUNCTION_DEFINITIONS]
