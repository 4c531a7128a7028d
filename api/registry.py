"""Registry API — registered blocks and elements, and their AI summaries."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from blocks.registry import (
    BLOCK_REGISTRY,
    ELEMENT_REGISTRY,
    resolve_block,
)
from blocks.tokens import default_design_tokens
from errors.exceptions import BlockNotFoundError
from models.errors import ErrorCode, format_error
from services.schema_summary import (
    normalize_schema,
    summarise_block_schema_for_ai,
    summarise_tokens_for_ai,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["registry"])


def _resolve_or_404(block_type: str):
    try:
        return resolve_block(block_type)
    except BlockNotFoundError as e:
        raise HTTPException(
            status_code=404, detail=format_error(ErrorCode.BLOCK_NOT_FOUND, str(e))
        ) from e


@router.get("/blocks")
async def list_blocks():
    return {
        "blocks": [
            {
                "type": entry.type.value,
                "name": entry.name,
                "description": entry.description,
                "component": entry.component,
            }
            for entry in BLOCK_REGISTRY.values()
        ]
    }


@router.get("/blocks/{block_type}")
async def get_block(block_type: str):
    entry = _resolve_or_404(block_type)
    return {
        "type": entry.type.value,
        "name": entry.name,
        "description": entry.description,
        "component": entry.component,
        "schema": normalize_schema(entry.schema),
        "defaultData": entry.defaults(),
        "metadata": dict(entry.metadata),
        "aiHints": entry.hints(),
    }


@router.get("/blocks/{block_type}/summary")
async def get_block_summary(block_type: str, include_hints: bool = True):
    """Plain-text schema summary as sent to the model, plus the token catalogue."""
    entry = _resolve_or_404(block_type)
    schema = normalize_schema(entry.schema)
    if include_hints and isinstance(schema, dict):
        hints = entry.hints()
        schema = {
            **schema,
            "layoutGuidance": hints.get("layoutGuidance"),
            "contentHints": hints.get("contentHints"),
        }
    return {
        "type": entry.type.value,
        "summary": summarise_block_schema_for_ai(schema, include_hints=include_hints),
        "tokens": summarise_tokens_for_ai(default_design_tokens()),
    }


@router.get("/elements")
async def list_elements():
    return {
        "elements": [
            {
                "type": entry.type.value,
                "name": entry.name,
                "description": entry.description,
                "defaultProps": entry.defaults(),
            }
            for entry in ELEMENT_REGISTRY.values()
        ]
    }
