"""PropertyAgent — applies direct property tweaks without calling the LLM.

"make this full width", "add more padding", "center align" are classified
by :mod:`services.property_intent` and written straight into the block
data.  Only the highest-confidence intent is applied.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from models.property_intent import PropertyAgentResult, PropertyChange, PropertyIntent
from services.block_store import BlockStore
from services.property_intent import classify_property_intent, convert_intent_to_property_update
from services.target_path import get_nested_value, set_nested_value

logger = logging.getLogger(__name__)

SPACING_DIRECTIONS = ("top", "bottom", "left", "right")

NOT_UNDERSTOOD_MESSAGE = "I couldn't understand what property changes you want to make."
NOT_APPLIED_MESSAGE = "I couldn't apply the requested property changes."
PROPERTY_ERROR_MESSAGE = "An error occurred while processing your property changes."

_DISPLAY_NAMES = {
    "blockWidth": "block width",
    "height": "block height",
    "contentWidth": "content width",
    "textAlignment": "text alignment",
    "top": "top spacing",
    "bottom": "bottom spacing",
    "left": "left spacing",
    "right": "right spacing",
    "color": "background color",
    "gradient": "background gradient",
}


def _display_value(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def get_property_display_name(prop: str) -> str:
    last = prop.split(".")[-1]
    return _DISPLAY_NAMES.get(last, last)


def _spacing_changes(intent: PropertyIntent, block_data: Any) -> list[PropertyChange]:
    changes = []
    for direction in SPACING_DIRECTIONS:
        path = f"{intent.property}.{direction}"
        old = get_nested_value(block_data, path)
        new = convert_intent_to_property_update(intent, old)
        if new != old:
            changes.append(PropertyChange(property=path, old_value=old, new_value=new, intent=intent))
    return changes


def _single_change(intent: PropertyIntent, block_data: Any) -> PropertyChange | None:
    old = get_nested_value(block_data, intent.property)
    new = convert_intent_to_property_update(intent, old)
    if new == old and type(new) is type(old):
        return None
    return PropertyChange(property=intent.property, old_value=old, new_value=new, intent=intent)


def apply_property_changes(block_data: Any, changes: list[PropertyChange]) -> dict[str, Any]:
    """Deep copy of *block_data* with every change written in."""
    updated = copy.deepcopy(block_data) if isinstance(block_data, dict) else {}
    for change in changes:
        updated = set_nested_value(updated, change.property, change.new_value)
    return updated


def build_success_message(changes: list[PropertyChange], intent: PropertyIntent) -> str:
    if len(changes) == 1:
        change = changes[0]
        return (
            f"✅ Updated {get_property_display_name(change.property)} "
            f"to {_display_value(change.new_value)}"
        )
    if intent.type == "spacing":
        action = {"increase": "increased", "decrease": "decreased"}.get(intent.action, "updated")
        target = "padding" if "padding" in intent.property else "margin"
        return f"✅ {action.capitalize()} {target} for all sides"
    return f"✅ Updated {len(changes)} properties"


def run_property_agent(
    user_input: str,
    block_id: str,
    current_block_data: Any,
    store: BlockStore | None = None,
) -> PropertyAgentResult:
    """Apply the top property intent in *user_input* to a block.

    With a *store*, the block identified by *block_id* is updated in place;
    without one, callers apply ``updated_block_data`` themselves.
    Failures are reported in the result, never raised.
    """
    try:
        intents = classify_property_intent(user_input)
        if not intents:
            return PropertyAgentResult(success=False, message=NOT_UNDERSTOOD_MESSAGE, confidence=0)

        primary = intents[0]
        logger.info(
            "Property intent %s %s (confidence=%.2f)",
            primary.action, primary.property, primary.confidence,
        )

        if "padding" in primary.property or "margin" in primary.property:
            changes = _spacing_changes(primary, current_block_data)
        else:
            change = _single_change(primary, current_block_data)
            changes = [change] if change else []

        if not changes:
            return PropertyAgentResult(
                success=False, message=NOT_APPLIED_MESSAGE, confidence=primary.confidence
            )

        updated = apply_property_changes(current_block_data, changes)

        if store is not None:
            index = store.get_block_index(block_id)
            if index == -1:
                raise KeyError(f"Block with id {block_id} not found in store")
            store.update_block(index, updated)
            logger.info("Property agent updated block %s in store", block_id)

        return PropertyAgentResult(
            success=True,
            changes=changes,
            message=build_success_message(changes, primary),
            confidence=primary.confidence,
            updated_block_data=updated,
        )
    except Exception:
        logger.exception("Property agent failed for block %s", block_id)
        return PropertyAgentResult(success=False, message=PROPERTY_ERROR_MESSAGE, confidence=0)
