"""Block intent classification — create, update or replace.

Compares a block's current data against the registry defaults and explains
the decision, so the prompt can tell the model whether to generate fresh
content or edit what the user already has.
"""

from __future__ import annotations

from typing import Any

from models.context import BlockIntentResult
from services.deep_equal import deep_equal, is_present

SECTIONS_TO_CHECK = ("elements", "layout", "background", "content", "style")

CREATE_REASON = "No existing block data provided - creating new block from defaults"
REPLACE_REASON = (
    "Block content is identical to defaults - AI may suggest entirely new "
    "content to improve engagement"
)
FALLBACK_UPDATE_REASON = (
    "Existing block data detected with potential modifications - updating existing content"
)


def analyze_differences(current: dict, default_data: Any) -> list[str]:
    """Names of the top-level sections where *current* departs from the defaults."""
    defaults = default_data if isinstance(default_data, dict) else {}
    differences: list[str] = []

    for section in SECTIONS_TO_CHECK:
        in_current = is_present(current.get(section))
        in_default = is_present(defaults.get(section))
        if in_current and in_default:
            if not deep_equal(current[section], defaults[section]):
                differences.append(section)
        elif in_current:
            differences.append(f"{section} (added)")
        elif in_default:
            differences.append(f"{section} (removed)")

    for key, value in current.items():
        if key in SECTIONS_TO_CHECK or deep_equal(value, defaults.get(key)):
            continue
        if not any(diff.startswith(key) for diff in differences):
            differences.append(key)

    return differences


def classify_block_intent(
    current: Any,
    default_data: Any,
    schema_summary: str = "",
) -> BlockIntentResult:
    """Classify the operation on a block; the first matching rule wins."""
    if should_create_block(current):
        return BlockIntentResult(intent="create", reason=CREATE_REASON)

    if deep_equal(current, default_data):
        return BlockIntentResult(intent="replace", reason=REPLACE_REASON)

    differences = analyze_differences(current, default_data) if isinstance(current, dict) else []
    if differences:
        if len(differences) <= 3:
            diff_list = ", ".join(differences)
        else:
            diff_list = f"{', '.join(differences[:3])} and {len(differences) - 3} more"
        return BlockIntentResult(
            intent="update",
            reason=(
                f"Partial changes detected in existing block data (modified: {diff_list}) "
                "- updating existing content"
            ),
        )

    return BlockIntentResult(intent="update", reason=FALLBACK_UPDATE_REASON)


def should_create_block(current: Any) -> bool:
    return not is_present(current)


def should_replace_block(current: Any, default_data: Any) -> bool:
    return is_present(current) and deep_equal(current, default_data)
