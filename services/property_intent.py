"""Property intent classification — map phrases like "make this full width"
or "add more padding" to concrete block-data property changes.

Each rule pairs a set of regexes with the :class:`PropertyIntent` it implies.
Matching is cheap and local, so the Indy fast path can skip the LLM entirely
when the request is a plain property tweak.
"""

from __future__ import annotations

import re
from typing import Any

from blocks.schema_builders import SPACING_SCALE
from models.property_intent import PropertyIntent, PropertyModifier

BASE_CONFIDENCE = 0.8
MAX_CONFIDENCE = 0.95
PROPERTY_INTENT_THRESHOLD = 0.6

_MODIFIER_STEPS = {"slight": 1, "moderate": 2, "significant": 3}


def _rule(patterns: list[str], **intent: Any) -> tuple[list[re.Pattern], dict[str, Any]]:
    return [re.compile(p, re.IGNORECASE) for p in patterns], intent


LAYOUT_RULES = [
    _rule(
        [r"full.?width", r"edge.?to.?edge", r"stretch.?across", r"no.?max.?width",
         r"remove.?width.?limit", r"expand.?width"],
        type="layout", action="set", property="layout.blockSettings.blockWidth", value=True,
    ),
    _rule(
        [r"narrow.?width", r"constrain.?width", r"contained.?width", r"normal.?width",
         r"limit.?width"],
        type="layout", action="set", property="layout.blockSettings.blockWidth", value=False,
    ),
    _rule(
        [r"content.?width.?narrow", r"narrow.?content", r"tight.?content"],
        type="layout", action="set", property="layout.contentSettings.contentWidth", value="narrow",
    ),
    _rule(
        [r"content.?width.?wide", r"wide.?content", r"broader.?content"],
        type="layout", action="set", property="layout.contentSettings.contentWidth", value="wide",
    ),
    _rule(
        [r"content.?width.?full", r"full.?content", r"content.?edge.?to.?edge"],
        type="layout", action="set", property="layout.contentSettings.contentWidth", value="full",
    ),
    _rule(
        [r"full.?height", r"screen.?height", r"viewport.?height", r"tall.?section"],
        type="layout", action="set", property="layout.blockSettings.height", value="screen",
    ),
    _rule(
        [r"half.?height", r"medium.?height", r"shorter.?section"],
        type="layout", action="set", property="layout.blockSettings.height", value="half",
    ),
    _rule(
        [r"quarter.?height", r"short.?section", r"compact.?height"],
        type="layout", action="set", property="layout.blockSettings.height", value="quarter",
    ),
    _rule(
        [r"auto.?height", r"content.?height", r"natural.?height"],
        type="layout", action="set", property="layout.blockSettings.height", value="auto",
    ),
]

SPACING_RULES = [
    _rule(
        [r"more.?padding", r"increase.?padding", r"add.?padding", r"bigger.?padding"],
        type="spacing", action="increase", property="layout.contentSettings.padding",
    ),
    _rule(
        [r"less.?padding", r"reduce.?padding", r"decrease.?padding", r"smaller.?padding"],
        type="spacing", action="decrease", property="layout.contentSettings.padding",
    ),
    _rule(
        [r"no.?padding", r"remove.?padding", r"zero.?padding"],
        type="spacing", action="set", property="layout.contentSettings.padding", value="none",
    ),
    _rule(
        [r"more.?margin", r"increase.?margin", r"add.?margin", r"more.?space.?above",
         r"more.?space.?below"],
        type="spacing", action="increase", property="layout.blockSettings.margin",
    ),
    _rule(
        [r"less.?margin", r"reduce.?margin", r"decrease.?margin", r"less.?space"],
        type="spacing", action="decrease", property="layout.blockSettings.margin",
    ),
    _rule(
        [r"no.?margin", r"remove.?margin", r"zero.?margin", r"no.?space"],
        type="spacing", action="set", property="layout.blockSettings.margin", value="none",
    ),
]

ALIGNMENT_RULES = [
    _rule(
        [r"center.?align", r"align.?center", r"centered.?text", r"center.?content"],
        type="alignment", action="set", property="layout.contentSettings.textAlignment", value="center",
    ),
    _rule(
        [r"left.?align", r"align.?left", r"left.?text"],
        type="alignment", action="set", property="layout.contentSettings.textAlignment", value="left",
    ),
    _rule(
        [r"right.?align", r"align.?right", r"right.?text"],
        type="alignment", action="set", property="layout.contentSettings.textAlignment", value="right",
    ),
]

BACKGROUND_RULES = [
    _rule(
        [r"blue.?background", r"make.?blue", r"color.?blue"],
        type="background", action="set", property="background.color", value="blue",
    ),
    _rule(
        [r"red.?background", r"make.?red", r"color.?red"],
        type="background", action="set", property="background.color", value="red",
    ),
    _rule(
        [r"green.?background", r"make.?green", r"color.?green"],
        type="background", action="set", property="background.color", value="green",
    ),
    _rule(
        [r"gradient.?background", r"make.?gradient", r"add.?gradient", r"sunset.?gradient"],
        type="background", action="set", property="background.gradient", value="sunset",
    ),
]

ALL_RULES = [*LAYOUT_RULES, *SPACING_RULES, *ALIGNMENT_RULES, *BACKGROUND_RULES]

_SIGNIFICANT = re.compile(r"much|lot|way|significantly|dramatically|massive", re.IGNORECASE)
_SLIGHT = re.compile(r"little|bit|slightly|small|minor", re.IGNORECASE)


def extract_modifier(text: str) -> PropertyModifier:
    if _SIGNIFICANT.search(text):
        return "significant"
    if _SLIGHT.search(text):
        return "slight"
    return "moderate"


def classify_property_intent(user_input: str) -> list[PropertyIntent]:
    """All property intents in *user_input*, highest confidence first.

    Duplicates (same property and action) keep their first match.
    """
    text = user_input.lower()
    intents: list[PropertyIntent] = []
    seen: set[tuple[str, str]] = set()

    for patterns, template in ALL_RULES:
        for regex in patterns:
            match = regex.search(text)
            if not match:
                continue
            confidence = BASE_CONFIDENCE
            if len(match.group(0)) > 8:
                confidence = min(MAX_CONFIDENCE, confidence + 0.1)
            key = (template["property"], template["action"])
            if key in seen:
                continue
            seen.add(key)
            modifier = (
                extract_modifier(text) if template["action"] in ("increase", "decrease") else None
            )
            intents.append(PropertyIntent(**template, modifier=modifier, confidence=confidence))

    intents.sort(key=lambda intent: intent.confidence, reverse=True)
    return intents


def _shift_spacing(current_value: Any, modifier: PropertyModifier | None, direction: int) -> str:
    current = current_value if isinstance(current_value, str) else "md"
    index = SPACING_SCALE.index(current) if current in SPACING_SCALE else -1
    step = _MODIFIER_STEPS[modifier or "moderate"]
    new_index = min(len(SPACING_SCALE) - 1, max(0, index + direction * step))
    return SPACING_SCALE[new_index]


def convert_intent_to_property_update(intent: PropertyIntent, current_value: Any) -> Any:
    if intent.action == "toggle":
        return not current_value
    if intent.action == "increase":
        return _shift_spacing(current_value, intent.modifier, 1)
    if intent.action == "decrease":
        return _shift_spacing(current_value, intent.modifier, -1)
    if intent.action == "reset":
        return None
    return intent.value


def is_property_intent(user_input: str) -> bool:
    intents = classify_property_intent(user_input)
    return bool(intents) and intents[0].confidence > PROPERTY_INTENT_THRESHOLD
