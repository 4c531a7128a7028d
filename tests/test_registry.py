"""Tests for blocks/registry.py — block and element lookups."""

import pytest

from blocks.registry import (
    BLOCK_REGISTRY,
    BlockKind,
    ElementKind,
    get_block_entry,
    get_block_types,
    get_element_entry,
    get_element_types,
    get_registry_description,
    resolve_block,
    resolve_element,
    validate_block_type,
)
from errors.exceptions import BlockNotFoundError
from tools.indy_functions import get_function_names, to_tool_definitions


def test_block_types():
    assert get_block_types() == ["hero", "grid"]


def test_validate_block_type():
    assert validate_block_type("hero") is BlockKind.HERO
    assert validate_block_type(BlockKind.GRID) is BlockKind.GRID
    assert validate_block_type("Hero") is None
    assert validate_block_type(None) is None
    assert validate_block_type(42) is None


def test_lookup_and_resolve():
    assert get_block_entry("grid").component == "GridBlock"
    assert get_block_entry("footer") is None
    assert resolve_block("hero").name == "Hero Section"
    with pytest.raises(BlockNotFoundError, match="footer"):
        resolve_block("footer")


def test_defaults_are_fresh_copies():
    entry = resolve_block("hero")
    first = entry.defaults()
    first["background"]["color"] = "red"
    assert entry.defaults()["background"]["color"] == "blue"


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        BLOCK_REGISTRY[BlockKind.HERO] = None  # type: ignore[index]
    with pytest.raises(TypeError):
        resolve_block("hero").default_data["background"] = {}  # type: ignore[index]


def test_elements():
    assert set(get_element_types()) == {e.value for e in ElementKind}
    button = resolve_element("button")
    assert button.defaults()["text"] == "Click me"
    assert button.defaults()["disabled"] is False
    assert get_element_entry("carousel") is None
    with pytest.raises(BlockNotFoundError, match="Element"):
        resolve_element("carousel")


@pytest.mark.parametrize(
    "element_type,prop,expected",
    [
        ("icon", "size", "md"),
        ("textarea", "resize", "vertical"),
        ("card", "border", True),
        ("video", "aspectRatio", "16:9"),
    ],
)
def test_media_and_form_elements(element_type, prop, expected):
    entry = resolve_element(element_type)
    assert entry.defaults()[prop] == expected
    assert entry.metadata["description"]


def test_registry_description_lists_every_block():
    description = get_registry_description()
    assert description.count("\n") == len(BLOCK_REGISTRY) - 1
    assert description.startswith("- hero: Hero Section")


# ── Function catalogue ───────────────────────────────────────


def test_function_catalogue():
    assert get_function_names() == ["updateBlock", "addBlock", "deleteBlock", "savePage"]
    tools = to_tool_definitions()
    assert all(t["type"] == "function" for t in tools)
    update = tools[0]["function"]
    assert update["parameters"]["required"] == ["index", "updates"]
