"""Tests for agents/property_agent.py — local property edits without the LLM."""

import copy

from agents.property_agent import (
    NOT_APPLIED_MESSAGE,
    NOT_UNDERSTOOD_MESSAGE,
    PROPERTY_ERROR_MESSAGE,
    get_property_display_name,
    run_property_agent,
)


def test_full_width(hero_data):
    original = copy.deepcopy(hero_data)
    result = run_property_agent("make this full width", "hero-1", hero_data)

    assert result.success
    assert result.message == "✅ Updated block width to true"
    assert result.updated_block_data["layout"]["blockSettings"]["blockWidth"] is True
    assert len(result.changes) == 1
    assert result.changes[0].old_value is None
    assert hero_data == original


def test_more_padding_changes_only_missing_sides(hero_data):
    result = run_property_agent("add more padding", "hero-1", hero_data)

    assert result.success
    assert result.message == "✅ Increased padding for all sides"
    assert {c.property.rsplit(".", 1)[1] for c in result.changes} == {"left", "right"}
    assert result.updated_block_data["layout"]["contentSettings"]["padding"] == {
        "top": "2xl", "bottom": "2xl", "left": "xl", "right": "xl",
    }


def test_remove_padding(hero_data):
    result = run_property_agent("remove padding", "hero-1", hero_data)
    assert result.success
    assert result.message == "✅ Updated padding for all sides"
    assert set(result.updated_block_data["layout"]["contentSettings"]["padding"].values()) == {"none"}


def test_no_change_needed(hero_data):
    result = run_property_agent("center align", "hero-1", hero_data)
    assert not result.success
    assert result.message == NOT_APPLIED_MESSAGE


def test_not_understood(hero_data):
    result = run_property_agent("tell me a joke", "hero-1", hero_data)
    assert not result.success
    assert result.message == NOT_UNDERSTOOD_MESSAGE
    assert result.confidence == 0


def test_updates_store(store):
    data = store.blocks[0].block_data
    result = run_property_agent("make this full width", "hero-1", data, store)
    assert result.success
    assert store.blocks[0].block_data["layout"]["blockSettings"]["blockWidth"] is True


def test_missing_block_in_store(store, hero_data):
    result = run_property_agent("make this full width", "missing", hero_data, store)
    assert not result.success
    assert result.message == PROPERTY_ERROR_MESSAGE


def test_display_names():
    assert get_property_display_name("layout.contentSettings.textAlignment") == "text alignment"
    assert get_property_display_name("background.color") == "background color"
    assert get_property_display_name("something.custom") == "custom"
