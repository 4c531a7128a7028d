"""Tests for services/block_store.py — the page block list and session registry."""

import time

import pytest

from errors.exceptions import InvalidBlockIndexError
from services.block_store import BlockStore, BlockStoreRegistry, generate_block_id


# ── BlockStore CRUD ──────────────────────────────────────────


class TestBlockStore:
    def test_add_block_positions(self, store):
        assert len(store) == 2
        assert [b.position for b in store.blocks] == [1, 2]
        assert [b.block_type for b in store.blocks] == ["hero", "grid"]

    def test_add_block_copies_data(self):
        data = {"elements": {"title": {"content": "A"}}}
        s = BlockStore()
        s.add_block("hero", data)
        data["elements"]["title"]["content"] = "B"
        assert s.blocks[0].block_data["elements"]["title"]["content"] == "A"

    def test_add_block_generates_id(self):
        s = BlockStore()
        block_id = s.add_block("hero", None)
        assert block_id and s.blocks[0].id == block_id
        assert s.blocks[0].block_data == {}

    def test_update_block(self, store):
        store.update_block(0, {"background": {"color": "red"}})
        assert store.blocks[0].block_data == {"background": {"color": "red"}}
        assert store.blocks[0].id == "hero-1"

    def test_update_block_out_of_range(self, store):
        with pytest.raises(InvalidBlockIndexError):
            store.update_block(5, {})
        with pytest.raises(InvalidBlockIndexError):
            store.update_block(-1, {})

    def test_delete_block_renumbers(self, store):
        store.add_block("hero", {}, block_id="hero-2")
        removed = store.delete_block(0)
        assert removed.id == "hero-1"
        assert [b.id for b in store.blocks] == ["grid-1", "hero-2"]
        assert [b.position for b in store.blocks] == [1, 2]

    def test_delete_selected_block_clears_selection(self, store):
        store.set_selected_index(0)
        store.delete_block(0)
        assert store.selected_index is None
        assert store.selected_block_id is None

    def test_delete_before_selection_shifts_index(self, store):
        store.set_selected_index(1)
        store.delete_block(0)
        assert store.selected_index == 0

    def test_reorder_blocks(self, store):
        store.add_block("hero", {}, block_id="hero-2")
        store.set_selected_index(0)
        store.reorder_blocks(0, 2)
        assert [b.id for b in store.blocks] == ["grid-1", "hero-2", "hero-1"]
        assert [b.position for b in store.blocks] == [1, 2, 3]
        assert store.selected_index == 2


# ── Selection and lookups ────────────────────────────────────


class TestSelection:
    def test_select_by_id(self, store):
        store.set_selected_block("grid-1")
        assert store.selected_index == 1
        assert store.selected_block_id == "grid-1"

    def test_select_unknown_id(self, store):
        store.set_selected_block("missing")
        assert store.selected_index is None

    def test_select_by_index(self, store):
        store.set_selected_index(0)
        assert store.selected_block_id == "hero-1"

    def test_lookups_by_id(self, store):
        assert store.get_block_index("grid-1") == 1
        assert store.get_block_index("missing") == -1
        assert store.get_block_by_id("hero-1").block_type == "hero"
        assert store.update_block_by_id("grid-1", {"columns": 4})
        assert store.blocks[1].block_data == {"columns": 4}
        assert not store.update_block_by_id("missing", {})
        assert store.remove_block_by_id("hero-1")
        assert not store.remove_block_by_id("hero-1")
        assert len(store) == 1

    def test_set_blocks_resets_selection(self, store):
        store.set_selected_index(1)
        store.set_blocks([{"id": "x", "blockType": "hero", "blockData": {}, "position": 1}])
        assert len(store) == 1
        assert store.selected_index is None

    def test_clear_blocks(self, store):
        store.clear_blocks()
        assert len(store) == 0

    def test_snapshot_is_independent(self, store):
        snap = store.snapshot()
        snap[0].block_data["elements"] = "changed"
        assert store.blocks[0].block_data["elements"] != "changed"

    def test_to_payload_wire_shape(self, store):
        payload = store.to_payload()
        assert payload[0]["id"] == "hero-1"
        assert payload[0]["blockType"] == "hero"
        assert payload[0]["position"] == 1
        assert "blockData" in payload[0]


def test_generate_block_id_unique():
    assert generate_block_id() != generate_block_id()


# ── BlockStoreRegistry ───────────────────────────────────────


class TestBlockStoreRegistry:
    def test_get_or_create(self):
        registry = BlockStoreRegistry(ttl_seconds=60)
        session = registry.get_or_create("s1")
        assert registry.get_or_create("s1") is session
        assert registry.size == 1

    def test_get_missing(self):
        assert BlockStoreRegistry().get("nope") is None

    def test_expired_session_dropped(self):
        registry = BlockStoreRegistry(ttl_seconds=10)
        session = registry.get_or_create("s1")
        session.updated_at = time.time() - 20
        assert registry.get("s1") is None
        assert registry.size == 0

    def test_cleanup_expired(self):
        registry = BlockStoreRegistry(ttl_seconds=10)
        registry.get_or_create("old").updated_at = time.time() - 20
        registry.get_or_create("fresh")
        assert registry.cleanup_expired() == 1
        assert registry.get("fresh") is not None

    def test_delete(self):
        registry = BlockStoreRegistry()
        registry.get_or_create("s1")
        registry.delete("s1")
        assert registry.size == 0
