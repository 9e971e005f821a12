from __future__ import annotations

"""
Integration tests for the SQLite-backed local cache.

Verifies key/value persistence across instances, tree helpers and the
handling of corrupted workspace entries.
"""

from pathlib import Path

from codecraft_vfs.domain.constants import LOCAL_CACHE_KEY
from codecraft_vfs.domain.tree_models import DirectoryNode, FileNode
from codecraft_vfs.infra.local_cache import LocalCache


def test_set_get_overwrite(local_cache: LocalCache) -> None:
    assert local_cache.get_item("k") is None
    assert local_cache.set_item("k", "v1") is True
    assert local_cache.set_item("k", "v2") is True
    assert local_cache.get_item("k") == "v2"
    assert local_cache.get_item("other") is None


def test_values_survive_new_instance(tmp_path: Path) -> None:
    db = str(tmp_path / "cache.db")
    LocalCache(db).save_tree(DirectoryNode({"a.txt": FileNode("ñandú")}))

    reopened = LocalCache(db)
    assert reopened.load_tree() == DirectoryNode({"a.txt": FileNode("ñandú")})


def test_tree_stored_under_workspace_key(local_cache: LocalCache) -> None:
    local_cache.save_tree(DirectoryNode())
    assert local_cache.get_item(LOCAL_CACHE_KEY) == '{"type": "directory", "children": {}}'


def test_corrupted_entry_reads_as_missing(local_cache: LocalCache) -> None:
    local_cache.set_item(LOCAL_CACHE_KEY, "{broken")
    assert local_cache.load_tree() is None

    local_cache.set_item(LOCAL_CACHE_KEY, '{"type": "file", "content": "x"}')
    assert local_cache.load_tree() is None


def test_default_location_is_user_data_dir(tmp_path: Path) -> None:
    cache = LocalCache()
    assert cache.db_path == str(tmp_path / "data" / LocalCache.DB_FILENAME)


def test_unwritable_location_disables_cache(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    cache = LocalCache(str(blocker / "nested" / "cache.db"))

    assert cache.set_item("k", "v") is False
    assert cache.get_item("k") is None
    assert cache.save_tree(DirectoryNode()) is False
