from __future__ import annotations

"""
Unit tests for the Bootstrap Loader state machine.

Covers every transition: signed out, remote hit, remote miss (push),
remote failure (degraded) and install failure.
"""

import pytest

from codecraft_vfs.core.services.bootstrap import BootstrapLoader, BootstrapState, TreeSource
from codecraft_vfs.core.services.notifications import NotificationType
from codecraft_vfs.core.services.store import WorkspaceStore
from codecraft_vfs.domain import constants as const
from codecraft_vfs.domain.config import Identity
from codecraft_vfs.domain.errors import WorkspaceError
from codecraft_vfs.domain.tree_models import DirectoryNode, FileNode, node_to_dict

IDENTITY = Identity(user_id="user-1", access_token="token")


def _loader(store, local_cache, sink, remote=None, identity=None):
    return BootstrapLoader(store, local_cache, remote=remote, identity=identity, notify=sink)


def test_signed_out_with_empty_cache_uses_default_project(local_cache, sink) -> None:
    store = WorkspaceStore()
    loader = _loader(store, local_cache, sink)
    assert loader.state is BootstrapState.START

    result = loader.run()

    assert loader.state is BootstrapState.READY
    assert result.source is TreeSource.DEFAULT
    assert not result.degraded
    tree = store.snapshot()
    assert set(tree.children) == {"README.md", "index.html", "src"}
    assert set(tree.children["src"].children) == {"App.jsx"}
    assert sink.messages == [const.MSG_INITIALIZING, const.MSG_LOADED_FROM_LOCAL]


def test_signed_out_prefers_local_cache(local_cache, remote, sink) -> None:
    cached = DirectoryNode({"mine.txt": FileNode("local")})
    local_cache.save_tree(cached)
    remote.workspace = node_to_dict(DirectoryNode({"cloud.txt": FileNode()}))

    store = WorkspaceStore()
    result = _loader(store, local_cache, sink, remote=remote, identity=None).run()

    assert result.source is TreeSource.LOCAL
    assert store.snapshot() == cached
    assert remote.saves == []


def test_remote_tree_is_adopted_and_mirrored(local_cache, remote, sink) -> None:
    cloud = DirectoryNode({"cloud.txt": FileNode("from cloud")})
    remote.workspace = node_to_dict(cloud)
    local_cache.save_tree(DirectoryNode({"stale.txt": FileNode()}))

    store = WorkspaceStore()
    result = _loader(store, local_cache, sink, remote=remote, identity=IDENTITY).run()

    assert result.source is TreeSource.REMOTE
    assert store.snapshot() == cloud
    assert local_cache.load_tree() == cloud
    assert const.MSG_SYNCED_FROM_CLOUD in sink.messages


def test_missing_remote_workspace_is_created_from_local(local_cache, remote, sink) -> None:
    cached = DirectoryNode({"mine.txt": FileNode("local")})
    local_cache.save_tree(cached)

    store = WorkspaceStore()
    result = _loader(store, local_cache, sink, remote=remote, identity=IDENTITY).run()

    assert result.source is TreeSource.LOCAL
    assert remote.saves == [node_to_dict(cached)]
    assert const.MSG_PUSHED_TO_CLOUD in sink.messages


def test_missing_remote_workspace_is_created_from_default(local_cache, remote, sink, default_tree) -> None:
    store = WorkspaceStore()
    result = _loader(store, local_cache, sink, remote=remote, identity=IDENTITY).run()

    assert result.source is TreeSource.DEFAULT
    assert remote.saves == [node_to_dict(default_tree)]


def test_remote_failure_degrades_to_local(local_cache, remote, sink) -> None:
    remote.fail_load = True
    cached = DirectoryNode({"mine.txt": FileNode("local")})
    local_cache.save_tree(cached)

    store = WorkspaceStore()
    loader = _loader(store, local_cache, sink, remote=remote, identity=IDENTITY)
    result = loader.run()

    assert loader.state is BootstrapState.READY
    assert result.degraded
    assert result.source is TreeSource.LOCAL
    assert store.snapshot() == cached
    errors = [n for n in sink.notifications if n.type is NotificationType.ERROR]
    assert len(errors) == 1
    assert "network down" in errors[0].message


def test_malformed_remote_tree_degrades(local_cache, remote, sink) -> None:
    remote.workspace = {"type": "file", "content": "not a root"}

    store = WorkspaceStore()
    result = _loader(store, local_cache, sink, remote=remote, identity=IDENTITY).run()

    assert result.degraded
    assert result.source is TreeSource.DEFAULT


def test_push_failure_after_remote_miss_degrades(local_cache, remote, sink) -> None:
    remote.fail_save = True

    store = WorkspaceStore()
    result = _loader(store, local_cache, sink, remote=remote, identity=IDENTITY).run()

    assert result.degraded
    assert store.is_loaded


def test_run_twice_is_rejected(local_cache, sink) -> None:
    loader = _loader(WorkspaceStore(), local_cache, sink)
    loader.run()
    with pytest.raises(WorkspaceError):
        loader.run()


def test_install_refusal_marks_failed(local_cache, sink) -> None:
    store = WorkspaceStore()
    store.install(DirectoryNode())
    loader = _loader(store, local_cache, sink)

    with pytest.raises(WorkspaceError):
        loader.run()
    assert loader.state is BootstrapState.FAILED


def test_bootstrap_does_not_schedule_remote_write(local_cache, remote, scheduler, sink) -> None:
    from codecraft_vfs.core.services.sync import SyncPipeline

    remote.workspace = node_to_dict(DirectoryNode())
    pipeline = SyncPipeline(local_cache, remote=remote, identity=IDENTITY,
                            scheduler=scheduler, notify=sink)
    store = WorkspaceStore(pipeline)
    _loader(store, local_cache, sink, remote=remote, identity=IDENTITY).run()

    assert scheduler.tasks == {}
    store.create_node("/a.txt", "file")
    assert len(scheduler.tasks) == 1
