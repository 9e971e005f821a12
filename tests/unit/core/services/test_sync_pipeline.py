from __future__ import annotations

"""
Unit tests for the Synchronization Pipeline.

Verifies:
1. Local cache writes are synchronous and happen on every commit.
2. Remote writes are debounced: a burst produces a single upload of the
   latest tree.
3. Remote failures are reported without rolling back local state.
"""

from codecraft_vfs.core.services.notifications import NotificationType
from codecraft_vfs.core.services.sync import SyncPipeline
from codecraft_vfs.core.vfs import mutator
from codecraft_vfs.domain import constants as const
from codecraft_vfs.domain.config import Identity
from codecraft_vfs.domain.tree_models import DirectoryNode, FileNode, node_to_dict

IDENTITY = Identity(user_id="user-1", access_token="token")


def _pipeline(local_cache, remote, scheduler, sink, identity=IDENTITY):
    return SyncPipeline(local_cache, remote=remote, identity=identity,
                        scheduler=scheduler, notify=sink)


def test_local_write_is_immediate(local_cache, remote, scheduler, sink) -> None:
    pipeline = _pipeline(local_cache, remote, scheduler, sink)
    tree = DirectoryNode({"a.txt": FileNode("1")})

    pipeline.persist(tree)

    assert local_cache.load_tree() == tree
    assert remote.saves == []
    assert pipeline.has_pending_write


def test_burst_of_edits_collapses_into_one_remote_write(local_cache, remote, scheduler, sink) -> None:
    pipeline = _pipeline(local_cache, remote, scheduler, sink)
    tree = DirectoryNode()
    for i in range(5):
        tree = mutator.create(tree, f"/file{i}.txt", "file", str(i))
        pipeline.persist(tree)

    assert len(scheduler.tasks) == 1
    assert len(scheduler.cancelled) == 4
    assert scheduler.delays == [const.REMOTE_SAVE_DEBOUNCE_SECONDS] * 5

    scheduler.fire_all()

    assert remote.saves == [node_to_dict(tree)]
    assert not pipeline.has_pending_write


def test_timer_uploads_latest_tree_at_fire_time(local_cache, remote, scheduler, sink) -> None:
    pipeline = _pipeline(local_cache, remote, scheduler, sink)
    first = DirectoryNode({"a": FileNode("1")})
    second = DirectoryNode({"a": FileNode("2")})

    pipeline.persist(first)
    callback = next(iter(scheduler.tasks.values()))
    pipeline.persist(second)
    # A stale callback that was already running still sends the newest tree
    callback()

    assert remote.saves == [node_to_dict(second)]


def test_remote_failure_notifies_and_keeps_local(local_cache, remote, scheduler, sink) -> None:
    remote.fail_save = True
    pipeline = _pipeline(local_cache, remote, scheduler, sink)
    tree = DirectoryNode({"a": FileNode("x")})

    pipeline.persist(tree)
    scheduler.fire_all()

    assert local_cache.load_tree() == tree
    assert len(sink.notifications) == 1
    note = sink.notifications[0]
    assert note.type is NotificationType.WARNING
    assert note.message == const.MSG_AUTOSAVE_FAILED
    assert note.duration == const.SYNC_FAILURE_NOTIFICATION_MS


def test_next_edit_retries_after_failure(local_cache, remote, scheduler, sink) -> None:
    remote.fail_save = True
    pipeline = _pipeline(local_cache, remote, scheduler, sink)
    pipeline.persist(DirectoryNode({"a": FileNode("1")}))
    scheduler.fire_all()

    remote.fail_save = False
    latest = DirectoryNode({"a": FileNode("2")})
    pipeline.persist(latest)
    scheduler.fire_all()

    assert remote.saves == [node_to_dict(latest)]


def test_signed_out_never_schedules(local_cache, remote, scheduler, sink) -> None:
    pipeline = _pipeline(local_cache, remote, scheduler, sink, identity=None)
    pipeline.persist(DirectoryNode())

    assert not pipeline.remote_enabled
    assert scheduler.tasks == {}
    assert local_cache.load_tree() == DirectoryNode()


def test_no_remote_client_never_schedules(local_cache, scheduler, sink) -> None:
    pipeline = SyncPipeline(local_cache, remote=None, identity=IDENTITY,
                            scheduler=scheduler, notify=sink)
    pipeline.persist(DirectoryNode())
    assert scheduler.tasks == {}


def test_flush_pushes_pending_write_now(local_cache, remote, scheduler, sink) -> None:
    pipeline = _pipeline(local_cache, remote, scheduler, sink)
    tree = DirectoryNode({"a": FileNode("1")})
    pipeline.persist(tree)

    assert pipeline.flush() is True
    assert remote.saves == [node_to_dict(tree)]
    assert scheduler.tasks == {}

    # Nothing pending anymore
    assert pipeline.flush() is True
    assert len(remote.saves) == 1


def test_flush_reports_failure(local_cache, remote, scheduler, sink) -> None:
    remote.fail_save = True
    pipeline = _pipeline(local_cache, remote, scheduler, sink)
    pipeline.persist(DirectoryNode())
    assert pipeline.flush() is False


def test_close_drops_pending_write(local_cache, remote, scheduler, sink) -> None:
    pipeline = _pipeline(local_cache, remote, scheduler, sink)
    pipeline.persist(DirectoryNode())
    pipeline.close()

    assert scheduler.tasks == {}
    assert not pipeline.has_pending_write
    assert remote.saves == []


def test_local_write_failure_is_reported(tmp_path, remote, scheduler, sink) -> None:
    class BrokenCache:
        def save_tree(self, tree):
            return False

    pipeline = SyncPipeline(BrokenCache(), remote=remote, identity=IDENTITY,
                            scheduler=scheduler, notify=sink)
    pipeline.persist(DirectoryNode())

    assert sink.notifications[0].type is NotificationType.ERROR
    assert sink.messages == [const.MSG_LOCAL_SAVE_FAILED]
    # The upload is still scheduled
    assert len(scheduler.tasks) == 1
