from __future__ import annotations

"""
Workspace Synchronization Pipeline.

Keeps two storage tiers coherent with the in-memory workspace:

1. Local cache: written synchronously on every committed tree, before
   control returns to the editor. This is the durability floor.
2. Remote store: written asynchronously after a quiet interval. Each new
   commit cancels the pending timer and starts a fresh one, so a burst of
   edits collapses into a single upload of the latest tree.

Remote failures never roll back local state; they are reported as a
warning and the next edit's timer is the retry opportunity.
"""

import logging
import threading
from typing import Any, Dict, Optional, Protocol

from codecraft_vfs.core.services.notifications import (
    Notification,
    NotificationSink,
    NotificationType,
    log_notification,
)
from codecraft_vfs.core.services.scheduler import Scheduler, ThreadingScheduler
from codecraft_vfs.domain import constants as const
from codecraft_vfs.domain.config import Identity
from codecraft_vfs.domain.errors import RemoteUnavailableError
from codecraft_vfs.domain.tree_models import Tree, node_to_dict
from codecraft_vfs.infra.local_cache import LocalCache

logger = logging.getLogger(__name__)


class RemoteStore(Protocol):
    """Remote workspace persistence collaborator."""

    def load_workspace(self) -> Optional[Dict[str, Any]]:
        ...

    def save_workspace(self, tree: Dict[str, Any]) -> None:
        ...


class SyncPipeline:
    """
    Persists committed trees locally at once and remotely after a debounce.

    Args:
        local_cache: Durable local key/value cache.
        remote: Remote store client, None when running offline.
        identity: Signed-in user; remote writes happen only when set.
        scheduler: Delayed-task runner for the debounce timer.
        notify: Sink for user-facing notifications.
        debounce_seconds: Quiet interval before a remote write.
    """

    def __init__(
            self,
            local_cache: LocalCache,
            remote: Optional[RemoteStore] = None,
            identity: Optional[Identity] = None,
            scheduler: Optional[Scheduler] = None,
            notify: NotificationSink = log_notification,
            debounce_seconds: float = const.REMOTE_SAVE_DEBOUNCE_SECONDS,
    ) -> None:
        self._local = local_cache
        self._remote = remote
        self._identity = identity
        self._scheduler = scheduler or ThreadingScheduler()
        self._notify = notify
        self._debounce = debounce_seconds

        self._lock = threading.Lock()
        self._latest: Optional[Tree] = None
        self._pending: Any = None

    @property
    def remote_enabled(self) -> bool:
        return self._remote is not None and self._identity is not None

    @property
    def has_pending_write(self) -> bool:
        with self._lock:
            return self._pending is not None

    def persist(self, tree: Tree) -> None:
        """
        Record a committed tree: write it locally now, schedule the upload.

        Args:
            tree: The tree that just became current.
        """
        with self._lock:
            self._latest = tree

        if not self._local.save_tree(tree):
            self._notify(Notification(NotificationType.ERROR, const.MSG_LOCAL_SAVE_FAILED))

        if self.remote_enabled:
            self._schedule_remote_write()

    def flush(self) -> bool:
        """
        Perform a pending remote write immediately.

        Returns:
            bool: False if the write was attempted and failed, True otherwise.
        """
        with self._lock:
            handle, self._pending = self._pending, None
            tree = self._latest
        if handle is None or tree is None:
            return True

        self._scheduler.cancel(handle)
        return self._push(tree)

    def close(self) -> None:
        """Drop any pending remote write without performing it."""
        with self._lock:
            handle, self._pending = self._pending, None
        if handle is not None:
            self._scheduler.cancel(handle)

    # -------------------------------------------------------------------------
    # REMOTE WRITE
    # -------------------------------------------------------------------------

    def _schedule_remote_write(self) -> None:
        with self._lock:
            if self._pending is not None:
                self._scheduler.cancel(self._pending)
            self._pending = self._scheduler.schedule(self._debounce, self._on_timer)
        logger.debug(f"Sync: Remote write scheduled in {self._debounce}s.")

    def _on_timer(self) -> None:
        # The tree is read when the timer fires, never captured at schedule time
        with self._lock:
            self._pending = None
            tree = self._latest
        if tree is not None:
            self._push(tree)

    def _push(self, tree: Tree) -> bool:
        assert self._remote is not None
        try:
            self._remote.save_workspace(node_to_dict(tree))
        except RemoteUnavailableError as e:
            logger.warning(f"Sync: Cloud auto-save failed: {e}")
            self._notify(Notification(
                NotificationType.WARNING,
                const.MSG_AUTOSAVE_FAILED,
                duration=const.SYNC_FAILURE_NOTIFICATION_MS,
            ))
            return False

        logger.info("Sync: Workspace auto-saved to cloud.")
        return True
