from __future__ import annotations

"""
Workspace Bootstrap Loader.

Decides the initial tree of a session by reconciling the remote store,
the local cache and the built-in default project:

    Start -> RemoteCheck      (identity present)
    Start -> LocalFallback    (signed out)
    RemoteCheck: remote tree       -> adopt + mirror locally      -> Ready
                 no remote tree    -> local/default, push to cloud -> Ready
                 remote failure    -> notify, local/default        -> Ready (degraded)
    LocalFallback: local/default                                   -> Ready

The loader runs once; Ready installs the tree into the store.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from codecraft_vfs.core.services.notifications import (
    Notification,
    NotificationSink,
    NotificationType,
    log_notification,
)
from codecraft_vfs.core.services.store import WorkspaceStore
from codecraft_vfs.core.services.sync import RemoteStore
from codecraft_vfs.domain import constants as const
from codecraft_vfs.domain.config import Identity
from codecraft_vfs.domain.errors import RemoteUnavailableError, TreeFormatError, WorkspaceError
from codecraft_vfs.domain.templates import default_project_tree
from codecraft_vfs.domain.tree_models import Tree, node_to_dict, tree_from_dict
from codecraft_vfs.infra.local_cache import LocalCache

logger = logging.getLogger(__name__)


class BootstrapState(str, Enum):
    START = "start"
    REMOTE_CHECK = "remote_check"
    LOCAL_FALLBACK = "local_fallback"
    READY = "ready"
    FAILED = "failed"


class TreeSource(str, Enum):
    REMOTE = "remote"
    LOCAL = "local"
    DEFAULT = "default"


@dataclass(frozen=True)
class BootstrapResult:
    """
    Outcome of a bootstrap run.

    Attributes:
        tree: The tree installed into the store.
        source: Where the tree came from.
        degraded: True when the remote store was expected but failed.
    """
    tree: Tree
    source: TreeSource
    degraded: bool = False


class BootstrapLoader:
    """
    One-shot state machine that produces and installs the initial tree.

    Args:
        store: Store receiving the resulting tree.
        local_cache: Durable local cache.
        remote: Remote store client, None when running offline.
        identity: Signed-in user, None when signed out.
        notify: Sink for user-facing notifications.
        default_factory: Builder of the built-in default project.
    """

    def __init__(
            self,
            store: WorkspaceStore,
            local_cache: LocalCache,
            remote: Optional[RemoteStore] = None,
            identity: Optional[Identity] = None,
            notify: NotificationSink = log_notification,
            default_factory: Callable[[], Tree] = default_project_tree,
    ) -> None:
        self._store = store
        self._local = local_cache
        self._remote = remote
        self._identity = identity
        self._notify = notify
        self._default_factory = default_factory
        self._state = BootstrapState.START

    @property
    def state(self) -> BootstrapState:
        return self._state

    def run(self) -> BootstrapResult:
        """
        Execute the state machine and install the tree into the store.

        Raises:
            WorkspaceError: If the loader already ran or the store refused
                the tree (state becomes Failed).
        """
        if self._state is not BootstrapState.START:
            raise WorkspaceError(f"Bootstrap already ran (state: {self._state.value}).")

        self._info(const.MSG_INITIALIZING)

        if self._identity is not None and self._remote is not None:
            self._state = BootstrapState.REMOTE_CHECK
            result = self._remote_check(self._remote)
        else:
            self._state = BootstrapState.LOCAL_FALLBACK
            tree, source = self._local_or_default()
            result = BootstrapResult(tree, source)
            self._emit(NotificationType.SUCCESS, const.MSG_LOADED_FROM_LOCAL)

        try:
            self._store.install(result.tree)
        except WorkspaceError:
            self._state = BootstrapState.FAILED
            raise

        self._state = BootstrapState.READY
        logger.info(f"Bootstrap: Workspace ready (source: {result.source.value}, "
                    f"degraded: {result.degraded}).")
        return result

    # -------------------------------------------------------------------------
    # STATES
    # -------------------------------------------------------------------------

    def _remote_check(self, remote: RemoteStore) -> BootstrapResult:
        self._info(const.MSG_SYNCING_FROM_CLOUD)
        try:
            remote_workspace = remote.load_workspace()
            if remote_workspace is not None:
                tree = tree_from_dict(remote_workspace.get("content"))
                self._local.save_tree(tree)
                self._emit(NotificationType.SUCCESS, const.MSG_SYNCED_FROM_CLOUD)
                return BootstrapResult(tree, TreeSource.REMOTE)

            self._info(const.MSG_NO_CLOUD_WORKSPACE)
            tree, source = self._local_or_default()
            remote.save_workspace(node_to_dict(tree))
            self._emit(NotificationType.SUCCESS, const.MSG_PUSHED_TO_CLOUD)
            return BootstrapResult(tree, source)

        except (RemoteUnavailableError, TreeFormatError) as e:
            logger.warning(f"Bootstrap: Remote check failed: {e}")
            self._emit(NotificationType.ERROR, const.MSG_CLOUD_SYNC_FAILED.format(error=e))
            tree, source = self._local_or_default()
            return BootstrapResult(tree, source, degraded=True)

    def _local_or_default(self) -> Tuple[Tree, TreeSource]:
        cached = self._local.load_tree()
        if cached is not None:
            return cached, TreeSource.LOCAL
        return self._default_factory(), TreeSource.DEFAULT

    def _info(self, message: str) -> None:
        self._emit(NotificationType.INFO, message)

    def _emit(self, kind: NotificationType, message: str) -> None:
        self._notify(Notification(kind, message))
