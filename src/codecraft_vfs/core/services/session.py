from __future__ import annotations

"""
Workspace Session Assembly.

Wires the local cache, remote client, synchronization pipeline, store and
bootstrap loader together from a validated configuration.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from codecraft_vfs.core.services.bootstrap import BootstrapLoader, BootstrapResult
from codecraft_vfs.core.services.notifications import NotificationSink, log_notification
from codecraft_vfs.core.services.scheduler import Scheduler
from codecraft_vfs.core.services.store import WorkspaceStore
from codecraft_vfs.core.services.sync import RemoteStore, SyncPipeline
from codecraft_vfs.domain.config import Identity, identity_from_config
from codecraft_vfs.infra.local_cache import LocalCache
from codecraft_vfs.infra.network import HttpWorkspaceClient

logger = logging.getLogger(__name__)


@dataclass
class WorkspaceSession:
    """Collaborators of one editing session, fully loaded."""
    store: WorkspaceStore
    pipeline: SyncPipeline
    cache: LocalCache
    identity: Optional[Identity]
    bootstrap: BootstrapResult

    def close(self, flush: bool = True) -> bool:
        """
        End the session, optionally pushing a pending remote write first.

        Returns:
            bool: False if the final remote write failed.
        """
        ok = self.pipeline.flush() if flush else True
        self.pipeline.close()
        return ok


def build_remote(config: Dict[str, Any], identity: Optional[Identity]) -> Optional[RemoteStore]:
    """Create the HTTP remote client when a backend and an identity are configured."""
    if identity is None or not config.get("remote_url"):
        return None
    return HttpWorkspaceClient(
        base_url=config["remote_url"],
        api_key=config.get("api_key", ""),
        identity=identity,
        timeout=float(config.get("remote_timeout", 10.0)),
    )


def open_workspace(
        config: Dict[str, Any],
        *,
        offline: bool = False,
        notify: NotificationSink = log_notification,
        scheduler: Optional[Scheduler] = None,
        remote: Optional[RemoteStore] = None,
) -> WorkspaceSession:
    """
    Bootstrap a workspace session from configuration.

    Args:
        config: Validated configuration dictionary.
        offline: Ignore any identity and use only the local cache.
        notify: Sink for user-facing notifications.
        scheduler: Delayed-task runner for the pipeline debounce.
        remote: Explicit remote client; built from config when omitted.

    Returns:
        WorkspaceSession: Session whose store already holds the initial tree.
    """
    identity = None if offline else identity_from_config(config)
    if remote is None:
        remote = build_remote(config, identity)
    if remote is None:
        identity = None

    cache = LocalCache(config.get("cache_path") or None)
    pipeline = SyncPipeline(
        cache,
        remote=remote,
        identity=identity,
        scheduler=scheduler,
        notify=notify,
        debounce_seconds=float(config.get("save_debounce_seconds", 2.0)),
    )
    store = WorkspaceStore(pipeline)
    loader = BootstrapLoader(store, cache, remote=remote, identity=identity, notify=notify)
    result = loader.run()

    logger.debug(f"Session: Opened workspace (cloud sync: {pipeline.remote_enabled}).")
    return WorkspaceSession(store, pipeline, cache, identity, result)
