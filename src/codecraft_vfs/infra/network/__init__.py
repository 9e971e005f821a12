from __future__ import annotations

"""
Network Communication Infrastructure.

Exposes the remote workspace client used by the synchronization layer.
"""

from codecraft_vfs.infra.network.common import DEFAULT_TIMEOUT, USER_AGENT
from codecraft_vfs.infra.network.workspace_client import HttpWorkspaceClient

__all__ = [
    "HttpWorkspaceClient",
    "DEFAULT_TIMEOUT",
    "USER_AGENT",
]
