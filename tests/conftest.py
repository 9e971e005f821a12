from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Deterministic stand-ins for the scheduler, the notification sink and
   the remote store, so synchronization can be tested without timers
   or network access.
"""

import os
import sys
from typing import Any, Callable, Dict, List, Optional

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from codecraft_vfs.core.services.notifications import Notification  # noqa: E402
from codecraft_vfs.core.services.scheduler import Scheduler  # noqa: E402
from codecraft_vfs.domain.errors import RemoteUnavailableError  # noqa: E402
from codecraft_vfs.domain.templates import default_project_tree  # noqa: E402
from codecraft_vfs.domain.tree_models import Tree  # noqa: E402
from codecraft_vfs.infra.local_cache import LocalCache  # noqa: E402


# -----------------------------------------------------------------------------
# Test Doubles
# -----------------------------------------------------------------------------
class ManualScheduler(Scheduler):
    """Scheduler whose tasks only run when the test fires them."""

    def __init__(self) -> None:
        self.tasks: Dict[int, Callable[[], None]] = {}
        self.delays: List[float] = []
        self.cancelled: List[int] = []
        self._next_id = 0

    def schedule(self, delay: float, fn: Callable[[], None]) -> int:
        self._next_id += 1
        self.tasks[self._next_id] = fn
        self.delays.append(delay)
        return self._next_id

    def cancel(self, handle: int) -> None:
        if self.tasks.pop(handle, None) is not None:
            self.cancelled.append(handle)

    def fire_all(self) -> None:
        tasks = list(self.tasks.values())
        self.tasks.clear()
        for fn in tasks:
            fn()


class RecordingSink:
    """Notification sink that keeps every notification it receives."""

    def __init__(self) -> None:
        self.notifications: List[Notification] = []

    def __call__(self, notification: Notification) -> None:
        self.notifications.append(notification)

    @property
    def messages(self) -> List[str]:
        return [n.message for n in self.notifications]


class FakeRemoteStore:
    """In-memory remote store with switchable failures."""

    def __init__(self, workspace: Optional[Dict[str, Any]] = None) -> None:
        self.workspace = workspace
        self.saves: List[Dict[str, Any]] = []
        self.fail_load = False
        self.fail_save = False

    def load_workspace(self) -> Optional[Dict[str, Any]]:
        if self.fail_load:
            raise RemoteUnavailableError("network down")
        return {"content": self.workspace} if self.workspace is not None else None

    def save_workspace(self, tree: Dict[str, Any]) -> None:
        if self.fail_save:
            raise RemoteUnavailableError("network down")
        self.saves.append(tree)
        self.workspace = tree


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def remote() -> FakeRemoteStore:
    return FakeRemoteStore()


@pytest.fixture
def local_cache(tmp_path: Any) -> LocalCache:
    """Provide a LocalCache backed by a temporary SQLite file."""
    return LocalCache(str(tmp_path / "workspace.db"))


@pytest.fixture
def default_tree() -> Tree:
    return default_project_tree()


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path: Any, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep every test away from the real user data directory and credentials."""
    monkeypatch.setenv("CODECRAFT_DATA_DIR", str(tmp_path / "data"))
    for key in ("CODECRAFT_REMOTE_URL", "CODECRAFT_API_KEY",
                "CODECRAFT_ACCESS_TOKEN", "CODECRAFT_USER_ID"):
        monkeypatch.delenv(key, raising=False)
