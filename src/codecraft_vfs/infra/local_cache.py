from __future__ import annotations

"""
Local Durable Cache.

Provides a thread-safe, SQLite-backed key/value store that plays the role
of the browser's local storage: the workspace tree is written here
synchronously on every committed edit so the last edit survives a reload.
Storage errors are logged and reported through return values rather than
raised, so a broken disk never blocks an interactive edit.
"""

import json
import logging
import os
import sqlite3
import threading
import time
from typing import Optional

from codecraft_vfs.domain.constants import LOCAL_CACHE_KEY
from codecraft_vfs.domain.errors import TreeFormatError
from codecraft_vfs.domain.tree_models import Tree, node_to_dict, tree_from_dict
from codecraft_vfs.infra.fs import get_user_data_dir

logger = logging.getLogger(__name__)


class LocalCache:
    """
    Persistent string key/value storage on top of a local SQLite file.
    """

    DB_FILENAME = "workspace.db"

    def __init__(self, db_path: Optional[str] = None) -> None:
        """
        Initialize the cache and ensure the database schema exists.

        Args:
            db_path: Location of the SQLite file; defaults to the user data dir.
        """
        self._db_path = db_path or os.path.join(get_user_data_dir(), self.DB_FILENAME)
        self._lock = threading.Lock()
        self._enabled = True

        self._init_db()

    @property
    def db_path(self) -> str:
        return self._db_path

    def _init_db(self) -> None:
        """
        Create the storage table if it does not exist.
        """
        try:
            parent = os.path.dirname(os.path.abspath(self._db_path))
            os.makedirs(parent, exist_ok=True)
            with self._lock:
                with sqlite3.connect(self._db_path) as conn:
                    cursor = conn.cursor()
                    cursor.execute("""
                        CREATE TABLE IF NOT EXISTS local_storage (
                            key TEXT PRIMARY KEY,
                            value TEXT,
                            updated_at REAL
                        )
                    """)
                    conn.commit()
            logger.debug(f"LocalCache: Database initialized at {self._db_path}")

        except (sqlite3.Error, OSError) as e:
            logger.warning(f"LocalCache: Failed to initialize database. Cache disabled. Error: {e}")
            self._enabled = False

    def get_item(self, key: str) -> Optional[str]:
        """
        Retrieve the value stored under `key`.

        Returns:
            Optional[str]: The stored string, or None on miss/error.
        """
        if not self._enabled:
            return None

        try:
            with self._lock:
                with sqlite3.connect(self._db_path) as conn:
                    row = conn.execute(
                        "SELECT value FROM local_storage WHERE key = ?", (key,)
                    ).fetchone()
            return str(row[0]) if row else None

        except sqlite3.Error as e:
            logger.warning(f"LocalCache: Read error for key '{key}': {e}")
            return None

    def set_item(self, key: str, value: str) -> bool:
        """
        Store or replace the value under `key`.

        Returns:
            bool: True when the value was committed to disk.
        """
        if not self._enabled:
            return False

        try:
            with self._lock:
                with sqlite3.connect(self._db_path) as conn:
                    conn.execute(
                        "INSERT OR REPLACE INTO local_storage (key, value, updated_at) "
                        "VALUES (?, ?, ?)",
                        (key, value, time.time()),
                    )
                    conn.commit()
            return True

        except sqlite3.Error as e:
            logger.error(f"LocalCache: Write error for key '{key}': {e}")
            return False

    # -------------------------------------------------------------------------
    # WORKSPACE HELPERS
    # -------------------------------------------------------------------------

    def load_tree(self) -> Optional[Tree]:
        """
        Read the cached workspace tree.

        A missing entry and a corrupted one both yield None; corruption is
        logged so the caller can fall back to the default project.
        """
        raw = self.get_item(LOCAL_CACHE_KEY)
        if raw is None:
            return None

        try:
            return tree_from_dict(json.loads(raw))
        except (ValueError, TreeFormatError) as e:
            logger.warning(f"LocalCache: Ignoring corrupted workspace entry: {e}")
            return None

    def save_tree(self, tree: Tree) -> bool:
        """Serialize and store the workspace tree."""
        return self.set_item(LOCAL_CACHE_KEY, json.dumps(node_to_dict(tree), ensure_ascii=False))
