from __future__ import annotations

"""
Workspace Store.

Owns the current workspace tree and is the single path through which it
changes. Every operation runs the corresponding mutator against the
current tree and, on success, installs the result with `replace`, which
in turn hands it to the synchronization pipeline.
"""

import logging
import threading
from typing import Callable, Mapping, Optional, Union

from codecraft_vfs.core.services.sync import SyncPipeline
from codecraft_vfs.core.vfs import mutator
from codecraft_vfs.core.vfs.paths import get_node
from codecraft_vfs.domain.errors import WorkspaceError, WorkspaceNotLoadedError
from codecraft_vfs.domain.tree_models import Node, NodeKind, Tree

logger = logging.getLogger(__name__)


class WorkspaceStore:
    """
    Process-wide holder of the workspace tree.

    The tree starts unset, is installed once by the bootstrap loader and
    is afterwards only ever swapped for a new value. Callers receive
    immutable snapshots, never a handle they could edit in place.

    Args:
        pipeline: Synchronization pipeline notified on every replace.
    """

    def __init__(self, pipeline: Optional[SyncPipeline] = None) -> None:
        self._pipeline = pipeline
        self._tree: Optional[Tree] = None
        self._lock = threading.RLock()

    @property
    def is_loaded(self) -> bool:
        return self._tree is not None

    def install(self, tree: Tree) -> None:
        """
        Set the initial tree produced by bootstrap. Allowed exactly once.

        Raises:
            WorkspaceError: If a tree was already installed.
        """
        with self._lock:
            if self._tree is not None:
                raise WorkspaceError("Workspace is already loaded.")
            self._tree = tree
        logger.debug("Store: Initial workspace installed.")

    def snapshot(self) -> Optional[Tree]:
        """Return the current tree, None while bootstrap is still running."""
        return self._tree

    def replace(self, tree: Tree) -> None:
        """
        Install a fully-formed new tree and persist it.

        Raises:
            WorkspaceNotLoadedError: If bootstrap has not installed a tree yet.
        """
        with self._lock:
            if self._tree is None:
                raise WorkspaceNotLoadedError("Workspace is not loaded yet.")
            self._tree = tree
            if self._pipeline is not None:
                self._pipeline.persist(tree)

    # -------------------------------------------------------------------------
    # QUERIES
    # -------------------------------------------------------------------------

    def get_node(self, path: str) -> Optional[Node]:
        return get_node(self._tree, path)

    def read_node(self, path: str) -> Optional[str]:
        tree = self._tree
        return mutator.read(tree, path) if tree is not None else None

    # -------------------------------------------------------------------------
    # MUTATIONS
    # -------------------------------------------------------------------------

    def create_node(self, path: str, kind: Union[NodeKind, str], content: str = "") -> Tree:
        return self._apply(lambda tree: mutator.create(tree, path, kind, content))

    def update_node(self, path: str, content: str) -> Tree:
        return self._apply(lambda tree: mutator.update(tree, path, content))

    def delete_node(self, path: str) -> Tree:
        return self._apply(lambda tree: mutator.delete(tree, path))

    def rename_node(self, path: str, new_name: str) -> Tree:
        return self._apply(lambda tree: mutator.rename(tree, path, new_name))

    def move_node(self, source_path: str, dest_dir_path: str) -> Tree:
        return self._apply(lambda tree: mutator.move(tree, source_path, dest_dir_path))

    def scaffold_project(self, files: Mapping[str, str]) -> Tree:
        return self._apply(lambda tree: mutator.scaffold(tree, files))

    def replace_fs(self, tree: Tree) -> Tree:
        self.replace(tree)
        return tree

    def _apply(self, operation: Callable[[Tree], Tree]) -> Tree:
        """Run a mutator against the current tree and commit its result."""
        with self._lock:
            if self._tree is None:
                raise WorkspaceNotLoadedError("Workspace is not loaded yet.")
            new_tree = operation(self._tree)
            self.replace(new_tree)
            return new_tree
