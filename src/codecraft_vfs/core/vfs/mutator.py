from __future__ import annotations

"""
Workspace Tree Mutator.

Implements the structural operations on the workspace (create, update,
delete, rename, move, scaffold). Trees are immutable values: every
operation validates first and then rebuilds only the directories along
the changed path, handing back a new root. The input tree is never
modified, so a failed operation leaves nothing half-applied.
"""

import logging
from typing import List, Mapping, Optional, Union

from codecraft_vfs.core.vfs.paths import (
    get_node,
    is_same_or_descendant,
    join_path,
    resolve,
    split_path,
)
from codecraft_vfs.domain.errors import (
    ConflictError,
    CycleError,
    InvalidNameError,
    InvalidParentError,
    NotFoundError,
)
from codecraft_vfs.domain.tree_models import (
    DirectoryNode,
    FileNode,
    Node,
    NodeKind,
    Tree,
    is_valid_name,
)

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# QUERIES
# -----------------------------------------------------------------------------

def read(tree: Tree, path: str) -> Optional[str]:
    """Return the content of the file at `path`, None for directories or gaps."""
    node = get_node(tree, path)
    return node.content if isinstance(node, FileNode) else None


# -----------------------------------------------------------------------------
# MUTATIONS
# -----------------------------------------------------------------------------

def create(
        tree: Tree,
        path: str,
        kind: Union[NodeKind, str],
        content: str = "",
) -> Tree:
    """
    Insert a new file or empty directory, creating missing parents.

    Args:
        tree: Current workspace tree.
        path: Location of the new entry.
        kind: NodeKind.FILE or NodeKind.DIRECTORY (or their string values).
        content: Initial text for files; ignored for directories.

    Returns:
        Tree: New tree containing the entry.

    Raises:
        InvalidNameError: If the path addresses the root.
        ConflictError: If a parent segment is a file or the name is taken.
    """
    kind = NodeKind(kind)
    parts = split_path(path)
    if not parts:
        raise InvalidNameError("Cannot create the workspace root.", path=path)

    leaf: Node = FileNode(content) if kind is NodeKind.FILE else DirectoryNode()
    new_tree = _create_in(tree, parts, leaf, parts)
    logger.debug(f"Mutator: Created {kind.value} at {join_path(parts)}")
    return new_tree


def update(tree: Tree, path: str, content: str) -> Tree:
    """
    Replace the content of an existing file.

    Raises:
        NotFoundError: If no file exists at `path` (directories included).
        InvalidParentError: If the parent of the entry is a file.
    """
    res = resolve(tree, path)
    if not isinstance(res.node, FileNode) or res.parent is None:
        raise NotFoundError(f"File not found: {join_path(res.parts)}", path=path)

    new_parent = res.parent.with_child(res.name, FileNode(content))
    logger.debug(f"Mutator: Updated {join_path(res.parts)} ({len(content)} chars)")
    return _replace_dir(tree, res.parts[:-1], new_parent)


def delete(tree: Tree, path: str) -> Tree:
    """
    Remove the entry at `path` together with its whole subtree.

    Raises:
        NotFoundError: If the entry does not exist or is the root.
    """
    res = resolve(tree, path)
    if res.parent is None or res.node is None:
        raise NotFoundError(f"Item not found: {path}", path=path)

    logger.debug(f"Mutator: Deleted {join_path(res.parts)}")
    return _replace_dir(tree, res.parts[:-1], res.parent.without_child(res.name))


def rename(tree: Tree, path: str, new_name: str) -> Tree:
    """
    Give an entry a new name inside the same directory.

    Renaming an entry to its current name returns the tree unchanged.

    Raises:
        InvalidNameError: If `new_name` is empty or contains a separator.
        NotFoundError: If the entry does not exist or is the root.
        ConflictError: If a sibling already uses `new_name`.
    """
    if not is_valid_name(new_name):
        raise InvalidNameError(f"Invalid name: {new_name!r}", path=path)

    res = resolve(tree, path)
    if res.parent is None or res.node is None:
        raise NotFoundError(f"Item not found: {path}", path=path)
    if new_name == res.name:
        return tree
    if new_name in res.parent.children:
        raise ConflictError(f"'{new_name}' already exists.", path=path)

    new_parent = res.parent.without_child(res.name).with_child(new_name, res.node)
    logger.debug(f"Mutator: Renamed {join_path(res.parts)} -> {new_name}")
    return _replace_dir(tree, res.parts[:-1], new_parent)


def move(tree: Tree, source_path: str, dest_dir_path: str) -> Tree:
    """
    Move an entry (with its subtree) into another directory.

    The cycle check runs first and on path segments only, so a destination
    equal to or beneath the source always fails with CycleError, even when
    that destination is not a directory.

    Raises:
        CycleError: If the destination is the source or inside it.
        NotFoundError: If the source or the destination does not exist.
        InvalidParentError: If the destination (or the source's parent) is a file.
        ConflictError: If the destination already holds an entry of that name.
    """
    src_parts = split_path(source_path)
    dst_parts = split_path(dest_dir_path)
    if is_same_or_descendant(dst_parts, src_parts):
        raise CycleError("Cannot move a directory into itself.", path=source_path)

    res = resolve(tree, source_path)
    if res.parent is None or res.node is None:
        raise NotFoundError(f"Source path not found: {source_path}", path=source_path)

    dest = get_node(tree, dest_dir_path)
    if dest is None:
        raise NotFoundError(f"Destination not found: {dest_dir_path}", path=dest_dir_path)
    if not isinstance(dest, DirectoryNode):
        raise InvalidParentError(
            f"Destination is not a directory: {dest_dir_path}", path=dest_dir_path
        )
    if res.name in dest.children:
        raise ConflictError(f"'{res.name}' already exists in destination.", path=dest_dir_path)

    detached = _replace_dir(tree, src_parts[:-1], res.parent.without_child(res.name))
    target = _dir_at(detached, dst_parts)
    logger.debug(f"Mutator: Moved {join_path(src_parts)} -> {join_path(dst_parts)}")
    return _replace_dir(detached, dst_parts, target.with_child(res.name, res.node))


def scaffold(tree: Tree, files: Mapping[str, str]) -> Tree:
    """
    Seed a batch of files, creating only what is missing.

    Existing files are never overwritten and missing directories are
    created on the way, so applying the same mapping twice yields the
    same tree. Entries whose path crosses an existing file are skipped.

    Args:
        tree: Current workspace tree.
        files: Mapping of workspace path to file content.

    Returns:
        Tree: New tree with the missing entries added.
    """
    new_tree = tree
    for path, content in files.items():
        parts = split_path(path)
        if not parts:
            logger.warning(f"Mutator: Scaffold ignored empty path {path!r}.")
            continue
        try:
            new_tree = _seed(new_tree, parts, content)
        except ConflictError as e:
            logger.warning(f"Mutator: Scaffold skipped '{path}': {e}")
    return new_tree


# -----------------------------------------------------------------------------
# PATH COPYING HELPERS
# -----------------------------------------------------------------------------

def _dir_at(tree: Tree, parts: List[str]) -> DirectoryNode:
    """Walk to a directory known to exist."""
    current: Node = tree
    for part in parts:
        current = current.children[part]  # type: ignore[union-attr]
    assert isinstance(current, DirectoryNode)
    return current


def _replace_dir(tree: Tree, parts: List[str], new_dir: DirectoryNode) -> Tree:
    """Swap the directory at `parts` for `new_dir`, rebuilding its ancestors."""
    if not parts:
        return new_dir
    parent = _dir_at(tree, parts[:-1])
    return _replace_dir(tree, parts[:-1], parent.with_child(parts[-1], new_dir))


def _create_in(
        directory: DirectoryNode,
        parts: List[str],
        leaf: Node,
        full: List[str],
) -> DirectoryNode:
    name = parts[0]
    existing = directory.children.get(name)

    if len(parts) == 1:
        if existing is not None:
            raise ConflictError(f"'{name}' already exists.", path=join_path(full))
        return directory.with_child(name, leaf)

    if existing is None:
        existing = DirectoryNode()
    elif not isinstance(existing, DirectoryNode):
        raise ConflictError(f"Path conflict: {name} is a file.", path=join_path(full))
    return directory.with_child(name, _create_in(existing, parts[1:], leaf, full))


def _seed(directory: DirectoryNode, parts: List[str], content: str) -> DirectoryNode:
    name = parts[0]
    existing = directory.children.get(name)

    if len(parts) == 1:
        if existing is not None:
            return directory
        return directory.with_child(name, FileNode(content))

    if existing is None:
        existing = DirectoryNode()
    elif not isinstance(existing, DirectoryNode):
        raise ConflictError(f"Path conflict: {name} is a file.", path=join_path(parts))

    seeded = _seed(existing, parts[1:], content)
    if seeded is existing and name in directory.children:
        return directory
    return directory.with_child(name, seeded)
