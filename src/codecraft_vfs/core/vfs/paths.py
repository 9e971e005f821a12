from __future__ import annotations

"""
Workspace Path Resolver.

Parses slash-delimited paths into name segments and walks a tree to
locate a node together with the directory that holds it. All helpers
here are pure: they never modify the tree they inspect.
"""

from dataclasses import dataclass
from typing import List, Optional

from codecraft_vfs.domain.errors import InvalidParentError, NotFoundError
from codecraft_vfs.domain.tree_models import PATH_SEPARATOR, DirectoryNode, Node, Tree

ROOT_NAME = "/"


@dataclass(frozen=True)
class Resolution:
    """
    Result of locating a path inside a tree.

    Attributes:
        parent: Directory holding the entry, None for the root itself.
        node: The entry at the path, None when the name is free.
        name: Final path segment ("/" for the root).
        parts: Segments of the path leading to the entry.
    """
    parent: Optional[DirectoryNode]
    node: Optional[Node]
    name: str
    parts: List[str]


def split_path(path: str) -> List[str]:
    """Split a path into its non-empty segments."""
    return [p for p in (path or "").split(PATH_SEPARATOR) if p]


def join_path(parts: List[str]) -> str:
    """Render segments back into an absolute path."""
    return PATH_SEPARATOR + PATH_SEPARATOR.join(parts)


def resolve(tree: Tree, path: str) -> Resolution:
    """
    Locate the entry addressed by `path` and its parent directory.

    Leading, trailing and repeated slashes are tolerated. `.` and `..`
    are ordinary names here; see `normalize_relative` for callers that
    need relative semantics.

    Args:
        tree: Root directory of the workspace.
        path: Slash-delimited path from the root.

    Returns:
        Resolution: Parent, possibly-absent node and final name.

    Raises:
        NotFoundError: If an intermediate segment is missing or not walkable.
        InvalidParentError: If the immediate parent of the entry is a file.
    """
    parts = split_path(path)
    if not parts:
        return Resolution(parent=None, node=tree, name=ROOT_NAME, parts=[])

    current: Node = tree
    for index, part in enumerate(parts[:-1]):
        child = current.children.get(part) if isinstance(current, DirectoryNode) else None
        if child is None:
            raise NotFoundError(
                f"Path not found: {join_path(parts[:index + 1])}", path=join_path(parts)
            )
        current = child

    if not isinstance(current, DirectoryNode):
        raise InvalidParentError(
            f"Not a directory: {join_path(parts[:-1])}", path=join_path(parts)
        )

    name = parts[-1]
    return Resolution(parent=current, node=current.children.get(name), name=name, parts=parts)


def get_node(tree: Optional[Tree], path: str) -> Optional[Node]:
    """
    Return the node at `path`, or None when any segment is missing.

    Never raises; walking into a file yields None.
    """
    if tree is None:
        return None
    current: Node = tree
    for part in split_path(path):
        if not isinstance(current, DirectoryNode) or part not in current.children:
            return None
        current = current.children[part]
    return current


def is_same_or_descendant(parts: List[str], ancestor: List[str]) -> bool:
    """Check whether `parts` equals `ancestor` or lies beneath it."""
    return parts[:len(ancestor)] == ancestor


def normalize_relative(base_file: str, ref: str) -> str:
    """
    Resolve a reference found inside a file into an absolute workspace path.

    Absolute references start from the root; relative ones start from the
    directory of `base_file`. `.` segments are dropped and `..` pops the
    previous segment (never above the root).

    Args:
        base_file: Path of the file that contains the reference.
        ref: Reference as written, e.g. "./app.js" or "../lib/x.js".

    Returns:
        str: Normalized absolute path.
    """
    if ref.startswith(PATH_SEPARATOR):
        stack: List[str] = []
    else:
        stack = split_path(base_file)[:-1]

    for segment in split_path(ref):
        if segment == ".":
            continue
        if segment == "..":
            if stack:
                stack.pop()
            continue
        stack.append(segment)
    return join_path(stack)
