from __future__ import annotations

"""
Workspace Tree Data Models.

Provides the closed node variant (File / Directory) that makes up the
in-memory workspace, together with the conversion helpers used to move a
tree in and out of its serialized, JSON-compatible shape.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Union

from codecraft_vfs.domain.errors import TreeFormatError

PATH_SEPARATOR = "/"


class NodeKind(str, Enum):
    """Discriminator of the node variant, as written in serialized trees."""
    FILE = "file"
    DIRECTORY = "directory"


# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FileNode:
    """
    Represents a leaf entry (file) in the workspace tree.

    Attributes:
        content: Opaque text payload of the file.
    """
    content: str = ""

    @property
    def kind(self) -> NodeKind:
        return NodeKind.FILE


@dataclass(frozen=True, eq=False)
class DirectoryNode:
    """
    Represents a directory entry holding uniquely-named children.

    The children mapping is wrapped in a read-only proxy on construction;
    structural changes always go through `with_child` / `without_child`,
    which hand back a new directory and leave this one untouched.

    Attributes:
        children: Mapping from entry name to child node.
    """
    children: Mapping[str, "Node"] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "children", MappingProxyType(dict(self.children)))

    @property
    def kind(self) -> NodeKind:
        return NodeKind.DIRECTORY

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DirectoryNode):
            return NotImplemented
        return dict(self.children) == dict(other.children)

    def with_child(self, name: str, node: "Node") -> "DirectoryNode":
        """Return a copy of this directory with `name` bound to `node`."""
        children = dict(self.children)
        children[name] = node
        return DirectoryNode(children)

    def without_child(self, name: str) -> "DirectoryNode":
        """Return a copy of this directory with the `name` entry removed."""
        children = dict(self.children)
        children.pop(name, None)
        return DirectoryNode(children)


Node = Union[FileNode, DirectoryNode]
Tree = DirectoryNode


def is_valid_name(name: Any) -> bool:
    """Check that a name can be used as a directory key."""
    return isinstance(name, str) and bool(name) and PATH_SEPARATOR not in name


# -----------------------------------------------------------------------------
# SERIALIZATION
# -----------------------------------------------------------------------------

def node_to_dict(node: Node) -> Dict[str, Any]:
    """
    Convert a node into its serialized shape.

    Files become `{"type": "file", "content": ...}` and directories
    `{"type": "directory", "children": {...}}`.
    """
    if isinstance(node, FileNode):
        return {"type": NodeKind.FILE.value, "content": node.content}
    return {
        "type": NodeKind.DIRECTORY.value,
        "children": {name: node_to_dict(child) for name, child in node.children.items()},
    }


def node_from_dict(data: Any, path: str = "/") -> Node:
    """
    Build a node from its serialized shape, validating it along the way.

    Args:
        data: Mapping produced by `node_to_dict` (or parsed JSON).
        path: Location of `data` inside the tree, used in error messages.

    Returns:
        Node: The reconstructed node.

    Raises:
        TreeFormatError: If the structure is not a valid serialized node.
    """
    if not isinstance(data, dict):
        raise TreeFormatError(f"Expected an object at '{path}'", path=path)

    node_type = data.get("type")
    if node_type == NodeKind.FILE.value:
        content = data.get("content", "")
        if not isinstance(content, str):
            raise TreeFormatError(f"File content at '{path}' is not text", path=path)
        return FileNode(content)

    if node_type == NodeKind.DIRECTORY.value:
        raw_children = data.get("children", {})
        if not isinstance(raw_children, dict):
            raise TreeFormatError(f"Children at '{path}' is not an object", path=path)
        children: Dict[str, Node] = {}
        for name, child in raw_children.items():
            if not is_valid_name(name):
                raise TreeFormatError(f"Invalid entry name {name!r} under '{path}'", path=path)
            child_path = f"{path.rstrip(PATH_SEPARATOR)}/{name}"
            children[name] = node_from_dict(child, child_path)
        return DirectoryNode(children)

    raise TreeFormatError(f"Unknown node type {node_type!r} at '{path}'", path=path)


def tree_from_dict(data: Any) -> Tree:
    """Build a workspace tree, requiring the root to be a directory."""
    node = node_from_dict(data)
    if not isinstance(node, DirectoryNode):
        raise TreeFormatError("Workspace root must be a directory", path="/")
    return node
