from __future__ import annotations

"""
Tree Renderer and Exporters.

Converts workspace trees into visual ASCII listings and into the mount
format expected by in-browser WebContainer runtimes.
"""

from typing import Any, Dict, List, Optional

from codecraft_vfs.domain.tree_models import DirectoryNode, FileNode, Node

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_tree(tree: DirectoryNode, lines: Optional[List[str]] = None, prefix: str = "") -> List[str]:
    """
    Recursively transform a directory into ASCII lines.

    Uses standard connectors (├──, └──); directory entries carry a
    trailing slash. Entries are sorted by name at every level.

    Args:
        tree: Directory to render.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.

    Returns:
        List[str]: The accumulated lines.
    """
    if lines is None:
        lines = []

    entries = sorted(tree.children.keys())
    total = len(entries)

    for i, entry in enumerate(entries):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        node = tree.children[entry]

        if isinstance(node, DirectoryNode):
            lines.append(f"{prefix}{connector}{entry}/")
            render_tree(node, lines, prefix=prefix + ("    " if is_last else "│   "))
            continue

        lines.append(f"{prefix}{connector}{entry}")

    return lines


def list_directory(tree: DirectoryNode) -> List[str]:
    """Return the sorted entry names of a directory, directories with a slash."""
    names = []
    for name in sorted(tree.children):
        child = tree.children[name]
        names.append(f"{name}/" if isinstance(child, DirectoryNode) else name)
    return names


def to_webcontainer(node: Node) -> Dict[str, Any]:
    """
    Convert a node into the WebContainer mount format.

    Files become `{"file": {"contents": ...}}` and directories
    `{"directory": {name: ...}}`. Mount the `directory` value of the
    root to reproduce the workspace.
    """
    if isinstance(node, FileNode):
        return {"file": {"contents": node.content}}
    return {"directory": {name: to_webcontainer(child) for name, child in node.children.items()}}
