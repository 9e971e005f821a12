from __future__ import annotations

"""
Unit tests for the Path Resolver.

Verifies:
1. Segment splitting tolerates extra slashes.
2. Root, present and absent entries resolve to parent/node/name.
3. Missing intermediates and file parents fail with typed errors.
4. Relative reference normalization.
"""

import pytest

from codecraft_vfs.core.vfs.paths import (
    get_node,
    normalize_relative,
    resolve,
    split_path,
)
from codecraft_vfs.domain.errors import InvalidParentError, NotFoundError
from codecraft_vfs.domain.tree_models import DirectoryNode, FileNode


@pytest.fixture
def tree() -> DirectoryNode:
    return DirectoryNode({
        "a.txt": FileNode("A"),
        "src": DirectoryNode({
            "main.js": FileNode("main"),
            "lib": DirectoryNode({"x.js": FileNode("x")}),
        }),
    })


def test_split_path_discards_empty_segments() -> None:
    assert split_path("//src///lib/") == ["src", "lib"]
    assert split_path("") == []
    assert split_path("/") == []


@pytest.mark.parametrize("path", ["", "/", "///"])
def test_resolve_root(tree: DirectoryNode, path: str) -> None:
    res = resolve(tree, path)
    assert res.parent is None
    assert res.node is tree
    assert res.name == "/"


def test_resolve_existing_entry(tree: DirectoryNode) -> None:
    res = resolve(tree, "/src/lib/x.js")
    assert res.parent is tree.children["src"].children["lib"]
    assert res.node == FileNode("x")
    assert res.name == "x.js"
    assert res.parts == ["src", "lib", "x.js"]


def test_resolve_absent_entry_returns_parent(tree: DirectoryNode) -> None:
    res = resolve(tree, "src/new.js")
    assert res.parent is tree.children["src"]
    assert res.node is None
    assert res.name == "new.js"


def test_resolve_missing_intermediate_is_not_found(tree: DirectoryNode) -> None:
    with pytest.raises(NotFoundError):
        resolve(tree, "/nope/file.js")


def test_resolve_file_parent_is_invalid_parent(tree: DirectoryNode) -> None:
    with pytest.raises(InvalidParentError):
        resolve(tree, "/a.txt/child")


def test_resolve_does_not_interpret_dot_segments(tree: DirectoryNode) -> None:
    with pytest.raises(NotFoundError):
        resolve(tree, "/src/../a.txt/x")
    with pytest.raises(NotFoundError):
        resolve(tree, "/src/./x")
    assert get_node(tree, "/src/../a.txt") is None


def test_get_node_never_raises(tree: DirectoryNode) -> None:
    assert get_node(tree, "/") is tree
    assert get_node(tree, "/src/main.js") == FileNode("main")
    assert get_node(tree, "/a.txt/deeper") is None
    assert get_node(tree, "/missing") is None
    assert get_node(None, "/") is None


@pytest.mark.parametrize(
    "base, ref, expected",
    [
        ("/index.html", "src/App.jsx", "/src/App.jsx"),
        ("/index.html", "./script.js", "/script.js"),
        ("/pages/about/index.html", "../../lib/x.js", "/lib/x.js"),
        ("/pages/index.html", "../../../x.js", "/x.js"),
        ("/pages/index.html", "/abs/y.js", "/abs/y.js"),
        ("/pages/index.html", "a/./b/../c.js", "/pages/a/c.js"),
    ],
)
def test_normalize_relative(base: str, ref: str, expected: str) -> None:
    assert normalize_relative(base, ref) == expected
