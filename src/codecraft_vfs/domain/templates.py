from __future__ import annotations

"""
Project Templates.

Built-in starter projects that can be scaffolded into a workspace, plus
the helpers that turn a flat `path -> content` mapping into a tree.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from codecraft_vfs.domain.constants import DEFAULT_FILE_SYSTEM
from codecraft_vfs.domain.tree_models import (
    PATH_SEPARATOR,
    DirectoryNode,
    FileNode,
    Node,
    Tree,
    tree_from_dict,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectTemplate:
    """
    Static description of a starter project.

    Attributes:
        id: Stable identifier used on the command line.
        name: Human readable title.
        description: One-line summary of the stack.
        files: Mapping of absolute workspace path to file content.
    """
    id: str
    name: str
    description: str
    files: Dict[str, str] = field(default_factory=dict)


# -----------------------------------------------------------------------------
# TEMPLATE REGISTRY
# -----------------------------------------------------------------------------

_REACT_VITE_FILES: Dict[str, str] = {
    "/index.html": """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>React + Vite</title>
  </head>
  <body>
    <div id="root"></div>
    <script type="module" src="/src/main.jsx"></script>
  </body>
</html>""",
    "/package.json": """{
  "name": "react-vite-starter",
  "private": true,
  "version": "0.0.0",
  "type": "module",
  "scripts": {
    "dev": "vite",
    "build": "vite build",
    "preview": "vite preview"
  },
  "dependencies": {
    "react": "^18.2.0",
    "react-dom": "^18.2.0"
  },
  "devDependencies": {
    "@vitejs/plugin-react": "^4.0.3",
    "vite": "^4.4.5"
  }
}""",
    "/src/main.jsx": """import React from 'react';
import ReactDOM from 'react-dom/client';
import App from './App.jsx';
import './index.css';

const container = document.getElementById('root');
const root = ReactDOM.createRoot(container);
root.render(
  <React.StrictMode>
    <App />
  </React.StrictMode>
);""",
    "/src/App.jsx": """import React, { useState } from 'react'
import './App.css'

function App() {
  const [count, setCount] = useState(0)

  return (
    <div className="container">
      <h1>Vite + React</h1>
      <div className="card">
        <button onClick={() => setCount((count) => count + 1)}>
          count is {count}
        </button>
        <p>
          Edit <code>src/App.jsx</code> and save to test HMR
        </p>
      </div>
    </div>
  )
}

export default App
""",
    "/src/index.css": """:root {
  font-family: Inter, system-ui, Avenir, Helvetica, Arial, sans-serif;
  line-height: 1.5;
  font-weight: 400;

  color-scheme: light dark;
  color: rgba(255, 255, 255, 0.87);
  background-color: #242424;
}""",
    "/src/App.css": """#root {
  max-width: 1280px;
  margin: 0 auto;
  padding: 2rem;
  text-align: center;
}""",
}

_VANILLA_JS_FILES: Dict[str, str] = {
    "/index.html": """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Vanilla JS App</title>
    <link rel="stylesheet" href="style.css">
</head>
<body>
    <h1>Hello, World!</h1>
    <p>This is a vanilla JavaScript application.</p>
    <button id="myButton">Click Me</button>
    <script src="script.js"></script>
</body>
</html>""",
    "/style.css": """body {
    font-family: sans-serif;
    background-color: #f0f0f0;
    color: #333;
    display: flex;
    flex-direction: column;
    align-items: center;
    justify-content: center;
    height: 100vh;
    margin: 0;
}""",
    "/script.js": """const button = document.getElementById('myButton');
let count = 0;
button.addEventListener('click', () => {
    count++;
    alert('Button clicked ' + count + ' times!');
});""",
}

TEMPLATES: List[ProjectTemplate] = [
    ProjectTemplate(
        id="react-vite",
        name="React + Vite",
        description="A modern React starter with Vite for a fast development experience.",
        files=_REACT_VITE_FILES,
    ),
    ProjectTemplate(
        id="vanilla-js",
        name="Vanilla JS",
        description="A classic plain HTML, CSS, and JavaScript project. No frameworks.",
        files=_VANILLA_JS_FILES,
    ),
]


def get_template(template_id: str) -> Optional[ProjectTemplate]:
    """Look up a built-in template by its identifier."""
    for template in TEMPLATES:
        if template.id == template_id:
            return template
    return None


def default_project_tree() -> Tree:
    """Build the project every new workspace starts from."""
    return tree_from_dict(DEFAULT_FILE_SYSTEM)


# -----------------------------------------------------------------------------
# TREE CONSTRUCTION
# -----------------------------------------------------------------------------

def build_tree_from_template(files: Mapping[str, str]) -> Tree:
    """
    Build a fresh tree from a flat `path -> content` mapping.

    Leading slashes are optional. Missing directories are created on the
    way. An entry that would put a file where a directory already is, or
    a directory where a file already is, is skipped with a warning. A later
    file entry overwrites an earlier one at the same path.

    Args:
        files: Mapping of workspace path to file content.

    Returns:
        Tree: A new root directory holding every valid entry.
    """
    root: Dict[str, Node] = {}
    for path, content in files.items():
        parts = [p for p in path.split(PATH_SEPARATOR) if p]
        if not parts:
            logger.warning(f"Template: Ignoring entry with empty path {path!r}.")
            continue
        if not _insert_file(root, parts, content):
            logger.warning(f"Template: Path conflict at '{path}' between a file and a directory.")
    return _freeze(root)


def _insert_file(level: Dict[str, Node], parts: List[str], content: str) -> bool:
    """Insert a file into a mutable nested dict, creating directory levels."""
    for part in parts[:-1]:
        nxt = level.setdefault(part, {})  # type: ignore[arg-type]
        if not isinstance(nxt, dict):
            return False
        level = nxt
    if isinstance(level.get(parts[-1]), dict):
        return False
    level[parts[-1]] = FileNode(content)
    return True


def _freeze(level: Dict[str, object]) -> DirectoryNode:
    """Convert the mutable nested dict built above into directory nodes."""
    children: Dict[str, Node] = {}
    for name, value in level.items():
        children[name] = _freeze(value) if isinstance(value, dict) else value  # type: ignore[assignment]
    return DirectoryNode(children)
