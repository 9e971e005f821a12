from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to application-wide constants: storage keys,
synchronization timings, user-facing notification texts and the built-in
project that seeds a brand-new workspace.
"""

from typing import Any, Dict

APP_VERSION = "1.0.0"

# Key under which the serialized tree is kept in the local durable cache
LOCAL_CACHE_KEY = "fileSystem"

# Quiet interval before a burst of edits is pushed to the remote store
REMOTE_SAVE_DEBOUNCE_SECONDS = 2.0

# Display duration for the cloud auto-save failure warning
SYNC_FAILURE_NOTIFICATION_MS = 10000

# -----------------------------------------------------------------------------
# NOTIFICATION MESSAGES
# -----------------------------------------------------------------------------
MSG_INITIALIZING = "Initializing workspace..."
MSG_SYNCING_FROM_CLOUD = "Syncing workspace from cloud..."
MSG_SYNCED_FROM_CLOUD = "Workspace synced from cloud."
MSG_NO_CLOUD_WORKSPACE = "No cloud workspace found. Creating one from local data..."
MSG_PUSHED_TO_CLOUD = "Local workspace pushed to cloud."
MSG_CLOUD_SYNC_FAILED = "Cloud sync failed: {error}. Using local version."
MSG_LOADED_FROM_LOCAL = "Workspace loaded from local storage."
MSG_AUTOSAVE_FAILED = "Cloud auto-save failed. Your work is saved locally."
MSG_LOCAL_SAVE_FAILED = "Could not write the workspace to local storage."

# -----------------------------------------------------------------------------
# DEFAULT PROJECT
# -----------------------------------------------------------------------------
_README = (
    "# Welcome to your React Workspace!\n"
    "\n"
    "This is a simple React starter project running entirely in your browser.\n"
    "\n"
    "- `index.html` is the main entry point.\n"
    "- `src/App.jsx` contains the main React component.\n"
    "- To see your app, open `index.html` and click the \"Run\" button in the editor header.\n"
)

_INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>React App</title>
  <!-- React Libraries -->
  <script src="https://unpkg.com/react@18/umd/react.development.js"></script>
  <script src="https://unpkg.com/react-dom@18/umd/react-dom.development.js"></script>
  <!-- Babel to transpile JSX -->
  <script src="https://unpkg.com/@babel/standalone/babel.min.js"></script>
  <style>
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif;
      background-color: #282c34;
      color: white;
      display: flex;
      justify-content: center;
      align-items: center;
      height: 100vh;
      margin: 0;
    }
    button {
      background-color: #61dafb;
      border: none;
      padding: 10px 20px;
      border-radius: 5px;
      cursor: pointer;
      font-size: 16px;
      margin-top: 1rem;
    }
  </style>
</head>
<body>
  <div id="root"></div>
  <!-- Load our React component -->
  <script type="text/babel" src="/src/App.jsx"></script>
</body>
</html>
"""

_APP_JSX = """function App() {
  const [count, setCount] = React.useState(0);

  return (
    <div style={{ textAlign: 'center' }}>
      <h1>Hello React!</h1>
      <p>This is your live React application running in the preview pane.</p>
      <hr style={{ margin: "20px 0", borderColor: "#555" }} />
      <h2>Simple Counter</h2>
      <p>You clicked {count} times</p>
      <button onClick={() => setCount(count + 1)}>
        Click me
      </button>
    </div>
  );
}

const container = document.getElementById('root');
const root = ReactDOM.createRoot(container);
root.render(<App />);
"""

# Serialized form; converted to a tree with `tree_from_dict` on demand
DEFAULT_FILE_SYSTEM: Dict[str, Any] = {
    "type": "directory",
    "children": {
        "README.md": {"type": "file", "content": _README},
        "index.html": {"type": "file", "content": _INDEX_HTML},
        "src": {
            "type": "directory",
            "children": {
                "App.jsx": {"type": "file", "content": _APP_JSX},
            },
        },
    },
}
