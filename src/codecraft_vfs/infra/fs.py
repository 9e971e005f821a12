from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves the OS-specific directory where the application keeps its
durable data (local workspace cache, configuration, logs).
"""

import os

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "CodeCraftVFS"
UNIX_APP_DIR_NAME = ".codecraft_vfs"
DATA_DIR_ENV = "CODECRAFT_DATA_DIR"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Override: $CODECRAFT_DATA_DIR
    - Windows: %LOCALAPPDATA%/CodeCraftVFS
    - Linux/Mac: ~/.codecraft_vfs

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = os.environ.get(DATA_DIR_ENV, "")

    # Windows specific resolution
    if not path and os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    # Posix fallback (Linux/Mac)
    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    # Idempotent directory creation
    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)
