from __future__ import annotations

from codecraft_vfs.domain.constants import APP_VERSION

USER_AGENT = f"CodeCraftVFS-Client/{APP_VERSION}"
DEFAULT_TIMEOUT = 10
WORKSPACES_ENDPOINT = "/rest/v1/workspaces"
