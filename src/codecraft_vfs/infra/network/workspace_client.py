from __future__ import annotations

"""
Remote Workspace Client.

Talks to the cloud workspace table over a PostgREST-style HTTP API. Each
signed-in user owns a single row whose `content` column holds the
serialized tree. Every transport problem is surfaced as
RemoteUnavailableError so callers deal with one failure type.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import requests

from codecraft_vfs.domain.config import Identity
from codecraft_vfs.domain.errors import RemoteUnavailableError
from codecraft_vfs.infra.network.common import DEFAULT_TIMEOUT, USER_AGENT, WORKSPACES_ENDPOINT

logger = logging.getLogger(__name__)


class HttpWorkspaceClient:
    """
    Remote store collaborator backed by HTTP.

    Args:
        base_url: Root URL of the backend (without the REST suffix).
        api_key: Public project key sent as the `apikey` header.
        identity: Signed-in user whose workspace is read and written.
        timeout: Per-request timeout in seconds.
    """

    def __init__(
            self,
            base_url: str,
            api_key: str,
            identity: Identity,
            timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._url = base_url.rstrip("/") + WORKSPACES_ENDPOINT
        self._api_key = api_key
        self._identity = identity
        self._timeout = timeout

    def _headers(self) -> Dict[str, str]:
        return {
            "User-Agent": USER_AGENT,
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._identity.access_token}",
            "Content-Type": "application/json",
        }

    def load_workspace(self) -> Optional[Dict[str, Any]]:
        """
        Fetch the user's workspace row.

        Returns:
            Optional[Dict[str, Any]]: `{"content": <tree dict>}` or None when
            the user has no workspace yet.

        Raises:
            RemoteUnavailableError: On network, auth or payload errors.
        """
        params = {"user_id": f"eq.{self._identity.user_id}", "select": "content"}
        logger.debug(f"Network: Loading workspace for user {self._identity.user_id}")

        try:
            response = requests.get(
                self._url, headers=self._headers(), params=params, timeout=self._timeout
            )
            response.raise_for_status()
            rows = response.json()
        except requests.exceptions.Timeout as e:
            raise RemoteUnavailableError(f"Workspace load timed out after {self._timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise RemoteUnavailableError(f"Workspace load failed: {e}") from e
        except ValueError as e:
            raise RemoteUnavailableError(f"Malformed workspace payload: {e}") from e

        if not isinstance(rows, list):
            raise RemoteUnavailableError("Malformed workspace payload (expected a list).")
        if not rows:
            return None

        row = rows[0]
        if not isinstance(row, dict) or "content" not in row:
            raise RemoteUnavailableError("Malformed workspace row (missing content).")
        return {"content": row["content"]}

    def save_workspace(self, tree: Dict[str, Any]) -> None:
        """
        Upsert the user's workspace row with a serialized tree.

        Raises:
            RemoteUnavailableError: On network, auth or server errors.
        """
        payload = {
            "user_id": self._identity.user_id,
            "content": tree,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        headers = self._headers()
        headers["Prefer"] = "resolution=merge-duplicates"

        try:
            response = requests.post(
                self._url, json=payload, headers=headers, timeout=self._timeout
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise RemoteUnavailableError(f"Workspace save timed out after {self._timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise RemoteUnavailableError(f"Workspace save failed: {e}") from e

        logger.info("Network: Workspace saved to cloud.")
