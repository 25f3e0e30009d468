"""Figma REST API client.

Thin wrapper around a ``requests.Session``: one method per endpoint the
watcher reads, every failure surfaced as ``RemoteAPIError`` carrying the HTTP
status so callers can branch on it. No retries are attempted here; a failed
fetch fails the run.
"""

from typing import Any, Dict, List, Optional

import requests

from ..exceptions import RemoteAPIError
from ..logging_config import get_logger
from ..snapshot.models import RevisionRecord

logger = get_logger(__name__)

DEFAULT_API_BASE = "https://api.figma.com/v1"


class FigmaClient:
    """Read-only access to one Figma file."""

    def __init__(
        self,
        token: str,
        file_key: str,
        base_url: str = DEFAULT_API_BASE,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        self.file_key = file_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"X-Figma-Token": token})

    def _get(self, path: str) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise RemoteAPIError(path, None, reason=str(e)) from e

        logger.info(f"Figma API: {path} {response.status_code} {response.reason}")
        if not response.ok:
            raise RemoteAPIError(
                path,
                response.status_code,
                reason=response.reason or "",
                body=response.text,
            )

        try:
            return response.json()
        except ValueError as e:
            raise RemoteAPIError(
                path, response.status_code, reason=f"invalid JSON body: {e}"
            ) from e

    # ── Endpoints ────────────────────────────────────────────────────

    def get_file(self) -> Optional[Dict[str, Any]]:
        """Root ``document`` node of the file."""
        return self._get(f"/files/{self.file_key}").get("document")

    def get_styles(self) -> List[Dict[str, Any]]:
        """Published styles (``node_id``, ``name``, ``style_type``)."""
        data = self._get(f"/files/{self.file_key}/styles")
        return list((data.get("meta") or {}).get("styles") or [])

    def get_versions(self) -> List[RevisionRecord]:
        """Version history, newest first as returned by the API."""
        data = self._get(f"/files/{self.file_key}/versions")
        return [RevisionRecord.from_raw(v) for v in data.get("versions") or []]

    def get_local_variables(self) -> List[Dict[str, Any]]:
        """Local variables of the file.

        The API returns ``meta.variables`` keyed by id; flat ``variables``
        lists are accepted as well.
        """
        data = self._get(f"/files/{self.file_key}/variables/local")
        variables = (data.get("meta") or {}).get("variables")
        if variables is None:
            variables = data.get("variables")
        if isinstance(variables, dict):
            return list(variables.values())
        return list(variables or [])

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "FigmaClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
