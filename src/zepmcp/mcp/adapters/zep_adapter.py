"""
Zep API Adapter
===============
HTTP client adapter for communicating with the Zep memory service (v2 REST API).
"""

from typing import Any, Dict, List, Optional
import urllib.parse
import warnings

import requests
from loguru import logger

from zepmcp.core.exceptions import MissingCredentialError, ZepAPIError

DEFAULT_BASE_URL = "https://api.getzep.com/api/v2"


def _is_local(url: str) -> bool:
    host = urllib.parse.urlparse(url).hostname or ""
    return host in ("localhost", "127.0.0.1", "::1")


class ZepAPIAdapter:
    def __init__(self, api_key: str, base_url: str = DEFAULT_BASE_URL, timeout_seconds: int = 15):
        if not api_key or not api_key.strip():
            raise MissingCredentialError("ZEPAPIKEY", "Zep API key is required")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

        if not self.base_url.startswith("https://") and not _is_local(self.base_url):
            warnings.warn(
                f"Zep API URL '{self.base_url}' is not using HTTPS. "
                "The API key will be sent over an unencrypted connection.",
                UserWarning
            )

    def _build_url(self, path: str, query_params: Optional[Dict[str, Any]] = None) -> str:
        """
        Build URL with properly encoded query parameters.

        None values are dropped.
        """
        url = f"{self.base_url}{path}"
        if query_params:
            filtered_params = {k: v for k, v in query_params.items() if v is not None}
            if filtered_params:
                url = f"{url}?{urllib.parse.urlencode(filtered_params, safe='')}"
        return url

    @staticmethod
    def _session_path(session_id: str) -> str:
        return f"/sessions/{urllib.parse.quote(session_id, safe='')}/memory"

    def _request(
        self,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
        query_params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        url = self._build_url(path, query_params)
        headers = {
            "Authorization": f"Api-Key {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.debug(f"Zep request: {method} {path}")
        try:
            response = requests.request(
                method=method,
                url=url,
                json=payload,
                headers=headers,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise ZepAPIError(f"Upstream request failed: {exc}") from exc

        if response.status_code >= 400:
            try:
                details = response.json()
            except ValueError:
                details = {"detail": response.text}
            if isinstance(details, dict) and details.get("message"):
                details = details["message"]
            raise ZepAPIError(
                f"Upstream error ({response.status_code}): {details}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ZepAPIError("Upstream returned non-JSON response") from exc

    def add_memory(self, session_id: str, messages: List[Dict[str, Any]]) -> Dict[str, Any]:
        return self._request("POST", self._session_path(session_id), {"messages": messages})

    def get_memory(self, session_id: str) -> Dict[str, Any]:
        return self._request("GET", self._session_path(session_id))

    def search_sessions(self, text: str, limit: int) -> Dict[str, Any]:
        return self._request(
            "POST",
            "/sessions/search",
            {"text": text, "search_scope": "messages"},
            query_params={"limit": limit},
        )
