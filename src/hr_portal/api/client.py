from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import requests

from ..core.constants import DEFAULT_API_TIMEOUT_SECONDS
from ..core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Optional[str]]


class ApiClient:
    """Thin JSON client for the HR REST backend.

    The bearer token is read per call from ``token_provider`` (the caller's
    session); this client never logs in or refreshes tokens by itself.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token_provider: Optional[TokenProvider] = None,
        timeout: float = DEFAULT_API_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._token_provider = token_provider
        self._timeout = timeout
        self._session = session or requests.Session()

    def _headers(self) -> dict:
        h = {"Accept": "application/json"}
        token = self._token_provider() if self._token_provider else None
        if token:
            h["Authorization"] = f"Bearer {token}"
        return h

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict] = None,
        json: Any = None,
        data: Optional[dict] = None,
        files: Optional[dict] = None,
    ) -> dict:
        url = f"{self._base_url}/{path.lstrip('/')}"
        try:
            r = self._session.request(
                method,
                url,
                headers=self._headers(),
                params=params,
                json=json,
                data=data,
                files=files,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.error("%s %s failed: %s", method, url, e)
            raise ExternalServiceError("HR service is unavailable, please retry") from e

        body = _safe_json(r)
        if r.status_code >= 400:
            message = body.get("message") if isinstance(body, dict) else None
            logger.error("%s %s failed: %s %s", method, url, r.status_code, (r.text or "")[:500])
            if r.status_code >= 500:
                raise ExternalServiceError("HR service error, please retry", status_code=r.status_code)
            raise ExternalServiceError(message or f"Request failed ({r.status_code})", status_code=r.status_code)
        return body if isinstance(body, dict) else {"data": body}

    def get(self, path: str, *, params: Optional[dict] = None) -> dict:
        return self.request("GET", path, params=params)

    def post(self, path: str, *, json: Any = None, data: Optional[dict] = None, files: Optional[dict] = None) -> dict:
        return self.request("POST", path, json=json, data=data, files=files)

    def put(self, path: str, *, json: Any = None) -> dict:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> dict:
        return self.request("DELETE", path)


def _safe_json(r) -> Any:
    if not r.content:
        return {}
    try:
        return r.json()
    except ValueError:
        return {}


def record_id(raw: dict) -> str:
    """Backend documents carry Mongo-style ``_id``; some endpoints use ``id``."""
    return str(raw.get("_id") or raw.get("id") or "")
