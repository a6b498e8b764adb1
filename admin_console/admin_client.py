"""HTTP client for the platform's admin REST API."""

from __future__ import annotations

import json as jsonlib
from typing import Any, Dict, Optional

import httpx
from loguru import logger

DEFAULT_TIMEOUT = httpx.Timeout(10.0, read=30.0)


class AdminAPIError(Exception):
    """Raised when an admin API call fails.

    ``kind`` tells the failure layers apart: ``"transport"`` (no response),
    ``"http"`` (non-2xx status) or ``"envelope"`` (2xx with ``success: false`` or an unusable body).
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        payload: Optional[Any] = None,
        kind: str = "http",
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload
        self.kind = kind


class MissingTokenError(AdminAPIError):
    """Raised before any request is made when no bearer token is configured."""

    def __init__(self) -> None:
        super().__init__("Admin token is missing", kind="auth")


def _error_message(payload: Any, fallback: str) -> str:
    if isinstance(payload, dict):
        for key in ("error", "message", "detail"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return fallback


class AdminClient:
    """Synchronous client that attaches the bearer token and unwraps envelopes.

    ``session`` lets callers share one ``httpx.Client`` (or a FastAPI
    ``TestClient``); otherwise a short-lived client is opened per request.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000/api",
        token: Optional[str] = None,
        *,
        session: Optional[httpx.Client] = None,
        transport: Optional[httpx.BaseTransport] = None,
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._session = session
        self._transport = transport
        self._timeout = timeout

    @property
    def has_token(self) -> bool:
        return bool(self.token)

    def with_token(self, token: Optional[str]) -> "AdminClient":
        return AdminClient(
            self.base_url,
            token,
            session=self._session,
            transport=self._transport,
            timeout=self._timeout,
        )

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None,
    ) -> Dict[str, Any]:
        """Perform a request and return the decoded ``{success, data}`` envelope."""
        if not self.token:
            raise MissingTokenError()

        url = f"{self.base_url}{path}"
        headers = {"Authorization": f"Bearer {self.token}", "Accept": "application/json"}
        content = None
        if json is not None:
            # NaN from malformed numeric input goes out verbatim.
            content = jsonlib.dumps(json)
            headers["Content-Type"] = "application/json"
        query = {key: value for key, value in (params or {}).items() if value is not None}

        logger.debug("{method} {url} params={params}", method=method, url=url, params=query)
        try:
            if self._session is not None:
                response = self._session.request(
                    method, url, params=query, content=content, headers=headers
                )
            else:
                with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                    response = client.request(
                        method, url, params=query, content=content, headers=headers
                    )
        except httpx.HTTPError as exc:
            logger.warning("{method} {url} failed: {error}", method=method, url=url, error=exc)
            raise AdminAPIError(f"Network error: {exc}", kind="transport") from exc

        try:
            payload: Any = response.json() if response.content else {}
        except ValueError:
            payload = {"error": response.text}

        if response.is_error:
            logger.error(
                "{method} {url} returned {status}",
                method=method,
                url=url,
                status=response.status_code,
            )
            raise AdminAPIError(
                _error_message(payload, f"HTTP {response.status_code}"),
                status_code=response.status_code,
                payload=payload,
                kind="http",
            )
        if not isinstance(payload, dict) or not payload.get("success", False):
            raise AdminAPIError(
                _error_message(payload, "Request failed"),
                status_code=response.status_code,
                payload=payload,
                kind="envelope",
            )
        return payload

    def get(self, path: str, *, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Shortcut for GET requests."""
        return self.request("GET", path, params=params)

    def post(self, path: str, *, json: Optional[Any] = None) -> Dict[str, Any]:
        """Shortcut for POST requests."""
        return self.request("POST", path, json=json)

    def put(self, path: str, *, json: Optional[Any] = None) -> Dict[str, Any]:
        """Shortcut for PUT requests."""
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Dict[str, Any]:
        """Shortcut for DELETE requests."""
        return self.request("DELETE", path)
