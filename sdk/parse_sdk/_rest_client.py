"""
Internal REST client for the Parse schema SDK.

This module provides the default REST transport. It issues one HTTP request
per call and leaves retries and request queuing to the caller.

Users should go through ParseSchema instead; swap this out with
set_rest_controller() to change transports.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from .config import ParseSettings
from .errors import RequestError

logger = logging.getLogger(__name__)

_BODY_METHODS = frozenset({"POST", "PUT"})


class HttpxRestController:
    """REST transport backed by httpx.AsyncClient.

    The underlying client is created on first request unless one is passed in.
    An owned client is bound to the event loop it was created on and is
    replaced when a request runs on a different loop (e.g. a second
    asyncio.run()). A client passed in is always used as-is.

    Example:
        >>> rest = HttpxRestController(ParseSettings(application_id="app"))
        >>> await rest.request("GET", "schemas/GameScore", options={"useMasterKey": True})
    """

    def __init__(
        self,
        settings: ParseSettings | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the REST transport.

        Args:
            settings: Connection settings (read from the environment if omitted)
            client: Optional preconfigured httpx client
        """
        self._settings = settings or ParseSettings()
        self._client = client
        self._owns_client = client is None
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def settings(self) -> ParseSettings:
        return self._settings

    def _get_client(self) -> httpx.AsyncClient:
        if self._owns_client:
            loop = asyncio.get_running_loop()
            if self._client is not None and self._loop is not loop:
                # Pool is bound to the previous loop
                logger.debug("Event loop changed, creating a new HTTP client")
                self._client = None
            if self._client is None:
                self._client = httpx.AsyncClient(timeout=self._settings.timeout)
                self._loop = loop
        return self._client

    def _headers(self, options: dict[str, Any]) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self._settings.application_id:
            headers["X-Parse-Application-Id"] = self._settings.application_id
        if self._settings.rest_api_key:
            headers["X-Parse-REST-API-Key"] = self._settings.rest_api_key
        if options.get("useMasterKey") and self._settings.master_key:
            headers["X-Parse-Master-Key"] = self._settings.master_key
        if options.get("sessionToken"):
            headers["X-Parse-Session-Token"] = str(options["sessionToken"])
        return headers

    async def request(
        self,
        method: str,
        path: str,
        data: dict[str, Any] | None = None,
        options: dict[str, Any] | None = None,
    ) -> Any:
        """Send one request and decode the JSON response.

        Args:
            method: HTTP method
            path: Path relative to the server URL
            data: JSON body (sent for POST and PUT only)
            options: Per-request options (sessionToken, useMasterKey)

        Returns:
            Decoded response body ({} when empty)

        Raises:
            RequestError: If the server is unreachable or answers with an error
        """
        method = method.upper()
        url = f"{self._settings.server_url.rstrip('/')}/{path.lstrip('/')}"
        kwargs: dict[str, Any] = {"headers": self._headers(options or {})}
        if method in _BODY_METHODS:
            kwargs["json"] = data if data is not None else {}

        logger.debug("%s %s", method, url)
        try:
            response = await self._get_client().request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("Request %s %s failed: %s", method, url, e)
            raise RequestError(f"Failed to reach server: {e}", code="CONNECTION_ERROR") from e

        if response.status_code >= 400:
            body = _error_body(response)
            message = body.get("error")
            server_code = body.get("code")
            logger.warning("Request %s %s returned %d", method, url, response.status_code)
            raise RequestError(
                message or f"Request failed with status {response.status_code}",
                status_code=response.status_code,
                server_code=server_code,
            )
        return _decode(response)

    async def aclose(self) -> None:
        """Close the owned httpx client."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


def _error_body(response: httpx.Response) -> dict[str, Any]:
    """Best-effort decode of an error response; non-JSON bodies yield {}."""
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _decode(response: httpx.Response) -> Any:
    """Decode a response body as JSON, mapping empty bodies to {}."""
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError as e:
        raise RequestError(
            "Invalid JSON in server response",
            status_code=response.status_code,
        ) from e
