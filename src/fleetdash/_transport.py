"""JSON-over-HTTP transport for the dashboard REST API."""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from fleetdash._constants import USER_AGENT
from fleetdash._redact import redact_for_log
from fleetdash.config import DashboardConfig
from fleetdash.exceptions import FleetConnectionError, FleetDecodeError, FleetHTTPError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by the API layer.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request_json(
        self,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        ...


class HttpTransport:
    """HTTP transport that sends and receives JSON bodies."""

    def __init__(
        self,
        config: DashboardConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session
        self._timeout = (
            aiohttp.ClientTimeout(total=config.request_timeout)
            if config.request_timeout is not None
            else aiohttp.ClientTimeout(total=None)
        )

    async def request_json(
        self,
        method: str,
        endpoint: str,
        payload: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send *payload* (if any) to *endpoint* and return the decoded JSON body.

        Raises
        ------
        FleetConnectionError
            The server could not be reached or the request timed out.
        FleetHTTPError
            The server answered with a non-2xx status.
        FleetDecodeError
            The body is not valid JSON in the declared charset.
        """
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        data: str | None = None
        if payload is not None:
            headers["content-type"] = "application/json"
            data = json.dumps(dict(payload), separators=(",", ":"), default=str)

        url = f"{self._config.base_url}{endpoint}"
        _logger.debug("%s %s", method, url)
        if self._config.api_trace_enabled and payload is not None:
            _logger.debug("%s %s request body: %s", method, endpoint, redact_for_log(payload))

        try:
            async with self._http.request(
                method,
                url,
                data=data,
                headers=headers,
                timeout=self._timeout,
            ) as resp:
                body = await resp.read()
                status = resp.status
                reason = resp.reason or ""
                charset = resp.charset or "utf-8"
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise FleetConnectionError(
                f"Request {method} {endpoint} failed: {exc!r}",
                endpoint=endpoint,
            ) from exc

        if not 200 <= status < 300:
            status_line = f"{status} {reason}".strip()
            snippet = body[:200].decode("utf-8", errors="replace")
            raise FleetHTTPError(
                f"HTTP {status_line} from {method} {endpoint}: {snippet}",
                status_code=status,
                status_text=reason,
                endpoint=endpoint,
            )

        if status == 204 or not body.strip():
            return None

        # Undecodable bytes, an unknown charset and malformed JSON all land here.
        try:
            result = json.loads(body.decode(charset))
        except (LookupError, ValueError) as exc:
            raise FleetDecodeError(
                f"Invalid JSON from {endpoint}: {body[:200]!r}",
                status_code=status,
                endpoint=endpoint,
            ) from exc

        if self._config.api_trace_enabled:
            _logger.debug("%s %s response body: %s", method, endpoint, redact_for_log(result))
        return result
