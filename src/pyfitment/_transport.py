"""HTTP transport for the Storefront GraphQL endpoint."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Mapping
from typing import Any, Protocol

import aiohttp

from pyfitment._constants import ACCESS_TOKEN_HEADER, USER_AGENT
from pyfitment._redact import redact_for_log
from pyfitment.config import FitmentConfig
from pyfitment.exceptions import FitmentApiError, FitmentConfigError, FitmentTransportError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules.

    Having a protocol here makes it easy to pass test doubles/mocks while
    keeping the production implementation (`StorefrontTransport`) concrete.
    """

    async def post_graphql(self, query: str, variables: Mapping[str, Any]) -> dict[str, Any]:
        ...


class StorefrontTransport:
    """POSTs GraphQL documents and returns the ``data`` object."""

    def __init__(
        self,
        config: FitmentConfig,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._http = http_session

    def _build_headers(self) -> dict[str, str]:
        token = self._config.storefront_access_token
        if not token or not token.strip():
            raise FitmentConfigError("Missing Storefront access token")
        return {
            "content-type": "application/json",
            "user-agent": USER_AGENT,
            ACCESS_TOKEN_HEADER: token,
            "cache-control": "no-cache, no-store, must-revalidate",
            "pragma": "no-cache",
        }

    async def post_graphql(self, query: str, variables: Mapping[str, Any]) -> dict[str, Any]:
        """Send a GraphQL request.

        1. POST ``{"query", "variables"}`` with a cache-busting ``_t`` parameter
        2. Reject non-200 replies and bodies that are not JSON objects
        3. Raise :class:`FitmentApiError` when the reply carries ``errors``
        4. Return the ``data`` dict
        """
        endpoint = self._config.graphql_endpoint
        headers = self._build_headers()
        url = f"{self._config.shop_url.rstrip('/')}{endpoint}"
        params = {"_t": str(int(time.time() * 1000))}
        body = json.dumps({"query": query, "variables": dict(variables)})

        _logger.debug("POST %s variables=%s headers=%s", url, redact_for_log(variables), redact_for_log(headers))

        try:
            async with self._http.post(url, params=params, data=body, headers=headers) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise FitmentTransportError(
                        f"Storefront API error: HTTP {resp.status} {resp.reason or ''}".rstrip(),
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except FitmentTransportError:
            raise
        except aiohttp.ClientError as exc:
            raise FitmentTransportError(
                f"Request to {endpoint} failed: {exc}",
                endpoint=endpoint,
            ) from exc

        try:
            body_json = json.loads(text)
        except json.JSONDecodeError as exc:
            raise FitmentTransportError(
                f"Invalid JSON from {endpoint}: {text[:200]}",
                endpoint=endpoint,
            ) from exc

        if not isinstance(body_json, dict):
            raise FitmentTransportError(
                f"Unexpected response shape from {endpoint}",
                endpoint=endpoint,
            )

        errors = body_json.get("errors")
        if errors:
            _logger.error("GraphQL errors from %s: %s", endpoint, errors)
            raise FitmentApiError(
                "GraphQL errors",
                errors=errors if isinstance(errors, list) else [errors],
                endpoint=endpoint,
            )

        data = body_json.get("data")
        if not isinstance(data, dict):
            raise FitmentTransportError(
                f"Missing 'data' field from {endpoint}",
                endpoint=endpoint,
            )
        return data
