import asyncio
from typing import Any

import requests

from gql_drift import log
from gql_drift.core.types import DriftConfig, Transport
from gql_drift.errors import TransportError

DEFAULT_TIMEOUT_SECONDS = 30.0


def unwrap_response(payload: Any) -> Any:
    """Extract the ``data`` payload from a GraphQL response body.

    Args:
        payload: The decoded JSON response body

    Returns:
        The ``data`` portion of the response

    Raises:
        TransportError: If the body is not an object or carries a non-empty error list
    """
    if not isinstance(payload, dict):
        raise TransportError(f"Unexpected GraphQL response body: {payload!r}")

    errors = payload.get("errors") or []
    if errors:
        messages = [str(error.get("message", error)) if isinstance(error, dict) else str(error) for error in errors]
        raise TransportError(", ".join(messages), errors=messages)

    return payload.get("data")


class HttpTransport:
    """Default transport: HTTP POST of the document and variables as JSON.

    The blocking ``requests`` call runs on a worker thread so the transport can
    be awaited like any custom one.
    """

    def __init__(
        self,
        endpoint: str,
        headers: dict[str, str] | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.endpoint = endpoint
        self.headers = headers or {}
        self.timeout = timeout

    async def __call__(self, query: str, variables: dict[str, Any] | None = None) -> Any:
        return await asyncio.to_thread(self.post, query, variables)

    def post(self, query: str, variables: dict[str, Any] | None = None) -> Any:
        """Send one GraphQL request and return its ``data`` payload."""
        log.debug(f"POST {self.endpoint}")
        try:
            response = requests.post(
                self.endpoint,
                json={"query": query, "variables": variables},
                headers={"Content-Type": "application/json", **self.headers},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise TransportError(f"GraphQL request to {self.endpoint} failed: {e}") from e

        if not response.ok:
            raise TransportError(
                f"GraphQL request failed: {response.status_code} {response.reason}",
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise TransportError(
                f"GraphQL response from {self.endpoint} is not valid JSON", status_code=response.status_code
            ) from e

        return unwrap_response(payload)


def get_transport(config: DriftConfig) -> Transport:
    """Return the configured custom transport, or an HTTP transport for the endpoint."""
    if config.transport is not None:
        return config.transport
    return HttpTransport(config.endpoint, config.headers)


async def gql_fetch(config: DriftConfig, query: str, variables: dict[str, Any] | None = None) -> Any:
    """Execute a GraphQL document and return the ``data`` portion of the response."""
    transport = get_transport(config)
    return await transport(query, variables)
