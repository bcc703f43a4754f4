"""Transport — uniform request/response channel to the town service.

Every endpoint answers with the same envelope::

    {"isOK": bool, "message": str | None, "response": T | None}

Provides ABC and concrete implementations:
- HttpTransport: httpx-backed, for the live service
- MockTransport: deterministic, offline, for testing
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable

import httpx

logger = logging.getLogger(__name__)


class RequestError(Exception):
    """Raised for any failed request. Never let raw httpx exceptions propagate.

    Callers do not distinguish network failures from rejections by the
    service; both carry a human-readable ``message``.
    """

    def __init__(self, message: str, path: str = ""):
        self.message = message
        self.path = path
        super().__init__(f"Error processing request: {message}")


@dataclass(frozen=True)
class ResponseEnvelope:
    """Immutable success/failure wrapper returned by every endpoint."""

    is_ok: bool
    message: str | None = None
    response: Any = None

    @classmethod
    def from_json(cls, data: Any) -> ResponseEnvelope:
        if not isinstance(data, dict) or not isinstance(data.get("isOK"), bool):
            raise RequestError(f"malformed response envelope: {data!r}")
        return cls(
            is_ok=data["isOK"],
            message=data.get("message"),
            response=data.get("response"),
        )


def unwrap_or_raise(envelope: ResponseEnvelope, ignore_response: bool = False) -> Any:
    """Return the envelope payload, or raise RequestError.

    Acknowledgment-only operations pass ``ignore_response=True`` and get
    ``None`` back; everything else must carry a payload.
    """
    if envelope.is_ok:
        if ignore_response:
            return None
        if envelope.response is None:
            raise RequestError("response payload missing from successful envelope")
        return envelope.response
    raise RequestError(envelope.message or "unknown error")


class Transport(ABC):
    """Abstract base for all transports."""

    @abstractmethod
    def post(self, path: str, body: dict[str, Any]) -> ResponseEnvelope:
        """Send ``body`` to ``path`` and return the decoded envelope."""

    def request(
        self,
        path: str,
        body: dict[str, Any],
        ignore_response: bool = False,
    ) -> Any:
        """POST and unwrap in one step."""
        envelope = self.post(path, body)
        try:
            return unwrap_or_raise(envelope, ignore_response=ignore_response)
        except RequestError as e:
            e.path = path
            raise

    def close(self) -> None:
        """Release any underlying connections."""


class HttpTransport(Transport):
    """Transport over HTTP against the town service base URL."""

    def __init__(
        self,
        base_url: str,
        timeout_s: float = 10.0,
        client: httpx.Client | None = None,
    ):
        if not base_url and client is None:
            raise ValueError("base_url is required")
        self._base_url = base_url
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout_s)

    def post(self, path: str, body: dict[str, Any]) -> ResponseEnvelope:
        try:
            resp = self._client.post(path, json=body)
        except httpx.TimeoutException as e:
            raise RequestError(f"timed out: {e}", path) from e
        except httpx.HTTPError as e:
            raise RequestError(f"transport failure: {e}", path) from e

        try:
            data = resp.json()
        except ValueError as e:
            # The service answers rejections with an envelope even on 4xx,
            # so only a non-JSON body is treated as a status failure.
            raise RequestError(
                f"HTTP {resp.status_code} with non-JSON body", path
            ) from e

        logger.debug("POST %s -> %s", path, resp.status_code)
        return ResponseEnvelope.from_json(data)

    def close(self) -> None:
        self._client.close()


class MockTransport(Transport):
    """Deterministic transport for offline testing.

    Takes a handler callable that receives (path, body) and returns a raw
    envelope dict. Every call is recorded in ``calls``.
    """

    def __init__(self, handler: Callable[[str, dict[str, Any]], dict[str, Any]]):
        self._handler = handler
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def post(self, path: str, body: dict[str, Any]) -> ResponseEnvelope:
        self.calls.append((path, dict(body)))
        return ResponseEnvelope.from_json(self._handler(path, body))
