"""HTTP transport for list data and template bundles."""

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Mapping

import httpx
import pybreaker
from returns.result import Failure, Result, Success

from ..core import get_logger, decode_payload, JSONParseError

logger = get_logger(__name__)

DataType = Literal["json", "html"]


class FailureReason(str, Enum):
    """Why a request produced no payload."""

    PARSE_ERROR = "parsererror"
    HTTP_ERROR = "http_error"
    BREAKER_OPEN = "breaker_open"


@dataclass(frozen=True)
class TransportFailure:
    """Failure side of a transport result."""

    reason: FailureReason
    message: str
    url: str

    @property
    def is_parse_error(self) -> bool:
        return self.reason == FailureReason.PARSE_ERROR


class BreakerListener(pybreaker.CircuitBreakerListener):
    """Logs circuit breaker state changes."""

    def state_change(self, cb, old_state, new_state):
        logger.warning(
            "breaker_state_change",
            breaker=cb.name,
            from_state=str(old_state),
            to_state=str(new_state),
        )


class HttpTransport:
    """
    Issues data and template requests with circuit breaker protection.

    The blocking httpx call runs in a worker thread so the event loop only
    suspends at the network boundary.
    """

    def __init__(
        self,
        timeout: float = 5.0,
        fail_max: int = 5,
        reset_timeout: int = 30,
    ) -> None:
        """
        Initialize transport.

        Args:
            timeout: Request timeout in seconds
            fail_max: Consecutive failures before the breaker opens
            reset_timeout: Seconds before an open breaker lets a trial call through
        """
        self.timeout = timeout
        self._client = httpx.Client(timeout=timeout)
        self._breaker = pybreaker.CircuitBreaker(
            fail_max=fail_max,
            reset_timeout=reset_timeout,
            name="datalist-http",
            listeners=[BreakerListener()],
        )

        logger.info("transport_init", timeout=timeout)

    def _send(
        self,
        url: str,
        params: Mapping[str, Any],
        method: str,
        cacheable: bool,
    ) -> httpx.Response:
        query = dict(params)
        headers = {}
        if not cacheable:
            headers["Cache-Control"] = "no-cache"
            if method == "GET":
                # Same cache-busting parameter browsers' ajax layers use
                query["_"] = int(time.time() * 1000)

        if method == "GET":
            response = self._client.get(url, params=query, headers=headers)
        else:
            response = self._client.request(method, url, data=query, headers=headers)

        response.raise_for_status()
        return response

    def fetch(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        method: str = "GET",
        cacheable: bool = False,
        data_type: DataType = "json",
    ) -> Result[Any, TransportFailure]:
        """
        Blocking request.

        Returns:
            Success with the decoded payload (or text for ``html``), or
            Failure with the reason
        """
        method = method.upper()
        try:
            response = self._breaker.call(self._send, url, params or {}, method, cacheable)
        except pybreaker.CircuitBreakerError:
            logger.error("request_failed", url=url, error="Circuit breaker open")
            return Failure(TransportFailure(FailureReason.BREAKER_OPEN, "Circuit breaker open", url))
        except httpx.HTTPError as e:
            logger.warning("http_error", url=url, error=str(e))
            return Failure(TransportFailure(FailureReason.HTTP_ERROR, str(e), url))

        if data_type == "html":
            return Success(response.text)

        try:
            payload = decode_payload(response.content)
        except JSONParseError as e:
            logger.warning("parse_error", url=url, error=str(e))
            return Failure(TransportFailure(FailureReason.PARSE_ERROR, str(e), url))

        logger.debug("request_complete", url=url, status=response.status_code)
        return Success(payload)

    async def request(
        self,
        url: str,
        params: Mapping[str, Any] | None = None,
        method: str = "GET",
        cacheable: bool = False,
        data_type: DataType = "json",
    ) -> Result[Any, TransportFailure]:
        """Async form of ``fetch``."""
        return await asyncio.to_thread(self.fetch, url, params, method, cacheable, data_type)

    def close(self) -> None:
        """Close HTTP client"""
        self._client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


__all__ = ["HttpTransport", "TransportFailure", "FailureReason", "BreakerListener", "DataType"]
