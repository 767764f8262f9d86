"""Data Model - fetches the list payload and splits it across bindings."""

from typing import Any, Mapping, Sequence
from urllib.parse import unquote

import httpx
from returns.pipeline import is_successful

from .binding import BindingNode
from .clients.transport import HttpTransport
from .core import (
    get_logger,
    ErrorReporter,
    ApplicationPayloadError,
    TransportError,
    TransportParseError,
)
from .options import ListOptions

logger = get_logger(__name__)

PARSE_WARNING = (
    "JSON data from server could not be parsed. This is caused by a JSON formatting error."
)


class DataModel:
    """
    Container model for one list.

    Owns the full payload and the query state. Every data-bearing node owns
    the slice assigned to it by ``distribute``.
    """

    def __init__(
        self,
        options: ListOptions,
        nodes: Sequence[BindingNode],
        transport: HttpTransport,
        reporter: ErrorReporter,
        method: str = "GET",
        cacheable: bool = False,
    ) -> None:
        self.server_url = options.server_url
        self.nodes = list(nodes)
        self.transport = transport
        self.reporter = reporter
        self.method = method
        self.cacheable = cacheable

        self.query: dict[str, Any] = options.query_params()
        self.payload: Mapping[str, Any] | None = None
        self._generation = 0

    def update_query(self, key: str, value: Any) -> None:
        """Merge one key into the parameters of subsequent fetches."""
        self.query[key] = value
        logger.debug("query_updated", key=key)

    def ajax_url(self) -> str:
        """Full request URL, decoded for readability."""
        return unquote(str(httpx.URL(self.server_url, params=self.query)))

    def invalidate(self) -> None:
        """Discard the result of any fetch still in flight."""
        self._generation += 1

    async def fetch(self) -> Mapping[str, Any] | None:
        """
        Request the payload.

        Returns:
            The payload, or None if the request failed or was superseded
        """
        self._generation += 1
        generation = self._generation
        query = dict(self.query)

        logger.info("fetch_start", url=self.server_url, generation=generation)
        result = await self.transport.request(
            self.server_url, query, method=self.method, cacheable=self.cacheable, data_type="json"
        )

        if generation != self._generation:
            logger.info("fetch_superseded", generation=generation, current=self._generation)
            return None

        if not is_successful(result):
            failure = result.failure()
            if failure.is_parse_error:
                self.reporter.report_error(TransportParseError(PARSE_WARNING))
            else:
                self.reporter.report_error(TransportError(failure.message))
            return None

        payload = result.unwrap()
        if not isinstance(payload, Mapping):
            self.reporter.report_error(
                ApplicationPayloadError(f"Expected a JSON object, got {type(payload).__name__}")
            )
            return None

        if payload.get("error"):
            # Partial data is still distributed
            self.reporter.report_error(ApplicationPayloadError(str(payload["error"])))

        self.payload = payload
        logger.info("fetch_complete", keys=len(payload), generation=generation)
        return payload

    def distribute(self, payload: Mapping[str, Any]) -> list[BindingNode]:
        """
        Assign each data-bearing node its slice of the payload.

        Structural nodes and keys missing from the payload are left alone.

        Returns:
            Nodes whose slice changed
        """
        changed = []

        for node in self.nodes:
            key = node.data_key
            if not key or key not in payload:
                continue

            if node.model.assign(payload[key]):
                node.mark_stale()
                changed.append(node)

        logger.debug("distributed", changed=[node.template for node in changed])
        return changed


__all__ = ["DataModel", "PARSE_WARNING"]
