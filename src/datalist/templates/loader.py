"""Template bundle loading over the transport."""

from returns.pipeline import is_successful

from ..core import get_logger, LRUCache, TransportError, TransportParseError
from ..clients.transport import HttpTransport
from .registry import TemplateRegistry, parse_bundle

logger = get_logger(__name__)


class TemplateLoader:
    """Fetches template bundles and keeps recent ones in memory."""

    def __init__(
        self,
        transport: HttpTransport,
        max_size: int = 16,
        ttl_seconds: int | None = 3600,
    ) -> None:
        self.transport = transport
        self._bundles: LRUCache[dict[str, str]] = LRUCache(
            max_size=max_size, ttl_seconds=ttl_seconds
        )

    async def load(self, url: str) -> TemplateRegistry:
        """
        Load a bundle into a new registry.

        Raises:
            TransportError: If the bundle cannot be fetched
        """
        sources = self._bundles.get(url)
        if sources is not None:
            logger.debug("bundle_cache_hit", url=url)
            return TemplateRegistry(sources)

        result = await self.transport.request(url, method="GET", cacheable=True, data_type="html")
        if not is_successful(result):
            failure = result.failure()
            error_cls = TransportParseError if failure.is_parse_error else TransportError
            raise error_cls(f"Template bundle {url} could not be loaded: {failure.message}")

        sources = parse_bundle(result.unwrap())
        self._bundles.set(url, sources)
        logger.info("bundle_loaded", url=url, templates=len(sources))
        return TemplateRegistry(sources)

    @property
    def stats(self):
        return self._bundles.stats


__all__ = ["TemplateLoader"]
