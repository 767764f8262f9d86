"""Dependency Injection Container."""

from typing import Any, Mapping

from injector import Injector, Module, inject, provider, singleton

from .clients.transport import HttpTransport
from .core import configure_logging, get_logger, get_settings, Settings
from .dom import DocumentSurface, Element
from .options import ListOptions
from .templates import TemplateLoader, TemplateRegistry
from .widget import DataList

logger = get_logger(__name__)


@singleton
class DataListFactory:
    """
    Creates lists that share one transport and one template registry per
    bundle URL.
    """

    @inject
    def __init__(self, settings: Settings, transport: HttpTransport, loader: TemplateLoader) -> None:
        self.settings = settings
        self.transport = transport
        self.loader = loader
        self._registries: dict[str, TemplateRegistry] = {}

    async def registry(self, template_url: str) -> TemplateRegistry:
        """Registry for a bundle URL, loaded on first use."""
        registry = self._registries.get(template_url)
        if registry is None:
            registry = await self.loader.load(template_url)
            self._registries[template_url] = registry
        return registry

    async def create(
        self,
        options: ListOptions | Mapping[str, Any],
        document: DocumentSurface | None = None,
        element: Element | None = None,
        templates: TemplateRegistry | None = None,
    ) -> DataList:
        """
        Build a list, loading its template bundle if none is given.

        Raises:
            ValueError: If neither templates nor a templateUrl is available
        """
        if not isinstance(options, ListOptions):
            options = ListOptions.model_validate(options)

        if templates is None:
            if not options.template_url:
                raise ValueError("templateUrl is required when no template registry is given")
            templates = await self.registry(options.template_url)

        return DataList(
            options,
            templates,
            self.transport,
            document=document,
            settings=self.settings,
            element=element,
        )


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings or get_settings()

    @singleton
    @provider
    def provide_transport(self, settings: Settings) -> HttpTransport:
        """Provide the shared HTTP transport."""
        return HttpTransport(
            timeout=settings.request_timeout,
            fail_max=settings.breaker_fail_max,
            reset_timeout=settings.breaker_reset_timeout,
        )

    @singleton
    @provider
    def provide_template_loader(self, settings: Settings, transport: HttpTransport) -> TemplateLoader:
        """Provide the template bundle loader."""
        return TemplateLoader(
            transport,
            max_size=settings.template_cache_size,
            ttl_seconds=settings.template_cache_ttl,
        )


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector and set up logging."""
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.json_logs)
    return Injector([CoreModule(settings)])
