"""DataList - one list instance wiring bindings, data, rendering and events."""

import asyncio
from typing import Any, Mapping

from .binding import BindingGraphBuilder, BindingNode, find_by_template, parse_bindings, roots
from .clients.transport import HttpTransport
from .core import (
    get_logger,
    get_settings,
    ErrorReporter,
    LogContext,
    Settings,
    SEVERITY_FATAL,
)
from .dom import DocumentSurface, DomEvent, Element, MemoryDocument
from .events import EventBindingManager
from .model import DataModel
from .options import ListOptions
from .render import RenderCoordinator, TemplateEngine

logger = get_logger(__name__)

LIST_TAGS = ("ul", "ol")


class DataList:
    """
    A declarative data list.

    Construction parses the bindings and builds the binding tree; malformed
    or inconsistent bindings raise immediately. ``start`` renders the tree
    and loads the first payload.
    """

    def __init__(
        self,
        options: ListOptions | Mapping[str, Any],
        templates: TemplateEngine,
        transport: HttpTransport,
        document: DocumentSurface | None = None,
        settings: Settings | None = None,
        reporter: ErrorReporter | None = None,
        element: Element | None = None,
    ) -> None:
        self.options = (
            options if isinstance(options, ListOptions) else ListOptions.model_validate(options)
        )
        self.settings = settings or get_settings()
        self.element = element
        self.list_id = element.id if element is not None and element.id else None
        self.reporter = reporter or ErrorReporter(self.list_id, self.settings.error_mode)
        self.document = document if document is not None else MemoryDocument()
        self.destroyed = False

        if element is not None:
            self._sanity_check(element)

        records = parse_bindings(self.options.bindings)
        self.nodes: list[BindingNode] = BindingGraphBuilder(
            strict=self.settings.strict_parents
        ).build(records)

        self.model = DataModel(
            self.options,
            self.nodes,
            transport,
            self.reporter,
            method=self.settings.request_method,
            cacheable=self.settings.cache_requests,
        )
        self.renderer = RenderCoordinator(templates, self.document)
        self.events = EventBindingManager(self.model, self.reload, self.reporter)

        tree_roots = roots(self.nodes)
        self.events.register_events(self.options.events, owner=tree_roots[0] if tree_roots else None)

        logger.info("list_created", list_id=self.list_id, bindings=len(self.nodes))

    def _sanity_check(self, element: Element) -> None:
        if element.tag.lower() not in LIST_TAGS:
            self.reporter.report(
                "Attempted to initialise dataList on a node which is not a list: "
                f"{element.tag}",
                level=SEVERITY_FATAL,
            )
        if not element.id:
            self.reporter.report(
                "The list must have a unique id in order for dataList to work.",
                level=SEVERITY_FATAL,
            )

    @property
    def roots(self) -> list[BindingNode]:
        return roots(self.nodes)

    def node(self, template: str) -> BindingNode | None:
        return find_by_template(self.nodes, template)

    async def start(self) -> list[BindingNode]:
        """
        Render the binding tree, then load and render the first payload.

        Returns:
            Nodes whose data arrived
        """
        with LogContext(list_id=self.list_id):
            self.renderer.render_all(self.nodes)
        return await self.reload()

    async def reload(self) -> list[BindingNode]:
        """
        Fetch, distribute and re-render.

        Returns:
            Nodes whose data changed (empty if the fetch failed or was superseded)
        """
        if self.destroyed:
            return []

        payload = await self.model.fetch()
        if payload is None or self.destroyed:
            return []

        with LogContext(list_id=self.list_id):
            changed = self.model.distribute(payload)
            self.renderer.refresh(self.nodes)
        return changed

    def dispatch(self, event: DomEvent) -> asyncio.Task | None:
        """Forward a DOM event; returns the reload task if one started."""
        if self.destroyed:
            return None
        return self.events.dispatch(event)

    def set_option(self, key: str, value: Any) -> None:
        """Change a query option; takes effect on the next reload."""
        self.model.update_query(key, value)

    async def wait(self) -> None:
        await self.events.wait()

    def destroy(self) -> None:
        """Tear down: cancel pending work and drop nodes, slices and markup."""
        self.events.cancel()
        self.model.invalidate()

        for node in self.nodes:
            node.model.clear()
            node.markup = None
            node.children = []
            node.parent = None

        self.nodes.clear()
        self.model.nodes = []
        self.destroyed = True
        logger.info("list_destroyed", list_id=self.list_id)


__all__ = ["DataList", "LIST_TAGS"]
