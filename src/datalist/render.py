"""Render Coordinator - parent-before-child rendering of the binding forest."""

from typing import Any, Mapping, Protocol, Sequence

from .binding import BindingNode, RenderState, roots, walk
from .core import get_logger
from .dom import DocumentSurface

logger = get_logger(__name__)


class TemplateEngine(Protocol):
    def render(self, template_id: str, data: Mapping[str, Any] | None = None) -> str:
        ...


def render_context(node: BindingNode) -> dict[str, Any]:
    """
    Template variables for a node.

    The slice is available as ``data`` and under the node's data key. A
    mapping slice also has its keys spread at the top level.
    """
    if not node.model.has_data:
        return {}

    data = node.model.data
    context: dict[str, Any] = dict(data) if isinstance(data, Mapping) else {}
    context["data"] = data
    if node.data_key:
        context[node.data_key] = data
    return context


class RenderCoordinator:
    """
    Renders bound elements through the template engine.

    Only roots are rendered from the top; each render recurses into its
    children, so a parent's markup is always in place before a child's.
    """

    def __init__(self, templates: TemplateEngine, document: DocumentSurface) -> None:
        self.templates = templates
        self.document = document

    def render_all(self, nodes: Sequence[BindingNode], already_rendered: bool = False) -> None:
        for root in roots(nodes):
            self.render(root, already_rendered)

    def render(self, node: BindingNode, already_rendered: bool = False) -> str:
        """
        Render a node and cascade into its children.

        Args:
            node: Node to render
            already_rendered: Reuse the node's previous markup when it is
                still valid. Children always receive ``already_rendered=True``.

        Returns:
            The node's markup

        Raises:
            UnresolvedTemplateLookup: If the node's template is not registered
        """
        reusable = node.state == RenderState.RENDERED and node.markup is not None

        if not already_rendered or not reusable:
            node.markup = self.templates.render(node.template, render_context(node))
            logger.debug("rendered", template=node.template, version=node.model.version)

        element = self.document.locate(node.element)
        if element is None:
            logger.warning("element_missing", template=node.template, element=node.element)
        else:
            # Re-inserting the parent resets child placeholders, so children follow
            self.document.replace_content(element, node.markup)

        node.state = RenderState.RENDERED

        for child in node.children:
            self.render(child, already_rendered=True)

        return node.markup

    def refresh(self, nodes: Sequence[BindingNode]) -> list[BindingNode]:
        """
        Re-render every node whose markup is out of date.

        Nodes are visited parents first; a stale node's descendants are
        refreshed by its cascade and skipped afterwards.

        Returns:
            Nodes that were regenerated from the top of a cascade
        """
        refreshed = []
        for node in walk(nodes):
            if node.state != RenderState.RENDERED:
                self.render(node, already_rendered=False)
                refreshed.append(node)

        if refreshed:
            logger.info("refreshed", templates=[node.template for node in refreshed])
        return refreshed


__all__ = ["RenderCoordinator", "TemplateEngine", "render_context"]
