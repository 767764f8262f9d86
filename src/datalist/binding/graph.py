"""Binding Graph - resolves parent/children links by template name."""

from collections import defaultdict
from typing import Iterable, Iterator, Sequence

from ..core import (
    get_logger,
    CyclicBindingError,
    DuplicateTemplateError,
    UnresolvedTemplateError,
)
from .node import BindingNode
from .parser import BindingRecord

logger = get_logger(__name__)


def find_by_template(nodes: Iterable[BindingNode], template: str | None) -> BindingNode | None:
    """First node whose template equals ``template``."""
    if template is None:
        return None
    for node in nodes:
        if node.template == template:
            return node
    return None


def find_children(nodes: Iterable[BindingNode], template: str) -> list[BindingNode]:
    """All nodes naming ``template`` as their parent, in order."""
    return [node for node in nodes if node.record.parent_template == template]


def roots(nodes: Iterable[BindingNode]) -> list[BindingNode]:
    return [node for node in nodes if node.parent is None]


def walk(nodes: Iterable[BindingNode]) -> Iterator[BindingNode]:
    """Pre-order traversal of the whole forest."""
    for root in roots(nodes):
        yield from root.walk()


class BindingGraphBuilder:
    """
    Builds the binding forest.

    Unresolved parent references are tolerated by default: the node becomes a
    root. Pass ``strict=True`` to reject them instead. Duplicate template
    names and parent cycles are always rejected.
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict

    def build(self, records: Sequence[BindingRecord]) -> list[BindingNode]:
        """
        Wrap records into linked nodes, preserving input order.

        Raises:
            DuplicateTemplateError: Two records share a template name
            UnresolvedTemplateError: Strict mode and a parent does not resolve
            CyclicBindingError: Parent references loop
        """
        self._check_duplicates(records)

        nodes = [BindingNode(record=record) for record in records]

        for node in nodes:
            parent_template = node.record.parent_template
            node.parent = find_by_template(nodes, parent_template)
            node.children = find_children(nodes, node.template)

            if parent_template is not None and node.parent is None:
                if self.strict:
                    raise UnresolvedTemplateError(node.template, parent_template)
                logger.warning(
                    "unresolved_parent",
                    template=node.template,
                    parent_template=parent_template,
                )

        self._check_cycles(nodes)

        logger.info(
            "graph_built",
            nodes=len(nodes),
            roots=[node.template for node in roots(nodes)],
        )
        return nodes

    def _check_duplicates(self, records: Sequence[BindingRecord]) -> None:
        elements: dict[str, list[str]] = defaultdict(list)
        for record in records:
            elements[record.template].append(record.element)

        for template, bound in elements.items():
            if len(bound) > 1:
                raise DuplicateTemplateError(template, bound)

    def _check_cycles(self, nodes: Sequence[BindingNode]) -> None:
        for node in nodes:
            chain = [node.template]
            current = node.parent
            while current is not None:
                chain.append(current.template)
                if current is node:
                    raise CyclicBindingError(chain)
                current = current.parent
                # Cycles not through this node are caught when their own members are visited
                if len(chain) > len(nodes) + 1:
                    break


def build_graph(records: Sequence[BindingRecord], strict: bool = False) -> list[BindingNode]:
    """Convenience function to build the binding forest."""
    return BindingGraphBuilder(strict=strict).build(records)


__all__ = [
    "BindingGraphBuilder",
    "build_graph",
    "find_by_template",
    "find_children",
    "roots",
    "walk",
]
