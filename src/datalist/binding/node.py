"""Binding nodes - one fixed type for every bound element."""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator

from ..core import fingerprint
from .parser import BindingRecord


class RenderState(str, Enum):
    """Lifecycle of a node's markup."""

    UNRENDERED = "unrendered"
    RENDERED = "rendered"
    STALE = "stale"


@dataclass(eq=False)
class SubModel:
    """Holds the data slice a node's template renders."""

    data: Any = None
    digest: str | None = None
    version: int = 0

    @property
    def has_data(self) -> bool:
        return self.digest is not None

    def assign(self, value: Any) -> bool:
        """
        Store a slice.

        Returns:
            True if the slice differs from the one held before
        """
        digest = fingerprint(value)
        if digest == self.digest:
            return False

        self.data = copy.deepcopy(value)
        self.digest = digest
        self.version += 1
        return True

    def clear(self) -> None:
        self.data = None
        self.digest = None


@dataclass(eq=False)
class BindingNode:
    """A binding record with its resolved place in the binding tree."""

    record: BindingRecord
    parent: "BindingNode | None" = None
    children: list["BindingNode"] = field(default_factory=list)
    model: SubModel = field(default_factory=SubModel)
    state: RenderState = RenderState.UNRENDERED
    markup: str | None = None

    @property
    def template(self) -> str:
        return self.record.template

    @property
    def element(self) -> str:
        return self.record.element

    @property
    def data_key(self) -> str | None:
        return self.record.data_key

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def walk(self) -> Iterator["BindingNode"]:
        """Yield this node then its descendants, parents before children."""
        yield self
        for child in self.children:
            yield from child.walk()

    def subtree_size(self) -> int:
        return sum(1 for _ in self.walk())

    def mark_stale(self) -> None:
        if self.state == RenderState.RENDERED:
            self.state = RenderState.STALE

    def __repr__(self) -> str:
        parent = self.parent.template if self.parent else None
        return (
            f"BindingNode(template={self.template!r}, element={self.element!r}, "
            f"parent={parent!r}, children={[c.template for c in self.children]!r}, "
            f"state={self.state.value})"
        )


__all__ = ["RenderState", "SubModel", "BindingNode"]
