"""DOM surface used by the render coordinator and event wiring."""

import re
from dataclasses import dataclass, field
from typing import Any, Protocol

from .core import get_logger

logger = get_logger(__name__)

# Compound selector: optional tag, then any mix of #id and .class parts
_COMPOUND = re.compile(r"^(?P<tag>[A-Za-z][\w-]*|\*)?(?P<parts>(?:[#.][\w-]+)*)$")
_PART = re.compile(r"([#.])([\w-]+)")


@dataclass(frozen=True)
class Selector:
    """A parsed compound selector."""

    tag: str | None = None
    id: str | None = None
    classes: tuple[str, ...] = ()

    @classmethod
    def parse(cls, text: str) -> "Selector":
        """
        Parse the last compound of a selector string.

        Raises:
            ValueError: If the compound is not ``tag#id.class`` shaped
        """
        compound = text.strip().split()[-1] if text.strip() else ""
        match = _COMPOUND.match(compound)
        if not compound or match is None:
            raise ValueError(f"Unsupported selector: {text!r}")

        tag = match.group("tag")
        element_id = None
        classes = []
        for marker, name in _PART.findall(match.group("parts")):
            if marker == "#":
                element_id = name
            else:
                classes.append(name)

        return cls(
            tag=None if tag in (None, "*") else tag.lower(),
            id=element_id,
            classes=tuple(classes),
        )


@dataclass(eq=False)
class Element:
    """A located element."""

    selector: str
    tag: str = "div"
    id: str = ""
    classes: tuple[str, ...] = ()
    value: Any = None
    checked: bool = False
    content: str = ""
    removed: bool = False

    @classmethod
    def from_selector(cls, selector: str, **kwargs: Any) -> "Element":
        parsed = Selector.parse(selector)
        kwargs.setdefault("tag", parsed.tag or "div")
        kwargs.setdefault("id", parsed.id or "")
        kwargs.setdefault("classes", parsed.classes)
        return cls(selector=selector, **kwargs)


@dataclass
class DomEvent:
    """A user interaction delivered to the list."""

    type: str
    target: Element
    key_code: int | None = None
    data: dict[str, Any] = field(default_factory=dict)


def matches(element: Element, selector: str) -> bool:
    """True if the element satisfies the selector's last compound."""
    try:
        parsed = Selector.parse(selector)
    except ValueError:
        logger.warning("unsupported_selector", selector=selector)
        return False

    if parsed.tag is not None and parsed.tag != element.tag.lower():
        return False
    if parsed.id is not None and parsed.id != element.id:
        return False
    return all(name in element.classes for name in parsed.classes)


class DocumentSurface(Protocol):
    """What the widget needs from a document."""

    def locate(self, selector: str) -> Element | None:
        ...

    def replace_content(self, element: Element, markup: str) -> None:
        ...

    def remove(self, element: Element) -> None:
        ...


class MemoryDocument:
    """
    In-process document keyed by selector.

    Elements are created on first lookup. Every content write is appended to
    ``history`` as ``(selector, markup)``.
    """

    def __init__(self, elements: list[Element] | None = None) -> None:
        self._elements: dict[str, Element] = {}
        self.history: list[tuple[str, str]] = []
        for element in elements or []:
            self.add(element)

    def add(self, element: Element) -> Element:
        self._elements[element.selector] = element
        return element

    def locate(self, selector: str) -> Element | None:
        element = self._elements.get(selector)
        if element is None:
            try:
                element = self.add(Element.from_selector(selector))
            except ValueError:
                logger.warning("locate_failed", selector=selector)
                return None
        return element

    def replace_content(self, element: Element, markup: str) -> None:
        element.content = markup
        self.history.append((element.selector, markup))

    def remove(self, element: Element) -> None:
        element.removed = True
        self._elements.pop(element.selector, None)

    def content(self, selector: str) -> str:
        element = self._elements.get(selector)
        return element.content if element else ""

    def __contains__(self, selector: str) -> bool:
        return selector in self._elements


__all__ = [
    "Selector",
    "Element",
    "DomEvent",
    "DocumentSurface",
    "MemoryDocument",
    "matches",
]
