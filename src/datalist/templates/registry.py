"""Template Registry - named Jinja2 templates for one application."""

import re
from typing import Any, Mapping

from jinja2 import DictLoader, Environment, TemplateNotFound, select_autoescape

from ..core import get_logger, UnresolvedTemplateLookup

logger = get_logger(__name__)

# <script id="datalist_items" type="text/x-template"> ... </script>
_SCRIPT_BLOCK = re.compile(
    r"<script\b(?P<attrs>[^>]*)>(?P<body>.*?)</script\s*>",
    re.DOTALL | re.IGNORECASE,
)
_ID_ATTR = re.compile(r"""\bid\s*=\s*(?:"([^"]*)"|'([^']*)'|([^\s>]+))""", re.IGNORECASE)


def parse_bundle(text: str) -> dict[str, str]:
    """
    Split a template bundle into named sources.

    A bundle is an HTML document holding one ``<script id="...">`` block per
    template. Blocks without an id are skipped.

    Args:
        text: Bundle document

    Returns:
        Template id -> template source, in document order
    """
    sources: dict[str, str] = {}

    for block in _SCRIPT_BLOCK.finditer(text):
        id_match = _ID_ATTR.search(block.group("attrs"))
        if id_match is None:
            logger.debug("bundle_block_without_id")
            continue

        template_id = next(group for group in id_match.groups() if group is not None)
        if template_id in sources:
            logger.warning("bundle_duplicate_id", template_id=template_id)
        sources[template_id] = block.group("body").strip()

    return sources


class TemplateRegistry:
    """
    Compiled templates addressable by unique id.

    Created once by the application root and shared by every list it hosts.
    """

    def __init__(self, sources: Mapping[str, str] | None = None) -> None:
        self._sources: dict[str, str] = dict(sources or {})
        self._env = Environment(
            loader=DictLoader(self._sources),
            autoescape=select_autoescape(default_for_string=True, default=True),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        logger.info("templates_registered", count=len(self._sources))

    @classmethod
    def from_bundle(cls, text: str) -> "TemplateRegistry":
        return cls(parse_bundle(text))

    def register(self, template_id: str, source: str) -> None:
        """Add or replace one template."""
        # DictLoader shares this dict and reports changed sources as outdated
        self._sources[template_id] = source

    def has(self, template_id: str) -> bool:
        return template_id in self._sources

    def ids(self) -> list[str]:
        return list(self._sources)

    def source(self, template_id: str) -> str:
        """Raw, unrendered template text."""
        try:
            return self._sources[template_id]
        except KeyError:
            raise UnresolvedTemplateLookup(template_id) from None

    def render(self, template_id: str, data: Mapping[str, Any] | None = None) -> str:
        """
        Render a template.

        Raises:
            UnresolvedTemplateLookup: If no template has this id
        """
        try:
            template = self._env.get_template(template_id)
        except TemplateNotFound:
            logger.error("template_not_found", template_id=template_id)
            raise UnresolvedTemplateLookup(template_id) from None

        return template.render(dict(data or {}))

    def __contains__(self, template_id: str) -> bool:
        return self.has(template_id)

    def __len__(self) -> int:
        return len(self._sources)


__all__ = ["TemplateRegistry", "parse_bundle"]
