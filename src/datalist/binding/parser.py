"""Binding Parser - declaration strings to binding records."""

import re
from dataclasses import dataclass, field
from typing import Mapping

from ..core import get_logger, MalformedBindingError

logger = get_logger(__name__)

# {binding template=...; parent_template=...; data=...}
_WRAPPER = re.compile(r"^\s*\{\s*binding\b(?P<body>.*)\}\s*$", re.DOTALL)

KNOWN_KEYS = ("template", "parent_template", "data", "data_collection")


@dataclass(frozen=True)
class BindingRecord:
    """A parsed binding declaration and the element it targets."""

    template: str
    element: str = ""
    parent_template: str | None = None
    data: str | None = None
    data_collection: str | None = None
    extra: dict[str, str] = field(default_factory=dict)

    @property
    def data_key(self) -> str | None:
        """Payload attribute this binding consumes, if any."""
        return self.data or self.data_collection

    @property
    def is_collection(self) -> bool:
        return self.data_collection is not None

    def fields(self) -> dict[str, str]:
        """Declared key/value pairs, in canonical order."""
        result = {"template": self.template}
        for key in KNOWN_KEYS[1:]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        result.update(self.extra)
        return result


class BindingParser:
    """Parses ``{binding key=value; ...}`` declarations."""

    def parse(self, raw: str, element: str = "") -> BindingRecord:
        """
        Parse one binding declaration.

        Args:
            raw: Declaration string, e.g. ``{binding template=items; data=products}``
            element: Selector of the element the declaration is bound to

        Returns:
            Parsed BindingRecord

        Raises:
            MalformedBindingError: If the declaration breaks the key=value grammar
        """
        if not isinstance(raw, str):
            raise MalformedBindingError(
                f"Binding for '{element}' must be a string, got {type(raw).__name__}"
            )

        match = _WRAPPER.match(raw)
        if match is None:
            raise MalformedBindingError(
                f"{raw!r} must be wrapped in {{binding ...}}", declaration=raw
            )

        body = match.group("body").strip()
        if not body:
            raise MalformedBindingError(f"{raw!r} can't be parsed into an object.", declaration=raw)

        pairs = self._split_pairs(body, raw)
        return self._build_record(pairs, element, raw)

    def _split_pairs(self, body: str, raw: str) -> dict[str, str]:
        pairs: dict[str, str] = {}

        for segment in body.split(";"):
            # Trailing separators leave empty segments
            if not segment.strip():
                continue

            parts = segment.split("=")
            if len(parts) != 2:
                raise MalformedBindingError(
                    f"{segment.strip()!r} needs to be separated by =", declaration=raw
                )

            key, value = parts[0].strip(), parts[1].strip()
            if not key:
                raise MalformedBindingError(
                    f"{segment.strip()!r} is missing a key", declaration=raw
                )
            if key in pairs:
                raise MalformedBindingError(f"{key!r} is declared more than once", declaration=raw)
            pairs[key] = value

        if not pairs:
            raise MalformedBindingError(f"{raw!r} can't be parsed into an object.", declaration=raw)

        return pairs

    def _build_record(self, pairs: dict[str, str], element: str, raw: str) -> BindingRecord:
        template = pairs.get("template")
        if not template:
            raise MalformedBindingError(f"{raw!r} is missing a template name", declaration=raw)

        data = pairs.get("data") or None
        data_collection = pairs.get("data_collection") or None
        if data and data_collection:
            raise MalformedBindingError(
                f"{raw!r} declares both data and data_collection", declaration=raw
            )

        return BindingRecord(
            template=template,
            element=element,
            parent_template=pairs.get("parent_template") or None,
            data=data,
            data_collection=data_collection,
            extra={k: v for k, v in pairs.items() if k not in KNOWN_KEYS},
        )


def parse_binding(raw: str, element: str = "") -> BindingRecord:
    """Convenience function to parse one declaration."""
    return BindingParser().parse(raw, element=element)


def parse_bindings(bindings: Mapping[str, str]) -> list[BindingRecord]:
    """
    Parse every declaration of a bindings mapping, in mapping order.

    Args:
        bindings: Element selector -> declaration string

    Returns:
        Binding records in declaration order

    Raises:
        MalformedBindingError: On the first bad declaration (nothing is returned)
    """
    parser = BindingParser()
    records = []

    for element, raw in bindings.items():
        try:
            records.append(parser.parse(raw, element=element))
        except MalformedBindingError as e:
            logger.error("binding_parse_failed", element=element, error=str(e))
            raise

    logger.debug("bindings_parsed", count=len(records))
    return records


def serialize(record: BindingRecord) -> str:
    """Render a record back into canonical declaration form."""
    body = "; ".join(f"{key}={value}" for key, value in record.fields().items())
    return f"{{binding {body}}}"


__all__ = [
    "BindingRecord",
    "BindingParser",
    "parse_binding",
    "parse_bindings",
    "serialize",
    "KNOWN_KEYS",
]
