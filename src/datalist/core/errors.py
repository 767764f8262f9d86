"""Error taxonomy for binding setup, data loading and rendering."""


class DataListError(Exception):
    """Base class for all data list failures."""

    pass


# Initialization errors - raised synchronously, setup aborts


class MalformedBindingError(DataListError):
    """A binding declaration does not follow the key=value grammar."""

    def __init__(self, message: str, declaration: str | None = None) -> None:
        super().__init__(message)
        self.declaration = declaration


class UnresolvedTemplateError(DataListError):
    """A parent_template names no declared template (strict mode only)."""

    def __init__(self, template: str, parent_template: str) -> None:
        super().__init__(
            f"Binding '{template}' names parent_template '{parent_template}' "
            "which is not declared"
        )
        self.template = template
        self.parent_template = parent_template


class DuplicateTemplateError(DataListError):
    """Two declarations share one template name."""

    def __init__(self, template: str, elements: list[str]) -> None:
        super().__init__(
            f"Template '{template}' is declared more than once: {', '.join(elements)}"
        )
        self.template = template
        self.elements = elements


class CyclicBindingError(DataListError):
    """Parent references form a cycle."""

    def __init__(self, cycle: list[str]) -> None:
        super().__init__(f"Binding parents form a cycle: {' -> '.join(cycle)}")
        self.cycle = cycle


# Runtime errors - reported, the widget stays interactive


class ApplicationPayloadError(DataListError):
    """The server answered with a payload carrying an error field."""

    pass


class TransportError(DataListError):
    """The data request failed at the network level."""

    pass


class TransportParseError(TransportError):
    """The response body could not be parsed as the expected data type."""

    pass


class UnresolvedTemplateLookup(DataListError):
    """A render names a template id that is not registered."""

    def __init__(self, template_id: str) -> None:
        super().__init__(f"No template registered with id '{template_id}'")
        self.template_id = template_id


class DataListAlert(DataListError):
    """A severity-0 message surfaced in raise mode."""

    pass


__all__ = [
    "DataListError",
    "MalformedBindingError",
    "UnresolvedTemplateError",
    "DuplicateTemplateError",
    "CyclicBindingError",
    "ApplicationPayloadError",
    "TransportError",
    "TransportParseError",
    "UnresolvedTemplateLookup",
    "DataListAlert",
]
