"""
datalist
Declarative data lists: binding strings -> binding tree -> fetched data -> rendered templates
"""

from .binding import (
    BindingRecord,
    BindingNode,
    RenderState,
    BindingParser,
    BindingGraphBuilder,
    parse_binding,
    parse_bindings,
    build_graph,
)
from .clients import HttpTransport, TransportFailure, FailureReason
from .core import (
    Settings,
    get_settings,
    configure_logging,
    ErrorReporter,
    DataListError,
    MalformedBindingError,
    UnresolvedTemplateError,
    DuplicateTemplateError,
    CyclicBindingError,
    ApplicationPayloadError,
    TransportError,
    TransportParseError,
    UnresolvedTemplateLookup,
    DataListAlert,
)
from .dom import DomEvent, Element, MemoryDocument
from .events import EventBindingManager
from .model import DataModel
from .options import ListOptions, DEFAULT_BINDINGS, default_events
from .render import RenderCoordinator
from .templates import TemplateRegistry, TemplateLoader
from .widget import DataList


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    "BindingRecord",
    "BindingNode",
    "RenderState",
    "BindingParser",
    "BindingGraphBuilder",
    "parse_binding",
    "parse_bindings",
    "build_graph",
    "HttpTransport",
    "TransportFailure",
    "FailureReason",
    "Settings",
    "get_settings",
    "configure_logging",
    "ErrorReporter",
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
    "DomEvent",
    "Element",
    "MemoryDocument",
    "EventBindingManager",
    "DataModel",
    "ListOptions",
    "DEFAULT_BINDINGS",
    "default_events",
    "RenderCoordinator",
    "TemplateRegistry",
    "TemplateLoader",
    "DataList",
    "create_container",
]
