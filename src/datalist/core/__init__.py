"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .errors import (
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
from .logging_config import configure_logging, get_logger, LogContext
from .reporter import ErrorReporter, SEVERITY_FATAL, SEVERITY_WARNING
from .json import decode_payload, canonical_json, JSONParseError
from .hash import Algorithm, hash_string, fingerprint
from .cache import LRUCache, Stats


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
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
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    "ErrorReporter",
    "SEVERITY_FATAL",
    "SEVERITY_WARNING",
    # JSON
    "decode_payload",
    "canonical_json",
    "JSONParseError",
    # Hashing
    "Algorithm",
    "hash_string",
    "fingerprint",
    # Caching
    "LRUCache",
    "Stats",
]
