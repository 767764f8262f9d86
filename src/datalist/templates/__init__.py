"""Templates - bundle parsing, registry and loading"""

from .registry import TemplateRegistry, parse_bundle
from .loader import TemplateLoader

__all__ = ["TemplateRegistry", "parse_bundle", "TemplateLoader"]
