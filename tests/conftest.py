"""Pytest configuration and fixtures."""

import asyncio
from typing import Any

import pytest
from returns.result import Failure, Success

from datalist.clients.transport import FailureReason, TransportFailure
from datalist.core import ErrorReporter, Settings
from datalist.dom import MemoryDocument
from datalist.templates import TemplateRegistry


# ============================================================================
# Transport Fakes
# ============================================================================

class FakeTransport:
    """Async transport double returning queued results in order."""

    def __init__(self, *results: Any) -> None:
        self.results = list(results)
        self.calls: list[dict[str, Any]] = []
        self.gates: list[asyncio.Event] = []

    def push(self, result: Any) -> None:
        self.results.append(result)

    async def request(self, url, params=None, method="GET", cacheable=False, data_type="json"):
        self.calls.append(
            {
                "url": url,
                "params": dict(params or {}),
                "method": method,
                "cacheable": cacheable,
                "data_type": data_type,
            }
        )
        if self.gates:
            await self.gates.pop(0).wait()
        result = self.results.pop(0)
        if isinstance(result, (Success, Failure)):
            return result
        return Success(result)


def parse_failure(url: str = "http://api.test/list") -> Failure:
    return Failure(TransportFailure(FailureReason.PARSE_ERROR, "Invalid JSON", url))


def http_failure(url: str = "http://api.test/list") -> Failure:
    return Failure(TransportFailure(FailureReason.HTTP_ERROR, "Server error '500'", url))


@pytest.fixture
def fake_transport():
    """Transport double with an empty queue."""
    return FakeTransport()


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Settings independent of the environment."""
    return Settings(error_mode="alert", strict_parents=False, request_method="GET")


@pytest.fixture
def alerts():
    """Collected severity-0 alerts."""
    return []


@pytest.fixture
def reporter(alerts):
    """Reporter that collects alerts instead of logging them."""
    return ErrorReporter(list_id="products", error_mode="alert", alert=alerts.append)


@pytest.fixture
def document():
    return MemoryDocument()


# ============================================================================
# Binding Fixtures
# ============================================================================

@pytest.fixture
def scenario_bindings():
    """Root with one data-bearing child."""
    return {
        "A": "{binding template=root}",
        "B": "{binding template=child; parent_template=root; data=items}",
    }


@pytest.fixture
def product_bindings():
    """The default product list layout."""
    return {
        "div#container": "{binding template=datalist_products}",
        "select#datalist_sort_by": "{binding template=datalist_sort_by; parent_template=datalist_products; data=sortbys}",
        "div#datalist_filters": "{binding template=datalist_filters; parent_template=datalist_products; data_collection=filters}",
        "div#datalist_items": "{binding template=datalist_items; parent_template=datalist_products; data_collection=products}",
        "div#datalist_pages": "{binding template=datalist_pages; parent_template=datalist_products; data=pages}",
    }


# ============================================================================
# Template Fixtures
# ============================================================================

@pytest.fixture
def sample_bundle():
    """Template bundle document."""
    return """<html><body>
<script id="root" type="text/x-template">
<section><div id="items"></div></section>
</script>
<script id="child" type="text/x-template">
<ul>{% for item in items %}<li>{{ item }}</li>{% endfor %}</ul>
</script>
<script id='datalist_products' type="text/x-template">
<div id="datalist_filters"></div><div id="datalist_items"></div><div id="datalist_pages"></div>
</script>
<script id="datalist_sort_by" type="text/x-template">
{% for sortby in sortbys %}<option>{{ sortby }}</option>{% endfor %}
</script>
<script id="datalist_filters" type="text/x-template">
{% for f in filters %}<input type="checkbox" class="datalist_filters" id="{{ f.id }}">{% endfor %}
</script>
<script id="datalist_items" type="text/x-template">
{% for p in products %}<p>{{ p.name }}</p>{% endfor %}
</script>
<script id="datalist_pages" type="text/x-template">
Page {{ current }} of {{ total }}
</script>
</body></html>"""


@pytest.fixture
def registry(sample_bundle):
    return TemplateRegistry.from_bundle(sample_bundle)


@pytest.fixture
def product_payload():
    """Server payload for the product list."""
    return {
        "sortbys": ["name", "price"],
        "filters": [{"id": "in_stock"}, {"id": "on_sale"}],
        "products": [{"name": "Lamp"}, {"name": "Desk"}],
        "pages": {"current": 1, "total": 3},
    }
