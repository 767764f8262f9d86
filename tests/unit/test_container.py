"""Tests for dependency wiring."""

import pytest

from datalist.clients.transport import HttpTransport
from datalist.container import DataListFactory, create_container
from datalist.core import Settings
from datalist.templates import TemplateLoader
from datalist.widget import DataList

from conftest import FakeTransport


@pytest.fixture
def container():
    return create_container(Settings(log_level="WARNING", error_mode="raise"))


@pytest.mark.unit
def test_singletons(container):
    """Test shared dependencies are created once."""
    assert container.get(HttpTransport) is container.get(HttpTransport)
    assert container.get(DataListFactory) is container.get(DataListFactory)

    factory = container.get(DataListFactory)
    assert factory.transport is container.get(HttpTransport)
    assert factory.loader.transport is factory.transport
    assert factory.settings.error_mode == "raise"


@pytest.mark.unit
def test_transport_uses_settings():
    container = create_container(Settings(breaker_fail_max=2, request_timeout=1.5))
    transport = container.get(HttpTransport)

    assert transport._breaker.fail_max == 2
    assert transport.timeout == 1.5


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_with_registry(container, registry, scenario_bindings):
    factory = container.get(DataListFactory)

    datalist = await factory.create(
        {"serverUrl": "http://api.test/list", "bindings": scenario_bindings},
        templates=registry,
    )

    assert isinstance(datalist, DataList)
    assert datalist.renderer.templates is registry
    assert datalist.settings.error_mode == "raise"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_create_requires_templates(container, scenario_bindings):
    factory = container.get(DataListFactory)

    with pytest.raises(ValueError, match="templateUrl"):
        await factory.create({"serverUrl": "http://api.test/list", "bindings": scenario_bindings})


@pytest.mark.unit
@pytest.mark.asyncio
async def test_registry_loaded_once_per_url(container, sample_bundle, scenario_bindings):
    """Test lists sharing a bundle URL share one registry."""
    factory = container.get(DataListFactory)
    transport = FakeTransport(sample_bundle)
    factory.loader = TemplateLoader(transport)
    options = {
        "serverUrl": "http://api.test/list",
        "templateUrl": "http://api.test/templates.html",
        "bindings": scenario_bindings,
    }

    first = await factory.create(options)
    second = await factory.create(options)

    assert first.renderer.templates is second.renderer.templates
    assert "child" in first.renderer.templates
    assert len(transport.calls) == 1
    assert transport.calls[0]["data_type"] == "html"
