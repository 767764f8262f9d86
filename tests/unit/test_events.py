"""Tests for event wiring."""

import asyncio
from unittest.mock import MagicMock

import pytest

from datalist.binding import build_graph, parse_bindings
from datalist.core import ErrorReporter
from datalist.dom import DomEvent, Element
from datalist.events import EventBinding, EventBindingManager
from datalist.model import DataModel
from datalist.options import ENTER_KEY, ListOptions, default_events


@pytest.fixture
def model(scenario_bindings, fake_transport):
    options = ListOptions(serverUrl="http://api.test/list", bindings=scenario_bindings, events={})
    nodes = build_graph(parse_bindings(scenario_bindings))
    return DataModel(options, nodes, fake_transport, MagicMock(spec=ErrorReporter))


def search_box(value="lamp"):
    return Element.from_selector("input#datalist_search", value=value)


class CascadeRecorder:
    """Cascade double that counts runs and can be held open."""

    def __init__(self):
        self.started = 0
        self.finished = 0
        self.gate = None

    async def __call__(self):
        self.started += 1
        if self.gate is not None:
            await self.gate.wait()
        self.finished += 1


@pytest.mark.unit
def test_event_binding_parse():
    """Test event keys split into type and selector."""
    binding = EventBinding.parse("keypress input#datalist_search", lambda e: None)
    assert binding.event_type == "keypress"
    assert binding.selector == "input#datalist_search"


@pytest.mark.unit
def test_event_binding_parse_requires_selector():
    with pytest.raises(ValueError):
        EventBinding.parse("click", lambda e: None)


@pytest.mark.unit
def test_event_binding_accepts():
    """Test bindings match on event type and target selector."""
    binding = EventBinding.parse("click .datalist_pages", lambda e: None)
    page = Element.from_selector("button#page_2.datalist_pages")

    assert binding.accepts(DomEvent("click", page))
    assert not binding.accepts(DomEvent("keypress", page))
    assert not binding.accepts(DomEvent("click", search_box()))


@pytest.mark.unit
def test_register_events_records_owner(model, fake_transport):
    manager = EventBindingManager(model, CascadeRecorder(), MagicMock(spec=ErrorReporter))
    owner = model.nodes[0]

    added = manager.register_events(default_events(), owner=owner)

    assert len(added) == 4
    assert all(b.owner == "root" for b in added)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_non_qualifying_event_ignored(model):
    """Test an extractor returning None triggers nothing."""
    cascade = CascadeRecorder()
    manager = EventBindingManager(model, cascade, MagicMock(spec=ErrorReporter))
    manager.register_events(default_events())

    task = manager.dispatch(DomEvent("keypress", search_box(), key_code=65))

    assert task is None
    assert "datalist_search" not in model.query
    assert cascade.started == 0


@pytest.mark.unit
@pytest.mark.asyncio
async def test_qualifying_event_updates_query_and_reloads(model):
    """Test Enter in the search box merges the value and runs the cascade."""
    cascade = CascadeRecorder()
    manager = EventBindingManager(model, cascade, MagicMock(spec=ErrorReporter))
    manager.register_events(default_events())

    task = manager.dispatch(DomEvent("keypress", search_box("desk"), key_code=ENTER_KEY))
    await task

    assert model.query["datalist_search"] == "desk"
    assert cascade.finished == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_checkbox_false_still_qualifies(model):
    """Test a falsy but present value is merged."""
    cascade = CascadeRecorder()
    manager = EventBindingManager(model, cascade, MagicMock(spec=ErrorReporter))
    manager.register_events(default_events())
    checkbox = Element.from_selector("input#in_stock.datalist_filters", checked=False)

    await manager.dispatch(DomEvent("click", checkbox))

    assert model.query["in_stock"] is False
    assert cascade.finished == 1


@pytest.mark.unit
@pytest.mark.asyncio
async def test_newer_event_supersedes_inflight_cascade(model):
    """Test only the latest cascade runs to completion."""
    cascade = CascadeRecorder()
    cascade.gate = asyncio.Event()
    manager = EventBindingManager(model, cascade, MagicMock(spec=ErrorReporter))
    manager.register_events(default_events())

    first = manager.dispatch(DomEvent("keypress", search_box("a"), key_code=ENTER_KEY))
    await asyncio.sleep(0)
    second = manager.dispatch(DomEvent("keypress", search_box("ab"), key_code=ENTER_KEY))
    cascade.gate.set()
    await manager.wait()

    assert first.cancelled()
    assert second.done() and not second.cancelled()
    assert cascade.finished == 1
    assert model.query["datalist_search"] == "ab"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_target_without_id_reported(model):
    """Test qualifying events from anonymous targets are ignored."""
    reporter = MagicMock(spec=ErrorReporter)
    cascade = CascadeRecorder()
    manager = EventBindingManager(model, cascade, reporter)
    manager.register_events({"click .datalist_pages": lambda e: e.target.value})
    anonymous = Element(selector="button.datalist_pages", tag="button", classes=("datalist_pages",), value=3)

    assert manager.dispatch(DomEvent("click", anonymous)) is None
    reporter.report.assert_called_once()
    assert cascade.started == 0


@pytest.mark.unit
@pytest.mark.asyncio
async def test_cancel_stops_inflight(model):
    cascade = CascadeRecorder()
    cascade.gate = asyncio.Event()
    manager = EventBindingManager(model, cascade, MagicMock(spec=ErrorReporter))
    manager.register_events(default_events())

    task = manager.dispatch(DomEvent("keypress", search_box(), key_code=ENTER_KEY))
    await asyncio.sleep(0)
    manager.cancel()
    await asyncio.sleep(0)

    assert task.cancelled()
    assert manager.inflight is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_failed_cascade_reported(model):
    """Test an exception inside the cascade reaches the reporter."""
    reporter = MagicMock(spec=ErrorReporter)
    failure = RuntimeError("render failed")

    async def failing_cascade():
        raise failure

    manager = EventBindingManager(model, failing_cascade, reporter)
    manager.register_events(default_events())

    task = manager.dispatch(DomEvent("keypress", search_box(), key_code=ENTER_KEY))
    with pytest.raises(RuntimeError):
        await task
    await asyncio.sleep(0)

    reporter.report_error.assert_called_once_with(failure)


@pytest.mark.unit
@pytest.mark.asyncio
async def test_cancelled_cascade_not_reported(model):
    reporter = MagicMock(spec=ErrorReporter)
    cascade = CascadeRecorder()
    cascade.gate = asyncio.Event()
    manager = EventBindingManager(model, cascade, reporter)
    manager.register_events(default_events())

    manager.dispatch(DomEvent("keypress", search_box(), key_code=ENTER_KEY))
    await asyncio.sleep(0)
    manager.cancel()
    await asyncio.sleep(0)
    await asyncio.sleep(0)

    reporter.report_error.assert_not_called()
