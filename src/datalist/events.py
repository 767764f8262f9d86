"""Event wiring - UI interactions that change the query and reload data."""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping

from .binding import BindingNode
from .core import get_logger, ErrorReporter
from .dom import DomEvent, matches
from .model import DataModel
from .options import Extractor

logger = get_logger(__name__)

Cascade = Callable[[], Awaitable[Any]]


@dataclass(frozen=True)
class EventBinding:
    """One ``"<eventType> <selector>"`` registration."""

    event_type: str
    selector: str
    extractor: Extractor
    owner: str | None = None

    @classmethod
    def parse(cls, key: str, extractor: Extractor, owner: str | None = None) -> "EventBinding":
        """
        Raises:
            ValueError: If the key has no selector part
        """
        parts = key.strip().split(None, 1)
        if len(parts) != 2:
            raise ValueError(f"Event key {key!r} must look like '<eventType> <selector>'")
        return cls(event_type=parts[0], selector=parts[1].strip(), extractor=extractor, owner=owner)

    def accepts(self, event: DomEvent) -> bool:
        return event.type == self.event_type and matches(event.target, self.selector)


class EventBindingManager:
    """
    Turns qualifying UI events into reload cascades.

    At most one cascade is in flight; a newer qualifying event cancels the
    older one.
    """

    def __init__(self, model: DataModel, cascade: Cascade, reporter: ErrorReporter) -> None:
        self.model = model
        self.cascade = cascade
        self.reporter = reporter
        self.bindings: list[EventBinding] = []
        self._inflight: asyncio.Task | None = None

    def register_events(
        self,
        event_specs: Mapping[str, Extractor],
        owner: BindingNode | None = None,
    ) -> list[EventBinding]:
        """
        Register extractors keyed by ``"<eventType> <selector>"``.

        Args:
            event_specs: Event key -> extractor returning a value or None
            owner: Node whose view the events belong to

        Returns:
            The new registrations
        """
        owner_template = owner.template if owner else None
        added = [
            EventBinding.parse(key, extractor, owner=owner_template)
            for key, extractor in event_specs.items()
        ]
        self.bindings.extend(added)
        logger.debug("events_registered", count=len(added), owner=owner_template)
        return added

    def dispatch(self, event: DomEvent) -> asyncio.Task | None:
        """
        Deliver a DOM event. Must be called from a running event loop.

        Returns:
            The cascade task if the event qualified, otherwise None
        """
        qualified = False

        for binding in self.bindings:
            if not binding.accepts(event):
                continue

            value = binding.extractor(event)
            if value is None:
                continue

            target_id = event.target.id
            if not target_id:
                self.reporter.report(
                    f"Event target for '{binding.event_type} {binding.selector}' has no id; ignored"
                )
                continue

            self.model.update_query(target_id, value)
            qualified = True

        if not qualified:
            return None

        return self._start_cascade()

    def _start_cascade(self) -> asyncio.Task:
        if self._inflight is not None and not self._inflight.done():
            logger.info("cascade_superseded")
            self._inflight.cancel()

        self._inflight = asyncio.get_running_loop().create_task(self.cascade())
        self._inflight.add_done_callback(self._cascade_done)
        return self._inflight

    def _cascade_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        error = task.exception()
        if error is None:
            return
        logger.error("cascade_failed", error=str(error), kind=type(error).__name__)
        self.reporter.report_error(error)

    @property
    def inflight(self) -> asyncio.Task | None:
        return self._inflight

    async def wait(self) -> None:
        """Wait for the current cascade, if any, to finish or be cancelled."""
        task = self._inflight
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    def cancel(self) -> None:
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self._inflight = None


__all__ = ["EventBinding", "EventBindingManager", "Cascade"]
