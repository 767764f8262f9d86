"""Widget options and the default list configuration."""

from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .dom import DomEvent

Extractor = Callable[[DomEvent], Any]

# Structural option keys that never travel as query parameters
RESERVED_KEYS = (
    "templateUrl",
    "serverUrl",
    "disabled",
    "bindings",
    "bindingObjects",
    "events",
    "templateId",
)

DEFAULT_BINDINGS: dict[str, str] = {
    "div#container": "{binding template=datalist_products}",
    "select#datalist_sort_by": "{binding template=datalist_sort_by; parent_template=datalist_products; data=sortbys}",
    "div#datalist_filters": "{binding template=datalist_filters; parent_template=datalist_products; data_collection=filters}",
    "div#datalist_items": "{binding template=datalist_items; parent_template=datalist_products; data_collection=products}",
    "div#datalist_pages": "{binding template=datalist_pages; parent_template=datalist_products; data=pages}",
}

ENTER_KEY = 13


def search_on_enter(event: DomEvent) -> Any:
    """Submit the search box only when Enter is pressed."""
    if event.key_code != ENTER_KEY:
        return None
    return event.target.value


def checked_state(event: DomEvent) -> Any:
    return event.target.checked


def target_value(event: DomEvent) -> Any:
    return event.target.value


def default_events() -> dict[str, Extractor]:
    return {
        "keypress input#datalist_search": search_on_enter,
        "click .datalist_filters": checked_state,
        "click .datalist_pages": target_value,
        "change select#datalist_sort_by": target_value,
    }


class ListOptions(BaseModel):
    """
    Options for one list instance.

    Known options use the widget's camelCase names as aliases. Any extra
    option is kept and sent to the server as a query parameter.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="allow",
        arbitrary_types_allowed=True,
    )

    server_url: str = Field(alias="serverUrl")
    template_url: str | None = Field(default=None, alias="templateUrl")
    template_id: str | None = Field(default=None, alias="templateId")
    disabled: bool = False
    items_per_page: int = Field(default=10, gt=0, alias="itemsPerPage")
    current_page_number: int = Field(default=1, ge=1, alias="currentPageNumber")
    bindings: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_BINDINGS))
    events: dict[str, Extractor] = Field(default_factory=default_events)

    @field_validator("server_url")
    @classmethod
    def validate_server_url(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("serverUrl cannot be empty")
        return stripped

    @field_validator("events")
    @classmethod
    def validate_event_keys(cls, v: dict[str, Extractor]) -> dict[str, Extractor]:
        for key in v:
            if len(key.split(None, 1)) != 2:
                raise ValueError(f"Event key {key!r} must look like '<eventType> <selector>'")
        return v

    def query_params(self) -> dict[str, Any]:
        """All non-structural options, keyed by their option names."""
        dumped = self.model_dump(by_alias=True, exclude={"bindings", "events"})
        return {
            key: value
            for key, value in dumped.items()
            if key not in RESERVED_KEYS and value is not None
        }


__all__ = [
    "ListOptions",
    "Extractor",
    "RESERVED_KEYS",
    "DEFAULT_BINDINGS",
    "default_events",
    "search_on_enter",
    "checked_state",
    "target_value",
    "ENTER_KEY",
]
