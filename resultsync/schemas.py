"""Data contracts for the results listing: view state, URL segments, payloads."""

from __future__ import annotations

import copy
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import ParseError

# dimension id -> selected value (or the "no filter" sentinel)
FilterSelection = dict[str, str]
ResultItem = dict[str, Any]


class ActionKind(str, Enum):
    NEXT = "next"
    PREV = "prev"
    JUMP = "jump"
    RESET = "reset"


class StoreSignal(str, Enum):
    """What the caller must do after a StateStore update."""

    PENDING_RESET = "pending_reset"  # wait for the pagination collaborator to confirm page 1
    FETCH_NOW = "fetch_now"


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    RENDERING = "rendering"


class NavigationHint(str, Enum):
    FOCUS_FIRST_RESULT = "focus_first_result"
    RETURN_FOCUS_TO_FILTER = "return_focus_to_filter"


@dataclass(slots=True)
class FilterState:
    is_initial: bool = True
    data: FilterSelection = field(default_factory=dict)


@dataclass(slots=True)
class PaginationData:
    current: int = 1
    total: int = 0
    last_action: ActionKind | None = None


@dataclass(slots=True)
class PaginationState:
    is_initial: bool = True
    data: PaginationData = field(default_factory=PaginationData)


@dataclass(slots=True)
class ViewState:
    """Filter + pagination selection currently reflected in the UI and the route."""

    filter: FilterState = field(default_factory=FilterState)
    pagination: PaginationState = field(default_factory=PaginationState)

    def snapshot(self) -> ViewState:
        return copy.deepcopy(self)


@dataclass(slots=True)
class UrlSegment:
    name: str
    included: bool
    value: str


@dataclass(slots=True)
class Location:
    host: str
    pathname: str
    search: str = ""
    # scheme://host of the page; empty when the page URL is unknown
    origin: str = ""


@dataclass(slots=True)
class DropdownState:
    id: str
    disabled_options: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> DropdownState:
        if not isinstance(raw, Mapping) or "id" not in raw:
            raise ParseError("dropdown state must be an object with an 'id'")
        options = raw.get("disabledOptions") or []
        if not isinstance(options, list):
            raise ParseError("disabledOptions must be a list")
        return cls(id=str(raw["id"]), disabled_options=[str(o) for o in options])


@dataclass(slots=True)
class ResultPayload:
    results: list[ResultItem]
    total_pages: int
    title: str | None = None
    filter_state: list[DropdownState] | None = None

    @classmethod
    def from_dict(cls, raw: Any) -> ResultPayload:
        """Build a payload from a decoded JSON document (wire keys are camelCase)."""
        if not isinstance(raw, Mapping):
            raise ParseError("payload must be a JSON object")

        results = raw.get("results")
        if not isinstance(results, list):
            raise ParseError("'results' must be a list")
        if any(not isinstance(item, Mapping) for item in results):
            raise ParseError("every item in 'results' must be an object")

        total = raw.get("totalPages")
        if isinstance(total, bool) or not isinstance(total, int) or total < 0:
            raise ParseError("'totalPages' must be a non-negative integer")

        title = raw.get("title")
        if title is not None and not isinstance(title, str):
            raise ParseError("'title' must be a string")

        filter_state = raw.get("filterState")
        if filter_state is not None:
            if not isinstance(filter_state, list):
                raise ParseError("'filterState' must be a list")
            filter_state = [DropdownState.from_dict(d) for d in filter_state]

        return cls(results=list(results), total_pages=total, title=title, filter_state=filter_state)
