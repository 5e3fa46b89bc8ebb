"""Static fixture buckets used when there is no backend for the current host.

Fixture layout (JSON):

    {
      "filter":  {"totalPages": 3, "filterState": [{"id": "year", "disabledOptions": []}, ...]},
      "results": [{...}, ...],
      "<segment>": {"filterState": [...]},
      ...
    }

"filter" is the default bucket; every other key is a path segment ("2020", "ipad", ...).
"""

from __future__ import annotations

import importlib.resources as res
import json
import random
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .errors import ParseError
from .schemas import DropdownState, ResultItem, ResultPayload

DEFAULT_BUCKET = "filter"
FIXTURE_FILE = "mock_results.json"


def unique_merge(first: Iterable[str], second: Iterable[str]) -> list[str]:
    """Order-preserving union without duplicates."""
    out: list[str] = []
    seen = set()
    for item in [*first, *second]:
        if item not in seen:
            seen.add(item)
            out.append(item)
    return out


def shuffled(items: list[ResultItem], rng: random.Random) -> list[ResultItem]:
    out = list(items)
    rng.shuffle(out)
    return out


@dataclass(slots=True)
class FixtureBucket:
    filter_state: list[DropdownState]
    total_pages: int | None = None


class MockFixture:
    def __init__(self, buckets: Mapping[str, FixtureBucket], results: list[ResultItem]):
        if DEFAULT_BUCKET not in buckets:
            raise ParseError(f"fixture has no default bucket {DEFAULT_BUCKET!r}")
        self.buckets = dict(buckets)
        self.results = list(results)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> MockFixture:
        if not isinstance(raw, Mapping):
            raise ParseError("fixture must be a JSON object")
        results = raw.get("results", [])
        if not isinstance(results, list):
            raise ParseError("fixture 'results' must be a list")
        buckets = {}
        for key, value in raw.items():
            if key == "results":
                continue
            if not isinstance(value, Mapping):
                raise ParseError(f"fixture bucket {key!r} must be an object")
            buckets[key] = FixtureBucket(
                filter_state=[DropdownState.from_dict(d) for d in value.get("filterState", [])],
                total_pages=value.get("totalPages"),
            )
        return cls(buckets, results)

    @classmethod
    def load_default(cls) -> MockFixture:
        text = res.files("resultsync").joinpath("fixtures", FIXTURE_FILE).read_text(encoding="utf-8")
        return cls.from_dict(json.loads(text))

    @property
    def default(self) -> FixtureBucket:
        return self.buckets[DEFAULT_BUCKET]

    def bucket_id(self, segment: str) -> str:
        return segment if segment and segment in self.buckets else DEFAULT_BUCKET

    def synthesize(self, url_path: str, rng: random.Random) -> ResultPayload:
        """
        Fake a backend answer for an encoded listing path.

        Several segments: dropdowns are merged pointwise by position, disabled options
        unioned across the matched buckets, page count from the default bucket.
        One segment: that bucket's dropdowns as they are.
        """
        params = url_path.split("/")
        total = self.default.total_pages or 0

        if len(params) > 1:
            merged: list[DropdownState] = []
            for param in params:
                for idx, dropdown in enumerate(self.buckets[self.bucket_id(param)].filter_state):
                    prev = merged[idx].disabled_options if idx < len(merged) else []
                    options = unique_merge(dropdown.disabled_options, prev)
                    state = DropdownState(id=dropdown.id, disabled_options=options)
                    if idx < len(merged):
                        merged[idx] = state
                    else:
                        merged.append(state)
            filter_state = merged
        else:
            bucket = self.buckets[self.bucket_id(params[0])]
            filter_state = [DropdownState(d.id, list(d.disabled_options)) for d in bucket.filter_state]

        return ResultPayload(
            results=shuffled(self.results, rng),
            total_pages=total,
            filter_state=filter_state,
        )
