from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Sequence

import pytest

from feedmill_kpi.application.models import EngineOptions
from feedmill_kpi.domain.entities.records import RecordStream
from feedmill_kpi.domain.entities.window import TimeWindow
from feedmill_kpi.infrastructure.repositories import InMemoryRecordStore

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def utc(day: int, hour: int = 0, minute: int = 0, month: int = 10) -> datetime:
    """Instant in the reference month of the sample data (October 2025)."""
    return datetime(2025, month, day, hour, minute, tzinfo=timezone.utc)


def store_with(**streams: Iterable[Any]) -> InMemoryRecordStore:
    """
    In-memory store with every stream loaded (empty unless given).

    Keyword names are ``RecordStream`` member names in lower case,
    e.g. ``store_with(batches=[...], orders=[...])``.
    """
    loaded: Dict[RecordStream, List[Any]] = {stream: [] for stream in RecordStream}
    for name, records in streams.items():
        loaded[RecordStream[name.upper()]] = list(records)
    return InMemoryRecordStore(loaded)


class FakeCursor:
    def __init__(self, documents: Sequence[Dict[str, Any]]):
        self._documents = list(documents)
        self.max_time: int | None = None

    def sort(self, key: str, direction: int = 1) -> "FakeCursor":
        self._documents.sort(key=lambda doc: doc[key], reverse=direction < 0)
        return self

    def max_time_ms(self, amount: int) -> "FakeCursor":
        self.max_time = amount
        return self

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return iter(self._documents)


class FakeCollection:
    def __init__(self, documents: Iterable[Dict[str, Any]] = ()) -> None:
        self.documents: List[Dict[str, Any]] = list(documents)
        self.last_query: Dict[str, Any] | None = None
        self.last_cursor: FakeCursor | None = None
        self.last_pipeline: List[Dict[str, Any]] | None = None
        self.last_aggregate_options: Dict[str, Any] = {}
        self.created_indexes: List[tuple[Any, ...]] = []
        self.error: Exception | None = None

    def find(self, query: Dict[str, Any]) -> FakeCursor:
        if self.error is not None:
            raise self.error
        self.last_query = query
        self.last_cursor = FakeCursor(
            [doc for doc in self.documents if self._matches(doc, query)]
        )
        return self.last_cursor

    def aggregate(self, pipeline: List[Dict[str, Any]], **kwargs: Any) -> List[Dict[str, Any]]:
        """Evaluate the latest-per-key pipeline ($sort, $group $first, $replaceRoot)."""
        if self.error is not None:
            raise self.error
        self.last_pipeline = pipeline
        self.last_aggregate_options = kwargs

        group = next(stage["$group"] for stage in pipeline if "$group" in stage)
        key = group["_id"].lstrip("$")
        time_field = next(
            field
            for field, direction in pipeline[0]["$sort"].items()
            if direction < 0
        )
        latest: Dict[Any, Dict[str, Any]] = {}
        for doc in self.documents:
            current = latest.get(doc[key])
            if current is None or doc[time_field] > current[time_field]:
                latest[doc[key]] = doc
        return [latest[value] for value in sorted(latest)]

    def create_index(self, keys: Any, name: str | None = None, **kwargs: Any) -> Any:
        if self.error is not None:
            raise self.error
        self.created_indexes.append((keys, name, kwargs))
        return name or keys

    @staticmethod
    def _matches(document: Mapping[str, Any], query: Mapping[str, Any]) -> bool:
        for key, condition in query.items():
            value = document.get(key)
            if isinstance(condition, dict):
                if "$gte" in condition and not value >= condition["$gte"]:
                    return False
                if "$lt" in condition and not value < condition["$lt"]:
                    return False
            elif value != condition:
                return False
        return True


class FakeMongoDatabase:
    def __init__(self) -> None:
        self.collections: Dict[str, FakeCollection] = {}
        self.closed = False

    def get_collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())

    def load(self, name: str, documents: Iterable[Dict[str, Any]]) -> FakeCollection:
        collection = self.get_collection(name)
        collection.documents.extend(documents)
        return collection

    async def create_indexes(self) -> None:
        pass

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def fake_mongo_database() -> FakeMongoDatabase:
    return FakeMongoDatabase()


@pytest.fixture()
def window() -> TimeWindow:
    """The reference week 2025-10-01 .. 2025-10-07 inclusive."""
    return TimeWindow(start=utc(1), end=utc(8))


@pytest.fixture()
def options() -> EngineOptions:
    return EngineOptions()
