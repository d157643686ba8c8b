"""
Infrastructure Repository - MongoDB record store

Each record stream is a collection named after the stream. Blocking pymongo
calls run in worker threads; every cursor carries a server-side time limit.
"""

import asyncio
from typing import Any, Callable, Dict, List, Mapping, Optional

import structlog
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import ExecutionTimeout, NetworkTimeout, PyMongoError

from feedmill_kpi.domain.entities.errors import (
    DataSourceTimeoutError,
    DataSourceUnavailableError,
)
from feedmill_kpi.domain.entities.records import RecordStream
from feedmill_kpi.domain.entities.window import TimeWindow
from feedmill_kpi.domain.repositories.record_store import IRecordStore
from feedmill_kpi.infrastructure.database.mongo_database import MongoDatabase
from feedmill_kpi.infrastructure.repositories.record_mapper import to_record

logger = structlog.get_logger(__name__)


class MongoRecordStore(IRecordStore):
    """MongoDB implementation of the record store."""

    def __init__(self, database: MongoDatabase, max_time_ms: int = 10_000):
        """
        Args:
            database: Connected database holding one collection per stream
            max_time_ms: Server-side time limit of every query
        """
        self.database = database
        self.max_time_ms = max_time_ms

    async def fetch(
        self,
        stream: RecordStream,
        time_range: Optional[TimeWindow] = None,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[Any]:
        query: Dict[str, Any] = dict(filters or {})
        if time_range is not None:
            query[self._time_field(stream)] = {
                "$gte": time_range.start,
                "$lt": time_range.end,
            }

        def _find() -> List[Dict[str, Any]]:
            cursor = self.database.get_collection(stream.value).find(query)
            if stream.time_field:
                cursor = cursor.sort(stream.time_field, ASCENDING)
            return list(cursor.max_time_ms(self.max_time_ms))

        documents = await self._execute(stream, _find)
        logger.debug(
            "record_store.fetch", stream=stream.value, documents=len(documents)
        )
        return [to_record(stream, document) for document in documents]

    async def fetch_latest(self, stream: RecordStream, key_field: str) -> List[Any]:
        time_field = self._time_field(stream)
        pipeline = [
            {"$sort": {key_field: ASCENDING, time_field: DESCENDING}},
            {"$group": {"_id": f"${key_field}", "latest": {"$first": "$$ROOT"}}},
            {"$replaceRoot": {"newRoot": "$latest"}},
            {"$sort": {key_field: ASCENDING}},
        ]

        def _aggregate() -> List[Dict[str, Any]]:
            collection = self.database.get_collection(stream.value)
            return list(collection.aggregate(pipeline, maxTimeMS=self.max_time_ms))

        documents = await self._execute(stream, _aggregate)
        return [to_record(stream, document) for document in documents]

    async def _execute(
        self, stream: RecordStream, operation: Callable[[], List[Dict[str, Any]]]
    ) -> List[Dict[str, Any]]:
        try:
            return await asyncio.to_thread(operation)
        except (ExecutionTimeout, NetworkTimeout) as e:
            logger.warning(
                "record_store.query.timeout", stream=stream.value, error=str(e)
            )
            raise DataSourceTimeoutError(stream.value, self.max_time_ms / 1000) from e
        except PyMongoError as e:
            logger.error(
                "record_store.query.failed", stream=stream.value, error=str(e)
            )
            raise DataSourceUnavailableError(stream.value, str(e)) from e

    @staticmethod
    def _time_field(stream: RecordStream) -> str:
        if not stream.time_field:
            raise ValueError(f"Record stream '{stream.value}' has no time field")
        return stream.time_field
