"""
MongoDB Database - Infrastructure Layer

Connection holder for the plant-floor record collections. The engine only
reads; index creation is an opt-in administrative operation performed at
startup so that the time-range queries stay cheap.
"""

import asyncio
from typing import Iterator, List, Tuple

import pymongo.errors
import structlog
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from feedmill_kpi.domain.entities.records import RecordStream

logger = structlog.get_logger(__name__)

# Extra (collection, key) indexes besides the time field of every stream.
_KEYED_INDEXES: Tuple[Tuple[RecordStream, str], ...] = (
    (RecordStream.ENERGY_READINGS, "meter_id"),
    (RecordStream.LINE_STATES, "line"),
    (RecordStream.BATCHES, "batch_id"),
    (RecordStream.SILO_LEVELS, "silo_id"),
)


class MongoDatabase:
    """MongoDB database client."""

    def __init__(self, mongo_uri: str, db_name: str):
        """
        Initialize the MongoDB database client.

        Args:
            mongo_uri: MongoDB connection URI
            db_name: Name of the database holding the record collections
        """
        self.client: MongoClient = MongoClient(mongo_uri, tz_aware=True)
        self.db: Database = self.client[db_name]

    def get_collection(self, collection_name: str) -> Collection:
        return self.db[collection_name]

    def close(self) -> None:
        """Close the database connection."""
        self.client.close()

    async def create_indexes(self) -> None:
        """
        Ensure the indexes used by the record store queries exist.

        Failures are logged and never raised. When the server cannot be
        reached the remaining indexes are skipped.
        """
        for collection_name, keys, name in self._index_specs():
            try:
                await asyncio.to_thread(
                    self.db[collection_name].create_index, keys, name=name, background=True
                )
            except pymongo.errors.PyMongoError as e:
                logger.warning(
                    "mongo.index.create_failed",
                    collection=collection_name,
                    index=name,
                    error=str(e),
                )
                if isinstance(e, pymongo.errors.ConnectionFailure):
                    return

    @staticmethod
    def _index_specs() -> Iterator[Tuple[str, List[Tuple[str, int]], str]]:
        for stream in RecordStream:
            if stream.time_field:
                yield (
                    stream.value,
                    [(stream.time_field, ASCENDING)],
                    f"{stream.time_field}_idx",
                )

        for stream, key in _KEYED_INDEXES:
            yield (
                stream.value,
                [(key, ASCENDING), (stream.time_field, DESCENDING)],
                f"{key}_{stream.time_field}_idx",
            )
