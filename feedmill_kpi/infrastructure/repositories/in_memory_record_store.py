"""
Infrastructure Repository - In-memory record store

Serves snapshot collections of records held in memory. Streams that were not
loaded behave like an unreachable source.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional

from feedmill_kpi.domain.entities.errors import DataSourceUnavailableError
from feedmill_kpi.domain.entities.records import RecordStream
from feedmill_kpi.domain.entities.window import TimeWindow
from feedmill_kpi.domain.repositories.record_store import IRecordStore
from feedmill_kpi.domain.services.aggregation import latest_per_key
from feedmill_kpi.infrastructure.repositories.record_mapper import to_record


class InMemoryRecordStore(IRecordStore):
    """Record store over in-memory snapshot collections."""

    def __init__(self, streams: Optional[Mapping[RecordStream, Iterable[Any]]] = None):
        self._streams: Dict[RecordStream, List[Any]] = {
            stream: list(records) for stream, records in (streams or {}).items()
        }

    @classmethod
    def from_documents(
        cls, documents: Mapping[str, Iterable[Mapping[str, Any]]]
    ) -> "InMemoryRecordStore":
        """Build a store from plain documents keyed by stream (collection) name."""
        streams = {}
        for name, stream_documents in documents.items():
            stream = RecordStream(name)
            streams[stream] = [to_record(stream, document) for document in stream_documents]
        return cls(streams)

    async def fetch(
        self,
        stream: RecordStream,
        time_range: Optional[TimeWindow] = None,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[Any]:
        records = self._records(stream)
        if filters:
            records = [
                record
                for record in records
                if all(getattr(record, key) == value for key, value in filters.items())
            ]
        if stream.time_field is None:
            return list(records)

        time_field = stream.time_field
        if time_range is not None:
            records = [
                record for record in records if time_range.contains(getattr(record, time_field))
            ]
        return sorted(records, key=lambda record: getattr(record, time_field))

    async def fetch_latest(self, stream: RecordStream, key_field: str) -> List[Any]:
        if stream.time_field is None:
            raise ValueError(f"Record stream '{stream.value}' has no time field")
        return latest_per_key(self._records(stream), key_field, stream.time_field)

    def _records(self, stream: RecordStream) -> List[Any]:
        if stream not in self._streams:
            raise DataSourceUnavailableError(stream.value, "stream not loaded")
        return self._streams[stream]
