"""
Record Store Interface

Read-only port over the plant-floor record streams. Implementations decide
how queries execute; the calculators only rely on the semantics below.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

from feedmill_kpi.domain.entities.records import RecordStream
from feedmill_kpi.domain.entities.window import TimeWindow


class IRecordStore(ABC):
    """Interface for record store implementations."""

    @abstractmethod
    async def fetch(
        self,
        stream: RecordStream,
        time_range: Optional[TimeWindow] = None,
        filters: Optional[Mapping[str, Any]] = None,
    ) -> List[Any]:
        """
        Fetch the records of a stream.

        Args:
            stream: Record stream to read
            time_range: Keep records whose stream time field lies in
                ``[start, end)``; ``None`` reads the whole stream
            filters: Attribute equality filters

        Returns:
            Typed records of the stream, ascending by its time field

        Raises:
            DataSourceUnavailableError: When the stream cannot be read
            DataSourceTimeoutError: When the store gives up on the query
        """
        pass

    @abstractmethod
    async def fetch_latest(self, stream: RecordStream, key_field: str) -> List[Any]:
        """
        Fetch the most recent record per key value.

        Args:
            stream: Timestamped record stream to read
            key_field: Attribute grouping the records (e.g. ``silo_id``)

        Returns:
            One record per key value: the one with the maximum time field

        Raises:
            DataSourceUnavailableError: When the stream cannot be read
            DataSourceTimeoutError: When the store gives up on the query
        """
        pass
