"""Mapping of stored documents onto the typed domain records."""

from dataclasses import fields
from typing import Any, Mapping

from feedmill_kpi.domain.entities.records import RecordStream


def to_record(stream: RecordStream, document: Mapping[str, Any]) -> Any:
    """Build the stream's record from a document, ignoring unknown keys (e.g. ``_id``)."""
    record_type = stream.record_type
    return record_type(
        **{field.name: document.get(field.name) for field in fields(record_type)}
    )
