"""
Domain Entities - Plant-floor records

Immutable facts ingested from the plant systems. The engine only reads them.
Each record type belongs to exactly one record stream; the stream also names
the attribute used for time-range predicates.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, Optional, Type


class RecordStream(str, Enum):
    """Logical tables the engine reads from."""

    BATCHES = "batches"
    BATCH_WEIGHMENTS = "batch_weighments"
    ENERGY_READINGS = "energy_meters_15min"
    PROCESS_SAMPLES = "process_signals_5min"
    LINE_STATES = "line_states_5min"
    ORDERS = "orders"
    QUALITY_RESULTS = "quality_results"
    SILOS = "silos"
    SILO_LEVELS = "silo_levels_15min"
    SILO_EVENTS = "silo_events"
    DOWNTIME_EVENTS = "downtime_events"
    BAGGING_RUNS = "bagging"

    @property
    def time_field(self) -> Optional[str]:
        return STREAM_TIME_FIELDS.get(self)

    @property
    def record_type(self) -> Type:
        return STREAM_RECORD_TYPES[self]


class LineState(str, Enum):
    RUN = "RUN"
    STOP = "STOP"


class Disposition(str, Enum):
    ACCEPT = "ACCEPT"
    HOLD = "HOLD"
    REJECT = "REJECT"


class SiloEventType(str, Enum):
    LOW_LEVEL = "LOW_LEVEL"
    CHANGEOVER = "CHANGEOVER"


@dataclass(frozen=True, slots=True)
class Batch:
    """One production run."""

    batch_id: str
    line: str
    product_code: str
    start_time: datetime
    batch_size_set_kg: Optional[float] = None
    batch_size_actual_kg: Optional[float] = None


@dataclass(frozen=True, slots=True)
class BatchWeighment:
    """One ingredient addition to a batch."""

    batch_id: str
    ingredient_code: str
    weigh_time: datetime
    target_kg: Optional[float] = None
    actual_kg: Optional[float] = None


@dataclass(frozen=True, slots=True)
class EnergyReading:
    meter_id: str
    timestamp: datetime
    kwh: Optional[float] = None
    kw: Optional[float] = None


@dataclass(frozen=True, slots=True)
class ProcessSample:
    """Conditioner signals sampled every five minutes."""

    timestamp: datetime
    line: str
    steam_flow_kgph: Optional[float] = None
    cond_temp_sp_c: Optional[float] = None
    cond_temp_pv_c: Optional[float] = None


@dataclass(frozen=True, slots=True)
class LineStateSample:
    line: str
    timestamp: datetime
    state: str


@dataclass(frozen=True, slots=True)
class Order:
    """Scheduled production window of a line."""

    line: str
    start_time: datetime
    end_time: datetime


@dataclass(frozen=True, slots=True)
class QualityResult:
    timestamp: datetime
    disposition: str


@dataclass(frozen=True, slots=True)
class Silo:
    silo_id: str
    material_code: str


@dataclass(frozen=True, slots=True)
class SiloLevelSample:
    silo_id: str
    timestamp: datetime
    inventory_t: Optional[float] = None
    level_pct: Optional[float] = None


@dataclass(frozen=True, slots=True)
class SiloEvent:
    timestamp: datetime
    event_type: str


@dataclass(frozen=True, slots=True)
class DowntimeEvent:
    reason_code: str
    start_time: datetime
    end_time: datetime


@dataclass(frozen=True, slots=True)
class BaggingRun:
    start_time: datetime
    end_time: datetime
    bag_count: Optional[int] = None
    rework_bags: Optional[int] = None
    avg_bag_weight_kg: Optional[float] = None


STREAM_TIME_FIELDS: Dict[RecordStream, str] = {
    RecordStream.BATCHES: "start_time",
    RecordStream.BATCH_WEIGHMENTS: "weigh_time",
    RecordStream.ENERGY_READINGS: "timestamp",
    RecordStream.PROCESS_SAMPLES: "timestamp",
    RecordStream.LINE_STATES: "timestamp",
    RecordStream.ORDERS: "start_time",
    RecordStream.QUALITY_RESULTS: "timestamp",
    RecordStream.SILO_LEVELS: "timestamp",
    RecordStream.SILO_EVENTS: "timestamp",
    RecordStream.DOWNTIME_EVENTS: "start_time",
    RecordStream.BAGGING_RUNS: "start_time",
}

STREAM_RECORD_TYPES: Dict[RecordStream, Type] = {
    RecordStream.BATCHES: Batch,
    RecordStream.BATCH_WEIGHMENTS: BatchWeighment,
    RecordStream.ENERGY_READINGS: EnergyReading,
    RecordStream.PROCESS_SAMPLES: ProcessSample,
    RecordStream.LINE_STATES: LineStateSample,
    RecordStream.ORDERS: Order,
    RecordStream.QUALITY_RESULTS: QualityResult,
    RecordStream.SILOS: Silo,
    RecordStream.SILO_LEVELS: SiloLevelSample,
    RecordStream.SILO_EVENTS: SiloEvent,
    RecordStream.DOWNTIME_EVENTS: DowntimeEvent,
    RecordStream.BAGGING_RUNS: BaggingRun,
}
