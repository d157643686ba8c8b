"""Outcome structures of a dashboard computation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from feedmill_kpi.domain.entities.window import TimeWindow


class SectionStatus(str, Enum):
    OK = "ok"
    ERROR = "error"


@dataclass(frozen=True)
class SectionOutcome:
    """Result of one calculator: its record, or the reason it failed."""

    name: str
    status: SectionStatus
    result: Any = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is SectionStatus.OK


@dataclass(frozen=True)
class DashboardReport:
    window: TimeWindow
    sections: Dict[str, SectionOutcome] = field(default_factory=dict)
