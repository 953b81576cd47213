"""
Per-record outcomes and the batch report they accumulate into.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, List, Optional


class OutcomeStatus(str, Enum):
    SAVED = "saved"
    SKIPPED = "skipped"


class SkipReason(str, Enum):
    FETCH_ERROR = "fetch_error"
    NOT_FOUND = "not_found"
    GENERATION_FAILED = "generation_failed"
    PERSIST_ERROR = "persist_error"
    ALREADY_EXISTS = "already_exists"
    UNEXPECTED_ERROR = "unexpected_error"


@dataclass(frozen=True)
class RecordOutcome:
    """Terminal state of one identifier."""

    record_id: int
    status: OutcomeStatus
    reason: Optional[SkipReason] = None
    detail: str = ""

    @classmethod
    def saved(cls, record_id: int) -> "RecordOutcome":
        return cls(record_id=record_id, status=OutcomeStatus.SAVED)

    @classmethod
    def skipped(cls, record_id: int, reason: SkipReason, detail: str = "") -> "RecordOutcome":
        return cls(record_id=record_id, status=OutcomeStatus.SKIPPED, reason=reason, detail=detail)

    @property
    def is_saved(self) -> bool:
        return self.status is OutcomeStatus.SAVED

    def to_dict(self) -> dict[str, Any]:
        return {
            "record_id": self.record_id,
            "status": self.status.value,
            "reason": self.reason.value if self.reason else None,
            "detail": self.detail,
        }


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class BatchReport:
    """
    Live view of one batch run.

    The orchestrator appends outcomes as identifiers finish, so a report
    shared with the HTTP listener shows progress while the run is going.
    """

    ids: List[int] = field(default_factory=list)
    run_id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    outcomes: List[RecordOutcome] = field(default_factory=list)
    state: str = "pending"
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None

    def start(self, ids: List[int]) -> None:
        self.ids = list(ids)
        self.state = "running"
        self.started_at = _now()

    def record(self, outcome: RecordOutcome) -> None:
        self.outcomes.append(outcome)

    def finish(self) -> None:
        self.state = "finished"
        self.finished_at = _now()

    @property
    def saved(self) -> int:
        return sum(1 for o in self.outcomes if o.is_saved)

    @property
    def skipped(self) -> int:
        return len(self.outcomes) - self.saved

    def summary(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "state": self.state,
            "total": len(self.ids),
            "processed": len(self.outcomes),
            "saved": self.saved,
            "skipped": self.skipped,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }
