"""
Blogforge Pipeline
==================

Id spec parsing and the sequential fetch -> generate -> persist batch.
"""

from .id_spec import InvalidSpecError, parse_id_spec
from .orchestrator import BatchOrchestrator
from .outcome_logger import OutcomeLogger
from .outcomes import BatchReport, OutcomeStatus, RecordOutcome, SkipReason

__all__ = [
    "parse_id_spec",
    "InvalidSpecError",
    "BatchOrchestrator",
    "BatchReport",
    "RecordOutcome",
    "OutcomeStatus",
    "SkipReason",
    "OutcomeLogger",
]
