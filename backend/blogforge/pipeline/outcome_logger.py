"""
Outcome trail for batch runs.

Appends one JSON line per processed identifier so a run can be audited
after the process is gone.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from threading import Lock
from typing import Any

from .outcomes import RecordOutcome

logger = logging.getLogger(__name__)


class OutcomeLogger:
    """Append-only JSONL logger for record outcomes."""

    def __init__(self, log_path: Path):
        self.log_path = Path(log_path)
        self._lock = Lock()

    def log_outcome(self, run_id: str, outcome: RecordOutcome) -> None:
        """Persist a single outcome as a JSON line."""

        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "run_id": run_id,
            **outcome.to_dict(),
        }

        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            serialized = json.dumps(entry, ensure_ascii=False)
            with self._lock:
                with self.log_path.open("a", encoding="utf-8") as log_file:
                    log_file.write(serialized + "\n")
        except OSError as exc:  # pragma: no cover - a broken trail must not stop the batch
            logger.warning("Failed to persist outcome for ID %s: %s", outcome.record_id, exc)
