"""
Batch Orchestrator
==================

Processes source ids strictly one after another:

  fetch source row -> generate content (LLM) -> insert destination row

Every identifier ends in exactly one RecordOutcome (saved or skipped).
A failure while handling one id never reaches the next one.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Set

from ..core.config import Settings
from ..data.store import FetchError, PersistError, RecordStore, StoreError
from ..llm.content_generator import ContentGenerator
from ..schemas.records import DestinationRecord
from .outcome_logger import OutcomeLogger
from .outcomes import BatchReport, RecordOutcome, SkipReason

logger = logging.getLogger(__name__)


class BatchOrchestrator:
    """
    Runs the fetch/generate/persist loop over a list of ids.

    Usage:
        orchestrator = BatchOrchestrator(settings, store, generator)
        report = await orchestrator.run([10, 11, 12])
    """

    def __init__(
        self,
        settings: Settings,
        store: RecordStore,
        generator: ContentGenerator,
        outcome_logger: Optional[OutcomeLogger] = None,
    ):
        self.settings = settings
        self.store = store
        self.generator = generator
        if outcome_logger is None and settings.outcome_log_path:
            outcome_logger = OutcomeLogger(settings.outcome_log_path)
        self.outcome_logger = outcome_logger

    async def run(self, ids: Iterable[int], report: Optional[BatchReport] = None) -> BatchReport:
        """
        Process every id in order.

        Args:
            ids: source ids, processed in the given order
            report: optional report to fill in (shared with the status endpoint)

        Returns:
            The BatchReport with one outcome per id
        """
        report = report or BatchReport()
        report.start(list(ids))
        seen: Set[int] = set()

        for record_id in report.ids:
            if self._is_repeat(record_id, seen):
                outcome = RecordOutcome.skipped(
                    record_id, SkipReason.ALREADY_EXISTS, "already processed in this run"
                )
                logger.info("ID %s already processed in this run. Skipping.", record_id)
            else:
                seen.add(record_id)
                try:
                    outcome = await self.process_one(record_id)
                except Exception as e:
                    logger.exception("Unexpected error on entry ID %s", record_id)
                    outcome = RecordOutcome.skipped(record_id, SkipReason.UNEXPECTED_ERROR, str(e))

            report.record(outcome)
            if self.outcome_logger:
                self.outcome_logger.log_outcome(report.run_id, outcome)

        report.finish()
        logger.info(
            "Batch %s complete: %d saved, %d skipped (of %d)",
            report.run_id,
            report.saved,
            report.skipped,
            len(report.ids),
        )
        return report

    def _is_repeat(self, record_id: int, seen: Set[int]) -> bool:
        if self.settings.duplicate_policy == "insert":
            return False
        return record_id in seen

    async def process_one(self, record_id: int) -> RecordOutcome:
        """Fetch, generate and persist a single id."""
        if self.settings.duplicate_policy == "skip_existing":
            try:
                exists = await self.store.destination_has_source(record_id)
            except StoreError as e:
                logger.error("Error checking existing blog for ID %s: %s", record_id, e)
                return RecordOutcome.skipped(record_id, SkipReason.FETCH_ERROR, str(e))
            if exists:
                logger.info("ID %s already has a blog in %s. Skipping.", record_id, self.settings.to_table)
                return RecordOutcome.skipped(record_id, SkipReason.ALREADY_EXISTS)

        # 1) Fetch
        try:
            source = await self.store.fetch_source(record_id)
        except FetchError as e:
            logger.error("Error fetching entry ID %s: %s", record_id, e)
            return RecordOutcome.skipped(record_id, SkipReason.FETCH_ERROR, str(e))

        if source is None:
            logger.warning("No data found for ID %s. Skipping.", record_id)
            return RecordOutcome.skipped(record_id, SkipReason.NOT_FOUND)

        logger.info("Processing entry ID: %s", record_id)

        # 2) Generate
        content = await self.generator.generate(source.prompt_text())
        if content is None:
            logger.warning("No valid AI-generated content. Skipping entry ID %s.", record_id)
            return RecordOutcome.skipped(record_id, SkipReason.GENERATION_FAILED)

        # 3) Persist
        try:
            await self.store.insert_destination(DestinationRecord.build(source, content))
        except PersistError as e:
            logger.error("Error inserting entry ID %s into %s: %s", record_id, self.settings.to_table, e)
            return RecordOutcome.skipped(record_id, SkipReason.PERSIST_ERROR, str(e))

        logger.info("Processed and saved entry ID %s to %s.", record_id, self.settings.to_table)
        return RecordOutcome.saved(record_id)
