"""
Blogforge
=========

Main entry point for the blog generation batch.

Reads question/answer rows for the given ids, asks the LLM for structured
blog content and writes it to the destination table, then keeps a small
HTTP listener up (health + batch status).

Usage:
    python main.py 10-20          # range
    python main.py 5,7,9          # list
    python main.py 5,7,9 --once   # run the batch and exit

Environment:
    SUPABASE_URL, SUPABASE_ANON_KEY, OPENROUTER_API_KEY: required
    FROM_TABLE / fromTable, TO_TABLE / toTable: required
"""

import argparse
import asyncio
import logging
import sys
from contextlib import asynccontextmanager, suppress
from typing import List, Optional, Sequence

from fastapi import FastAPI
from pydantic import ValidationError

from blogforge.api.routes import router as api_router
from blogforge.core.config import ConfigurationError, Settings, get_settings
from blogforge.data.store import SupabaseRecordStore
from blogforge.llm.content_generator import ContentGenerator
from blogforge.pipeline.id_spec import USAGE, InvalidSpecError, parse_id_spec
from blogforge.pipeline.orchestrator import BatchOrchestrator
from blogforge.pipeline.outcomes import BatchReport

logger = logging.getLogger(__name__)


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_settings() -> Settings:
    """Settings with every required credential present, or ConfigurationError."""
    try:
        settings = get_settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
    settings.require_complete()
    return settings


async def build_orchestrator(settings: Settings) -> BatchOrchestrator:
    store = await SupabaseRecordStore.connect(settings)
    return BatchOrchestrator(settings, store, ContentGenerator(settings))


def _log_task_result(task: asyncio.Task) -> None:
    if task.cancelled():
        logger.warning("Batch task cancelled before completion.")
    elif task.exception() is not None:
        logger.error("Batch task failed: %s", task.exception())


def create_app(
    settings: Settings,
    ids: Optional[List[int]] = None,
    orchestrator: Optional[BatchOrchestrator] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    When `ids` is given, the batch starts in the background as soon as the
    app starts and `/status` reports on it.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting %s v%s", settings.app_name, settings.app_version)
        logger.info("Model: %s", settings.llm_model)

        task = None
        runner = None
        if ids is not None:
            runner = orchestrator or await build_orchestrator(settings)
            task = asyncio.create_task(runner.run(ids, app.state.batch_report))
            task.add_done_callback(_log_task_result)
        app.state.batch_task = task

        yield

        if task is not None and not task.done():
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task
        if runner is not None:
            await runner.store.close()
        logger.info("Shutting down %s.", settings.app_name)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Batch blog generation from question/answer rows",
        lifespan=lifespan,
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.batch_report = BatchReport(ids=list(ids)) if ids is not None else None
    app.include_router(api_router)
    return app


async def run_once(settings: Settings, ids: List[int]) -> BatchReport:
    orchestrator = await build_orchestrator(settings)
    try:
        return await orchestrator.run(ids)
    finally:
        await orchestrator.store.close()


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="blogforge",
        description="Generate blog rows from question/answer rows via LLM",
    )
    parser.add_argument("ids", nargs="+", help=USAGE)
    parser.add_argument("--once", action="store_true", help="Exit after the batch instead of serving")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging()

    try:
        settings = load_settings()
        # "5, 7, 9" arrives as three argv entries
        ids = parse_id_spec("".join(args.ids))
    except (ConfigurationError, InvalidSpecError) as e:
        logger.error("%s", e)
        sys.exit(1)

    if settings.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    logger.info("Processing IDs: %s", ", ".join(str(i) for i in ids))

    if args.once:
        asyncio.run(run_once(settings, ids))
        return 0

    import uvicorn

    uvicorn.run(
        create_app(settings, ids),
        host=settings.api_host,
        port=settings.api_port,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
