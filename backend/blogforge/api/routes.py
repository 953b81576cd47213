"""
Blogforge API Routes
====================

The listener exists to keep the process up after the batch; it only
reports on it.

Endpoints:
  - GET /health
  - GET /status  (live batch report)
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, status

router = APIRouter(tags=["batch"])


@router.get("/health")
async def health(request: Request):
    """Health check endpoint."""
    settings = request.app.state.settings
    return {
        "status": "healthy",
        "version": settings.app_version,
        "model": settings.llm_model,
    }


@router.get("/status")
async def batch_status(request: Request):
    """Progress and per-id outcomes of the current batch."""
    report = getattr(request.app.state, "batch_report", None)
    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No batch attached.")
    return report.summary()
