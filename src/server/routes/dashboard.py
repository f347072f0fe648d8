"""Dashboard statistics endpoint."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, HTTPException

from src.journal import JournalRepository, compute_dashboard

from ..dependencies import get_current_owner, get_journal_repository, serialize_dashboard
from ..schemas import DashboardResponse

logger = logging.getLogger(__name__)


def register_dashboard_routes(app: FastAPI) -> None:
    """Register dashboard endpoints."""

    @app.get("/api/dashboard", response_model=DashboardResponse)
    async def get_dashboard(
        owner: str = Depends(get_current_owner),
        repo: JournalRepository = Depends(get_journal_repository),
    ) -> DashboardResponse:
        """Aggregate activity statistics over the caller's entries."""
        try:
            entries = await asyncio.to_thread(repo.list, owner)
            today = datetime.now(timezone.utc).date()
            return serialize_dashboard(compute_dashboard(entries, today))
        except Exception as exc:
            logger.exception("Failed to build dashboard: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to build dashboard") from exc
