"""Journal entry endpoints."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, HTTPException, Query

from src.devjournal.exceptions import InvalidRequestError
from src.journal import UNSET, JournalRepository

from ..dependencies import get_current_owner, get_journal_repository, serialize_entry
from ..schemas import EntryCreateRequest, EntryResponse, EntryUpdateRequest, HealthResponse

logger = logging.getLogger(__name__)


def register_entry_routes(app: FastAPI) -> None:
    """Register health and journal entry CRUD endpoints."""

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        """Simple health check endpoint."""
        return HealthResponse(status="ok")

    @app.get("/api/entries", response_model=List[EntryResponse])
    async def list_entries(
        q: Optional[str] = None,
        category: Optional[str] = None,
        tag: Optional[str] = None,
        limit: Optional[int] = Query(default=None, ge=1),
        owner: str = Depends(get_current_owner),
        repo: JournalRepository = Depends(get_journal_repository),
    ) -> List[EntryResponse]:
        """List the caller's entries, newest first."""
        try:
            entries = await asyncio.to_thread(
                repo.list, owner, query=q, category=category, tag=tag, limit=limit
            )
            return [serialize_entry(entry) for entry in entries]
        except InvalidRequestError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to list entries: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to list entries") from exc

    @app.post("/api/entries", response_model=EntryResponse, status_code=201)
    async def create_entry(
        request: EntryCreateRequest,
        owner: str = Depends(get_current_owner),
        repo: JournalRepository = Depends(get_journal_repository),
    ) -> EntryResponse:
        """Create a new entry."""
        try:
            entry = await asyncio.to_thread(
                repo.create,
                owner,
                request.title,
                request.content,
                request.category,
                request.tags or [],
            )
            return serialize_entry(entry)
        except InvalidRequestError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to create entry: %s", exc)
            raise HTTPException(status_code=500, detail="Failed to create entry") from exc

    @app.get("/api/entries/{entry_id}", response_model=EntryResponse)
    async def get_entry(
        entry_id: str,
        owner: str = Depends(get_current_owner),
        repo: JournalRepository = Depends(get_journal_repository),
    ) -> EntryResponse:
        """Fetch a single entry."""
        try:
            entry = await asyncio.to_thread(repo.get, owner, entry_id)
            if not entry:
                raise HTTPException(status_code=404, detail="Entry not found")
            return serialize_entry(entry)
        except HTTPException:
            raise
        except Exception as exc:
            logger.exception("Failed to fetch entry %s: %s", entry_id, exc)
            raise HTTPException(status_code=500, detail="Failed to fetch entry") from exc

    @app.patch("/api/entries/{entry_id}", response_model=EntryResponse)
    async def update_entry(
        entry_id: str,
        request: EntryUpdateRequest,
        owner: str = Depends(get_current_owner),
        repo: JournalRepository = Depends(get_journal_repository),
    ) -> EntryResponse:
        """Update an existing entry."""
        try:
            payload = request.model_dump(exclude_unset=True)
            entry = await asyncio.to_thread(
                repo.update,
                owner,
                entry_id,
                title=payload.get("title"),
                content=payload.get("content"),
                category=payload["category"] if "category" in payload else UNSET,
                tags=payload["tags"] if payload.get("tags") is not None else None,
            )
            if not entry:
                raise HTTPException(status_code=404, detail="Entry not found")
            return serialize_entry(entry)
        except HTTPException:
            raise
        except InvalidRequestError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except Exception as exc:
            logger.exception("Failed to update entry %s: %s", entry_id, exc)
            raise HTTPException(status_code=500, detail="Failed to update entry") from exc

    @app.delete("/api/entries/{entry_id}")
    async def delete_entry(
        entry_id: str,
        owner: str = Depends(get_current_owner),
        repo: JournalRepository = Depends(get_journal_repository),
    ) -> Dict[str, bool]:
        """Delete an entry."""
        try:
            deleted = await asyncio.to_thread(repo.delete, owner, entry_id)
            if not deleted:
                raise HTTPException(status_code=404, detail="Entry not found")
            return {"deleted": True}
        except HTTPException:
            raise
        except Exception as exc:
            logger.exception("Failed to delete entry %s: %s", entry_id, exc)
            raise HTTPException(status_code=500, detail="Failed to delete entry") from exc
