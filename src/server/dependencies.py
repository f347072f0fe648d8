"""Dependency helpers shared across FastAPI routes.

Every collaborator is resolved through a FastAPI dependency so tests can swap
it with ``app.dependency_overrides``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

from fastapi import Depends, Header, HTTPException

from src.devjournal.completion_client import CompletionClient, create_completion_client
from src.devjournal.config import Config
from src.devjournal.exceptions import UnauthorizedError
from src.devjournal.identity import IdentityVerifier, JwtIdentityVerifier
from src.journal import JournalEntry, JournalRepository, SummaryGenerator
from src.journal.stats import DashboardStats
from src.resume import LocalBlobStore, ResumeImporter

from .schemas import (
    ActivityPointResponse,
    DashboardResponse,
    EntryResponse,
    RecentEntryResponse,
)


@lru_cache(maxsize=1)
def get_config() -> Config:
    """Load configuration once per process."""
    return Config.from_yaml()


@lru_cache(maxsize=None)
def _journal_repository(config: Config) -> JournalRepository:
    return JournalRepository(db_path=Path(config.storage.db_path))


@lru_cache(maxsize=None)
def _blob_store(config: Config) -> LocalBlobStore:
    storage = config.storage
    return LocalBlobStore(Path(storage.blob_dir), bucket=storage.resume_bucket)


@lru_cache(maxsize=None)
def _completion_client(config: Config) -> CompletionClient:
    return create_completion_client(config)


@lru_cache(maxsize=None)
def _identity_verifier(config: Config) -> IdentityVerifier:
    return JwtIdentityVerifier.from_config(config.auth)


def get_journal_repository(config: Config = Depends(get_config)) -> JournalRepository:
    """JournalRepository shared by every request using ``config``."""
    return _journal_repository(config)


def get_blob_store(config: Config = Depends(get_config)) -> LocalBlobStore:
    """Blob store for uploaded resumes."""
    return _blob_store(config)


def get_completion_client(config: Config = Depends(get_config)) -> CompletionClient:
    """Completion API client for the configured provider."""
    return _completion_client(config)


def get_identity_verifier(config: Config = Depends(get_config)) -> IdentityVerifier:
    """JWT verifier."""
    return _identity_verifier(config)


def get_summary_generator(
    repository: JournalRepository = Depends(get_journal_repository),
    completion_client: CompletionClient = Depends(get_completion_client),
) -> SummaryGenerator:
    return SummaryGenerator(repository, completion_client)


def get_resume_importer(
    repository: JournalRepository = Depends(get_journal_repository),
    blob_store: LocalBlobStore = Depends(get_blob_store),
    completion_client: CompletionClient = Depends(get_completion_client),
    config: Config = Depends(get_config),
) -> ResumeImporter:
    return ResumeImporter(
        repository,
        blob_store,
        completion_client,
        max_chars=config.resume_max_chars,
    )


def get_current_owner(
    authorization: Optional[str] = Header(default=None),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> str:
    """Resolve the caller for the /api routes (401 on failure)."""
    try:
        return verifier.resolve(authorization)
    except UnauthorizedError as exc:
        raise HTTPException(
            status_code=401,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


def serialize_entry(entry: JournalEntry) -> EntryResponse:
    """Convert domain JournalEntry to API response."""
    return EntryResponse(
        id=entry.id,
        title=entry.title,
        content=entry.content,
        category=entry.category,
        tags=list(entry.tags),
        created_at=entry.created_at,
        updated_at=entry.updated_at,
    )


def serialize_dashboard(stats: DashboardStats) -> DashboardResponse:
    """Convert DashboardStats dataclass to API response."""
    return DashboardResponse(
        total_entries=stats.total_entries,
        entries_this_week=stats.entries_this_week,
        current_streak=stats.current_streak,
        category_count=stats.category_count,
        entries_this_month=stats.entries_this_month,
        entries_last_month=stats.entries_last_month,
        weekly_activity=[
            ActivityPointResponse(name=point.name, day=point.day, entries=point.entries)
            for point in stats.weekly_activity
        ],
        recent_entries=[
            RecentEntryResponse(
                id=recent.id,
                title=recent.title,
                excerpt=recent.excerpt,
                category=recent.category,
                created_on=recent.created_on,
            )
            for recent in stats.recent_entries
        ],
    )
