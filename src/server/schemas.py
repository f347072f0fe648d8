"""Pydantic schemas for the FastAPI server."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    """Response for health check endpoint."""

    status: str


class ErrorResponse(BaseModel):
    """Error envelope returned by the function endpoints."""

    error: str


class ParseResumeRequest(BaseModel):
    """Request body for the resume-parse endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    file_path: Optional[str] = Field(
        default=None,
        alias="filePath",
        description="Path of a previously uploaded resume inside the resumes bucket",
    )


class ParseResumeResponse(BaseModel):
    """Response body for the resume-parse endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    message: str
    entries_created: int = Field(..., alias="entriesCreated")


class SummaryResponse(BaseModel):
    """AI summary of the caller's journal."""

    overview: str
    insights: List[str]
    achievements: List[str]
    technologies: List[str]
    recommendations: List[str]


class EntryCreateRequest(BaseModel):
    """Request body for creating a journal entry."""

    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    category: Optional[str] = None
    tags: Union[List[str], str, None] = Field(
        default=None,
        description="List of tags or a comma separated string",
    )


class EntryUpdateRequest(BaseModel):
    """Partial update for a journal entry."""

    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    tags: Union[List[str], str, None] = None


class EntryResponse(BaseModel):
    """Serialized journal entry."""

    id: str
    title: str
    content: str
    category: Optional[str]
    tags: List[str]
    created_at: datetime
    updated_at: datetime


class ResumeUploadResponse(BaseModel):
    """Location of an uploaded resume, to be passed to parse-resume."""

    model_config = ConfigDict(populate_by_name=True)

    file_path: str = Field(..., alias="filePath")
    size: int


class ActivityPointResponse(BaseModel):
    name: str
    day: date
    entries: int


class RecentEntryResponse(BaseModel):
    id: str
    title: str
    excerpt: str
    category: Optional[str]
    created_on: date


class DashboardResponse(BaseModel):
    """Dashboard statistics for the caller."""

    total_entries: int
    entries_this_week: int
    current_streak: int
    category_count: int
    entries_this_month: int
    entries_last_month: int
    weekly_activity: List[ActivityPointResponse]
    recent_entries: List[RecentEntryResponse]
