"""Resume upload endpoint.

The uploaded file is stored under the caller's folder in the resumes bucket;
the returned ``filePath`` is what the parse-resume function expects.
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from pathlib import PurePosixPath

from fastapi import Depends, FastAPI, HTTPException, Request

from src.devjournal.config import Config
from src.devjournal.exceptions import StorageError
from src.resume import SUPPORTED_EXTENSIONS, LocalBlobStore

from ..dependencies import get_blob_store, get_config, get_current_owner
from ..schemas import ResumeUploadResponse

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def safe_filename(filename: str) -> str:
    """Strip directories and replace characters that are awkward in object paths."""
    name = PurePosixPath(filename.replace("\\", "/")).name
    return _UNSAFE_CHARS.sub("_", name).strip("._") or "resume"


def register_resume_routes(app: FastAPI) -> None:
    """Register resume upload endpoints."""

    @app.put("/api/resumes/{filename}", response_model=ResumeUploadResponse)
    async def upload_resume(
        filename: str,
        request: Request,
        owner: str = Depends(get_current_owner),
        blob_store: LocalBlobStore = Depends(get_blob_store),
        config: Config = Depends(get_config),
    ) -> ResumeUploadResponse:
        """Store a PDF, DOCX or TXT resume for later parsing."""
        name = safe_filename(filename)
        suffix = PurePosixPath(name).suffix.lower()
        if suffix not in SUPPORTED_EXTENSIONS:
            raise HTTPException(
                status_code=400,
                detail="Please upload a PDF, DOCX or TXT file",
            )

        data = await request.body()
        if not data:
            raise HTTPException(status_code=400, detail="Uploaded file is empty")
        if len(data) > config.storage.max_upload_bytes:
            raise HTTPException(status_code=413, detail="Uploaded file is too large")

        path = f"{owner}/{int(time.time() * 1000)}-{name}"
        try:
            await asyncio.to_thread(blob_store.upload, path, data)
        except StorageError as exc:
            logger.exception("Failed to store resume %s: %s", path, exc)
            raise HTTPException(status_code=500, detail="Failed to store resume") from exc
        return ResumeUploadResponse(file_path=path, size=len(data))
