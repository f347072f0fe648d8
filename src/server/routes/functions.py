"""Summary and resume-parse function endpoints.

Both endpoints answer with a JSON body and a permissive CORS header set on
every response, including errors, and convert pipeline exceptions into an
``{"error": message}`` envelope.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Optional

from fastapi import Depends, FastAPI, Header, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from src.devjournal.exceptions import (
    DevJournalError,
    InvalidRequestError,
    NoEntriesError,
)
from src.devjournal.identity import IdentityVerifier
from src.journal import SummaryGenerator
from src.resume import ResumeImporter

from ..dependencies import (
    get_identity_verifier,
    get_resume_importer,
    get_summary_generator,
)
from ..schemas import (
    ErrorResponse,
    ParseResumeRequest,
    ParseResumeResponse,
    SummaryResponse,
)

logger = logging.getLogger(__name__)

FUNCTIONS_PREFIX = "/functions/v1/"
SUMMARY_PATH = f"{FUNCTIONS_PREFIX}generate-summary"
PARSE_RESUME_PATH = f"{FUNCTIONS_PREFIX}parse-resume"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

UNEXPECTED_ERROR = "An unexpected error occurred"

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def json_response(content: Dict[str, Any], status_code: int = 200) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


def error_response(exc: Exception) -> JSONResponse:
    """Render an exception as the JSON error envelope."""
    if isinstance(exc, NoEntriesError):
        return json_response({"error": str(exc)}, status_code=400)
    if isinstance(exc, DevJournalError):
        return json_response({"error": str(exc)}, status_code=500)
    return json_response({"error": UNEXPECTED_ERROR}, status_code=500)


def preflight_response() -> Response:
    return Response(status_code=204, headers=CORS_HEADERS)


def register_function_routes(app: FastAPI) -> None:
    """Register the summary and resume-parse endpoints."""

    @app.options(SUMMARY_PATH, include_in_schema=False)
    async def generate_summary_preflight() -> Response:
        return preflight_response()

    @app.post(SUMMARY_PATH, responses={200: {"model": SummaryResponse}, **ERROR_RESPONSES})
    async def generate_summary(
        authorization: Optional[str] = Header(default=None),
        verifier: IdentityVerifier = Depends(get_identity_verifier),
        generator: SummaryGenerator = Depends(get_summary_generator),
    ) -> JSONResponse:
        """Generate an AI summary of every journal entry owned by the caller."""
        try:
            owner = await asyncio.to_thread(verifier.resolve, authorization)
            summary = await asyncio.to_thread(generator.generate, owner)
            return json_response(summary.model_dump())
        except NoEntriesError as exc:
            logger.info("Summary requested without entries: %s", exc)
            return error_response(exc)
        except Exception as exc:
            logger.exception("Error in generate-summary: %s", exc)
            return error_response(exc)

    @app.options(PARSE_RESUME_PATH, include_in_schema=False)
    async def parse_resume_preflight() -> Response:
        return preflight_response()

    @app.post(PARSE_RESUME_PATH, responses={200: {"model": ParseResumeResponse}, **ERROR_RESPONSES})
    async def parse_resume(
        request: Request,
        authorization: Optional[str] = Header(default=None),
        verifier: IdentityVerifier = Depends(get_identity_verifier),
        importer: ResumeImporter = Depends(get_resume_importer),
    ) -> JSONResponse:
        """Extract journal entries from an uploaded resume and store them."""
        try:
            owner = await asyncio.to_thread(verifier.resolve, authorization)
            body = await _read_parse_request(request)
            created = await asyncio.to_thread(
                importer.import_resume, owner, body.file_path or ""
            )
            payload = ParseResumeResponse(
                message="Resume parsed successfully", entries_created=created
            )
            return json_response(payload.model_dump(by_alias=True))
        except Exception as exc:
            logger.exception("Error in parse-resume: %s", exc)
            return error_response(exc)


async def _read_parse_request(request: Request) -> ParseResumeRequest:
    raw = await request.body()
    if not raw.strip():
        raise InvalidRequestError("File path is required")
    try:
        return ParseResumeRequest.model_validate(json.loads(raw))
    except (json.JSONDecodeError, ValidationError) as exc:
        raise InvalidRequestError("Request body must be a JSON object with filePath") from exc
