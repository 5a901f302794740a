import asyncio
from typing import Any

from fastapi import APIRouter, Body, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.responses import Response

from resume_pipeline.api.deps import get_client_provider, get_record_store
from resume_pipeline.core.config import settings
from resume_pipeline.core.rate_limit import rate_limit
from resume_pipeline.parsing import RawDocument
from resume_pipeline.render import RenderedDocument, render
from resume_pipeline.schemas import ErrorResponse, ResumeUploadResponse, StoredResumeResponse
from resume_pipeline.services.resume_service import ClientProvider, process_upload
from resume_pipeline.store import ResumeRecordStore

router = APIRouter()


def _error_responses(*status_codes: int) -> dict:
    return {code: {"model": ErrorResponse} for code in status_codes}


def _pdf_response(rendered: RenderedDocument) -> Response:
    return Response(
        content=rendered.content,
        media_type=rendered.content_type,
        headers={"Content-Disposition": f'attachment; filename="{rendered.filename}"'},
    )


@router.post(
    "/resumes/upload",
    response_model=ResumeUploadResponse,
    responses=_error_responses(415, 422, 502, 503),
)
@rate_limit()
async def upload_resume(
    request: Request,
    resume: UploadFile | None = File(default=None),
    store: ResumeRecordStore = Depends(get_record_store),
    client_provider: ClientProvider = Depends(get_client_provider),
):
    _ = request
    if resume is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file was uploaded.")

    content = await resume.read(settings.max_upload_bytes + 1)
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="The uploaded file is empty.")
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="File is too large. Maximum size is "
            f"{settings.max_upload_bytes // (1024 * 1024)} MB.",
        )

    document = RawDocument(
        content=content,
        media_type=resume.content_type or "",
        filename=resume.filename or "",
    )
    processed = await asyncio.to_thread(
        process_upload,
        document,
        client_provider=client_provider,
        store=store,
    )
    return ResumeUploadResponse(
        message="Resume parsed and saved successfully.",
        record_id=processed.record_id,
        parsed_data=processed.record,
    )


@router.get("/resumes/{record_id}", response_model=StoredResumeResponse, responses=_error_responses(503))
async def get_resume(record_id: str, store: ResumeRecordStore = Depends(get_record_store)):
    record = await asyncio.to_thread(store.load, record_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resume not found.")
    return StoredResumeResponse(record_id=record_id, record=record)


@router.post("/resumes/render", response_class=Response, responses=_error_responses(422))
@rate_limit(settings.render_rate_limit)
async def render_resume(request: Request, payload: Any = Body(...)):
    _ = request
    rendered = await asyncio.to_thread(render, payload)
    return _pdf_response(rendered)


@router.get("/resumes/{record_id}/pdf", response_class=Response, responses=_error_responses(422, 503))
@rate_limit(settings.render_rate_limit)
async def render_stored_resume(
    request: Request,
    record_id: str,
    store: ResumeRecordStore = Depends(get_record_store),
):
    _ = request
    record = await asyncio.to_thread(store.load, record_id)
    if record is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resume not found.")
    rendered = await asyncio.to_thread(render, record)
    return _pdf_response(rendered)
