from __future__ import annotations

from pydantic import BaseModel, Field

from .resume import NormalizedResume


class ResumeUploadResponse(BaseModel):
    message: str
    record_id: str
    parsed_data: NormalizedResume


class StoredResumeResponse(BaseModel):
    record_id: str
    record: NormalizedResume


class ErrorResponse(BaseModel):
    error: str = Field(description="Stable machine-readable error code.")
    detail: str
