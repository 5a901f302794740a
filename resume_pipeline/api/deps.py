from __future__ import annotations

from fastapi import Request

from resume_pipeline.ai.factory import get_ai_client
from resume_pipeline.core.errors import StoreUnavailable
from resume_pipeline.services.resume_service import ClientProvider
from resume_pipeline.store import ResumeRecordStore


def get_record_store(request: Request) -> ResumeRecordStore:
    store = getattr(request.app.state, "record_store", None)
    if store is None:
        raise StoreUnavailable("The resume store is unavailable. Try again later.")
    return store


def get_client_provider() -> ClientProvider:
    return get_ai_client
