from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from resume_pipeline.ai.types import StructuredDataClient
from resume_pipeline.core.config import settings
from resume_pipeline.core.errors import NormalizationFailed
from resume_pipeline.normalize import normalize
from resume_pipeline.parsing import RawDocument, extract
from resume_pipeline.schemas.resume import NormalizedResume
from resume_pipeline.store import RecordId, ResumeRecordStore

logger = logging.getLogger(__name__)

ClientProvider = Callable[[], StructuredDataClient]


@dataclass(frozen=True)
class ProcessedResume:
    record_id: RecordId
    record: NormalizedResume


def _build_client(provider: ClientProvider) -> StructuredDataClient:
    try:
        return provider()
    except Exception as exc:
        logger.error("resume_ai_client_unavailable: %s", exc)
        raise NormalizationFailed("AI parsing is not available right now.") from exc


def process_upload(
    document: RawDocument,
    *,
    client_provider: ClientProvider,
    store: ResumeRecordStore,
) -> ProcessedResume:
    """Extract, normalize and persist one uploaded résumé.

    Each stage raises its own error type; a failure stops the pipeline before
    anything is written to the store.
    """
    text = extract(document, tmp_dir=settings.upload_tmp_dir)
    record = normalize(text, _build_client(client_provider))
    record_id = store.save(record)
    logger.info("resume_upload_processed record_id=%s file=%s", record_id, document.filename)
    return ProcessedResume(record_id=record_id, record=record)
