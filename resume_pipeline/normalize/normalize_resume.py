from __future__ import annotations

import logging
import time

from pydantic import ValidationError

from resume_pipeline.ai.types import StructuredDataClient
from resume_pipeline.core.errors import NormalizationFailed
from resume_pipeline.schemas.resume import NormalizedResume

from .payload import PayloadParseError, parse_json_object
from .prompt import build_messages
from .reconcile import to_normalized_resume

logger = logging.getLogger(__name__)


def normalize(text: str, client: StructuredDataClient) -> NormalizedResume:
    """Turn extracted résumé text into a schema-closed record.

    The client is called exactly once. Transport failures and answers that
    hold no JSON object raise ``NormalizationFailed``; anything parseable is
    reconciled to the schema rather than rejected.
    """
    messages = build_messages(text)
    started = time.perf_counter()
    try:
        raw = client.complete_json(messages)
    except Exception as exc:
        logger.warning("resume_normalize_llm_failed prompt_len=%s: %s", len(messages[-1].content), exc)
        raise NormalizationFailed("AI parsing failed. The resume could not be analyzed.") from exc
    latency_ms = int((time.perf_counter() - started) * 1000)

    try:
        payload = parse_json_object(raw)
    except PayloadParseError as exc:
        logger.warning(
            "resume_normalize_unparseable latency_ms=%s response_len=%s: %s",
            latency_ms,
            len(raw or ""),
            exc,
        )
        raise NormalizationFailed("AI parsing failed. The response was not valid structured data.") from exc

    try:
        record = to_normalized_resume(payload)
    except ValidationError as exc:
        logger.warning("resume_normalize_invalid_schema latency_ms=%s: %s", latency_ms, exc)
        raise NormalizationFailed("AI parsing failed. The response did not match the resume schema.") from exc

    logger.info(
        "resume_normalized latency_ms=%s experience=%s education=%s projects=%s",
        latency_ms,
        len(record.experience),
        len(record.education),
        len(record.projects),
    )
    return record
