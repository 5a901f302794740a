from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone

from resume_pipeline.normalize.reconcile import to_normalized_resume
from resume_pipeline.schemas.resume import NormalizedResume

from .connection import SQLiteConnection

logger = logging.getLogger(__name__)

RecordId = str


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ResumeRecordStore:
    def __init__(self, connection: SQLiteConnection):
        self._connection = connection

    def save(self, record: NormalizedResume) -> RecordId:
        record_id = uuid.uuid4().hex
        payload_json = json.dumps(record.model_dump(mode="json"), ensure_ascii=False)
        with self._connection.session() as conn:
            conn.execute(
                """
                INSERT INTO resume_records (record_id, payload_json, created_at)
                VALUES (?, ?, ?)
                """,
                (record_id, payload_json, _utc_now()),
            )
        logger.info("resume_record_saved record_id=%s bytes=%s", record_id, len(payload_json))
        return record_id

    def load(self, record_id: RecordId) -> NormalizedResume | None:
        with self._connection.session() as conn:
            cur = conn.execute(
                "SELECT payload_json FROM resume_records WHERE record_id = ?",
                (record_id,),
            )
            row = cur.fetchone()

        if not row:
            return None
        payload = json.loads(row[0]) if row[0] else {}
        return to_normalized_resume(payload)
