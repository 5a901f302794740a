from __future__ import annotations

import logging
import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Mapping

from resume_pipeline.core.errors import ExtractionFailed

from .codecs import CODECS, TextCodec
from .file_security import validate_upload_signature
from .models import MediaKind, RawDocument, resolve_media_kind

logger = logging.getLogger(__name__)


@contextmanager
def staged_document(content: bytes, *, suffix: str, tmp_dir: str | None = None) -> Iterator[Path]:
    """Write ``content`` to a temp file and remove it when the block exits."""
    if tmp_dir:
        os.makedirs(tmp_dir, exist_ok=True)
    tmp_file = tempfile.NamedTemporaryFile("wb", suffix=suffix, dir=tmp_dir, delete=False)
    tmp_path = Path(tmp_file.name)
    try:
        try:
            tmp_file.write(content)
        finally:
            tmp_file.close()
        yield tmp_path
    finally:
        tmp_path.unlink(missing_ok=True)


def extract(
    document: RawDocument,
    *,
    tmp_dir: str | None = None,
    codecs: Mapping[MediaKind, TextCodec] | None = None,
) -> str:
    kind = resolve_media_kind(document.media_type)
    validate_upload_signature(kind=kind, content=document.content)
    codec = (codecs or CODECS)[kind]

    with staged_document(document.content, suffix=kind.suffix, tmp_dir=tmp_dir) as path:
        try:
            text = codec(path)
        except Exception as exc:
            logger.warning("resume_extract_failed kind=%s file=%s: %s", kind.value, document.filename, exc)
            raise ExtractionFailed(f"Unable to extract text from this {kind.value.upper()} file.") from exc

    if not isinstance(text, str):
        raise ExtractionFailed(f"Unable to extract text from this {kind.value.upper()} file.")
    logger.info("resume_extracted kind=%s chars=%s", kind.value, len(text))
    return text
