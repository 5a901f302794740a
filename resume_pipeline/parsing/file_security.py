from __future__ import annotations

from io import BytesIO
from zipfile import BadZipFile, ZipFile

from resume_pipeline.core.errors import ExtractionFailed

from .models import MediaKind

PDF_MAGIC = b"%PDF-"
ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06", b"PK\x07\x08")


def _is_zip_payload(content: bytes) -> bool:
    return any(content.startswith(magic) for magic in ZIP_MAGICS)


def _zip_has_paths(content: bytes, prefixes: tuple[str, ...]) -> bool:
    try:
        with ZipFile(BytesIO(content)) as archive:
            names = archive.namelist()
    except BadZipFile:
        return False
    return any(name.startswith(prefix) for name in names for prefix in prefixes)


def validate_upload_signature(*, kind: MediaKind, content: bytes) -> None:
    if kind is MediaKind.PDF:
        if not content.startswith(PDF_MAGIC):
            raise ExtractionFailed("File signature does not match .pdf content.")
        return

    if kind is MediaKind.DOCX:
        if not _is_zip_payload(content) or not _zip_has_paths(content, ("word/",)):
            raise ExtractionFailed("File signature does not match .docx content.")
        return
