from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from resume_pipeline.core.errors import UnsupportedMediaType

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class MediaKind(str, Enum):
    PDF = "pdf"
    DOCX = "docx"

    @property
    def suffix(self) -> str:
        return f".{self.value}"


_MEDIA_TYPE_KINDS = {
    PDF_MIME_TYPE: MediaKind.PDF,
    DOCX_MIME_TYPE: MediaKind.DOCX,
    "pdf": MediaKind.PDF,
    "docx": MediaKind.DOCX,
}


def resolve_media_kind(media_type: str | None) -> MediaKind:
    # Content-Type headers may carry parameters, e.g. "application/pdf; charset=binary".
    normalized = (media_type or "").split(";", 1)[0].strip().lower()
    kind = _MEDIA_TYPE_KINDS.get(normalized)
    if kind is None:
        raise UnsupportedMediaType("Unsupported file type. Upload PDF or DOCX.")
    return kind


@dataclass(frozen=True)
class RawDocument:
    content: bytes
    media_type: str
    filename: str = ""
