from .extract import extract
from .models import DOCX_MIME_TYPE, PDF_MIME_TYPE, MediaKind, RawDocument, resolve_media_kind

__all__ = [
    "extract",
    "RawDocument",
    "MediaKind",
    "resolve_media_kind",
    "PDF_MIME_TYPE",
    "DOCX_MIME_TYPE",
]
