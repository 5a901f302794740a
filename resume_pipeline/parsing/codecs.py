from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable

from docx import Document
from pypdf import PdfReader

from .models import MediaKind

# pypdf logs a warning for every malformed object it recovers from.
logging.getLogger("pypdf").setLevel(logging.ERROR)

_CID_RE = re.compile(r"\(cid:\d+\)")

TextCodec = Callable[[Path], str]


def pdf_to_text(file_path: Path) -> str:
    reader = PdfReader(str(file_path))
    text_parts: list[str] = []
    for page in reader.pages:
        page_text = (page.extract_text() or "").strip()
        if page_text:
            text_parts.append(page_text)
    return _CID_RE.sub("", "\n".join(text_parts))


def docx_to_text(file_path: Path) -> str:
    document = Document(str(file_path))
    lines = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text and cell.text.strip()]
            if cells:
                lines.append(" | ".join(cells))
    return "\n".join(lines)


CODECS: dict[MediaKind, TextCodec] = {
    MediaKind.PDF: pdf_to_text,
    MediaKind.DOCX: docx_to_text,
}
