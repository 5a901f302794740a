from __future__ import annotations

import logging
import re
from collections import defaultdict
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Iterator, Mapping

from pydantic import ValidationError
from reportlab.pdfgen import canvas

from resume_pipeline.core.config import settings
from resume_pipeline.core.errors import RenderFailed
from resume_pipeline.schemas.resume import NormalizedResume

from .fonts import FALLBACK_FONTS, FontSet, resolve_fonts
from .layout import DocumentLayout, DrawOp, DrawRule, DrawText, LayoutContext, layout_document

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"


@dataclass(frozen=True)
class RenderedDocument:
    content: bytes
    content_type: str
    filename: str


def slugify(value: str) -> str:
    value = value.strip().lower()
    value = re.sub(r"[^a-z0-9]+", "_", value)
    value = re.sub(r"_+", "_", value).strip("_")
    return value[:60]


def suggested_filename(record: NormalizedResume) -> str:
    slug = slugify(record.contact_info.name)
    return f"{slug}_resume.pdf" if slug else "resume.pdf"


def _as_record(record: NormalizedResume | Mapping[str, Any]) -> NormalizedResume:
    if isinstance(record, NormalizedResume):
        return record
    if not isinstance(record, Mapping):
        raise RenderFailed("Could not generate PDF: resume data must be an object.")
    try:
        return NormalizedResume.model_validate(dict(record))
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ())) or "payload"
        raise RenderFailed(f"Could not generate PDF: invalid value at '{location}'.") from exc


def _iter_text(value: Any) -> Iterator[str]:
    if isinstance(value, str):
        yield value
    elif isinstance(value, Mapping):
        for item in value.values():
            yield from _iter_text(item)
    elif isinstance(value, list):
        for item in value:
            yield from _iter_text(item)


def unencodable_characters(record: NormalizedResume) -> set[str]:
    """Characters the base-14 fonts (cp1252) cannot draw."""
    missing: set[str] = set()
    for text in _iter_text(record.model_dump()):
        for char in text:
            try:
                char.encode("cp1252")
            except UnicodeEncodeError:
                missing.add(char)
    return missing


def _draw(pdf: canvas.Canvas, op: DrawOp) -> None:
    if isinstance(op, DrawRule):
        pdf.setLineWidth(op.width)
        pdf.line(op.x1, op.y, op.x2, op.y)
        return
    pdf.setFont(op.font, op.size)
    if op.align == "right":
        pdf.drawRightString(op.x, op.y, op.text)
    elif op.align == "center":
        pdf.drawCentredString(op.x, op.y, op.text)
    else:
        pdf.drawString(op.x, op.y, op.text)


def encode_pdf(layout: DocumentLayout, ctx: LayoutContext, *, title: str) -> bytes:
    by_page: dict[int, list[DrawOp]] = defaultdict(list)
    for op in layout.ops:
        by_page[op.page].append(op)

    buffer = BytesIO()
    # invariant=1 pins creation date and document id so equal input gives equal bytes.
    pdf = canvas.Canvas(buffer, pagesize=(ctx.geometry.width, ctx.geometry.height), invariant=1)
    pdf.setTitle(title)
    pdf.setCreator("resume-pipeline")
    for page in range(layout.page_count):
        for op in by_page.get(page, ()):
            _draw(pdf, op)
        pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def render(
    record: NormalizedResume | Mapping[str, Any],
    *,
    fonts: FontSet | None = None,
) -> RenderedDocument:
    resume = _as_record(record)
    ctx = LayoutContext(fonts=fonts or resolve_fonts(settings.pdf_font_regular_path, settings.pdf_font_bold_path))
    if ctx.fonts == FALLBACK_FONTS:
        missing = unencodable_characters(resume)
        if missing:
            logger.warning(
                "pdf_font_missing_glyphs fonts=%s count=%s sample=%r",
                ctx.fonts.regular,
                len(missing),
                "".join(sorted(missing)[:10]),
            )
    name = resume.contact_info.name.strip()
    try:
        layout = layout_document(resume, ctx)
        content = encode_pdf(layout, ctx, title=f"{name} - Resume" if name else "Resume")
    except Exception as exc:
        logger.warning("resume_render_failed name_len=%s: %s", len(name), exc, exc_info=True)
        raise RenderFailed("Could not generate PDF.") from exc

    logger.info(
        "resume_rendered pages=%s sections=%s bytes=%s",
        layout.page_count,
        ",".join(layout.section_titles) or "-",
        len(content),
    )
    return RenderedDocument(content=content, content_type=PDF_CONTENT_TYPE, filename=suggested_filename(resume))
