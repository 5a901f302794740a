"""
Page layout for rendered résumés.

Layout is computed before any PDF bytes exist: every function here takes a
``LayoutCursor`` (page index plus the top of the free space on that page),
appends draw operations to ``ops`` and returns the advanced cursor. The PDF
encoder later replays the operations page by page.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Literal, Sequence

from reportlab.lib.pagesizes import LETTER
from reportlab.lib.units import inch
from reportlab.pdfbase.pdfmetrics import stringWidth

from resume_pipeline.schemas.resume import (
    EducationEntry,
    ExperienceEntry,
    NormalizedResume,
    ProjectEntry,
)

from .fonts import FALLBACK_FONTS, FontSet

Align = Literal["left", "right", "center"]
Measure = Callable[[str, str, float], float]

BULLET_GLYPH = "•"
BULLET_INDENT = 0.18 * inch
BULLET_TEXT_INDENT = 0.35 * inch
COLUMN_GAP = 0.25 * inch
RIGHT_COLUMN_MAX_RATIO = 0.4
SECTION_GAP = 10.0
ENTRY_GAP = 5.0
RULE_GAP = 6.0
RULE_WIDTH = 0.6


@dataclass(frozen=True)
class PageGeometry:
    width: float = LETTER[0]
    height: float = LETTER[1]
    margin: float = 0.75 * inch

    @property
    def left(self) -> float:
        return self.margin

    @property
    def right(self) -> float:
        return self.width - self.margin

    @property
    def top(self) -> float:
        return self.height - self.margin

    @property
    def bottom(self) -> float:
        return self.margin

    @property
    def content_width(self) -> float:
        return self.right - self.left


@dataclass(frozen=True)
class TextStyle:
    bold: bool
    size: float
    leading: float


NAME_STYLE = TextStyle(bold=True, size=18, leading=22)
CONTACT_STYLE = TextStyle(bold=False, size=9.5, leading=12.5)
SECTION_STYLE = TextStyle(bold=True, size=11.5, leading=14)
ENTRY_STYLE = TextStyle(bold=True, size=10.5, leading=13.5)
BODY_STYLE = TextStyle(bold=False, size=10, leading=13)


@dataclass(frozen=True)
class LayoutCursor:
    page: int
    y: float

    def down(self, dy: float) -> LayoutCursor:
        return replace(self, y=self.y - dy)


@dataclass(frozen=True)
class DrawText:
    page: int
    x: float
    y: float
    text: str
    font: str
    size: float
    align: Align = "left"


@dataclass(frozen=True)
class DrawRule:
    page: int
    x1: float
    x2: float
    y: float
    width: float = RULE_WIDTH


DrawOp = DrawText | DrawRule


@dataclass(frozen=True)
class LayoutContext:
    geometry: PageGeometry = field(default_factory=PageGeometry)
    fonts: FontSet = FALLBACK_FONTS
    measure: Measure = stringWidth

    def font_for(self, style: TextStyle) -> str:
        return self.fonts.bold if style.bold else self.fonts.regular

    def start(self) -> LayoutCursor:
        return LayoutCursor(page=0, y=self.geometry.top)


@dataclass(frozen=True)
class DocumentLayout:
    ops: tuple[DrawOp, ...]
    page_count: int
    section_titles: tuple[str, ...]

    def texts(self) -> list[str]:
        return [op.text for op in self.ops if isinstance(op, DrawText)]


# --------------------------------------------------------------------------
# primitives


def wrap_text(text: str, font: str, size: float, width: float, measure: Measure = stringWidth) -> list[str]:
    words = text.split()
    if not words:
        return []
    lines: list[str] = []
    current = ""
    for word in words:
        # A single word wider than the column is broken by characters.
        while measure(word, font, size) > width and len(word) > 1:
            cut = len(word) - 1
            while cut > 1 and measure(word[:cut], font, size) > width:
                cut -= 1
            if current:
                lines.append(current)
                current = ""
            lines.append(word[:cut])
            word = word[cut:]
        candidate = f"{current} {word}" if current else word
        if not current or measure(candidate, font, size) <= width:
            current = candidate
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


def ensure_space(ctx: LayoutContext, cursor: LayoutCursor, height: float) -> LayoutCursor:
    if cursor.y - height >= ctx.geometry.bottom:
        return cursor
    if cursor.y >= ctx.geometry.top:
        # Already at the top of a page; a taller block cannot fit anywhere.
        return cursor
    return LayoutCursor(page=cursor.page + 1, y=ctx.geometry.top)


def layout_line(
    ctx: LayoutContext,
    ops: list[DrawOp],
    cursor: LayoutCursor,
    text: str,
    style: TextStyle,
    *,
    x: float,
    align: Align = "left",
) -> LayoutCursor:
    cursor = ensure_space(ctx, cursor, style.leading)
    ops.append(
        DrawText(
            page=cursor.page,
            x=x,
            y=cursor.y - style.size,
            text=text,
            font=ctx.font_for(style),
            size=style.size,
            align=align,
        )
    )
    return cursor.down(style.leading)


def layout_paragraph(
    ctx: LayoutContext,
    ops: list[DrawOp],
    cursor: LayoutCursor,
    text: str,
    style: TextStyle = BODY_STYLE,
    *,
    align: Align = "left",
) -> LayoutCursor:
    geometry = ctx.geometry
    x = {"left": geometry.left, "right": geometry.right, "center": geometry.left + geometry.content_width / 2}[align]
    font = ctx.font_for(style)
    for block in text.splitlines():
        for line in wrap_text(block, font, style.size, geometry.content_width, ctx.measure):
            cursor = layout_line(ctx, ops, cursor, line, style, x=x, align=align)
    return cursor


def layout_section_header(ctx: LayoutContext, ops: list[DrawOp], cursor: LayoutCursor, title: str) -> LayoutCursor:
    geometry = ctx.geometry
    # Keep the title together with its rule and the first body line.
    cursor = ensure_space(ctx, cursor, SECTION_STYLE.leading + RULE_GAP + BODY_STYLE.leading)
    cursor = layout_line(ctx, ops, cursor, title.upper(), SECTION_STYLE, x=geometry.left)
    rule_y = cursor.y + SECTION_STYLE.leading - SECTION_STYLE.size - 3
    ops.append(DrawRule(page=cursor.page, x1=geometry.left, x2=geometry.right, y=rule_y))
    return cursor.down(RULE_GAP)


def layout_dated_row(
    ctx: LayoutContext,
    ops: list[DrawOp],
    cursor: LayoutCursor,
    left_text: str,
    right_text: str,
    *,
    left_style: TextStyle = ENTRY_STYLE,
    right_style: TextStyle = BODY_STYLE,
) -> LayoutCursor:
    """Left text and right-aligned text sharing a baseline; both sides wrap."""
    geometry = ctx.geometry
    left_font = ctx.font_for(left_style)
    right_font = ctx.font_for(right_style)

    right_lines = wrap_text(
        right_text, right_font, right_style.size, geometry.content_width * RIGHT_COLUMN_MAX_RATIO, ctx.measure
    )
    right_width = max((ctx.measure(line, right_font, right_style.size) for line in right_lines), default=0.0)
    left_width = geometry.content_width - (right_width + COLUMN_GAP if right_lines else 0.0)
    left_lines = wrap_text(left_text, left_font, left_style.size, left_width, ctx.measure)

    leading = max(left_style.leading, right_style.leading)
    size = max(left_style.size, right_style.size)
    for index in range(max(len(left_lines), len(right_lines))):
        cursor = ensure_space(ctx, cursor, leading)
        baseline = cursor.y - size
        if index < len(left_lines):
            ops.append(
                DrawText(cursor.page, geometry.left, baseline, left_lines[index], left_font, left_style.size)
            )
        if index < len(right_lines):
            ops.append(
                DrawText(
                    cursor.page,
                    geometry.right,
                    baseline,
                    right_lines[index],
                    right_font,
                    right_style.size,
                    align="right",
                )
            )
        cursor = cursor.down(leading)
    return cursor


def layout_bullets(
    ctx: LayoutContext,
    ops: list[DrawOp],
    cursor: LayoutCursor,
    items: Sequence[str],
    style: TextStyle = BODY_STYLE,
) -> LayoutCursor:
    geometry = ctx.geometry
    font = ctx.font_for(style)
    text_width = geometry.content_width - BULLET_TEXT_INDENT
    for item in items:
        lines = wrap_text(item, font, style.size, text_width, ctx.measure)
        for index, line in enumerate(lines):
            cursor = ensure_space(ctx, cursor, style.leading)
            baseline = cursor.y - style.size
            if index == 0:
                ops.append(DrawText(cursor.page, geometry.left + BULLET_INDENT, baseline, BULLET_GLYPH, font, style.size))
            ops.append(DrawText(cursor.page, geometry.left + BULLET_TEXT_INDENT, baseline, line, font, style.size))
            cursor = cursor.down(style.leading)
    return cursor


# --------------------------------------------------------------------------
# sections


def date_range(start: str, end: str) -> str:
    start, end = start.strip(), end.strip()
    if start and end:
        return f"{start} - {end}"
    return start or end


def _has_experience(entry: ExperienceEntry) -> bool:
    fields = (entry.job_title, entry.company, entry.location, entry.start_date, entry.end_date)
    return any(value.strip() for value in fields) or any(item.strip() for item in entry.responsibilities)


def _has_education(entry: EducationEntry) -> bool:
    return any(value.strip() for value in (entry.degree, entry.institution, entry.graduation_date, entry.cgpa))


def _has_project(entry: ProjectEntry) -> bool:
    return bool(entry.name.strip()) or any(item.strip() for item in entry.responsibilities)


def _items(values: Sequence[str]) -> list[str]:
    return [value.strip() for value in values if value and value.strip()]


def layout_header(ctx: LayoutContext, ops: list[DrawOp], cursor: LayoutCursor, record: NormalizedResume) -> LayoutCursor:
    contact = record.contact_info
    if contact.name.strip():
        cursor = layout_paragraph(ctx, ops, cursor, contact.name.strip(), NAME_STYLE, align="center")
    details = [value.strip() for value in (contact.email, contact.phone, contact.linkedin, contact.github) if value.strip()]
    if details:
        cursor = layout_paragraph(ctx, ops, cursor, "  |  ".join(details), CONTACT_STYLE, align="center")
    return cursor


def layout_summary(ctx: LayoutContext, ops: list[DrawOp], cursor: LayoutCursor, record: NormalizedResume) -> LayoutCursor:
    return layout_paragraph(ctx, ops, cursor, record.summary.strip())


def layout_education(ctx: LayoutContext, ops: list[DrawOp], cursor: LayoutCursor, record: NormalizedResume) -> LayoutCursor:
    entries = [entry for entry in record.education if _has_education(entry)]
    for index, entry in enumerate(entries):
        if index:
            cursor = cursor.down(ENTRY_GAP)
        title = entry.degree.strip() or entry.institution.strip()
        cursor = layout_dated_row(ctx, ops, cursor, title, entry.graduation_date.strip())
        institution = entry.institution.strip() if entry.degree.strip() else ""
        cgpa = f"CGPA: {entry.cgpa.strip()}" if entry.cgpa.strip() else ""
        if institution or cgpa:
            cursor = layout_dated_row(ctx, ops, cursor, institution, cgpa, left_style=BODY_STYLE)
    return cursor


def layout_skills(ctx: LayoutContext, ops: list[DrawOp], cursor: LayoutCursor, record: NormalizedResume) -> LayoutCursor:
    return layout_paragraph(ctx, ops, cursor, record.skills.strip())


def layout_experience(ctx: LayoutContext, ops: list[DrawOp], cursor: LayoutCursor, record: NormalizedResume) -> LayoutCursor:
    entries = [entry for entry in record.experience if _has_experience(entry)]
    for index, entry in enumerate(entries):
        if index:
            cursor = cursor.down(ENTRY_GAP)
        job_title, company, location = entry.job_title.strip(), entry.company.strip(), entry.location.strip()
        cursor = layout_dated_row(ctx, ops, cursor, job_title or company, date_range(entry.start_date, entry.end_date))
        secondary = company if job_title else ""
        if secondary or location:
            cursor = layout_dated_row(ctx, ops, cursor, secondary, location, left_style=BODY_STYLE)
        cursor = layout_bullets(ctx, ops, cursor, _items(entry.responsibilities))
    return cursor


def layout_projects(ctx: LayoutContext, ops: list[DrawOp], cursor: LayoutCursor, record: NormalizedResume) -> LayoutCursor:
    entries = [entry for entry in record.projects if _has_project(entry)]
    for index, entry in enumerate(entries):
        if index:
            cursor = cursor.down(ENTRY_GAP)
        if entry.name.strip():
            cursor = layout_paragraph(ctx, ops, cursor, entry.name.strip(), ENTRY_STYLE)
        cursor = layout_bullets(ctx, ops, cursor, _items(entry.responsibilities))
    return cursor


def layout_certifications(
    ctx: LayoutContext, ops: list[DrawOp], cursor: LayoutCursor, record: NormalizedResume
) -> LayoutCursor:
    return layout_bullets(ctx, ops, cursor, _items(record.certifications))


SectionLayout = Callable[[LayoutContext, list[DrawOp], LayoutCursor, NormalizedResume], LayoutCursor]

SECTIONS: tuple[tuple[str, Callable[[NormalizedResume], bool], SectionLayout], ...] = (
    ("Summary", lambda r: bool(r.summary.strip()), layout_summary),
    ("Education", lambda r: any(_has_education(e) for e in r.education), layout_education),
    ("Skills", lambda r: bool(r.skills.strip()), layout_skills),
    ("Experience", lambda r: any(_has_experience(e) for e in r.experience), layout_experience),
    ("Projects", lambda r: any(_has_project(e) for e in r.projects), layout_projects),
    ("Certifications", lambda r: bool(_items(r.certifications)), layout_certifications),
)


def layout_document(record: NormalizedResume, ctx: LayoutContext | None = None) -> DocumentLayout:
    ctx = ctx or LayoutContext()
    ops: list[DrawOp] = []
    cursor = layout_header(ctx, ops, ctx.start(), record)

    titles: list[str] = []
    for title, has_content, layout_body in SECTIONS:
        if not has_content(record):
            continue
        cursor = cursor.down(SECTION_GAP)
        cursor = layout_section_header(ctx, ops, cursor, title)
        cursor = layout_body(ctx, ops, cursor, record)
        titles.append(title.upper())

    page_count = max((op.page for op in ops), default=0) + 1
    return DocumentLayout(ops=tuple(ops), page_count=page_count, section_titles=tuple(titles))
