"""Sample documents and a deterministic structured-data client for tests."""

from __future__ import annotations

import json
from io import BytesIO
from typing import Any, Sequence

from docx import Document
from reportlab.lib.pagesizes import LETTER
from reportlab.pdfgen import canvas

JANE_DOE_TEXT = "Jane Doe\njane@x.com\nSoftware Engineer at Acme\n- Built X\n- Led Y"

JANE_DOE_PAYLOAD: dict[str, Any] = {
    "contact_info": {
        "name": "Jane Doe",
        "email": "jane@x.com",
        "phone": "",
        "linkedin": "",
        "github": "",
    },
    "summary": "",
    "experience": [
        {
            "job_title": "Software Engineer",
            "company": "Acme",
            "location": "",
            "start_date": "",
            "end_date": "",
            "responsibilities": ["Built X", "Led Y"],
        }
    ],
    "education": [],
    "projects": [],
    "skills": "",
    "certifications": [],
}


def make_pdf_bytes(lines: Sequence[str]) -> bytes:
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=LETTER, invariant=1)
    y = 720
    for line in lines:
        pdf.drawString(72, y, line)
        y -= 16
    pdf.showPage()
    pdf.save()
    return buffer.getvalue()


def make_docx_bytes(paragraphs: Sequence[str], table_rows: Sequence[Sequence[str]] = ()) -> bytes:
    document = Document()
    for paragraph in paragraphs:
        document.add_paragraph(paragraph)
    if table_rows:
        table = document.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for row_index, row in enumerate(table_rows):
            for col_index, value in enumerate(row):
                table.cell(row_index, col_index).text = value
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


class StubStructuredClient:
    """Returns a canned answer and remembers what it was asked."""

    def __init__(self, response: str | dict[str, Any]):
        self.response = response if isinstance(response, str) else json.dumps(response)
        self.calls: list[Sequence[Any]] = []

    def complete_json(self, messages):
        self.calls.append(list(messages))
        return self.response


class FailingStructuredClient:
    def __init__(self, exc: Exception | None = None):
        self.exc = exc or ConnectionError("upstream unreachable")
        self.calls = 0

    def complete_json(self, messages):
        self.calls += 1
        raise self.exc
