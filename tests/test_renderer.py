import sys
import tempfile
import unittest
from io import BytesIO
from pathlib import Path

from pypdf import PdfReader
from reportlab.pdfbase.pdfmetrics import stringWidth

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_pipeline.core.errors import RenderFailed  # noqa: E402
from resume_pipeline.render import LayoutContext, layout_document, render  # noqa: E402
from resume_pipeline.render.fonts import FALLBACK_FONTS, resolve_fonts  # noqa: E402
from resume_pipeline.render.pdf_renderer import unencodable_characters  # noqa: E402
from resume_pipeline.render.layout import BULLET_GLYPH, DrawText, PageGeometry  # noqa: E402
from resume_pipeline.schemas import NormalizedResume  # noqa: E402

FULL_RECORD = {
    "contact_info": {"name": "Jane Doe", "email": "jane@x.com", "phone": "+1 555 0100"},
    "summary": "Backend engineer who likes boring infrastructure.",
    "experience": [
        {
            "job_title": "Engineer",
            "company": "Acme",
            "location": "Remote",
            "start_date": "2020",
            "end_date": "2023",
            "responsibilities": ["Built X", "Led Y"],
        }
    ],
    "education": [{"degree": "BSc Computer Science", "institution": "MIT", "graduation_date": "2019", "cgpa": "3.9"}],
    "projects": [{"name": "resume-cli", "responsibilities": ["Parses resumes"]}],
    "skills": "Python, SQL, Docker",
    "certifications": ["CKA"],
}


def _layout(payload):
    return layout_document(NormalizedResume.model_validate(payload), LayoutContext())


class RenderTests(unittest.TestCase):
    def test_rendering_is_deterministic(self):
        first = render(FULL_RECORD, fonts=FALLBACK_FONTS)
        second = render(FULL_RECORD, fonts=FALLBACK_FONTS)
        self.assertEqual(first.content, second.content)
        self.assertEqual(first.content_type, "application/pdf")

    def test_empty_record_renders_a_valid_document(self):
        rendered = render({}, fonts=FALLBACK_FONTS)
        self.assertTrue(rendered.content.startswith(b"%PDF"))
        self.assertEqual(rendered.filename, "resume.pdf")
        self.assertEqual(len(PdfReader(BytesIO(rendered.content)).pages), 1)

    def test_filename_is_derived_from_contact_name(self):
        rendered = render(FULL_RECORD, fonts=FALLBACK_FONTS)
        self.assertEqual(rendered.filename, "jane_doe_resume.pdf")

    def test_rendered_pdf_contains_record_text(self):
        rendered = render(FULL_RECORD, fonts=FALLBACK_FONTS)
        text = "\n".join(page.extract_text() or "" for page in PdfReader(BytesIO(rendered.content)).pages)
        for expected in ("Jane Doe", "EXPERIENCE", "Engineer", "Built X", "CGPA: 3.9"):
            self.assertIn(expected, text)

    def test_malformed_input_fails_with_render_error(self):
        bad_payloads = [
            {"experience": "Engineer at Acme"},
            {"experience": [{"job_title": "Engineer", "responsibilities": "Built X"}]},
            {"contact_info": ["Jane Doe"]},
        ]
        for payload in bad_payloads:
            with self.subTest(payload=payload):
                with self.assertRaises(RenderFailed):
                    render(payload, fonts=FALLBACK_FONTS)

        with self.assertRaises(RenderFailed):
            render(["not", "an", "object"], fonts=FALLBACK_FONTS)

    def test_fallback_fonts_warn_about_unencodable_text(self):
        record = {"contact_info": {"name": "Иван Петров 李雷"}, "summary": "Résumé of a café owner"}
        with self.assertLogs("resume_pipeline.render.pdf_renderer", level="WARNING") as logs:
            rendered = render(record, fonts=FALLBACK_FONTS)

        self.assertTrue(rendered.content.startswith(b"%PDF"))
        self.assertTrue(any("pdf_font_missing_glyphs" in line for line in logs.output))
        self.assertEqual(unencodable_characters(NormalizedResume.model_validate({"summary": "Résumé café"})), set())
        self.assertIn("李", unencodable_characters(NormalizedResume.model_validate(record)))

    def test_fallback_fonts_are_quiet_for_latin_text(self):
        with self.assertNoLogs("resume_pipeline.render.pdf_renderer", level="WARNING"):
            render(FULL_RECORD, fonts=FALLBACK_FONTS)

    def test_null_fields_fall_back_to_defaults(self):
        rendered = render({"summary": None, "experience": None}, fonts=FALLBACK_FONTS)
        self.assertTrue(rendered.content.startswith(b"%PDF"))


class LayoutTests(unittest.TestCase):
    def test_experience_only_record(self):
        layout = _layout(
            {
                "experience": [
                    {
                        "job_title": "Engineer",
                        "company": "Acme",
                        "start_date": "2020",
                        "end_date": "2023",
                        "responsibilities": ["Built X", "Led Y"],
                    }
                ]
            }
        )
        texts = layout.texts()

        self.assertIn("Engineer", texts)
        self.assertIn("2020 - 2023", texts)
        self.assertIn("EXPERIENCE", texts)
        self.assertEqual(texts.count(BULLET_GLYPH), 2)
        self.assertEqual(layout.section_titles, ("EXPERIENCE",))
        for absent in ("EDUCATION", "SKILLS", "SUMMARY", "PROJECTS", "CERTIFICATIONS"):
            self.assertNotIn(absent, texts)

    def test_sections_follow_fixed_order(self):
        layout = _layout(FULL_RECORD)
        self.assertEqual(
            layout.section_titles,
            ("SUMMARY", "EDUCATION", "SKILLS", "EXPERIENCE", "PROJECTS", "CERTIFICATIONS"),
        )
        texts = layout.texts()
        positions = [texts.index(title) for title in layout.section_titles]
        self.assertEqual(positions, sorted(positions))

    def test_header_comes_first(self):
        texts = _layout(FULL_RECORD).texts()
        self.assertEqual(texts[0], "Jane Doe")
        self.assertIn("jane@x.com", texts[1])

    def test_empty_entries_draw_nothing(self):
        layout = _layout(
            {
                "experience": [{"job_title": "", "responsibilities": ["", "   "]}],
                "projects": [{"name": "", "responsibilities": []}],
                "certifications": ["", " "],
            }
        )
        self.assertEqual(layout.ops, ())
        self.assertEqual(layout.section_titles, ())
        self.assertEqual(layout.page_count, 1)

    def test_long_title_does_not_overlap_dates(self):
        title = "Principal Distributed Systems Engineer for Large Scale Event Processing Platforms " * 2
        layout = _layout(
            {"experience": [{"job_title": title.strip(), "start_date": "January 2020", "end_date": "Present"}]}
        )
        date_op = next(op for op in layout.ops if isinstance(op, DrawText) and op.text == "January 2020 - Present")
        date_left_edge = date_op.x - stringWidth(date_op.text, date_op.font, date_op.size)

        title_ops = [
            op
            for op in layout.ops
            if isinstance(op, DrawText) and op.align == "left" and op.font == FALLBACK_FONTS.bold and op.text != "EXPERIENCE"
        ]
        self.assertGreater(len(title_ops), 1)
        for op in title_ops:
            if op.y == date_op.y:
                self.assertLess(op.x + stringWidth(op.text, op.font, op.size), date_left_edge)

    def test_overflow_continues_on_next_page_within_margins(self):
        long_line = "Designed and operated a multi-region ingestion service with strict latency budgets. " * 3
        layout = _layout(
            {
                "experience": [
                    {"job_title": f"Role {index}", "responsibilities": [long_line.strip()] * 4}
                    for index in range(12)
                ]
            }
        )
        geometry = PageGeometry()

        self.assertGreater(layout.page_count, 1)
        self.assertEqual({op.page for op in layout.ops}, set(range(layout.page_count)))
        for op in layout.ops:
            self.assertGreaterEqual(op.y, geometry.bottom)
            self.assertLessEqual(op.y, geometry.top)
            if isinstance(op, DrawText) and op.align == "left":
                self.assertLessEqual(op.x + stringWidth(op.text, op.font, op.size), geometry.right + 0.01)


class FontFallbackTests(unittest.TestCase):
    def setUp(self):
        resolve_fonts.cache_clear()

    def tearDown(self):
        resolve_fonts.cache_clear()

    def test_missing_font_files_fall_back_to_base_fonts(self):
        fonts = resolve_fonts("/nonexistent/Regular.ttf", "/nonexistent/Bold.ttf")
        self.assertEqual(fonts, FALLBACK_FONTS)

    def test_corrupt_font_file_falls_back_to_base_fonts(self):
        with tempfile.TemporaryDirectory() as tmp:
            garbage = Path(tmp) / "broken.ttf"
            garbage.write_bytes(b"definitely not a truetype font")
            fonts = resolve_fonts(str(garbage), str(garbage))
            self.assertEqual(fonts, FALLBACK_FONTS)

            rendered = render(FULL_RECORD, fonts=fonts)
            self.assertTrue(rendered.content.startswith(b"%PDF"))


if __name__ == "__main__":
    unittest.main()
