from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

logger = logging.getLogger(__name__)

_REGULAR_CANDIDATES = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/TTF/DejaVuSans.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans.ttf",
    "/Library/Fonts/DejaVuSans.ttf",
)
_BOLD_CANDIDATES = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/TTF/DejaVuSans-Bold.ttf",
    "/usr/share/fonts/dejavu/DejaVuSans-Bold.ttf",
    "/Library/Fonts/DejaVuSans-Bold.ttf",
)

PREFERRED_REGULAR = "ResumeSans"
PREFERRED_BOLD = "ResumeSans-Bold"


@dataclass(frozen=True)
class FontSet:
    regular: str
    bold: str


# Standard PDF base-14 fonts; every viewer has them, nothing is embedded.
FALLBACK_FONTS = FontSet(regular="Helvetica", bold="Helvetica-Bold")


def _first_existing(configured: str | None, candidates: tuple[str, ...]) -> str | None:
    if configured:
        return configured
    for path in candidates:
        if os.path.isfile(path):
            return path
    return None


@lru_cache(maxsize=8)
def resolve_fonts(regular_path: str | None = None, bold_path: str | None = None) -> FontSet:
    regular = _first_existing(regular_path, _REGULAR_CANDIDATES)
    bold = _first_existing(bold_path, _BOLD_CANDIDATES)
    if not regular or not bold:
        logger.info("pdf_font_fallback reason=preferred_font_not_found fonts=%s", FALLBACK_FONTS)
        return FALLBACK_FONTS

    try:
        pdfmetrics.registerFont(TTFont(PREFERRED_REGULAR, regular))
        pdfmetrics.registerFont(TTFont(PREFERRED_BOLD, bold))
    except Exception as exc:  # noqa: BLE001 - any font problem degrades to the base fonts
        logger.warning("pdf_font_fallback regular=%s bold=%s: %s", regular, bold, exc)
        return FALLBACK_FONTS
    return FontSet(regular=PREFERRED_REGULAR, bold=PREFERRED_BOLD)
