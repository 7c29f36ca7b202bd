"""Helpers for configuring Unicode-capable fonts in ReportLab PDFs."""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

_FALLBACK_WARNING_EMITTED = False

FONT_CANDIDATES: list[str] = [
    # Linux
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/usr/share/fonts/truetype/noto/NotoSans-Regular.ttf",
    "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
    # macOS
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    # Windows
    r"C:\\Windows\\Fonts\\seguisym.ttf",
    r"C:\\Windows\\Fonts\\arial.ttf",
]


def find_unicode_ttf() -> str | None:
    """Return first available system Unicode font path for PDF generation."""
    for candidate in FONT_CANDIDATES:
        if Path(candidate).exists():
            return candidate
    return None


def register_pdf_font() -> str:
    """Register a Unicode font for ReportLab and return chosen font name."""
    global _FALLBACK_WARNING_EMITTED

    font_path = find_unicode_ttf()
    if font_path:
        font_name = "PosUnicode"
        from reportlab.pdfbase import pdfmetrics
        from reportlab.pdfbase.ttfonts import TTFont

        if font_name not in set(pdfmetrics.getRegisteredFontNames()):
            pdfmetrics.registerFont(TTFont(font_name, font_path))
        return font_name

    if not _FALLBACK_WARNING_EMITTED:
        logger.warning("No Unicode TTF font found; currency symbols may render incorrectly.")
        _FALLBACK_WARNING_EMITTED = True
    return "Helvetica"
