from __future__ import annotations

from dataclasses import dataclass

import fitz  # PyMuPDF

from app.core.logging import configure_logging
from app.services.image_service import CompressionError
from app.services.quality import get_quality_settings

logger = configure_logging()


@dataclass
class PdfCompressionOutcome:
    data: bytes
    page_count: int


class CompressionService:
    """ضغط ملفات PDF باستخدام PyMuPDF مع مستويات جودة متعددة."""

    LEVEL_OPTIONS = {
        "low": dict(garbage=1, use_objstms=1, deflate=False, clean=False),
        "medium": dict(garbage=2, use_objstms=1, deflate=True, deflate_fonts=True, clean=True),
        "high": dict(
            garbage=4,
            use_objstms=1,
            deflate=True,
            deflate_fonts=True,
            deflate_images=True,
            clean=True,
        ),
    }
    SUBSET_FONTS = {"medium", "high"}

    def options_for(self, level: str | None) -> dict:
        return dict(self.LEVEL_OPTIONS[get_quality_settings(level).level])

    def compress(self, data: bytes, level: str | None = "medium") -> PdfCompressionOutcome:
        resolved = get_quality_settings(level).level
        options = self.options_for(resolved)

        try:
            with fitz.open(stream=data, filetype="pdf") as document:
                page_count = document.page_count
                if page_count == 0:
                    raise CompressionError("PDF document has no pages")
                if resolved in self.SUBSET_FONTS:
                    document.subset_fonts()
                logger.info("خيارات ضغط PDF (%s): %s", resolved, options)
                pdf_bytes = document.tobytes(**options)
        except (RuntimeError, ValueError) as exc:
            # FileDataError وأخطاء MuPDF ترث من RuntimeError.
            raise CompressionError("Failed to process PDF") from exc

        return PdfCompressionOutcome(data=pdf_bytes, page_count=page_count)
