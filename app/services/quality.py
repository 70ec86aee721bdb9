from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_LEVEL = "medium"


@dataclass(frozen=True)
class QualitySetting:
    level: str
    quality: int
    description: str


QUALITY_TABLE: dict[str, QualitySetting] = {
    "low": QualitySetting("low", 90, "Minimal compression, best quality"),
    "medium": QualitySetting("medium", 75, "Balanced compression and quality"),
    "high": QualitySetting("high", 60, "Maximum compression, smaller files"),
}


def get_quality_settings(level: Optional[str] = None) -> QualitySetting:
    """إرجاع إعداد الجودة للمستوى المطلوب، والمستويات غير المعروفة تعود إلى medium."""
    key = (level or "").strip().lower()
    return QUALITY_TABLE.get(key, QUALITY_TABLE[DEFAULT_LEVEL])
