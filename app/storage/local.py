import re
import time
from datetime import datetime, timedelta
from pathlib import Path
from typing import Iterator, Optional
from uuid import uuid4

from app.core.config import get_settings
from app.core.logging import configure_logging

logger = configure_logging()

SAFE_FILENAME = re.compile(r"^[A-Za-z0-9][A-Za-z0-9._-]*$")


class LocalStorage:
    """تخزين محلي للملفات المضغوطة داخل مجلد واحد مسطح."""

    def __init__(self, base_dir: Optional[Path] = None, ttl_hours: Optional[float] = None) -> None:
        settings = get_settings()
        self.base_dir = Path(base_dir or settings.uploads_dir).resolve()
        self.ttl_hours = settings.artifact_ttl_hours if ttl_hours is None else ttl_hours
        self.base_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _generate_filename(extension: str) -> str:
        extension = extension.lstrip(".")
        timestamp = int(time.time() * 1000)
        return f"compressed_{timestamp}_{uuid4().hex[:8]}.{extension}"

    def save_bytes(self, data: bytes, *, extension: str) -> Path:
        target_path = self.base_dir / self._generate_filename(extension)
        target_path.write_bytes(data)
        return target_path

    def resolve(self, filename: str) -> Optional[Path]:
        """إرجاع مسار الملف المخزن إن وُجد، مع رفض أي اسم يخرج عن المجلد."""
        if not filename or not SAFE_FILENAME.match(filename):
            return None
        candidate = (self.base_dir / filename).resolve()
        if candidate.parent != self.base_dir or not candidate.is_file():
            return None
        return candidate

    def iter_artifacts(self) -> Iterator[Path]:
        for path in sorted(self.base_dir.glob("*")):
            if path.is_file():
                yield path

    def sweep_expired(self, now: Optional[datetime] = None) -> int:
        """حذف الملفات الأقدم من مدة الاحتفاظ المحددة."""
        if not self.ttl_hours or self.ttl_hours <= 0:
            return 0
        cutoff = (now or datetime.now()) - timedelta(hours=self.ttl_hours)
        removed = 0
        for path in self.iter_artifacts():
            # قد يحذف طلب متزامن الملف نفسه أثناء المسح.
            try:
                if datetime.fromtimestamp(path.stat().st_mtime) >= cutoff:
                    continue
                path.unlink()
            except FileNotFoundError:
                continue
            removed += 1
        if removed:
            logger.info("تم حذف %d ملفات منتهية الصلاحية", removed)
        return removed
