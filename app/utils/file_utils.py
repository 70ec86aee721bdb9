from pathlib import Path
from typing import Optional, Tuple

from fastapi import UploadFile

from app.core.errors import bad_request

IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}
PDF_MIME = "application/pdf"

CONTENT_TYPES = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
    ".pdf": PDF_MIME,
}


def ensure_upload(upload: Optional[UploadFile], error: str, message: str) -> UploadFile:
    if upload is None or not upload.filename:
        raise bad_request(error, message)
    return upload


def ensure_image(upload: UploadFile) -> str:
    """التحقق من نوع الصورة وإرجاع الامتداد المقابل."""
    extension = IMAGE_EXTENSIONS.get((upload.content_type or "").lower())
    if extension is None:
        raise bad_request("Unsupported format", "Only JPEG, PNG, and WebP images are supported")
    return extension


def ensure_pdf(upload: UploadFile) -> None:
    """التحقق من أن الملف المرفوع هو PDF."""
    if (upload.content_type or "").lower() != PDF_MIME:
        raise bad_request("Invalid file type", "Only PDF files are supported")


def ensure_size(size: int, limit: int) -> None:
    if size > limit:
        raise bad_request(
            "File too large",
            f"File must be smaller than {limit / (1024 * 1024):g}MB",
        )


def file_stats(path: Path) -> Tuple[int, str]:
    """إرجاع حجم الملف بالبَيت ونوعه البسيط للاستخدام في الاستجابات."""
    size = path.stat().st_size
    suffix = path.suffix.lower().lstrip(".")
    return size, suffix or "bin"


def content_type_for(path: Path) -> str:
    return CONTENT_TYPES.get(path.suffix.lower(), "application/octet-stream")


def savings_percent(original_size: int, compressed_size: int) -> float:
    if not original_size:
        return 0.0
    return round((original_size - compressed_size) / original_size * 100, 2)


def compression_ratio(original_size: int, compressed_size: int) -> float:
    if not compressed_size:
        return 0.0
    return round(original_size / compressed_size, 2)
