from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from typing import Optional

from PIL import Image, ImageOps, UnidentifiedImageError

from app.core.logging import configure_logging
from app.services.quality import get_quality_settings

logger = configure_logging()

# صيغة Pillow المقابلة لكل نوع MIME مدعوم، ولا يتم التحويل بين الصيغ.
PIL_FORMATS = {
    "image/jpeg": "JPEG",
    "image/png": "PNG",
    "image/webp": "WEBP",
}


class InvalidImageError(ValueError):
    """تعذر قراءة أبعاد الصورة."""


class CompressionError(RuntimeError):
    """فشل الترميز داخل مكتبة الصور أو PDF."""


@dataclass
class ImageInfo:
    width: int
    height: int
    format: Optional[str]
    has_alpha: bool
    density: Optional[int] = None


def _density(image: Image.Image) -> Optional[int]:
    dpi = image.info.get("dpi")
    if not dpi:
        return None
    try:
        return int(round(float(dpi[0])))
    except (TypeError, ValueError, IndexError):
        return None


def _has_alpha(image: Image.Image) -> bool:
    return image.mode in ("RGBA", "LA", "PA", "La", "RGBa") or "transparency" in image.info


class ImageCompressionService:
    """ضغط الصور باستخدام Pillow مع الحفاظ على الصيغة الأصلية."""

    def __init__(self, max_dimension: int = 4000, max_pixels: int = 100_000_000) -> None:
        self.max_dimension = max_dimension
        self.max_pixels = max_pixels

    def probe(self, data: bytes) -> ImageInfo:
        try:
            with Image.open(BytesIO(data)) as image:
                width, height = image.size
                info = ImageInfo(
                    width=width,
                    height=height,
                    format=image.format.lower() if image.format else None,
                    has_alpha=_has_alpha(image),
                    density=_density(image),
                )
        except Image.DecompressionBombError as exc:
            raise InvalidImageError("Image exceeds the pixel limit") from exc
        except (UnidentifiedImageError, OSError, SyntaxError) as exc:
            raise InvalidImageError("Unable to read image dimensions") from exc

        if not info.width or not info.height:
            raise InvalidImageError("Unable to read image dimensions")
        if info.width * info.height > self.max_pixels:
            raise InvalidImageError("Image exceeds the pixel limit")
        return info

    def encode_options(self, mime_type: str, level: Optional[str]) -> dict:
        """معاملات الترميز الخاصة بكل صيغة حسب مستوى الضغط."""
        quality = get_quality_settings(level).quality
        if mime_type == "image/jpeg":
            return {"quality": quality, "progressive": True, "optimize": True}
        if mime_type == "image/png":
            return {"compress_level": 9, "optimize": True}
        if mime_type == "image/webp":
            return {"quality": quality, "method": 6}
        raise CompressionError(f"Unsupported format: {mime_type}")

    def compress(self, data: bytes, mime_type: str, level: Optional[str] = None) -> bytes:
        pil_format = PIL_FORMATS.get(mime_type)
        if pil_format is None:
            raise CompressionError(f"Unsupported format: {mime_type}")
        options = self.encode_options(mime_type, level)
        logger.info("إعدادات ترميز %s: %s", pil_format, options)

        try:
            with Image.open(BytesIO(data)) as source:
                image = ImageOps.exif_transpose(source)
                # thumbnail لا يكبّر الصور الأصغر من الحد المسموح.
                image.thumbnail((self.max_dimension, self.max_dimension), Image.Resampling.LANCZOS)
                if pil_format == "JPEG" and image.mode not in ("RGB", "L", "CMYK"):
                    image = image.convert("RGB")

                buffer = BytesIO()
                image.save(buffer, format=pil_format, **options)
        except (Image.DecompressionBombError, UnidentifiedImageError, OSError, ValueError, SyntaxError) as exc:
            raise CompressionError("Failed to encode image") from exc

        return buffer.getvalue()
