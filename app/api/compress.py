from typing import Optional

from fastapi import APIRouter, File, Query, UploadFile
from fastapi.concurrency import run_in_threadpool

from app.core.config import get_settings
from app.core.errors import bad_request, server_error
from app.core.logging import configure_logging
from app.models import CompressionMetadata, CompressionResponse, CompressionStats, Dimensions, ErrorResponse
from app.services.compression_service import CompressionService
from app.services.image_service import CompressionError, ImageCompressionService, InvalidImageError
from app.services.quality import DEFAULT_LEVEL, QualitySetting, get_quality_settings
from app.storage.local import LocalStorage
from app.utils.file_utils import (
    PDF_MIME,
    compression_ratio,
    ensure_image,
    ensure_pdf,
    ensure_size,
    ensure_upload,
    file_stats,
    savings_percent,
)

router = APIRouter(prefix="/api", tags=["Compression"])

logger = configure_logging()
settings = get_settings()
storage = LocalStorage()
image_service = ImageCompressionService(
    max_dimension=settings.max_dimension,
    max_pixels=settings.max_image_pixels,
)
pdf_service = CompressionService()


def _build_stats(original_size: int, compressed_size: int, quality: QualitySetting) -> CompressionStats:
    percent = savings_percent(original_size, compressed_size)
    ratio = compression_ratio(original_size, compressed_size)

    logger.info(
        "نتيجة الضغط: %d → %d بايت (توفير %.2f%%، نسبة %.2f:1)",
        original_size,
        compressed_size,
        percent,
        ratio,
    )
    if compressed_size >= original_size:
        logger.warning("لم يتحقق أي تقليص في الحجم، قد يكون الملف مضغوطًا مسبقًا")

    return CompressionStats(
        original_size=original_size,
        compressed_size=compressed_size,
        savings=percent,
        savings_percent=percent,
        compression_level=quality.level,
        compression_description=quality.description,
        compression_ratio=ratio,
    )


def _check_declared_size(upload: UploadFile, limit: int) -> None:
    # يحدد Starlette الحجم عند قراءة النموذج، فنرفض الملف قبل تحميله في الذاكرة.
    if upload.size is not None:
        ensure_size(upload.size, limit)


def _persist(data: bytes, extension: str) -> tuple[str, int]:
    path = storage.save_bytes(data, extension=extension)
    try:
        size, _ = file_stats(path)
    except OSError as exc:
        logger.exception("تعذر التحقق من الملف المضغوط %s", path.name)
        raise server_error("File processing error", "Compressed file could not be verified") from exc
    try:
        storage.sweep_expired()
    except OSError:
        logger.exception("فشل حذف الملفات المنتهية الصلاحية")
    return path.name, size


@router.post(
    "/upload",
    response_model=CompressionResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="ضغط صورة JPEG أو PNG أو WebP مع الحفاظ على صيغتها",
)
async def upload_image(
    image: Optional[UploadFile] = File(None),
    level: str = Query(DEFAULT_LEVEL),
) -> CompressionResponse:
    upload = ensure_upload(image, "No image uploaded", "Please select an image file to upload")
    quality = get_quality_settings(level)
    extension = ensure_image(upload)
    mime_type = upload.content_type.lower()
    limit = get_settings().max_image_bytes
    _check_declared_size(upload, limit)

    data = await upload.read()
    original_size = len(data)
    logger.info(
        "رفع صورة: %s (%s، %d بايت، مستوى %s)",
        upload.filename,
        mime_type,
        original_size,
        quality.level,
    )
    ensure_size(original_size, limit)

    try:
        info = await run_in_threadpool(image_service.probe, data)
    except InvalidImageError:
        raise bad_request("Invalid image", "Unable to read image dimensions. File may be corrupted.")
    logger.info("الأبعاد الأصلية: %dx%d", info.width, info.height)

    try:
        compressed = await run_in_threadpool(image_service.compress, data, mime_type, quality.level)
    except CompressionError:
        logger.exception("فشل ضغط الصورة %s", upload.filename)
        raise server_error(
            "Compression failed",
            "Failed to process image. The file may be corrupted or in an unsupported format.",
        )

    filename, compressed_size = await run_in_threadpool(_persist, compressed, extension)
    logger.info("تم حفظ الصورة المضغوطة: %s", filename)

    return CompressionResponse(
        preview_url=f"/api/uploads/{filename}",
        download_url=f"/api/download/{filename}",
        stats=_build_stats(original_size, compressed_size, quality),
        metadata=CompressionMetadata(
            original_format=mime_type,
            output_format=mime_type,
            original_dimensions=Dimensions(width=info.width, height=info.height),
            original_filename=upload.filename,
            processed_filename=filename,
        ),
    )


@router.post(
    "/pdf-compress",
    response_model=CompressionResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="ضغط ملف PDF بالمستوى المحدد",
)
async def compress_pdf(
    pdf: Optional[UploadFile] = File(None),
    level: str = Query(DEFAULT_LEVEL),
) -> CompressionResponse:
    upload = ensure_upload(pdf, "No PDF uploaded", "Please select a PDF file to upload")
    quality = get_quality_settings(level)
    ensure_pdf(upload)
    limit = get_settings().max_pdf_bytes
    _check_declared_size(upload, limit)

    data = await upload.read()
    original_size = len(data)
    logger.info("رفع PDF: %s (%d بايت، مستوى %s)", upload.filename, original_size, quality.level)
    ensure_size(original_size, limit)

    try:
        outcome = await run_in_threadpool(pdf_service.compress, data, quality.level)
    except CompressionError:
        logger.exception("فشل ضغط ملف PDF %s", upload.filename)
        raise server_error(
            "PDF processing failed",
            "An unexpected error occurred while processing your PDF. Please try again.",
        )

    filename, compressed_size = await run_in_threadpool(_persist, outcome.data, "pdf")
    logger.info("تم حفظ PDF المضغوط: %s (%d صفحات)", filename, outcome.page_count)

    return CompressionResponse(
        preview_url=f"/api/uploads/{filename}",
        download_url=f"/api/download/{filename}",
        stats=_build_stats(original_size, compressed_size, quality),
        metadata=CompressionMetadata(
            original_format=PDF_MIME,
            output_format=PDF_MIME,
            page_count=outcome.page_count,
            original_filename=upload.filename,
            processed_filename=filename,
        ),
    )
