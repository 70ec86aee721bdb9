from io import BytesIO
from typing import Optional

from fastapi import APIRouter, File, UploadFile
from fastapi.concurrency import run_in_threadpool
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from app.core.config import get_settings
from app.core.errors import bad_request, server_error
from app.core.logging import configure_logging
from app.models import Dimensions, ImageInfoResponse, PdfInfoResponse
from app.services.image_service import ImageCompressionService, InvalidImageError
from app.utils.file_utils import ensure_pdf, ensure_upload

router = APIRouter(prefix="/api", tags=["Info"])

logger = configure_logging()
image_service = ImageCompressionService(max_pixels=get_settings().max_image_pixels)


def _read_pdf_info(data: bytes) -> dict:
    reader = PdfReader(BytesIO(data))
    encrypted = reader.is_encrypted
    page_count: Optional[int] = None
    title = author = None
    if not encrypted:
        page_count = len(reader.pages)
        metadata = reader.metadata
        if metadata is not None:
            title = metadata.title
            author = metadata.author
    version = reader.pdf_header.lstrip("%").replace("PDF-", "") if reader.pdf_header else None
    return {
        "page_count": page_count,
        "encrypted": encrypted,
        "pdf_version": version,
        "title": title,
        "author": author,
    }


@router.post("/image-info", response_model=ImageInfoResponse, summary="قراءة بيانات الصورة دون حفظها")
async def image_info(image: Optional[UploadFile] = File(None)) -> ImageInfoResponse:
    upload = ensure_upload(image, "No image uploaded", "Please select an image file to upload")
    data = await upload.read()

    try:
        info = await run_in_threadpool(image_service.probe, data)
    except InvalidImageError as exc:
        logger.warning("تعذر قراءة بيانات الصورة %s: %s", upload.filename, exc)
        raise server_error("Failed to get image information", str(exc))

    return ImageInfoResponse(
        filename=upload.filename,
        size=len(data),
        mimetype=upload.content_type or "application/octet-stream",
        dimensions=Dimensions(width=info.width, height=info.height),
        format=info.format,
        has_alpha=info.has_alpha,
        density=info.density,
    )


@router.post("/pdf-info", response_model=PdfInfoResponse, summary="قراءة بيانات ملف PDF دون حفظه")
async def pdf_info(pdf: Optional[UploadFile] = File(None)) -> PdfInfoResponse:
    upload = ensure_upload(pdf, "No PDF uploaded", "Please select a PDF file to upload")
    ensure_pdf(upload)
    data = await upload.read()

    try:
        details = await run_in_threadpool(_read_pdf_info, data)
    except (PdfReadError, ValueError) as exc:
        logger.warning("ملف PDF غير صالح %s: %s", upload.filename, exc)
        raise bad_request("Invalid PDF", "The uploaded file could not be read as a PDF document")

    return PdfInfoResponse(
        filename=upload.filename,
        size=len(data),
        mimetype=upload.content_type,
        **details,
    )
