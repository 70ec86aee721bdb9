from datetime import datetime

from fastapi import APIRouter
from fastapi.responses import FileResponse

from app.core.config import get_settings
from app.core.errors import not_found
from app.models import FileDescriptor, FileListResponse
from app.storage.local import LocalStorage
from app.utils.file_utils import content_type_for

router = APIRouter(prefix="/api", tags=["Files"])
storage = LocalStorage()


@router.get("/uploads/{filename}", summary="عرض الملف المضغوط داخل المتصفح")
async def preview_file(filename: str) -> FileResponse:
    path = storage.resolve(filename)
    if path is None:
        raise not_found("Image not found", "The requested image could not be found")

    return FileResponse(
        path,
        media_type=content_type_for(path),
        headers={"Cache-Control": f"public, max-age={get_settings().preview_cache_seconds}"},
    )


@router.get("/download/{filename}", summary="تنزيل الملف المضغوط كمرفق")
async def download_file(filename: str) -> FileResponse:
    path = storage.resolve(filename)
    if path is None:
        raise not_found("File not found", "The requested file could not be found")

    return FileResponse(
        path,
        media_type=content_type_for(path),
        filename=path.name,
        content_disposition_type="attachment",
    )


@router.get("/files", response_model=FileListResponse, summary="قائمة الملفات المضغوطة المتاحة")
async def list_files() -> FileListResponse:
    files: list[FileDescriptor] = []
    for path in storage.iter_artifacts():
        try:
            stat = path.stat()
        except FileNotFoundError:
            continue
        files.append(
            FileDescriptor(
                filename=path.name,
                preview_url=f"/api/uploads/{path.name}",
                download_url=f"/api/download/{path.name}",
                size_bytes=stat.st_size,
                updated_at=datetime.fromtimestamp(stat.st_mtime),
            )
        )

    return FileListResponse(files=files)
