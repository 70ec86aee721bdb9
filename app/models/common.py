from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """نموذج أساسي يُخرج الحقول بصيغة camelCase كما تتوقعها الواجهة."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(CamelModel):
    error: str
    message: str


class HealthResponse(CamelModel):
    status: str = "OK"
    message: str
    timestamp: datetime


class Dimensions(CamelModel):
    width: int
    height: int


class FileDescriptor(CamelModel):
    filename: str
    preview_url: str
    download_url: str
    size_bytes: int
    updated_at: datetime


class FileListResponse(CamelModel):
    files: list[FileDescriptor] = Field(default_factory=list)


class ImageInfoResponse(CamelModel):
    filename: str
    size: int
    mimetype: str
    dimensions: Dimensions
    format: Optional[str] = None
    has_alpha: bool
    density: Optional[int] = None


class PdfInfoResponse(CamelModel):
    filename: str
    size: int
    mimetype: str
    page_count: Optional[int] = None
    encrypted: bool
    pdf_version: Optional[str] = None
    title: Optional[str] = None
    author: Optional[str] = None
