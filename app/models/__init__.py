from .common import (
    Dimensions,
    ErrorResponse,
    FileDescriptor,
    FileListResponse,
    HealthResponse,
    ImageInfoResponse,
    PdfInfoResponse,
)
from .compress import CompressionMetadata, CompressionResponse, CompressionStats

__all__ = [
    "CompressionMetadata",
    "CompressionResponse",
    "CompressionStats",
    "Dimensions",
    "ErrorResponse",
    "FileDescriptor",
    "FileListResponse",
    "HealthResponse",
    "ImageInfoResponse",
    "PdfInfoResponse",
]
