from typing import Optional

from pydantic import Field

from .common import CamelModel, Dimensions


class CompressionStats(CamelModel):
    original_size: int = Field(..., ge=0)
    compressed_size: int = Field(..., ge=0)
    savings: float = Field(..., description="مرادف لـ savingsPercent.")
    savings_percent: float
    compression_level: str = Field(..., description="مستوى الضغط (low | medium | high).")
    compression_description: str
    compression_ratio: float


class CompressionMetadata(CamelModel):
    original_format: str
    output_format: str
    original_dimensions: Optional[Dimensions] = None
    page_count: Optional[int] = None
    original_filename: Optional[str] = None
    processed_filename: str


class CompressionResponse(CamelModel):
    success: bool = True
    preview_url: str
    download_url: str
    stats: CompressionStats
    metadata: CompressionMetadata
