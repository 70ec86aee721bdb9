import json
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_ORIGIN = "http://localhost:5173"


class Settings(BaseSettings):
    """إعدادات التطبيق العامة مع تحميل القيم من ملف .env عند توفره."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "SaveDisk.space API"
    app_version: str = "0.1.0"

    host: str = "0.0.0.0"
    port: int = 3001
    log_level: str = "INFO"

    base_dir: Path = Field(default_factory=lambda: Path(__file__).resolve().parents[2])
    uploads_dir: Optional[Path] = None

    max_image_bytes: int = 50 * 1024 * 1024
    max_pdf_bytes: int = 50 * 1024 * 1024
    max_dimension: int = 4000
    max_image_pixels: int = 100_000_000
    preview_cache_seconds: int = 3600
    artifact_ttl_hours: float = 24.0

    allow_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: [DEFAULT_ORIGIN])
    allow_credentials: bool = True

    @field_validator("allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        # يدعم "a,b,c" أو JSON list مثل '["a","b"]'
        if not isinstance(value, str):
            return value
        raw = value.strip()
        if raw.startswith("["):
            return [str(x).strip() for x in json.loads(raw) if str(x).strip()]
        return [x.strip() for x in raw.split(",") if x.strip()]

    def configure_paths(self) -> None:
        """تهيئة مجلد الملفات المضغوطة وإنشاؤه في حال غيابه."""
        self.uploads_dir = (self.uploads_dir or (self.base_dir / "uploads")).resolve()
        self.uploads_dir.mkdir(parents=True, exist_ok=True)

    def cors_origins(self) -> list[str]:
        origins = self.allow_origins or [DEFAULT_ORIGIN]
        # لا يجوز الجمع بين allow_credentials والنجمة.
        if self.allow_credentials and "*" in origins:
            return [DEFAULT_ORIGIN]
        return origins


@lru_cache()
def get_settings() -> Settings:
    settings = Settings()
    settings.configure_paths()
    return settings
