# app/main.py
from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import routers
from app.core.config import get_settings
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.models import HealthResponse
from app.storage.local import LocalStorage

# === إعدادات وتسجيل ===
settings = get_settings()
logger = configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    logger.info("%s يعمل، مجلد الملفات: %s", settings.app_name, settings.uploads_dir)
    LocalStorage().sweep_expired()
    yield


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

# === CORS ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=settings.allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],  # لقراءة اسم الملف من الهيدر عند التنزيل
)

register_exception_handlers(app)

# === Routers ===
for router in routers:
    app.include_router(router)


# === Basic endpoints ===
@app.get("/api/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    logger.debug("Health check invoked")
    return HealthResponse(
        status="OK",
        message=f"{settings.app_name} is running",
        timestamp=datetime.now(timezone.utc),
    )


def run() -> None:
    import uvicorn

    uvicorn.run("app.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
