import os
import shutil
import tempfile

import pytest

# يجب تحديد مجلد التخزين قبل استيراد التطبيق لأن الإعدادات مخزنة مؤقتًا.
_UPLOADS_DIR = tempfile.mkdtemp(prefix="savedisk-tests-")
os.environ["UPLOADS_DIR"] = _UPLOADS_DIR
os.environ["ARTIFACT_TTL_HOURS"] = "24"

from fastapi.testclient import TestClient  # noqa: E402

from app.core.config import get_settings  # noqa: E402
from app.main import app  # noqa: E402
from tests.factories import make_image, make_pdf  # noqa: E402


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_UPLOADS_DIR, ignore_errors=True)


@pytest.fixture()
def uploads_dir():
    path = get_settings().uploads_dir
    yield path
    for child in path.iterdir():
        if child.is_file():
            child.unlink()


@pytest.fixture()
def client(uploads_dir):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def png_bytes():
    return make_image("PNG")


@pytest.fixture()
def jpeg_bytes():
    return make_image("JPEG")


@pytest.fixture()
def webp_bytes():
    return make_image("WEBP")


@pytest.fixture()
def pdf_bytes():
    return make_pdf()
