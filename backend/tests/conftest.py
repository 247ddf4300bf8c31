import sys
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from upload_gateway.core.config import Settings
from upload_gateway.main import create_app
from upload_gateway.services import storage as storage_service

API_KEY = "test-secret"
CDN_BASE_URL = "https://cdn.example.com"
CLIENT_ADDRESS = "127.0.0.1"


class DummyStorage(storage_service.StorageService):
    def __init__(self) -> None:  # type: ignore[super-init-not-called]
        self.bucket = "dummy"
        self.calls: list[tuple[str, bytes, str]] = []
        self.objects: dict[str, bytes] = {}
        self.error: Exception | None = None

    async def put_object(self, key, data, content_type):  # type: ignore[override]
        self.calls.append((key, data, content_type))
        if self.error is not None:
            raise self.error
        self.objects[key] = data


def make_settings(**overrides) -> Settings:
    values = {
        "ENV": "test",
        "API_KEY": API_KEY,
        "CDN_BASE_URL": CDN_BASE_URL,
        "IP_WHITELIST": CLIENT_ADDRESS,
        "S3_BUCKET": "test-bucket",
        "S3_KEY": "test",
        "S3_SECRET": "test",
        "S3_REGION": "us-east-1",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def storage() -> DummyStorage:
    return DummyStorage()


@pytest.fixture
def app_instance(settings, storage):
    return create_app(settings=settings, storage=storage)


@pytest_asyncio.fixture
async def client(app_instance):
    transport = ASGITransport(app=app_instance, client=(CLIENT_ADDRESS, 50000))
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
