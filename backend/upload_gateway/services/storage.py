import asyncio
import logging
from pathlib import Path
from typing import Final

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from upload_gateway.core.config import Settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the storage backend rejects or fails a write."""


class StorageService:
    """Default S3-compatible storage backend."""

    scheme: Final[str] = "s3"

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        session = boto3.session.Session()
        self.client = session.client(
            "s3",
            endpoint_url=str(settings.s3_endpoint) if settings.s3_endpoint else None,
            aws_access_key_id=settings.s3_access_key,
            aws_secret_access_key=settings.s3_secret_key,
            region_name=settings.s3_region,
            config=Config(signature_version="s3v4"),
        )
        self.bucket = settings.s3_bucket

    async def put_object(self, key: str, data: bytes, content_type: str) -> None:
        def _upload() -> None:
            self.client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
                ContentLength=len(data),
            )

        try:
            await asyncio.to_thread(_upload)
        except (BotoCoreError, ClientError) as exc:
            raise StorageError(f"PutObject s3://{self.bucket}/{key} failed: {exc}") from exc


class LocalStorageService(StorageService):
    """Local filesystem storage intended for development use."""

    scheme: Final[str] = "local"

    def __init__(self, settings: Settings) -> None:  # type: ignore[super-init-not-called]
        self.settings = settings
        self.base_path = Path(settings.local_storage_dir).resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _key_path(self, key: str) -> Path:
        try:
            candidate = self.base_path.joinpath(*Path(key).parts).resolve()
        except (ValueError, OSError):
            raise StorageError(f"Invalid storage key: {key!r}") from None
        if not candidate.is_relative_to(self.base_path) or candidate == self.base_path:
            raise StorageError(f"Invalid storage key: {key!r}")
        return candidate

    async def put_object(self, key: str, data: bytes, content_type: str) -> None:  # type: ignore[override]
        target = self._key_path(key)

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)

        try:
            await asyncio.to_thread(_write)
        except (ValueError, OSError) as exc:
            raise StorageError(f"Writing {target} failed: {exc}") from exc
        logger.debug("Stored %d bytes at %s (%s)", len(data), target, content_type)

    async def read_object(self, key: str) -> bytes:
        source = self._key_path(key)
        if not source.exists():
            raise FileNotFoundError(key)
        return await asyncio.to_thread(source.read_bytes)


def build_storage_service(settings: Settings) -> StorageService:
    if settings.storage_backend == "local":
        return LocalStorageService(settings)
    return StorageService(settings)
