import logging

from starlette.datastructures import UploadFile

from upload_gateway.core.errors import BadRequest, InternalError
from upload_gateway.services.storage import StorageError, StorageService

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def build_public_url(base: str, key: str) -> str:
    return f"{base}/{key}"


class UploadService:
    """Buffers one uploaded part and writes it to storage under a caller-chosen key."""

    def __init__(self, storage: StorageService, cdn_base_url: str, max_upload_bytes: int) -> None:
        self.storage = storage
        self.cdn_base_url = cdn_base_url
        self.max_upload_bytes = max_upload_bytes

    async def upload(self, part: UploadFile | str | None, key: str | None) -> str:
        if not isinstance(part, UploadFile):
            raise BadRequest("Failed to get file")
        if not key:
            raise BadRequest("Key is required")

        if part.size is not None and part.size > self.max_upload_bytes:
            logger.warning("Rejected upload for key %s: %d bytes declared", key, part.size)
            raise BadRequest("File too large")

        try:
            # Reading one byte past the limit is enough to detect an oversize body.
            data = await part.read(self.max_upload_bytes + 1)
        except OSError:
            logger.exception("Failed to read upload body for key %s", key)
            raise InternalError("Failed to read file") from None
        finally:
            await part.close()

        if len(data) > self.max_upload_bytes:
            logger.warning("Rejected upload for key %s: body exceeds %d bytes", key, self.max_upload_bytes)
            raise BadRequest("File too large")

        content_type = part.content_type or DEFAULT_CONTENT_TYPE
        try:
            await self.storage.put_object(key, data, content_type)
        except StorageError:
            logger.exception("Failed to upload file to storage")
            raise InternalError("Failed to upload file") from None

        logger.info("Uploaded %d bytes to key %s", len(data), key)
        return build_public_url(self.cdn_base_url, key)
