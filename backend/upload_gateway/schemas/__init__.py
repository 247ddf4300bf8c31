from upload_gateway.schemas.upload import (
    ErrorResponse,
    ForbiddenResponse,
    RootResponse,
    UploadResponse,
)

__all__ = [
    "RootResponse",
    "UploadResponse",
    "ErrorResponse",
    "ForbiddenResponse",
]
