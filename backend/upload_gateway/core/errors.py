from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse


class GatewayError(Exception):
    """Terminal request failure rendered as a JSON error body."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def body(self) -> dict[str, Any]:
        return {"error": self.message}


class Unauthorized(GatewayError):
    status_code = status.HTTP_401_UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class Forbidden(GatewayError):
    status_code = status.HTTP_403_FORBIDDEN

    def __init__(self, message: str = "Permission denied") -> None:
        super().__init__(message)

    def body(self) -> dict[str, Any]:
        return {"status": self.status_code, "message": self.message}


class BadRequest(GatewayError):
    status_code = status.HTTP_400_BAD_REQUEST


class InternalError(GatewayError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.body())
