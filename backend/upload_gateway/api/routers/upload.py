from fastapi import APIRouter, Depends, Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from upload_gateway.api.deps import get_upload_service, require_access
from upload_gateway.core.errors import BadRequest
from upload_gateway.schemas import ErrorResponse, ForbiddenResponse, UploadResponse
from upload_gateway.services.upload import UploadService

router = APIRouter(prefix="/api", tags=["upload"])


@router.put(
    "/upload",
    response_model=UploadResponse,
    dependencies=[Depends(require_access)],
    responses={
        400: {"model": ErrorResponse},
        401: {"model": ErrorResponse},
        403: {"model": ForbiddenResponse},
        500: {"model": ErrorResponse},
    },
)
async def upload_file(
    request: Request,
    upload_service: UploadService = Depends(get_upload_service),
) -> UploadResponse:
    try:
        form = await request.form()
    except (MultiPartException, StarletteHTTPException):
        raise BadRequest("Failed to get file") from None

    key = form.get("key")
    url = await upload_service.upload(form.get("data"), key if isinstance(key, str) else None)
    return UploadResponse(url=url)
