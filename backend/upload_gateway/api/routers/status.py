from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from upload_gateway.schemas import RootResponse

router = APIRouter(tags=["status"])


@router.get("/", response_model=RootResponse)
async def api_root() -> RootResponse:
    return RootResponse(message="Why are you here?")


@router.get("/status", response_class=PlainTextResponse)
async def api_status() -> str:
    return "Healthy"
