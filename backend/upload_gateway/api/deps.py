import logging

from fastapi import Request

from upload_gateway.core.config import Settings
from upload_gateway.core.security import GuardChain, RequestMeta, resolve_client_address
from upload_gateway.services.upload import UploadService

logger = logging.getLogger(__name__)


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service


async def require_access(request: Request) -> None:
    settings: Settings = request.app.state.settings
    guard_chain: GuardChain = request.app.state.guard_chain

    meta = RequestMeta(
        presented_key=request.headers.get(settings.api_key_header),
        client_address=resolve_client_address(request, settings.trust_forwarded_headers),
    )
    decision = guard_chain.evaluate(meta)
    if not decision.allowed:
        logger.warning(
            "Access denied for %s %s from %s: %s",
            request.method,
            request.url.path,
            meta.client_address,
            decision.reason,
        )
        raise decision.error
