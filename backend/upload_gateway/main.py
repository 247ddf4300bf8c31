import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from upload_gateway.api.routers import status as status_router
from upload_gateway.api.routers import upload as upload_router
from upload_gateway.core.config import Settings, get_settings
from upload_gateway.core.errors import GatewayError, gateway_error_handler
from upload_gateway.core.logging import setup_logging
from upload_gateway.core.security import build_guard_chain
from upload_gateway.services.storage import StorageService, build_storage_service
from upload_gateway.services.upload import UploadService

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    storage: StorageService | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        debug=settings.debug,
        title="Upload Gateway API",
    )

    storage = storage or build_storage_service(settings)
    app.state.settings = settings
    app.state.guard_chain = build_guard_chain(settings)
    app.state.upload_service = UploadService(
        storage,
        cdn_base_url=settings.cdn_base_url,
        max_upload_bytes=settings.max_upload_bytes,
    )

    if not settings.ip_allowlist:
        logger.warning("IP_WHITELIST is empty; every upload request will be denied")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=[
            "Origin",
            "X-Requested-With",
            "Content-Type",
            "Accept",
            settings.api_key_header,
        ],
        max_age=3600,
    )
    app.add_exception_handler(GatewayError, gateway_error_handler)

    app.include_router(status_router.router)
    app.include_router(upload_router.router)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
