from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from bakery.api.router import api_router
from bakery.core.config import get_settings
from bakery.core.errors import InvalidResource, StoreError, ValidationError
from bakery.core.logging import configure_logging


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""

    settings = get_settings()
    configure_logging(settings.log_level)
    application = FastAPI(title=settings.app_name, debug=settings.debug)
    application.include_router(api_router, prefix="/api")

    @application.exception_handler(InvalidResource)
    def handle_invalid_resource(request: Request, exc: InvalidResource) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

    @application.exception_handler(ValidationError)
    def handle_validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc), "field": exc.field},
        )

    @application.exception_handler(StoreError)
    def handle_store_error(request: Request, exc: StoreError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"detail": str(exc)})

    @application.get("/health", tags=["health"])
    def health_check() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
