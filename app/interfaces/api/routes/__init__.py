from fastapi import FastAPI

from .delivery_attempts import router as delivery_attempts_router
from .dispatch import router as dispatch_router, unexpected_error_handler
from .health import router as health_router
from .preferences import router as preferences_router


def register_routes(app: FastAPI) -> None:
    """Register every API router and the fallback error handler on the application."""

    app.include_router(dispatch_router)
    app.include_router(delivery_attempts_router)
    app.include_router(preferences_router)
    app.include_router(health_router)
    app.add_exception_handler(Exception, unexpected_error_handler)
