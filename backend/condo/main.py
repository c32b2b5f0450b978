"""FastAPI application."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.condo.api.routes.auth import router as auth_router
from backend.condo.api.routes.bookings import router as bookings_router
from backend.condo.api.routes.chat import router as chat_router
from backend.condo.api.routes.documents import router as documents_router
from backend.condo.api.routes.health import router as health_router
from backend.condo.api.routes.metrics import router as metrics_router
from backend.condo.api.routes.notices import router as notices_router
from backend.condo.api.routes.visitors import router as visitors_router
from backend.condo.config import get_settings
from backend.condo.errors import CondoError, RateLimited
from backend.condo.utils.logging import configure_logging

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)

app = FastAPI(title="Condo Management API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(auth_router, prefix="/api")
app.include_router(notices_router, prefix="/api")
app.include_router(chat_router, prefix="/api")
app.include_router(visitors_router, prefix="/api")
app.include_router(bookings_router, prefix="/api")
app.include_router(documents_router, prefix="/api")


@app.exception_handler(CondoError)
async def condo_error_handler(request: Request, exc: CondoError) -> JSONResponse:
    headers = None
    if isinstance(exc, RateLimited):
        headers = {"Retry-After": str(exc.retry_after)}
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message},
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "success": False,
            "error": "Invalid input",
            "details": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in exc.errors()
            ],
        },
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    content: dict[str, object] = {"success": False, "error": "Internal server error"}
    if get_settings().is_development:
        content["message"] = str(exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Condo Management API", "version": "0.1.0"}
