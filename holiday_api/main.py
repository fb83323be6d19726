from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from holiday_api.core.config import get_settings
from holiday_api.core.dependencies import get_ingestion_service
from holiday_api.core.errors import AppError
from holiday_api.core.logging_config import get_logger, setup_logging
from holiday_api.core.middleware import RequestLoggingMiddleware
from holiday_api.routers import holidays
from holiday_api.schemas.holiday import error_response
from holiday_api.services.scheduler import RefreshScheduler

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Own the yearly refresh job for the lifetime of the process."""
    settings = get_settings()
    setup_logging(json_format=settings.LOG_FORMAT.lower() == "json", level=settings.LOG_LEVEL)

    scheduler = None
    if settings.SCHEDULER_ENABLED:
        scheduler = RefreshScheduler(get_ingestion_service())
        scheduler.start()
    app.state.scheduler = scheduler

    yield

    if scheduler is not None:
        scheduler.stop()


app = FastAPI(
    title=get_settings().PROJECT_NAME,
    version="1.0.0",
    description="Indonesian public holiday calendar, scraped and cached per year",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

app.include_router(holidays.router)


@app.get("/health", tags=["Health"])
def health_check():
    """Liveness probe"""
    return {"status": "healthy", "service": get_settings().PROJECT_NAME}


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)

    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(exc.status_code, exc.message).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=error_response(400, "Invalid request: year must be an integer").model_dump(),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Anything not mapped to an AppError becomes a generic 500 envelope."""
    logger.error("Unhandled exception: %s", exc, exc_info=exc)

    return JSONResponse(
        status_code=500,
        content=error_response(500, "An internal error occurred. Please try again later.").model_dump(),
    )


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
