"""
Tá Pago Backend - FastAPI Application
"""
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from tapago import __version__
from tapago.api import auth, calendar, stats, weights, workout_types, workouts
from tapago.core.config import settings
from tapago.core.database import check_connection, get_db, init_db
from tapago.core.exceptions import (
    AuthProviderError,
    DuplicateDateError,
    InvalidDataError,
    NotFoundError,
    ProtectedResourceError,
    TaPagoError,
)
from tapago.core.logging import clear_request_context, get_logger, setup_logging

logger = get_logger(__name__)

ERROR_STATUS = {
    NotFoundError: 404,
    DuplicateDateError: 409,
    ProtectedResourceError: 400,
    InvalidDataError: 400,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    logger.info("Starting Tá Pago Backend", version=__version__, port=settings.PORT)
    await init_db()
    logger.info("Database initialized")
    
    yield
    
    # Shutdown
    logger.info("Shutting down Tá Pago Backend")


app = FastAPI(
    title="Tá Pago API",
    description="Workout tracking and statistics backend",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def reset_log_context(request: Request, call_next):
    """Drop per-request log context bound while handling the previous request."""
    clear_request_context()
    return await call_next(request)


@app.exception_handler(TaPagoError)
async def tapago_error_handler(request: Request, exc: TaPagoError):
    if isinstance(exc, AuthProviderError):
        status_code = exc.status_code
    else:
        status_code = next(
            (code for error_type, code in ERROR_STATUS.items() if isinstance(exc, error_type)),
            500,
        )
    
    extra = {}
    if isinstance(exc, DuplicateDateError) and exc.day is not None:
        extra["day"] = exc.day.isoformat()
    
    log = logger.error if status_code >= 500 else logger.warning
    log("Request failed", path=request.url.path, error=type(exc).__name__, detail=exc.message, **extra)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


# Include routers
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(workouts.router, prefix="/api/workouts", tags=["workouts"])
app.include_router(workout_types.router, prefix="/api/workout-types", tags=["workout-types"])
app.include_router(weights.router, prefix="/api/weights", tags=["weights"])
app.include_router(stats.router, prefix="/api/stats", tags=["stats"])
app.include_router(calendar.router, prefix="/api/calendar", tags=["calendar"])


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "OK", "message": "Tá Pago Backend is running!"}


@app.get("/test-db")
async def test_db(db: AsyncSession = Depends(get_db)):
    """Check that the database answers a trivial query."""
    try:
        await check_connection(db)
    except Exception as e:
        logger.error("Database connection test failed", error=str(e))
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": "Database connection failed", "error": str(e)},
        )
    return {"status": "OK", "message": "Database connection successful"}


if __name__ == "__main__":
    import uvicorn
    
    uvicorn.run("tapago.main:app", host="0.0.0.0", port=settings.PORT, reload=True)
