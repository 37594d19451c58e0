"""Main FastAPI application."""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api import admin, clubs, events, manager, member, payments, users
from app.core.config import settings
from app.core.database import init_db
from app.core.exceptions import AppError
from app.services.scheduler import membership_scheduler

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting ClubSphere API")
    logger.info(f"Debug mode: {settings.DEBUG}")

    await init_db()

    if settings.SCHEDULER_ENABLED:
        await membership_scheduler.start()

    yield

    # Shutdown
    logger.info("Shutting down ClubSphere API")
    await membership_scheduler.stop()


# Create FastAPI app
app = FastAPI(
    title="ClubSphere API",
    description="Club membership and event registration platform",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    content = {"message": exc.message}
    if exc.error is not None:
        content["error"] = exc.error
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(content))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=400,
        content=jsonable_encoder({"message": "Invalid request data", "error": exc.errors()}),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


# Include routers
app.include_router(users.router)
app.include_router(clubs.router)
app.include_router(events.router)
app.include_router(payments.router)
app.include_router(member.router)
app.include_router(manager.router)
app.include_router(admin.router)


@app.get("/")
async def root():
    return {"message": "ClubSphere API is running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "scheduler_running": membership_scheduler.running,
    }
