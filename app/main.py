"""
Main FastAPI application for the library membership system.
"""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware
import asyncio
import logging
import time
from contextlib import asynccontextmanager
import os

from app.core.config import settings
from app.core.dependencies import get_notifier
from app.core.exceptions import LibraryError
from app.api.routes import auth, students, seats, schedules, users, uploads, settings as settings_routes
from app.db.session import engine, SessionLocal
from app.db.models import Base
from app.services.accounts import ensure_default_admin
from app.services.reminders import reminder_loop

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting library membership system...")

    reminder_task = None
    # Only touch the database and start the reminder job outside of test mode
    if not os.getenv("TESTING"):
        try:
            Base.metadata.create_all(bind=engine)
            logger.info("Database tables created successfully")
        except Exception as e:
            logger.error(f"Failed to create database tables: {str(e)}")

        db = SessionLocal()
        try:
            ensure_default_admin(db, settings.default_admin_username, settings.default_admin_password)
        except Exception as e:
            logger.error(f"Failed to create default admin: {str(e)}")
        finally:
            db.close()

        reminder_task = asyncio.create_task(
            reminder_loop(SessionLocal, get_notifier, settings.reminder_hour, settings.reminder_minute)
        )
        logger.info("Expiration reminder job scheduled")
    else:
        logger.info("Skipping database setup and reminder job in test mode")

    yield

    if reminder_task:
        reminder_task.cancel()
        try:
            await reminder_task
        except asyncio.CancelledError:
            pass

    logger.info("Shutting down library membership system...")


# Create FastAPI application
app = FastAPI(
    title=settings.project_name,
    version=settings.version,
    description="Membership, seat and shift management for libraries and coaching centers",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan
)

# Add middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)

app.add_middleware(
    SessionMiddleware,
    secret_key=settings.session_secret,
    max_age=settings.session_max_age_seconds,
    same_site="lax",
    https_only=settings.session_https_only,
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time to response headers."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)
    return response


# Exception handlers
@app.exception_handler(LibraryError)
async def library_error_handler(request: Request, exc: LibraryError):
    """Map domain errors to their HTTP status codes."""
    if exc.status_code >= 500:
        logger.error(f"{type(exc).__name__} on {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request data is a client error."""
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = "Invalid request"
    return JSONResponse(status_code=400, content={"detail": message})


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.error(f"Global exception on {request.url}: {str(exc)}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "path": str(request.url.path),
            "timestamp": time.time()
        }
    )


# Include API routes
app.include_router(auth.router, prefix=f"{settings.api_prefix}/auth", tags=["auth"])
app.include_router(students.router, prefix=f"{settings.api_prefix}/students", tags=["students"])
app.include_router(seats.router, prefix=f"{settings.api_prefix}/seats", tags=["seats"])
app.include_router(schedules.router, prefix=f"{settings.api_prefix}/schedules", tags=["schedules"])
app.include_router(users.router, prefix=f"{settings.api_prefix}/users", tags=["users"])
app.include_router(settings_routes.router, prefix=f"{settings.api_prefix}/settings", tags=["settings"])
app.include_router(uploads.router, prefix=settings.api_prefix, tags=["uploads"])


# Health check endpoints
@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "version": settings.version
    }


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Student Management API",
        "version": settings.version,
        "docs_url": "/docs",
        "health_url": "/health",
        "api_prefix": settings.api_prefix
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
