# journai backend api
# fastapi app with async mongodb, gated vent/mentor chat, and gemini completions

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.exceptions import GatingDenied, JournaiError
from app.services.db import db
from app.routers import chat, logs, journal, mentor, sessions, users, history, weekly

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """startup: connect to mongodb. shutdown: close connection."""
    logger.info("Starting JournAI backend...")
    await db.connect()
    await db.create_indexes()
    logger.info("JournAI backend ready")
    yield
    logger.info("Shutting down JournAI backend...")
    await db.close()


app = FastAPI(
    title="JournAI API",
    description="Backend API for the JournAI journaling companion — vent and mentor chat, weekly gating, journal summaries",
    version="0.1.0",
    lifespan=lifespan,
)

# cors — allow frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL, "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# error rendering — every failure is {success: false, error}


def _error(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message, **extra})


@app.exception_handler(JournaiError)
async def journai_error_handler(request: Request, exc: JournaiError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}")
    extra = {}
    if isinstance(exc, GatingDenied) and exc.hours_remaining is not None:
        extra["hoursRemaining"] = exc.hours_remaining
    return _error(exc.status_code, exc.message, **extra)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    fields = sorted({".".join(str(p) for p in err["loc"][1:]) or str(err["loc"][0]) for err in exc.errors()})
    message = f"Missing or invalid fields: {', '.join(fields)}"
    logger.warning(f"{request.method} {request.url.path} rejected (400): {message}")
    return _error(400, message)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return _error(500, "Internal server error")


# register routers
app.include_router(chat.router)
app.include_router(logs.router)
app.include_router(journal.router)
app.include_router(mentor.router)
app.include_router(sessions.router)
app.include_router(users.router)
app.include_router(history.router)
app.include_router(weekly.router)


@app.get("/health")
async def health_check():
    """basic health check endpoint"""
    return {"status": "ok", "service": "journai-api"}
