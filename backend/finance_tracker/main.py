"""
FastAPI application for the personal finance tracker.

Usage:
    uvicorn finance_tracker.main:app --port 3001
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
import logging

from finance_tracker.config import DEFAULT_JWT_SECRET, get_settings

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

from finance_tracker.database import engine, Base
from finance_tracker.db_helpers import authenticate_request_from_headers
from finance_tracker.routes import api_router
import finance_tracker.models  # noqa: F401  (registers tables on Base.metadata)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.jwt_secret == DEFAULT_JWT_SECRET:
        logger.warning("JWT_SECRET is not set; tokens are signed with the default development secret.")
    if settings.auto_create_tables:
        logger.info("AUTO_CREATE_TABLES is enabled; creating tables via SQLAlchemy metadata.")
        Base.metadata.create_all(bind=engine)
    yield


app = FastAPI(
    title="Finance Tracker API",
    description="API for tracking personal income and expenses",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.api_docs_enabled else None,
    redoc_url="/redoc" if settings.api_docs_enabled else None,
    openapi_url="/openapi.json" if settings.api_docs_enabled else None,
)


UNPROTECTED_API_PATHS = {"/api/health", "/api/auth/register", "/api/auth/login"}


@app.middleware("http")
async def bearer_auth_middleware(request: Request, call_next):
    path = request.url.path.rstrip("/") or "/"
    if (
        request.method == "OPTIONS"
        or not path.startswith("/api/")
        or path in UNPROTECTED_API_PATHS
    ):
        return await call_next(request)

    try:
        request.state.user_id = authenticate_request_from_headers(request.headers)
    except HTTPException as exc:
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers={"WWW-Authenticate": "Bearer"},
        )

    return await call_next(request)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error."},
    )


# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api")


@app.get("/")
def root():
    payload = {"message": "Finance Tracker API"}
    if settings.api_docs_enabled:
        payload["docs"] = "/docs"
    return payload


@app.get("/health")
def health():
    return {"status": "healthy"}
