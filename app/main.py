import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings
from app.core.exceptions import CatalogQueryError
from app.database import engine
from app.routers import albums, artists, insights, tracks
from app.schemas.common import ErrorResponse

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup/shutdown events.
    """
    # Startup
    logger.info(f"Starting {settings.app_name}...")
    yield
    # Shutdown
    await engine.dispose()
    logger.info(f"Shutting down {settings.app_name}...")


app = FastAPI(
    title=settings.app_name,
    description="Search, distributions, similarity and collaborations over a music catalog",
    version="1.0.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ============== Error envelope ==============

def error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(error=message)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )
    return error_response(400, errors or "Invalid request")


@app.exception_handler(CatalogQueryError)
async def catalog_query_exception_handler(request: Request, exc: CatalogQueryError):
    logger.error(f"{request.method} {request.url.path} failed: {exc.message} (cause: {exc.__cause__!r})")
    return error_response(500, exc.message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"{request.method} {request.url.path} failed")
    return error_response(500, "Internal server error")


# Include routers
app.include_router(
    artists.router,
    prefix=f"{settings.api_v1_prefix}/artists",
    tags=["Artists"]
)
app.include_router(
    albums.router,
    prefix=f"{settings.api_v1_prefix}/albums",
    tags=["Albums"]
)
app.include_router(
    tracks.router,
    prefix=f"{settings.api_v1_prefix}/tracks",
    tags=["Tracks"]
)
app.include_router(
    insights.router,
    prefix=f"{settings.api_v1_prefix}/insights",
    tags=["Insights"]
)


@app.get("/", tags=["Health"])
async def root():
    """Root endpoint - API info."""
    return {
        "name": settings.app_name,
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
