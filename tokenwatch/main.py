"""
FastAPI application main module.
"""
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, APIRouter
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from .config import Config
from .routers.extract import extractor, router as extract_router
from .utils.logging_config import setup_logging
from .utils.solana_constants import PROGRAM_TYPES

# Configure logging
logger = setup_logging('tokenwatch.main')


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI app.
    """
    logger.info(f"Starting {Config.API_TITLE} {Config.API_VERSION} ({Config.ENVIRONMENT})")
    logger.info(f"Tracking programs: {', '.join(extractor.tracked_programs)}")
    yield
    logger.info("Application shutdown complete")


app = FastAPI(
    title=Config.API_TITLE,
    description=Config.API_DESCRIPTION,
    version=Config.API_VERSION,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
    max_age=600,
)

# Add Prometheus metrics
metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)

api_router = APIRouter(prefix="/api")
api_router.include_router(extract_router)
app.include_router(api_router)


@app.get("/health", tags=["Diagnostics"])
async def health():
    """Liveness check"""
    return {
        "status": "ok",
        "version": Config.API_VERSION,
        "timestamp": datetime.now().isoformat()
    }


@app.get("/api/programs", tags=["Diagnostics"])
async def programs():
    """Program ids the extractor decodes"""
    return {
        "programs": {
            program_id: PROGRAM_TYPES.get(program_id, handler.program_name)
            for program_id, handler in extractor.program_handlers.items()
        }
    }
