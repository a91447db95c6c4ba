"""
Credit Sea - FastAPI Application

Main entry point for the Credit Sea backend.

Architecture:
- XML bytes → Parser → CanonicalReport (SSOT)
- CanonicalReport → ReportStore → persisted report id
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS, LOG_LEVEL, PORT
from .routers import reports_router
from .database import init_db

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize database on startup."""
    init_db()
    logger.info("Database initialized")
    yield

# Create FastAPI app
app = FastAPI(
    lifespan=lifespan,
    title="Credit Sea",
    description="""
    Credit Sea - Experian Credit Report Ingestion

    Uploads Experian INProfileResponse XML reports, normalizes them into a
    canonical record and stores the result.

    ## Pipeline
    1. **XML Tree Reader**: bytes → RawNode tree
    2. **Field Extractor / Type Coercer**: basic details and report summary
    3. **Account List Normalizer**: CAIS account details → ordered accounts
    4. **Record Assembler**: CanonicalReport (SSOT), persisted once

    ## Key Principles
    - Missing or unparsable fields become 0 / empty, never errors
    - Only malformed XML or a missing INProfileResponse root aborts ingestion
    - Stored reports are read-only
    """,
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(reports_router)


@app.get("/")
async def root():
    """Root endpoint - API information."""
    return {
        "name": "Credit Sea",
        "version": "1.0.0",
        "description": "Experian XML credit report ingestion",
        "docs": "/docs",
        "endpoints": {
            "upload": "POST /api/upload",
            "list": "GET /api/reports",
            "detail": "GET /api/reports/{id}",
        }
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "1.0.0"}


# For running with: python -m credit_sea.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=PORT)
