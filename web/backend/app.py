#!/usr/bin/env python3
"""
ServiceMatch API - FastAPI Application

Matches client jobs to local service providers.

Usage:
    python -m web.backend.app

Then open:
    - http://localhost:8080/docs - API Documentation (Swagger UI)
    - http://localhost:8080/redoc - Alternative API Documentation
"""

import logging

from fastapi import Depends, FastAPI, HTTPException

from servicematch.app_context import AppContext
from servicematch.exceptions import MatchingError
from .config import get_config
from .dependencies import get_app_context
from .exceptions import (
    matching_exception_handler,
    http_exception_handler,
    general_exception_handler
)
from .routers import advisor_router, matching_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="ServiceMatch API",
    description="Provider matching for local service jobs",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# Register exception handlers
app.add_exception_handler(MatchingError, matching_exception_handler)
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

# Include routers
app.include_router(matching_router)
app.include_router(advisor_router)


@app.get("/health")
def health_check(ctx: AppContext = Depends(get_app_context)):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "servicematch-api",
        "aiScoring": "configured" if ctx.llm_handle.is_configured else "deterministic",
        "providers": len(ctx.directory),
    }


def main():
    """Run the web server."""
    import uvicorn

    config = get_config()
    logger.info(f"Starting ServiceMatch API on {config.web.host}:{config.web.port}")
    logger.info(f"API Docs: http://{config.web.host}:{config.web.port}/docs")

    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )


if __name__ == "__main__":
    main()
