"""
Main FastAPI application entry point.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fincalc import __version__
from fincalc.config import get_settings
from fincalc.logging_config import configure_logging
from fincalc.api import router as api_router
from fincalc.errors import InvalidInputError, DegenerateResultError

settings = get_settings()
configure_logging(settings.log_level)

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Personal finance calculators",
    version=__version__,
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix=settings.api_prefix)


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    logger.info(f"Rejected input for {request.url.path}: {exc.reason}")
    return JSONResponse(
        status_code=422,
        content={"detail": exc.reason, "field": exc.field},
    )


@app.exception_handler(DegenerateResultError)
async def degenerate_result_handler(request: Request, exc: DegenerateResultError):
    logger.info(f"Degenerate result for {request.url.path}: {exc.reason}")
    return JSONResponse(
        status_code=422,
        content={"detail": exc.reason, "error": "degenerate"},
    )


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy", "version": __version__}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
