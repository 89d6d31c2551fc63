"""
BeLoved Transportation API - Main FastAPI application
"""
import logging
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from beloved.core.config import settings
from beloved.core.database import engine, init_db
from beloved.core.forms import FormValidationError
from beloved.core.logging_config import configure_logging
from beloved.core.middleware import SecurityHeadersMiddleware
from beloved.api.v1.router import api_router

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan events for startup/shutdown"""
    # Startup
    logger.info("Starting BeLoved API (%s)", settings.ENVIRONMENT)
    await init_db()
    yield
    # Shutdown
    await engine.dispose()


app = FastAPI(
    title="BeLoved Transportation API",
    description="Ride scheduling for members, drivers and dispatch",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(SecurityHeadersMiddleware)


@app.exception_handler(FormValidationError)
async def form_validation_handler(request: Request, exc: FormValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "Validation failed", "errors": exc.errors},
    )


# Include routers
app.include_router(api_router, prefix="/api")


@app.get("/healthz")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("beloved.main:app", host="0.0.0.0", port=8000, reload=True)
