"""
Helpdesk Field Configuration - Main Application Entry Point
Hierarchical ticket field configuration for a multi-tenant helpdesk
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import structlog

from helpdesk_config.core.config import get_settings
from helpdesk_config.core.database import init_db
from helpdesk_config.api import field_configurations

# Configure structured logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.JSONRenderer()
    ],
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
)

logger = structlog.get_logger(__name__)
settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    # Startup
    logger.info("Initializing helpdesk field configuration service")
    if settings.AUTO_CREATE_TABLES:
        await init_db()
    else:
        logger.info("Database schema managed externally")

    yield

    # Shutdown
    logger.info("Shutting down helpdesk field configuration service")


# Create FastAPI application
app = FastAPI(
    title="Helpdesk Field Configuration API",
    description="Customer, tenant and system layered ticket field configuration",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure middleware stack
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(
    field_configurations.router,
    prefix=f"{settings.API_V1_PREFIX}/field-configurations",
    tags=["field-configurations"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "helpdesk-field-configuration"}


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Helpdesk Field Configuration API",
        "version": "1.0.0",
        "docs": "/docs",
    }


def run():
    import uvicorn
    uvicorn.run(
        "helpdesk_config.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.ENVIRONMENT == "development",
        log_level="info",
    )


if __name__ == "__main__":
    run()
