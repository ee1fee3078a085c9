"""
Main FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from fleetdesk.config import get_settings
from fleetdesk.database import SessionLocal, init_db, ping_db
from fleetdesk.errors import register_error_handlers
from fleetdesk.routers import collaborators, dashboard, files, fuel, users, vehicles
from fleetdesk.services.migration import MigrationService

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan events for the application.
    Handles startup and shutdown events.
    """
    # Startup
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Starting %s %s", settings.app_name, settings.app_version)
    await init_db()
    await MigrationService(SessionLocal, settings).run_once()
    logger.info("API available at %s", settings.api_v1_prefix)

    yield

    # Shutdown
    logger.info("Shutting down %s", settings.app_name)


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    ## Fleet back office API

    ### Entities:
    * **Vehicles**: Fleet and aggregated vehicles, with filters and assignment
    * **Collaborators**: Drivers, license status and responsibility terms
    * **Fuel**: Fuel-card CSV imports and spend summaries
    * **Files**: Documents and photos attached to vehicles and collaborators
    * **Users**: Role management (master only)
    """,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Include routers
app.include_router(vehicles.router, prefix=settings.api_v1_prefix)
app.include_router(collaborators.router, prefix=settings.api_v1_prefix)
app.include_router(fuel.router, prefix=settings.api_v1_prefix)
app.include_router(files.router, prefix=settings.api_v1_prefix)
app.include_router(dashboard.router, prefix=settings.api_v1_prefix)
app.include_router(users.router, prefix=settings.api_v1_prefix)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": f"Welcome to {settings.app_name} API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    try:
        await ping_db()
    except SQLAlchemyError as e:
        logger.error("Database ping failed: %s", e)
        return JSONResponse(
            status_code=503,
            content={"status": "unhealthy", "database": "unreachable", "version": settings.app_version},
        )
    return {
        "status": "healthy",
        "database": "connected",
        "version": settings.app_version,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "fleetdesk.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
