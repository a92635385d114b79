"""
Main FastAPI application entry point.
Configures and initializes the File Storage API.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from mangum import Mangum
from src.core.config import settings
from src.core.dependencies import get_retention_sweeper
from src.core.exception_handler import register_exception_handlers
from src.core.logging_config import configure_logging
from src.api.routes import health_routes, file_routes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    sweeper = get_retention_sweeper()
    sweeper.start()
    logger.info("%s %s started (%s)", settings.api_title, settings.api_version, settings.environment)
    yield
    await sweeper.stop()


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description="File storage service with upload progress tracking",
    lifespan=lifespan
)

# Register exception handlers
register_exception_handlers(app)

# Register routes
app.include_router(health_routes.router)
app.include_router(file_routes.router)

# Middleware to log requests
@app.middleware("http")
async def log_request(request: Request, call_next):
    response = await call_next(request)
    logger.info("%s %s -> %d", request.method, request.url.path, response.status_code)
    return response

# Lambda handler for AWS; progress records are per container and not swept there
handler = Mangum(app, lifespan="off")


# For local development
if __name__ == "__main__":
    import uvicorn
    configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=8000)
