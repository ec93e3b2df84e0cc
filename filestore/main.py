from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import os
import logging
from dotenv import load_dotenv

from .api.files import router as files_router
from .models.responses import ErrorResponse, HealthResponse
from .storage.factory import create_default_storage_service, StorageConfigurationError
from .storage.providers.base import StorageError

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

SERVICE_NAME = "filestore"
SERVICE_VERSION = "1.0.0"

# Create FastAPI application
app = FastAPI(
    title="Filestore",
    description="Upload, list, download and rename files in a flat storage directory",
    version=SERVICE_VERSION
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")],
    allow_methods=["*"],
    allow_headers=["*"],
)


# Initialize storage service on startup
@app.on_event("startup")
async def startup_event():
    """Initialize storage service and attach to application state."""
    try:
        storage_service = create_default_storage_service()
        app.state.storage_service = storage_service
        logger.info("Storage service initialized successfully")
    except StorageConfigurationError as e:
        logger.error(f"Failed to initialize storage service: {e}")
        raise RuntimeError(f"Storage initialization failed: {e}") from e


@app.exception_handler(StorageError)
async def storage_error_handler(request: Request, exc: StorageError):
    """Translate storage errors into their HTTP status and error body."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")

    body = ErrorResponse(error=exc.title, message=str(exc))
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())


# Include API routers
app.include_router(files_router)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint for monitoring and deployment validation"""
    return HealthResponse(service=SERVICE_NAME, version=SERVICE_VERSION)


if __name__ == "__main__":
    import uvicorn
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO").upper())
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "5000"))
    debug = os.getenv("DEBUG", "False").lower() == "true"

    uvicorn.run("filestore.main:app", host=host, port=port, reload=debug)
