"""
Global exception handler for the File Storage API.
Provides centralized error handling for all API exceptions.
"""
import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from .exceptions import (
    FileNotFoundException,
    UploadNotFoundException,
    ValidationException,
    FileTooLargeException,
    S3Exception,
    DynamoDBException
)

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""

    @app.exception_handler(FileNotFoundException)
    async def handle_file_not_found(request: Request, exc: FileNotFoundException):
        return JSONResponse(
            status_code=404,
            content={"error": "Not Found", "message": exc.message}
        )

    @app.exception_handler(UploadNotFoundException)
    async def handle_upload_not_found(request: Request, exc: UploadNotFoundException):
        return JSONResponse(
            status_code=404,
            content={"error": "Upload Not Found", "message": exc.message}
        )

    @app.exception_handler(FileTooLargeException)
    async def handle_file_too_large(request: Request, exc: FileTooLargeException):
        return JSONResponse(
            status_code=413,
            content={"error": "File Too Large", "message": exc.message}
        )

    @app.exception_handler(ValidationException)
    async def handle_validation_error(request: Request, exc: ValidationException):
        return JSONResponse(
            status_code=400,
            content={"error": "Validation Error", "message": exc.message}
        )

    @app.exception_handler(S3Exception)
    async def handle_s3_error(request: Request, exc: S3Exception):
        logger.error("Storage error on %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=500,
            content={"error": "Storage Error", "message": exc.message}
        )

    @app.exception_handler(DynamoDBException)
    async def handle_dynamodb_error(request: Request, exc: DynamoDBException):
        logger.error("Database error on %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=500,
            content={"error": "Database Error", "message": exc.message}
        )

    @app.exception_handler(Exception)
    async def handle_generic_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal Server Error", "message": "An unexpected error occurred"}
        )
