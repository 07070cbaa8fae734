"""Exception handlers for the FastAPI application.

This module defines custom exception handlers that convert Python exceptions
into consistent JSON responses. Shell-level mistakes (unknown commands,
missing files) never reach these handlers: the interpreter reports them as
terminal output.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from models.workspace import (
    GenerationInFlightError,
    ModelNotFoundError,
    NoModelSelectedError,
)

logger = logging.getLogger(__name__)


class OutputFileNotFoundError(Exception):
    """Raised when a download is requested for a file not in outputs.

    Args:
        filename: The requested filename.
        outputs_path: The outputs directory that was searched.
    """

    def __init__(self, filename: str, outputs_path: str):
        self.filename = filename
        self.outputs_path = outputs_path
        super().__init__(f"File '{filename}' not found in {outputs_path}")


# Exception Handlers


async def generation_in_flight_handler(request: Request, exc: GenerationInFlightError):
    """Handle GenerationInFlightError with a 409 (Conflict)."""
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "error": "Generation In Progress",
            "detail": exc.message,
            "suggestion": "Wait for the current generation to finish",
        },
    )


async def no_model_selected_handler(request: Request, exc: NoModelSelectedError):
    """Handle NoModelSelectedError with a 400."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "No Model Selected",
            "detail": exc.message,
            "suggestion": "Select a model with POST /models/select",
        },
    )


async def model_not_found_handler(request: Request, exc: ModelNotFoundError):
    """Handle ModelNotFoundError with a 404 listing the valid model ids."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Model Not Found",
            "detail": f"The model '{exc.model_id}' does not exist",
            "requested_model": exc.model_id,
            "available_models": exc.available_models,
        },
    )


async def output_file_not_found_handler(request: Request, exc: OutputFileNotFoundError):
    """Handle OutputFileNotFoundError with a 404."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "File Not Found",
            "detail": str(exc),
            "requested_file": exc.filename,
            "outputs_path": exc.outputs_path,
        },
    )


async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors raised outside request parsing."""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation Error",
            "detail": "The request data failed validation",
            "validation_errors": exc.errors(),
        },
    )


async def value_error_handler(request: Request, exc: ValueError):
    """Handle ValueError exceptions with a 400."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid Value",
            "detail": str(exc),
            "type": "ValueError",
        },
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle any unhandled exceptions.

    Logs the traceback and returns a generic 500 without exposing it.
    """
    logger.exception("Unhandled exception while serving %s", request.url.path)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
            "type": type(exc).__name__,
        },
    )
