"""Main entry point for the code assistant simulator FastAPI application.

This module creates and configures the FastAPI app instance that serves the
simulated terminal, the chat/generation endpoint, the model picker and the
generated-file download channel.

To run the development server:
    uvicorn main:app --reload

Or through the console script:
    codeshell serve --port 8000
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from api.dependencies import initialize_workspace, shutdown_workspace
from api.exceptions import (
    OutputFileNotFoundError,
    generation_in_flight_handler,
    generic_exception_handler,
    model_not_found_handler,
    no_model_selected_handler,
    output_file_not_found_handler,
    validation_exception_handler,
    value_error_handler,
)
from api.routes import catalog as catalog_routes
from api.routes import chat as chat_routes
from api.routes import files as files_routes
from api.routes import terminal as terminal_routes
from config import get_settings
from models.workspace import (
    GenerationInFlightError,
    ModelNotFoundError,
    NoModelSelectedError,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    Creates the shared workspace at startup and closes the generation client
    at shutdown.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    logger.info("Starting code assistant simulator, home directory %s", settings.home_directory)
    initialize_workspace(settings)

    yield

    logger.info("Shutting down code assistant simulator")
    await shutdown_workspace()


app = FastAPI(
    title="Code Assistant Simulator",
    description="Simulated Linux terminal over an in-memory filesystem, fed by generated code",
    version="0.1.0",
    lifespan=lifespan,
)

# Register exception handlers
# Specific exceptions before general ones
app.add_exception_handler(GenerationInFlightError, generation_in_flight_handler)
app.add_exception_handler(NoModelSelectedError, no_model_selected_handler)
app.add_exception_handler(ModelNotFoundError, model_not_found_handler)
app.add_exception_handler(OutputFileNotFoundError, output_file_not_found_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(ValueError, value_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Register route modules
app.include_router(terminal_routes.router)
app.include_router(chat_routes.router)
app.include_router(catalog_routes.router)
app.include_router(files_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message."""
    return {
        "message": "Welcome to Linux Simulator",
        "version": "0.1.0",
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}
