"""FastAPI application factory."""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from models.formatted_response import FormattedResponse, ToolError
from server.middleware import RequestIDMiddleware
from server.routes import browse, health
from server.schemas.responses import ToolResponseDTO
from server.utils import validation_error_message
from utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan event handler for startup/shutdown logic."""
    logger.info("Fetch Browser server starting up")

    if not os.getenv("API_KEYS"):
        logger.warning("Missing environment variables: ['API_KEYS']")

    yield

    logger.info("Fetch Browser server shutting down")


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Return malformed tool arguments as the uniform error envelope."""
    message = validation_error_message(exc.errors())
    logger.warning(
        f"Request validation failed: {message}",
        extra={
            "extra_fields": {
                "request_id": getattr(request.state, "request_id", "unknown"),
                "path": request.url.path,
            }
        },
    )
    envelope = FormattedResponse.failure(ToolError(code="validation_error", message=message))
    dto = ToolResponseDTO.from_formatted_response(envelope)
    return JSONResponse(
        status_code=422,
        content=dto.model_dump(by_alias=True),
    )


def create_app() -> FastAPI:
    """Factory function to create FastAPI application."""
    app = FastAPI(
        title="Fetch Browser API",
        description="Web page fetching and Google search tools for AI agents",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(RequestIDMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(health.router)
    app.include_router(browse.router)

    return app
