import sys
import time
from contextlib import asynccontextmanager
from typing import Optional

import structlog
import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from src.api import api_router
from src.api.health import health_router
from src.api.responses import error_response, status_code_for, utc_timestamp
from src.config.config import Config
from src.exceptions import ImageStudioError
from src.services.gemini_service import GeminiService
from src.utils.logging_config import setup_logging

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Logs startup and warns when the Gemini API key is missing, in which case
    only the health check is usable.
    """
    config: Config = app.state.config
    logger.info(
        "Starting Image Studio API",
        environment=config.environment,
        model=config.gemini_model,
        text_model=config.gemini_text_model,
        api_configured=config.is_api_configured,
    )
    if not config.is_api_configured:
        logger.warning("GEMINI_API_KEY not set, generation endpoints are disabled")

    try:
        yield
    finally:
        logger.info("Shutting down Image Studio API")


def create_app(config: Optional[Config] = None, gemini_service: Optional[GeminiService] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Application configuration, loaded from the environment when omitted
        gemini_service: Gemini gateway, built from the config when omitted

    Returns:
        Configured FastAPI application instance
    """
    config = config or Config()
    setup_logging(config)

    app = FastAPI(
        title="Image Studio API",
        description="""
        ## Image Studio API

        Backend proxy for Gemini-powered image editing and generation.

        ### Features:
        - **Edit Image**: Upload an image and describe the edit
        - **Generate Image**: Create an image from a text prompt
        - **Weather Card**: Illustrated, localized weather card for any city
        - **Health**: Reports whether the Gemini API key is configured

        Generated images are returned inline as `data:image/jpeg;base64,...` URIs.
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Shared, read-only for the lifetime of the app
    app.state.config = config
    app.state.gemini_service = gemini_service or GeminiService(config)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    # Request logging middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all HTTP requests with timing information."""
        start_time = time.time()

        logger.info(
            "HTTP request started",
            method=request.method,
            url=str(request.url),
            client_ip=request.client.host if request.client else "unknown",
        )

        try:
            response = await call_next(request)
            process_time = time.time() - start_time

            logger.info(
                "HTTP request completed",
                method=request.method,
                url=str(request.url),
                status_code=response.status_code,
                process_time=process_time,
            )

            # Add processing time header
            response.headers["X-Process-Time"] = str(process_time)
            return response

        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                "HTTP request failed",
                method=request.method,
                url=str(request.url),
                error=str(e),
                process_time=process_time,
            )
            raise

    # Service error handler
    @app.exception_handler(ImageStudioError)
    async def image_studio_exception_handler(request: Request, exc: ImageStudioError):
        """Map service errors to their HTTP status."""
        status_code = status_code_for(exc)
        logger.warning(
            "Service error",
            method=request.method,
            url=str(request.url),
            error_type=type(exc).__name__,
            status_code=status_code,
            error=str(exc),
        )
        return error_response(str(exc), status_code)

    # Request body validation handler
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Report malformed request bodies as 400 with the common error shape."""
        errors = exc.errors()
        message = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ())[1:]) or 'body'}: {err.get('msg')}"
            for err in errors
        ) or "Invalid request"
        logger.warning("Request validation failed", method=request.method, url=str(request.url), error=message)
        return error_response(message, 400)

    # HTTP exception handler
    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Handle HTTP exceptions with consistent formatting."""
        logger.warning(
            "HTTP exception",
            method=request.method,
            url=str(request.url),
            status_code=exc.status_code,
            detail=exc.detail,
        )
        return error_response(str(exc.detail), exc.status_code)

    # Global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions globally."""
        logger.error(
            "Unhandled exception",
            method=request.method,
            url=str(request.url),
            error=str(exc),
            exc_info=True,
        )
        return error_response("Internal server error", 500)

    # Include API routes
    app.include_router(health_router)
    app.include_router(api_router)

    # Root endpoint (hide from swagger)
    @app.get("/", tags=["Root"], include_in_schema=False)
    async def root():
        """Root endpoint providing basic system information."""
        return {
            "message": "Image Studio API",
            "version": "1.0.0",
            "status": "running",
            "timestamp": utc_timestamp(),
            "docs": "/docs",
            "redoc": "/redoc",
        }

    return app


def main():
    config = Config()
    app = create_app(config)

    logger.info(
        f"Starting Image Studio server in {config.environment} environment",
        host=config.api_host,
        port=config.api_port,
        reload=False,
    )

    try:
        uvicorn.run(
            app,
            host=config.api_host,
            port=config.api_port,
            log_level=config.log_level.lower(),
            access_log=True,
            server_header=False,
            date_header=False,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.error("Server failed to start", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
