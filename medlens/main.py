"""Application entry point and FastAPI app factory."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
import sys
from pathlib import Path

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from .config.settings import settings
from .controllers import analysis, audio, chat, images
from .middleware import ERROR_CODE_HEADER, StructuredLoggingMiddleware, TelemetryMiddleware
from .services.chat_session import ChatSessionManager
from .services.errors import AnalysisError
from .services.gemini_client import has_api_key
from .views import ErrorResponse

logger = logging.getLogger(__name__)


def _file_logger(name: str, filename: str) -> None:
    """Route ``name`` to its own rotating file in addition to the root handlers."""

    log_path = Path(filename)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_path,
        maxBytes=500_000,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))

    named_logger = logging.getLogger(name)
    named_logger.handlers.clear()
    named_logger.addHandler(handler)
    named_logger.setLevel(logging.INFO)


def _configure_logging() -> None:
    """Stream logs to stdout and file; pipeline and chat get dedicated files."""

    logging.getLogger().handlers.clear()

    formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(formatter)

    log_path = Path(settings.log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=1_000_000,
        backupCount=5,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.addHandler(stdout_handler)
    root_logger.addHandler(file_handler)
    root_logger.setLevel(logging.DEBUG if settings.debug else logging.INFO)

    middleware_logger = logging.getLogger("medlens.middleware.structured")
    middleware_logger.handlers.clear()
    middleware_stdout = logging.StreamHandler(sys.stdout)
    middleware_stdout.setFormatter(logging.Formatter("%(message)s"))
    middleware_logger.addHandler(middleware_stdout)
    middleware_logger.setLevel(logging.INFO)
    middleware_logger.propagate = False

    _file_logger("medlens.services.analysis_pipeline", settings.pipeline_log_file)
    _file_logger("medlens.logs.chat", settings.chat_log_file)

    for name in ("httpx", "httpcore", "google_genai", "urllib3"):
        logging.getLogger(name).setLevel(logging.WARNING)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    _configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        description="Multimodal medical document analysis backed by Gemini",
    )

    # One conversation per process, replaced on every successful analysis.
    app.state.chat_manager = ChatSessionManager()

    app.add_middleware(TelemetryMiddleware)
    app.add_middleware(StructuredLoggingMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.include_router(analysis.router)
    app.include_router(chat.router)
    app.include_router(audio.router)
    app.include_router(images.router)

    @app.get("/", include_in_schema=False)
    async def root() -> dict[str, str]:
        """Root endpoint."""

        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "status": "operational",
        }

    @app.get("/health", include_in_schema=False)
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""

        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.app_version,
            "gemini": "configured" if has_api_key() else "missing",
        }

    @app.get("/metrics", include_in_schema=False)
    async def metrics() -> Response:
        """Expose application metrics for Prometheus scraping."""

        return Response(generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.exception_handler(AnalysisError)
    async def analysis_exception_handler(request, exc: AnalysisError):
        body = ErrorResponse(
            detail=exc.message,
            code=exc.code,
            category=exc.category.value,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=body.model_dump(),
            headers={ERROR_CODE_HEADER: exc.code},
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request, exc):
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request, exc):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "medlens.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
