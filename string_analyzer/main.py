from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from typing import Optional
import logging

from string_analyzer.api.routes import router
from string_analyzer.config import Settings, get_settings
from string_analyzer.crud import StringStore
from string_analyzer.errors import StringAnalyzerError
from string_analyzer import schemas

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def create_app(store: Optional[StringStore] = None, settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The store is created once here and shared by every request through
    app.state; tests pass their own to get an isolated store.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description="Analyze, store and filter strings by their computed properties",
        version="1.0.0"
    )
    app.state.store = store if store is not None else StringStore()

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StringAnalyzerError)
    async def string_analyzer_error_handler(request: Request, exc: StringAnalyzerError):
        logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"{request.method} {request.url.path} -> 400: {exc.errors()}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid request body or query parameters"}
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error in {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "An error occurred while processing your request"}
        )

    @app.get("/")
    def root():
        """Root endpoint"""
        return {
            "message": settings.app_name,
            "version": "1.0.0",
            "endpoints": {
                "POST /strings": "Analyze and store a string",
                "GET /strings/{string_value}": "Get specific string analysis",
                "GET /strings": "Get all strings with optional filters",
                "GET /strings/filter-by-natural-language": "Filter using natural language",
                "DELETE /strings/{string_value}": "Delete a string"
            }
        }

    @app.get("/health", response_model=schemas.HealthResponse)
    def health_check():
        """Health check endpoint"""
        return schemas.HealthResponse(status="healthy", strings_stored=app.state.store.count())

    app.include_router(router, tags=["strings"])
    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    app = create_app(settings=settings)
    logger.info(f"Starting {settings.app_name} on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
