# libros_api/main.py
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import config
from .errors import (
    INTERNAL_ERROR,
    INVALID_FIELDS,
    METHOD_NOT_ALLOWED,
    ROUTE_NOT_FOUND,
    CatalogError,
    PersistenceFailure,
)
from .models import HealthStatus
from .router import router as libros_router
from .storage import BookRepository


logger = logging.getLogger(__name__)

HTTP_ERROR_MESSAGES = {
    400: INVALID_FIELDS,
    404: ROUTE_NOT_FOUND,
    405: METHOD_NOT_ALLOWED,
}


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    return _error(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Unparseable JSON bodies are reported like missing fields
    return _error(400, INVALID_FIELDS)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Bodies FastAPI cannot decode (e.g. invalid UTF-8) arrive here as 400
    message = HTTP_ERROR_MESSAGES.get(exc.status_code, str(exc.detail))
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": message},
        headers=getattr(exc, "headers", None),
    )


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unexpected error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error(500, INTERNAL_ERROR)


def create_app(repository: Optional[BookRepository] = None) -> FastAPI:
    """Build the application and eagerly load the backing file.

    A failed load is not fatal: the app still starts and every catalogue
    request answers 500 until the process is restarted.
    """
    if repository is None:
        repository = BookRepository(config.get_data_file())
        repository.load()

    app = FastAPI(
        title="Biblioteca Aurora",
        description="Catálogo de libros respaldado por un archivo JSON.",
        version="1.0.0",
    )
    app.state.repository = repository

    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(PersistenceFailure, internal_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    @app.get("/", response_model=HealthStatus)
    def health_check() -> HealthStatus:
        books = repository.books
        return HealthStatus(
            status="ok" if books is not None else "degraded",
            books=len(books) if books is not None else None,
        )

    app.include_router(libros_router)
    return app


def run() -> None:
    logging.basicConfig(
        level=config.get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    port = config.get_port()
    app = create_app()
    logger.info("Servidor corriendo en http://localhost:%s", port)
    uvicorn.run(app, host=config.get_host(), port=port)


if __name__ == "__main__":
    run()
