# catalog/core/errors.py
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette import status

from catalog.core.metrics import VALIDATION_FAILURES

logger = logging.getLogger("errors")


class CatalogError(Exception):
    """Base dos erros de domínio; `message` é seguro para devolver ao cliente."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CatalogError):
    status_code = status.HTTP_400_BAD_REQUEST


class EmbedSanitizationError(ValidationError):
    pass


class AuthError(CatalogError):
    status_code = status.HTTP_401_UNAUTHORIZED


class NotFoundError(CatalogError):
    status_code = status.HTTP_404_NOT_FOUND


class UpstreamError(CatalogError):
    """Falha de storage/banco. A causa fica só no log."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if isinstance(exc, ValidationError):
        VALIDATION_FAILURES.labels(reason=exc.message).inc()
        logger.info("Requisição rejeitada: %s", exc.message)
    elif isinstance(exc, UpstreamError):
        logger.error("Falha upstream: %s", exc.message, exc_info=exc.__cause__ or exc)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Erro não tratado em %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CatalogError, catalog_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
