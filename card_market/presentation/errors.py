import logging
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from card_market.domain.exceptions import (
    DomainException, NotFoundError, ValidationFailedError, StateConflictError, PersistenceError,
)

logger = logging.getLogger(__name__)

# Порядок важен: берется первый подходящий базовый класс
_STATUS_BY_ERROR = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationFailedError, status.HTTP_400_BAD_REQUEST),
    (StateConflictError, status.HTTP_400_BAD_REQUEST),
    (PersistenceError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def _envelope(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "data": None}
    )


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            break
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    if isinstance(exc, PersistenceError):
        message = "Не удалось выполнить операцию, повторите запрос позже"
    else:
        message = str(exc)
    logger.info(f"{request.method} {request.url.path} -> {status_code}: {exc}")
    return _envelope(status_code, message)


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    logger.info(f"{request.method} {request.url.path} -> некорректный запрос: {errors}")
    return _envelope(status.HTTP_400_BAD_REQUEST, f"Некорректные данные: {errors}")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
