from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io import Logger

# Type alias for exception handlers (compatible with Starlette's expected signature)
ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc), 500)
    return JSONResponse(
        status_code=error.status_code,
        content={
            'detail': error.message,
            'error': error.kind,
            'retryable': error.retryable,
            **error.extra(),
        },
    )


async def value_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': str(exc), 'error': 'InvalidInput', 'retryable': False},
    )


async def validation_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': error.errors(), 'error': 'InvalidInput', 'retryable': False},
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    Logger.base.error(f'[HTTP] Unhandled {type(exc).__name__} on {request.url.path}: {exc}')
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'detail': 'Internal server error'},
    )


# Exception handler mapping
EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    CustomBaseError: custom_error_handler,
    ValueError: value_error_handler,
    RequestValidationError: validation_error_handler,
    Exception: general_500_exception_handler,  # Catch-all for unhandled exceptions
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
