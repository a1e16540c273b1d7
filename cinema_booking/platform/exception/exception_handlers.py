from typing import Any, Callable, Coroutine

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.responses import Response

from cinema_booking.platform.exception.exceptions import CustomBaseError, SeatConflictError

ExceptionHandler = Callable[[Request, Exception], Coroutine[Any, Any, Response]]


def _error_body(error: CustomBaseError) -> dict[str, Any]:
    # 'code' lets the client pick a message without parsing 'detail'
    return {'detail': error.message, 'code': type(error).__name__}


async def custom_error_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, CustomBaseError) else CustomBaseError(str(exc))
    return JSONResponse(status_code=error.status_code, content=_error_body(error))


async def seat_conflict_handler(request: Request, exc: Exception) -> JSONResponse:
    if not isinstance(exc, SeatConflictError):
        return await custom_error_handler(request, exc)
    content = _error_body(exc) | {'seats': exc.seat_ids}
    return JSONResponse(status_code=exc.status_code, content=content)


async def request_validation_handler(request: Request, exc: Exception) -> JSONResponse:
    error = exc if isinstance(exc, RequestValidationError) else RequestValidationError([])
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': jsonable_encoder(error.errors()), 'code': 'RequestValidationError'},
    )


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'detail': 'Internal server error', 'code': 'InternalError'},
    )


# Most specific first; Starlette resolves handlers by MRO anyway
EXCEPTION_HANDLERS: dict[type[Exception], ExceptionHandler] = {
    SeatConflictError: seat_conflict_handler,
    CustomBaseError: custom_error_handler,
    RequestValidationError: request_validation_handler,
    Exception: general_500_exception_handler,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
