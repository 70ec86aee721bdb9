from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .logging import configure_logging

logger = configure_logging()


class ApiError(StarletteHTTPException):
    """خطأ موجه للعميل بجسم JSON من الشكل {error, message}."""

    def __init__(self, status_code: int, error: str, message: str) -> None:
        super().__init__(status_code=status_code, detail={"error": error, "message": message})
        self.error = error
        self.message = message


def bad_request(error: str, message: str) -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, error, message)


def not_found(error: str, message: str) -> ApiError:
    return ApiError(status.HTTP_404_NOT_FOUND, error, message)


def server_error(error: str, message: str) -> ApiError:
    return ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, error, message)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc.detail, dict):
        body = exc.detail
    elif exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        # أي مسار أو طريقة غير معرّفة تُعامل كمسار غير موجود.
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Not found", "message": "The requested endpoint does not exist"},
        )
    else:
        body = {"error": HTTPStatus(exc.status_code).phrase, "message": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def _validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Upload error", "message": message},
    )


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("خطأ غير متوقع أثناء معالجة %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error", "message": "Something went wrong on our end"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
