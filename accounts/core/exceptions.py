import time
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.i18n import get_translator
from core.logger import get_logger

logger = get_logger("error")


class AppException(Exception):
    """
    서비스 계층 예외의 부모 클래스

    - message_key: 번역 테이블의 키 (현지화는 경계 계층에서 처리)
    - status_code: 응답 HTTP 상태 코드
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message_key = "server_error"

    def __init__(self, message_key: str | None = None):
        if message_key:
            self.message_key = message_key
        super().__init__(self.message_key)


class ValidationFailure(AppException):
    """필드 검증 실패 — 모든 필드 에러를 한 번에 담음 {field: message_key}"""
    status_code = status.HTTP_400_BAD_REQUEST
    message_key = "validation_failure"

    def __init__(self, errors: dict[str, str]):
        super().__init__()
        self.errors = errors


class AuthenticationFailure(AppException):
    status_code = status.HTTP_401_UNAUTHORIZED
    message_key = "incorrect_credentials"


class ForbiddenAccess(AppException):
    status_code = status.HTTP_403_FORBIDDEN
    message_key = "unauthorized_user_update"


class UserNotFound(AppException):
    status_code = status.HTTP_404_NOT_FOUND
    message_key = "user_not_found"


class InvalidToken(AppException):
    status_code = status.HTTP_400_BAD_REQUEST
    message_key = "invalid_token"


class EmailDeliveryFailure(AppException):
    status_code = status.HTTP_502_BAD_GATEWAY
    message_key = "email_failure"


def _error_body(request: Request, message: str, validation_errors: dict | None = None) -> dict:
    """공통 에러 응답 형태: {path, timestamp(epoch ms), message[, validationErrors]}"""
    body = {
        "path": request.url.path,
        "timestamp": int(time.time() * 1000),
        "message": message,
    }
    if validation_errors:
        body["validationErrors"] = validation_errors
    return body


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    t = get_translator(request)
    validation_errors = None
    if isinstance(exc, ValidationFailure):
        validation_errors = {field: t(key) for field, key in exc.errors.items()}
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(request, t(exc.message_key), validation_errors),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """JSON 파싱 실패, 경로 파라미터 타입 불일치 등 → 400"""
    t = get_translator(request)
    validation_errors = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        field = ".".join(loc) or "body"
        validation_errors.setdefault(field, t("field_invalid"))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(request, t("validation_failure"), validation_errors),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """분류되지 않은 예외 (DB 장애 등) → 500, validationErrors 없음"""
    logger.error(
        f"처리되지 않은 예외: {type(exc).__name__}",
        exc_info=exc,
        extra={"extra_data": {"path": request.url.path}},
    )
    t = get_translator(request)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(request, t("server_error")),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
