import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from core.logger import get_logger, generate_request_id, request_id_var

logger = get_logger("access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    모든 HTTP 요청에 추적 ID를 붙이고 접근 로그를 남기는 미들웨어

    기능:
    1. 요청마다 고유 request_id 부여 (서비스 로그에도 함께 찍힘)
    2. 응답 시간 측정
    3. JSON 접근 로그 출력
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        req_id = generate_request_id()
        request_id_var.set(req_id)

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        logger.info(
            f"{request.method} {request.url.path} {response.status_code} {duration_ms:.0f}ms",
            extra={"extra_data": {
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round(duration_ms, 1),
            }}
        )

        # 응답 헤더에 request_id 포함 (디버깅용)
        response.headers["X-Request-ID"] = req_id

        return response
