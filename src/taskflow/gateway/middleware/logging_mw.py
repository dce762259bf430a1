"""RequestLogMiddleware -- 评分请求的 request_id、计算器与耗时

每个请求生成 ULID request_id 并绑定到 structlog contextvars；
评分接口额外绑定 calculator，并在响应中返回 Server-Timing。
"""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from ulid import ULID

# 路径 -> 计算器名称
SCORING_ENDPOINTS = {
    "/api/performance/worker": "worker",
    "/api/performance/manager": "manager",
    "/api/projects/progress": "progress",
    "/api/projects/report": "report",
}


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = str(ULID())
        calculator = SCORING_ENDPOINTS.get(request.url.path)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        if calculator is not None:
            structlog.contextvars.bind_contextvars(calculator=calculator)

        log = structlog.get_logger()
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        # 4xx / 5xx 记为 warning
        log_method = log.awarning if response.status_code >= 400 else log.ainfo
        await log_method(
            "request_completed",
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        response.headers["X-Request-ID"] = request_id
        if calculator is not None:
            response.headers["Server-Timing"] = f"{calculator};dur={duration_ms}"
        return response
