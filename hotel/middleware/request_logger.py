import time
import logging
import uuid
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from hotel.core.config import settings
from hotel.core.logging import request_id_var

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """
    Request id + timing.

    Берёт X-Request-ID из запроса (или генерирует), кладёт его в контекст
    логирования и возвращает в ответе. Логирует запросы дольше
    LOG_SLOW_REQUEST_THRESHOLD_MS и все ответы 5xx.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id
        token = request_id_var.set(request_id)

        status_code = 500
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            status_code = response.status_code
            return response
        finally:
            duration_ms = (time.perf_counter() - start_time) * 1000
            slow = duration_ms > settings.log_slow_request_threshold_ms

            if slow or status_code >= 500:
                logger.log(
                    logging.WARNING if status_code >= 500 else logging.INFO,
                    f"{request.method} {request.url.path} -> {status_code} "
                    f"in {duration_ms:.2f}ms",
                    extra={
                        "method": request.method,
                        "path": request.url.path,
                        "status_code": status_code,
                        "duration_ms": round(duration_ms, 2),
                        "slow": slow,
                    },
                )
            request_id_var.reset(token)
