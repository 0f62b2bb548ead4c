import time
import uuid

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

SLOW_THRESHOLD_MS = 500
REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """요청마다 한 줄씩 기록하고 X-Request-ID를 붙인다.

    클라이언트가 보낸 X-Request-ID가 있으면 그대로 쓰고, 없으면 새로 만든다.
    처리 중 남는 로그에는 request_id가 extra로 함께 실린다.
    500ms를 넘긴 요청은 WARNING.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:12]
        start = time.perf_counter()

        with logger.contextualize(request_id=request_id):
            response = await call_next(request)

            elapsed_ms = (time.perf_counter() - start) * 1000
            client_ip = request.client.host if request.client else "unknown"
            line = (
                f"{request.method} {request.url.path} | {client_ip} | "
                f"{response.status_code} | {elapsed_ms:.0f}ms"
            )
            if elapsed_ms > SLOW_THRESHOLD_MS:
                logger.warning(f"{line} (slow)")
            else:
                logger.info(line)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
