"""
API middleware
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from storelink.monitoring import get_logger, global_metrics

logger = get_logger(__name__)


class TimingMiddleware(BaseHTTPMiddleware):
    """Request timing, request ID header and API metrics"""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()
        global_metrics.increment("api.requests")

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            global_metrics.increment("api.errors")
            global_metrics.record("api.latency", process_time)

            logger.bind(request_id=request_id).error(
                f"{request.method} {request.url.path} - Exception: {e} - {process_time:.3f}s"
            )
            raise

        process_time = time.time() - start_time

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = str(process_time)

        global_metrics.record("api.latency", process_time)

        logger.bind(request_id=request_id, status_code=response.status_code).info(
            f"{request.method} {request.url.path} - {response.status_code} - {process_time:.3f}s"
        )

        if response.status_code >= 400:
            global_metrics.increment("api.errors")

        return response
