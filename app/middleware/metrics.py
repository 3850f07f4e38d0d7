# app/middleware/metrics.py
import logging
import time
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from typing import Callable

logger = logging.getLogger(__name__)


def new_metrics() -> dict:
    return {
        "requests": 0,
        "total_response_ms": 0.0,
        "slow_requests": 0,
    }


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Collects in-process metrics:
      - total requests
      - total response time (ms)
      - requests slower than `slow_ms`, which are also logged
    NOTE: app.state is not touched in __init__; it may not exist yet while the middleware stack builds.
    """

    def __init__(self, app, dispatch: Callable = None, slow_ms: float = 500.0):
        super().__init__(app, dispatch=dispatch)
        self.slow_ms = slow_ms

    async def dispatch(self, request: Request, call_next):
        metrics = getattr(request.app.state, "metrics", None)
        if metrics is None:
            # startup event has not run
            metrics = request.app.state.metrics = new_metrics()

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        # single-process counters
        metrics["requests"] += 1
        metrics["total_response_ms"] += elapsed_ms
        if elapsed_ms > self.slow_ms:
            metrics["slow_requests"] += 1
            logger.warning(
                "slow request %s %s -> %s in %.1f ms",
                request.method, request.url.path, response.status_code, elapsed_ms,
            )

        return response
