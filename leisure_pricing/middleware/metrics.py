import logging
import time
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

SLOW_REQUEST_MS = 500.0


def _new_metrics() -> dict:
    return {
        "requests": 0,
        "total_response_ms": 0.0,
        "price_calculations": 0,
        "price_calculation_failures": 0,
        "superseded_quotes": 0,
    }


def get_metrics(app) -> dict:
    """Metrics container on app.state, created lazily."""
    metrics = getattr(app.state, "metrics", None)
    if metrics is None:
        metrics = _new_metrics()
        app.state.metrics = metrics
    return metrics


def increment_metric(request: Request, key: str, amount: int = 1) -> None:
    metrics = get_metrics(request.app)
    metrics[key] = metrics.get(key, 0) + amount


class MetricsMiddleware(BaseHTTPMiddleware):
    """
    Collects in-process metrics:
      - total requests
      - total response time (ms)
    Pricing routes add their own counters through increment_metric().
    NOTE: app.state is not touched in __init__; it may not exist while the
    middleware stack is being built.
    """

    def __init__(self, app, dispatch: Callable = None):
        super().__init__(app, dispatch=dispatch)

    async def dispatch(self, request: Request, call_next):
        metrics = get_metrics(request.app)

        start = time.perf_counter()
        response: Response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000.0

        metrics["requests"] = metrics.get("requests", 0) + 1
        metrics["total_response_ms"] = metrics.get("total_response_ms", 0.0) + elapsed_ms

        if elapsed_ms > SLOW_REQUEST_MS:
            logger.warning(
                "Slow request %s %s took %.2f ms", request.method, request.url.path, elapsed_ms
            )

        return response
