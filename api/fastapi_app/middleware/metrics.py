from __future__ import annotations

import time
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from core.telemetry.metrics import (
    metrics_enabled,
    get_http_requests_total,
    get_http_request_duration_seconds,
)

# scrapes et sondes : pas de série dédiée
_SKIPPED_PATHS = frozenset({"/metrics", "/health"})


def _route_template(request: Request) -> str:
    """/todos/{todo_id} plutôt que /todos/42 (cardinalité bornée)."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or "/unknown"


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Any):  # type: ignore[override]
        if not metrics_enabled() or request.url.path in _SKIPPED_PATHS:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        route = _route_template(request)
        get_http_requests_total().labels(route, request.method, str(response.status_code)).inc()
        get_http_request_duration_seconds().labels(route, request.method).observe(elapsed)
        return response
