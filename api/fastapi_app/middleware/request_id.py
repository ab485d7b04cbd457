from __future__ import annotations

import logging
import re
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from core.log import request_id_var, todo_id_var

# /todos/42 -> 42 ; le routage n'a pas encore eu lieu ici, path_params est vide
_TODO_PATH = re.compile(r"^/todos/(\d+)/?$")


def _todo_id_from_path(path: str) -> int | None:
    m = _TODO_PATH.match(path)
    return int(m.group(1)) if m else None


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Propagate X-Request-ID, bind request/todo context and write one access record."""

    def __init__(self, app):
        super().__init__(app)
        # Dedicated logger so uvicorn's access formatter is untouched
        self.logger = logging.getLogger("api.access")

    async def dispatch(self, request: Request, call_next):  # type: ignore[override]
        rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = rid
        todo_id = _todo_id_from_path(request.url.path)
        rid_token = request_id_var.set(rid)
        todo_token = todo_id_var.set(todo_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            todo_id_var.reset(todo_token)
            request_id_var.reset(rid_token)

        response.headers["X-Request-ID"] = rid
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        self.logger.log(
            level,
            "access",
            extra={
                "request_id": rid,
                "todo_id": todo_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return response
