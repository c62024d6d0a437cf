"""Request Logging — per-request method, path and execution time.

Invariants:
    - One INFO line per request: "[METHOD] /path - Execution time: Nms"
    - Paths in skip_paths are not logged (health probes)
    - Timing measured with a monotonic clock, logged even when the handler raises
"""

import logging
import time
from collections.abc import Iterable

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)


def register_request_logging(app: FastAPI, skip_paths: Iterable[str] = ()) -> None:
    """Attach the timing middleware to the app."""
    skipped = frozenset(skip_paths)

    @app.middleware("http")
    async def log_request(request: Request, call_next):
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            path = request.url.path
            if path not in skipped:
                duration_ms = round((time.perf_counter() - start) * 1000)
                logger.info(
                    f"[{request.method}] {path} - Execution time: {duration_ms}ms",
                    extra={
                        "method": request.method,
                        "path": path,
                        "status_code": status_code,
                        "duration_ms": duration_ms,
                    },
                )
